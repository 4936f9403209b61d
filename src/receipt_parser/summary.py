"""
Summary Extractor
=================
Subtotal, delivery fee, VAT and grand total from the receipt footer.

  "104.03: סך הכל"
  "29.90: דמי משלוח"
  "19.46: מע"מ 17%"
  "133.93 סכום לתשלום"

Only the grand total is mandatory; receipts without a delivery fee or VAT
line are valid and read as 0.
"""

import re
from typing import Callable, List, NamedTuple, Optional

from receipt_parser import labels
from receipt_parser.errors import MissingTotal, UnparsableField


class ReceiptSummary(NamedTuple):
    subtotal: float
    vat_amount: float
    delivery_fee: float
    total_amount: float


_LABELED_AMOUNT = re.compile(r'^([\d.]+)\s*:', re.ASCII)
_LEADING_AMOUNT = re.compile(r'^([\d.]+)\s', re.ASCII)


def _find_line(lines: List[str], predicate: Callable[[str], bool]) -> Optional[str]:
    for line in lines:
        if predicate(line):
            return line
    return None


def _labeled_amount(line: Optional[str]) -> float:
    if line is None:
        return 0.0
    m = _LABELED_AMOUNT.match(line)
    if not m:
        return 0.0
    try:
        return float(m.group(1))
    except ValueError:
        raise UnparsableField("summary", line) from None


def extract_summary(lines: List[str]) -> ReceiptSummary:
    subtotal_line = _find_line(lines, lambda l: labels.SUBTOTAL_LABEL in l)
    delivery_line = _find_line(lines, lambda l: all(w in l for w in labels.DELIVERY_FEE_WORDS))
    vat_line = _find_line(lines, lambda l: all(w in l for w in labels.VAT_WORDS))
    total_line = _find_line(lines, lambda l: labels.TOTAL_LABEL in l)

    if total_line is None:
        raise MissingTotal()

    m = _LEADING_AMOUNT.match(total_line)
    if not m:
        raise UnparsableField("total_amount", total_line)
    try:
        total_amount = float(m.group(1))
    except ValueError:
        raise UnparsableField("total_amount", total_line) from None

    return ReceiptSummary(
        subtotal=_labeled_amount(subtotal_line),
        vat_amount=_labeled_amount(vat_line),
        delivery_fee=_labeled_amount(delivery_line),
        total_amount=total_amount,
    )
