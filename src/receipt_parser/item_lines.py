"""
Item Line Classifier
====================
Recognises the item and promotion lines of a receipt item table.

Item line shapes (numeric columns first, description last)
----------------------------------------------------------
  weight_barcode : "18.45 36.90 קג 0.5 0.5 ימ 2900000123456 עגבניות שרי"
  weight_code    : "11.78 12.40 קג 0.95 1 ימ מלפפון 1234"
  item_barcode   : "23.80 11.90 2 2 יח 7290000066318 חלב תנובה 3%"
  item_code      : "9.90 9.90 1 1 יח לחם אחיד פרוס 55123"

Columns: total price, unit price, supplied qty, ordered qty, unit tag,
barcode/code, description. Either price may be the placeholder "----"
(giveaways), which reads as 0.

The shapes are tried in the order above and the first match wins. Looser
shapes come last because they can match the tail of a weight line.

Promotion line
--------------
  "23.80- 4.80- 2 מבצע: 904123 חלב 2 ב-19.00"
  subtotal-, discount-, optional qty, promotion code, description.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Tuple

from receipt_parser import labels
from receipt_parser.errors import UnparsableField
from receipt_parser.models import ReceiptPromotion, SellingMethod


class ParsedItemLine(NamedTuple):
    total_price: float
    price: float
    supplied_quantity: float
    ordered_quantity: float
    unit: str
    description: str
    code: str
    barcode: Optional[str] = None


# ─── Patterns ─────────────────────────────────────────────────────────────────

_MONEY = r'([\d.]+|-{4})'
_PRICES = r'^' + _MONEY + r'\s+' + _MONEY + r'\s+'
_UNITS = '(' + '|'.join((labels.UNIT_TAG, labels.KILOGRAM_TAG, labels.PACKAGE_TAG)) + ')'
_WEIGHT_QUANTITIES = (
    labels.KILOGRAM_TAG + r'\s+([\d.]+)\s+([\d.]+)\s+' + labels.PACKAGE_TAG + r'\s+'
)

_WEIGHT_WITH_BARCODE = re.compile(
    _PRICES + _WEIGHT_QUANTITIES + r'(\d{13})\s+(.+)$', re.ASCII
)
_WEIGHT_WITH_CODE = re.compile(
    _PRICES + _WEIGHT_QUANTITIES + r'(.+?)\s+(\d+)$', re.ASCII
)
_ITEM_WITH_BARCODE = re.compile(
    _PRICES + r'(\d+)\s+(\d+)\s+' + _UNITS + r'\s+([A-Z]+\s+)?(\d{13})\s+(.+)$', re.ASCII
)
_ITEM_WITH_CODE = re.compile(
    _PRICES + r'(\d+)\s+(\d+)\s+' + _UNITS + r'\s+(.+?)\s+(\d+)$', re.ASCII
)

_PROMOTION = re.compile(
    r'^([\d.]+)-\s+([\d.]+)-\s+(?:[\d.]+\s+)?' + labels.PROMOTION_MARK + r'\s+(\d+)\s+(.+)$',
    re.ASCII,
)

_EMBEDDED_BARCODE = re.compile(r'^(\d{13})\s+(.+)', re.ASCII)


def parse_number(token: str, field: str = "amount") -> float:
    """Numeric column value; the '----' placeholder is 0."""
    if token == labels.PLACEHOLDER:
        return 0.0
    try:
        return float(token)
    except ValueError:
        raise UnparsableField(field, token) from None


def selling_method_for(unit: str) -> SellingMethod:
    if unit == labels.UNIT_TAG:
        return SellingMethod.UNIT
    return SellingMethod.WEIGHT


def recover_embedded_barcode(description: str) -> Optional[str]:
    """
    Barcode printed at the start of a description.

    Best effort only: any 13-digit run leading the description is taken
    as a barcode.
    """
    m = _EMBEDDED_BARCODE.match(description)
    return m.group(1) if m else None


def is_separator(line: str) -> bool:
    """Dash rule between table rows, e.g. "--------"."""
    return line.startswith('-') and ' ' not in line


# ─── Shape extractors ─────────────────────────────────────────────────────────

def _weight_with_barcode(m: re.Match) -> ParsedItemLine:
    return ParsedItemLine(
        total_price=parse_number(m.group(1), "total_price"),
        price=parse_number(m.group(2), "price"),
        supplied_quantity=parse_number(m.group(3), "supplied_quantity"),
        ordered_quantity=parse_number(m.group(4), "ordered_quantity"),
        unit=labels.KILOGRAM_TAG,
        description=m.group(6),
        code=m.group(5),
        barcode=m.group(5),
    )


def _weight_with_code(m: re.Match) -> ParsedItemLine:
    return ParsedItemLine(
        total_price=parse_number(m.group(1), "total_price"),
        price=parse_number(m.group(2), "price"),
        supplied_quantity=parse_number(m.group(3), "supplied_quantity"),
        ordered_quantity=parse_number(m.group(4), "ordered_quantity"),
        unit=labels.KILOGRAM_TAG,
        description=m.group(5),
        code=m.group(6),
    )


def _item_with_barcode(m: re.Match) -> ParsedItemLine:
    prefix = m.group(6) or ''
    return ParsedItemLine(
        total_price=parse_number(m.group(1), "total_price"),
        price=parse_number(m.group(2), "price"),
        supplied_quantity=parse_number(m.group(3), "supplied_quantity"),
        ordered_quantity=parse_number(m.group(4), "ordered_quantity"),
        unit=m.group(5),
        description=prefix + m.group(8),
        code=m.group(7),
        barcode=m.group(7),
    )


def _item_with_code(m: re.Match) -> ParsedItemLine:
    description = m.group(6)
    return ParsedItemLine(
        total_price=parse_number(m.group(1), "total_price"),
        price=parse_number(m.group(2), "price"),
        supplied_quantity=parse_number(m.group(3), "supplied_quantity"),
        ordered_quantity=parse_number(m.group(4), "ordered_quantity"),
        unit=m.group(5),
        description=description,
        code=m.group(7),
        barcode=recover_embedded_barcode(description),
    )


# Most specific first
ITEM_SHAPES: List[Tuple[str, re.Pattern, Callable[[re.Match], ParsedItemLine]]] = [
    ("weight_barcode", _WEIGHT_WITH_BARCODE, _weight_with_barcode),
    ("weight_code",    _WEIGHT_WITH_CODE,    _weight_with_code),
    ("item_barcode",   _ITEM_WITH_BARCODE,   _item_with_barcode),
    ("item_code",      _ITEM_WITH_CODE,      _item_with_code),
]


def classify_item_line(line: str) -> Optional[ParsedItemLine]:
    """First matching item shape, or None when the line is not an item."""
    for _name, pattern, extract in ITEM_SHAPES:
        m = pattern.match(line)
        if m:
            return extract(m)
    return None


def match_promotion_line(line: str) -> Optional[ReceiptPromotion]:
    """Promotion attached to the item above, or None."""
    m = _PROMOTION.match(line)
    if not m:
        return None
    return ReceiptPromotion(
        code=m.group(3),
        description=m.group(4).strip(),
        discount_amount=parse_number(m.group(2), "discount_amount"),
    )
