"""
Section Locator
===============
Finds the Hebrew label anchors of a delivery receipt and derives the line
offsets every field extractor works from.

Layout (top to bottom)
----------------------
  תעודת משלוח                 delivery-document marker
  <label>: ... מס. הזמנה:     colon-terminated header labels
  <value> ...                 one value per label, same order
  ת. הזמנה: / ת. אספקה:        date labels, followed by the two dates
  שם לקוח: / טלפון: / כתובת:   customer labels, then name and phone
  קומה.: / דירה.:              address lines
  <item-table header>         one per page, followed by a separator
  ...items and promotions...
  סך הכל / דמי משלוח / מע"מ / סכום לתשלום

Label scans never look further than a small forward window from their
anchor, so malformed input cannot pull in values from a distant block.
"""

from typing import List, NamedTuple, Optional, Tuple

from loguru import logger

from receipt_parser import labels
from receipt_parser.errors import MissingSection, NoItemsFound


DEFAULT_WINDOW = 20


class Section(NamedTuple):
    """Half-open line range [start, end) of one item table."""
    start: int
    end: int


def find_label(
    lines: List[str],
    label: str,
    start: int = 0,
    stop: Optional[int] = None,
    exact: bool = False,
) -> Optional[int]:
    """Index of the first line in [start, stop) holding the label, or None."""
    stop = len(lines) if stop is None else min(stop, len(lines))
    for idx in range(max(start, 0), stop):
        line = lines[idx].strip()
        if (line == label) if exact else (label in line):
            return idx
    return None


def require_label(
    lines: List[str],
    label: str,
    start: int = 0,
    stop: Optional[int] = None,
    exact: bool = False,
) -> int:
    """Like find_label() but raises MissingSection when the label is absent."""
    idx = find_label(lines, label, start, stop, exact)
    if idx is None:
        raise MissingSection(label)
    return idx


def locate_order_labels(lines: List[str], window: int = DEFAULT_WINDOW) -> Tuple[List[str], int]:
    """
    Collect the header labels that precede the order number value.

    Returns
    -------
    (labels, index of the order-number label line)
    """
    marker = require_label(lines, labels.DELIVERY_DOCUMENT)

    found: List[str] = []
    for idx in range(marker + 1, min(marker + window, len(lines))):
        line = lines[idx].strip()
        if not line.endswith(':'):
            continue
        found.append(line)
        if line == labels.ORDER_NUMBER_LABEL:
            logger.debug(f"[Sections] order labels at {marker + 1}..{idx}: {len(found)} labels")
            return found, idx

    raise MissingSection(labels.ORDER_NUMBER_LABEL)


def locate_order_values(lines: List[str], labels_end: int, window: int = DEFAULT_WINDOW) -> List[str]:
    """Non-empty lines after the label list, up to the first date label."""
    values: List[str] = []
    for idx in range(labels_end + 1, min(labels_end + window, len(lines))):
        line = lines[idx].strip()
        if labels.ORDER_DATE_LABEL in line or labels.DELIVERY_DATE_LABEL in line:
            break
        if line:
            values.append(line)
    return values


def locate_date_labels(lines: List[str]) -> Tuple[int, int]:
    """(order-date label index, delivery-date label index)."""
    order_idx = require_label(lines, labels.ORDER_DATE_LABEL)
    delivery_idx = require_label(lines, labels.DELIVERY_DATE_LABEL)
    return order_idx, delivery_idx


def locate_customer_block(lines: List[str]) -> int:
    """First line after the name, phone and address labels (in that order)."""
    name_idx = require_label(lines, labels.CUSTOMER_NAME_LABEL, exact=True)
    phone_idx = require_label(lines, labels.PHONE_LABEL, start=name_idx + 1, exact=True)
    address_idx = require_label(lines, labels.ADDRESS_LABEL, start=phone_idx + 1, exact=True)
    return address_idx + 1


def locate_address_lines(lines: List[str]) -> Tuple[str, str]:
    """(floor line, apartment line)."""
    floor_idx = require_label(lines, labels.FLOOR_MARKER)
    apartment_idx = require_label(lines, labels.APARTMENT_MARKER)
    return lines[floor_idx], lines[apartment_idx]


def locate_item_sections(lines: List[str]) -> List[Section]:
    """
    Every item table in document order.

    A table starts two lines below its header (header + separator) and runs
    up to the subtotal line, the next page's header, or the end of text.
    """
    sections: List[Section] = []
    for idx, line in enumerate(lines):
        if labels.ITEMS_HEADER not in line:
            continue
        end = len(lines)
        for j in range(idx + 1, len(lines)):
            if labels.SUBTOTAL_LABEL in lines[j] or labels.ITEMS_HEADER in lines[j]:
                end = j
                break
        sections.append(Section(idx + 2, end))

    if not sections:
        raise NoItemsFound()

    logger.debug(f"[Sections] {len(sections)} item table(s): {sections}")
    return sections
