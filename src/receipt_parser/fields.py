"""
Field Extractors
================
Label → value resolvers for the receipt header, customer and address
blocks. Each one works on the window the Section Locator hands it and
raises instead of returning a default.
"""

import re
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from receipt_parser import labels
from receipt_parser.errors import MissingField, UnparsableField
from receipt_parser.sections import (
    DEFAULT_WINDOW,
    locate_address_lines,
    locate_customer_block,
    locate_date_labels,
    locate_order_labels,
    locate_order_values,
)


ORDER_CODE_WIDTH = 8
VALUE_WINDOW = 10

# ─── Patterns ─────────────────────────────────────────────────────────────────

_DIGITS    = re.compile(r'^[0-9]+$')
_DATE_TIME = re.compile(r'[\d:]+\s+[\d/]+', re.ASCII)  # "09:41 12/03/24"
_FLOOR     = re.compile(re.escape(labels.FLOOR_MARKER) + r' (\d+)\s+(.+)', re.ASCII)  # "קומה.: 3 הרצל 12"
_APARTMENT = re.compile(re.escape(labels.APARTMENT_MARKER) + r' (\d+)\s+(.+)', re.ASCII)  # "דירה.: 7 תל אביב"


def pair_by_position(keys: Sequence[str], values: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Join two parallel sequences by index.

    The receipt prints its two-column header as all labels first, then all
    values, so the N-th value belongs to the N-th label.
    """
    if len(keys) != len(values):
        raise UnparsableField(
            "order_code",
            message=f"Label/value mismatch: {len(keys)} labels, {len(values)} values",
        )
    return list(zip(keys, values))


def extract_order_number(lines: List[str], window: int = DEFAULT_WINDOW) -> str:
    """Order number, zero-padded to ORDER_CODE_WIDTH digits."""
    found_labels, labels_end = locate_order_labels(lines, window)
    values = locate_order_values(lines, labels_end, window)

    order_number: Optional[str] = None
    for label, value in pair_by_position(found_labels, values):
        if label == labels.ORDER_NUMBER_LABEL:
            order_number = value
            break

    if not order_number or not _DIGITS.match(order_number) or len(order_number) > ORDER_CODE_WIDTH:
        raise UnparsableField("order_code", order_number)

    return order_number.zfill(ORDER_CODE_WIDTH)


def extract_dates(lines: List[str], window: int = VALUE_WINDOW) -> Tuple[str, str]:
    """
    (order date, delivery date) as printed, e.g. "09:41 12/03/24".

    Both labels normally come first and the two values follow the later
    one. When a date sits between the two labels, the values are printed
    inline and each label takes the first date line after it.
    """
    order_idx, delivery_idx = locate_date_labels(lines)

    if not _date_between(lines, order_idx, delivery_idx):
        start = max(order_idx, delivery_idx) + 1
        dates = [
            line for line in lines[start:start + window]
            if _DATE_TIME.search(line)
        ][:2]
        if len(dates) == 2:
            return dates[0], dates[1]

    order_date = _first_date_after(lines, order_idx, delivery_idx, window)
    delivery_date = _first_date_after(lines, delivery_idx, order_idx, window)
    if not order_date:
        raise MissingField("order_date")
    if not delivery_date:
        raise MissingField("delivery_date")

    logger.debug("[Fields] dates resolved per label")
    return order_date, delivery_date


def _date_between(lines: List[str], first_idx: int, second_idx: int) -> bool:
    low, high = sorted((first_idx, second_idx))
    return any(_DATE_TIME.search(line) for line in lines[low + 1:high])


def _first_date_after(lines: List[str], label_idx: int, other_idx: int, window: int) -> Optional[str]:
    """First date line below a label, never reaching past the other date label."""
    stop = label_idx + 1 + window
    if other_idx > label_idx:
        stop = min(stop, other_idx)
    for line in lines[label_idx + 1:stop]:
        if _DATE_TIME.search(line):
            return line
    return None


def extract_customer_info(lines: List[str], window: int = VALUE_WINDOW) -> Tuple[str, str]:
    """(customer name, phone): first non-numeric line, then first all-digit line."""
    start = locate_customer_block(lines)

    name: Optional[str] = None
    phone: Optional[str] = None
    for line in lines[start:start + window]:
        if not line:
            continue
        if _DIGITS.match(line):
            phone = line
            break
        if name is None:
            name = line

    if not name:
        raise MissingField("customer_name")
    if not phone:
        raise MissingField("customer_phone")
    return name, phone


def extract_address(lines: List[str]) -> str:
    """"{street} {city}, קומה {floor}, דירה {apartment}"."""
    floor_line, apartment_line = locate_address_lines(lines)

    floor_match = _FLOOR.search(floor_line)
    apartment_match = _APARTMENT.search(apartment_line)
    if not floor_match:
        raise UnparsableField("address", floor_line)
    if not apartment_match:
        raise UnparsableField("address", apartment_line)

    floor, street = floor_match.group(1), floor_match.group(2)
    apartment, city = apartment_match.group(1), apartment_match.group(2)
    return (
        f"{street} {city}, "
        f"{labels.FLOOR_WORD} {floor}, {labels.APARTMENT_WORD} {apartment}"
    )
