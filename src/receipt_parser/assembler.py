"""
Receipt Item Assembler
======================
Folds the lines of every item table into ReceiptItem records.

An item line opens a new item (flushing the previous one); promotion lines
attach to the open item. A promotion seen before any item has nothing to
attach to and is dropped. Tables from later pages continue the same fold,
so an item's promotions may follow it onto the next page.
"""

import re
from functools import reduce
from typing import Iterator, List, NamedTuple, Optional, Tuple

from loguru import logger

from receipt_parser.item_lines import (
    ParsedItemLine,
    classify_item_line,
    is_separator,
    match_promotion_line,
    selling_method_for,
)
from receipt_parser.models import ReceiptItem
from receipt_parser.sections import Section


PRODUCT_CODE_PREFIX = "P_"

_LEADING_BARCODE = re.compile(r'^\d{13}\s+', re.ASCII)


class _FoldState(NamedTuple):
    items: Tuple[ReceiptItem, ...] = ()
    current: Optional[ReceiptItem] = None


def build_receipt_item(parsed: ParsedItemLine) -> ReceiptItem:
    """ReceiptItem for a freshly recognised item line (no promotions yet)."""
    name = parsed.description
    if parsed.barcode:
        name = _LEADING_BARCODE.sub('', name)

    return ReceiptItem(
        product_code=f"{PRODUCT_CODE_PREFIX}{parsed.code}",
        product_name=name,
        barcode=parsed.barcode,
        ordered_quantity=parsed.ordered_quantity,
        supplied_quantity=parsed.supplied_quantity,
        selling_method=selling_method_for(parsed.unit),
        price=parsed.price,
        total_price=parsed.total_price,
        promotions=[],
    )


def _step(state: _FoldState, line: str) -> _FoldState:
    if not line or is_separator(line):
        return state

    parsed = classify_item_line(line)
    if parsed is not None:
        items = state.items if state.current is None else state.items + (state.current,)
        return _FoldState(items, build_receipt_item(parsed))

    promotion = match_promotion_line(line)
    if promotion is not None:
        if state.current is None:
            logger.debug(f"[Assembler] promotion before first item dropped: {line!r}")
            return state
        current = state.current.model_copy(
            update={"promotions": state.current.promotions + [promotion]}
        )
        return _FoldState(state.items, current)

    return state


def _section_lines(lines: List[str], sections: List[Section]) -> Iterator[str]:
    for section in sections:
        for idx in range(section.start, section.end):
            yield lines[idx].strip()


def assemble_items(lines: List[str], sections: List[Section]) -> List[ReceiptItem]:
    """Items of all item tables, in document order."""
    state = reduce(_step, _section_lines(lines, sections), _FoldState())
    items = list(state.items)
    if state.current is not None:
        items.append(state.current)
    return items
