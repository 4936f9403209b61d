"""
Tests for item line classification and item assembly
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_parser.assembler import assemble_items, build_receipt_item
from receipt_parser.errors import NoItemsFound
from receipt_parser.item_lines import (
    ParsedItemLine,
    classify_item_line,
    is_separator,
    match_promotion_line,
    parse_number,
    recover_embedded_barcode,
)
from receipt_parser.labels import ITEMS_HEADER
from receipt_parser.models import SellingMethod
from receipt_parser.sections import Section, locate_item_sections


MILK = "23.80 11.90 2 2 יח 7290000066318 חלב תנובה 3% 1 ליטר"
MILK_PROMO = "23.80- 4.80- 2 מבצע: 904123 חלב 2 ב-19.00"
BREAD = "9.90 9.90 1 1 יח לחם אחיד פרוס 55123"


# ─── Shapes ───────────────────────────────────────────────────────────────────

def test_weight_item_with_barcode_placeholder_total():
    parsed = classify_item_line("---- 36.90 קג 0.5 0.5 ימ 2900000123456 עגבניות שרי")
    item = build_receipt_item(parsed)

    assert item.total_price == 0
    assert item.price == 36.9
    assert item.selling_method == SellingMethod.WEIGHT
    assert item.barcode == "2900000123456"
    assert item.product_code == "P_2900000123456"
    assert item.product_name == "עגבניות שרי"


def test_weight_item_with_code():
    parsed = classify_item_line("11.78 12.40 קג 0.95 1 ימ מלפפון 1234")

    assert parsed.code == "1234"
    assert parsed.description == "מלפפון"
    assert parsed.barcode is None
    assert parsed.supplied_quantity == 0.95
    assert parsed.ordered_quantity == 1


def test_unit_item_with_barcode():
    parsed = classify_item_line(MILK)

    assert parsed.total_price == 23.8
    assert parsed.price == 11.9
    assert parsed.unit == "יח"
    assert parsed.barcode == "7290000066318"
    assert parsed.description == "חלב תנובה 3% 1 ליטר"


def test_barcode_item_keeps_latin_prefix_in_description():
    parsed = classify_item_line("12.90 12.90 1 1 יח ABC 7290000012345 ופל שוקולד")

    assert parsed.barcode == "7290000012345"
    assert parsed.description == "ABC ופל שוקולד"


def test_unit_item_with_code():
    item = build_receipt_item(classify_item_line(BREAD))

    assert item.product_code == "P_55123"
    assert item.product_name == "לחם אחיד פרוס"
    assert item.barcode is None
    assert item.selling_method == SellingMethod.UNIT


def test_package_tag_is_sold_by_weight():
    parsed = classify_item_line("15.00 15.00 1 1 ימ גבינה צהובה 77001")
    assert build_receipt_item(parsed).selling_method == SellingMethod.WEIGHT


def test_both_prices_placeholder():
    parsed = classify_item_line("---- ---- 1 1 יח 7290000000001 שקית מתנה")
    assert parsed.total_price == 0
    assert parsed.price == 0


@pytest.mark.parametrize("line", [
    "",
    "עמוד 1 מתוך 2",
    MILK_PROMO,
    "104.03: סך הכל",
    "12.00 יח לחם",
    "٩.٩٠ ٩.٩٠ ١ ١ יח לחם אחיד פרוס ٥٥١٢٣",
])
def test_non_item_lines(line):
    assert classify_item_line(line) is None


def test_parse_number_placeholder():
    assert parse_number("----") == 0
    assert parse_number("12.40") == 12.4


# ─── Promotions ───────────────────────────────────────────────────────────────

def test_promotion_line():
    promo = match_promotion_line(MILK_PROMO)

    assert promo.code == "904123"
    assert promo.description == "חלב 2 ב-19.00"
    assert promo.discount_amount == 4.8


def test_promotion_line_without_quantity():
    promo = match_promotion_line("10.00- 2.50- מבצע: 900001 הנחה ישיר")
    assert promo.discount_amount == 2.5
    assert promo.code == "900001"


def test_promotion_line_needs_ascii_digits():
    assert match_promotion_line("١٠.٠٠- ٢.٥٠- מבצע: ٩٠٠٠٠١ הנחה ישיר") is None


def test_item_line_is_not_promotion():
    assert match_promotion_line(MILK) is None


# ─── Barcode recovery ─────────────────────────────────────────────────────────

def test_recover_embedded_barcode():
    assert recover_embedded_barcode("7290000066318 חלב") == "7290000066318"
    assert recover_embedded_barcode("חלב 7290000066318") is None
    assert recover_embedded_barcode("729000006631 חלב") is None


def test_item_name_drops_embedded_barcode():
    parsed = ParsedItemLine(
        total_price=5.0, price=5.0, supplied_quantity=1, ordered_quantity=1,
        unit="יח", description="7290000066318 חלב", code="55", barcode="7290000066318",
    )
    item = build_receipt_item(parsed)
    assert item.product_name == "חלב"
    assert item.product_code == "P_55"


def test_separator():
    assert is_separator("----------")
    assert not is_separator("---- ---- 1 1 יח 7290000000001 שקית מתנה")


# ─── Assembly ─────────────────────────────────────────────────────────────────

def test_promotions_attach_to_open_item():
    lines = [ITEMS_HEADER, "-----", MILK, MILK_PROMO, BREAD, "רעש"]
    items = assemble_items(lines, locate_item_sections(lines))

    assert [len(i.promotions) for i in items] == [1, 0]
    assert items[0].promotions[0].code == "904123"


def test_promotion_before_first_item_is_dropped():
    lines = [ITEMS_HEADER, "-----", MILK_PROMO, BREAD]
    items = assemble_items(lines, [Section(2, 4)])

    assert len(items) == 1
    assert items[0].promotions == []


def test_promotion_carries_over_page_break():
    lines = [ITEMS_HEADER, "-----", MILK, ITEMS_HEADER, "-----", MILK_PROMO, BREAD]
    sections = locate_item_sections(lines)
    items = assemble_items(lines, sections)

    assert sections == [Section(2, 3), Section(5, 7)]
    assert len(items[0].promotions) == 1


def test_empty_sections_yield_no_items():
    lines = [ITEMS_HEADER, "-----", "104.03: סך הכל"]
    assert assemble_items(lines, locate_item_sections(lines)) == []


def test_no_items_header():
    with pytest.raises(NoItemsFound):
        locate_item_sections([MILK, BREAD])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
