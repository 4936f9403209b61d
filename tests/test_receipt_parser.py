"""
Tests for the receipt parser (fixture receipts end to end)
"""

import json
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_parser import (
    MissingField,
    MissingSection,
    MissingTotal,
    NoItemsFound,
    ReceiptParser,
    SellingMethod,
    UnparsableField,
    parse_receipt,
)
from receipt_parser import labels


FIXTURES_DIR = Path(__file__).parent / "fixtures"
FIXTURES = sorted(p.stem for p in FIXTURES_DIR.glob("*.txt"))


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / f"{name}.txt").read_text(encoding="utf-8")


def load_expected(name: str) -> dict:
    return json.loads((FIXTURES_DIR / f"{name}.expected.json").read_text(encoding="utf-8"))


@pytest.fixture
def parser():
    return ReceiptParser()


@pytest.fixture
def receipt_text():
    return load_fixture("two_page_order")


def test_fixtures_present():
    assert FIXTURES, "No fixture receipts found in tests/fixtures/"


@pytest.mark.parametrize("name", FIXTURES)
def test_fixture_matches_expected(parser, name):
    actual = parser.parse(load_fixture(name))
    assert actual.model_dump(mode="json") == load_expected(name)


@pytest.mark.parametrize("name", FIXTURES)
def test_fixture_totals_add_up(parser, name):
    details = parser.parse(load_fixture(name))

    assert details.subtotal + details.delivery_fee == pytest.approx(details.total_amount, abs=0.01)

    items_total = sum(item.total_price for item in details.items)
    discounts = sum(p.discount_amount for item in details.items for p in item.promotions)
    assert items_total - discounts == pytest.approx(details.subtotal, abs=0.01)
    assert parser.check(details) == []


@pytest.mark.parametrize("name", FIXTURES)
def test_order_code_is_eight_digits(parser, name):
    details = parser.parse(load_fixture(name))
    assert len(details.order_code) == 8
    assert details.order_code.isdigit()


def test_parse_is_deterministic(parser, receipt_text):
    assert parser.parse(receipt_text) == parser.parse(receipt_text)


def test_module_level_parse(receipt_text):
    assert parse_receipt(receipt_text).order_code == "12345678"


def test_crlf_input(parser, receipt_text):
    crlf = receipt_text.replace("\n", "\r\n")
    assert parser.parse(crlf) == parser.parse(receipt_text)


def test_items_across_pages(parser, receipt_text):
    details = parser.parse(receipt_text)

    assert len(details.items) == 7
    assert [i.product_code for i in details.items][-3:] == [
        "P_7290000000001", "P_7290011194246", "P_88001",
    ]
    gift = details.items[4]
    assert gift.total_price == 0
    assert gift.price == 0
    assert gift.promotions == []


def test_selling_methods(parser, receipt_text):
    methods = [item.selling_method for item in parser.parse(receipt_text).items]
    assert methods[:4] == [
        SellingMethod.UNIT, SellingMethod.WEIGHT, SellingMethod.WEIGHT, SellingMethod.UNIT,
    ]


def test_partial_fulfillment(parser, receipt_text):
    oil = parser.parse(receipt_text).items[-1]
    assert oil.ordered_quantity == 2
    assert oil.supplied_quantity == 1


def test_order_code_zero_padded(parser, receipt_text):
    text = receipt_text.replace("\n12345678\n", "\n4567\n")
    assert parser.parse(text).order_code == "00004567"


def test_order_code_width_is_not_configurable(receipt_text):
    parser = ReceiptParser(config={"parser": {"order_code_width": 10}})
    assert parser.parse(receipt_text).order_code == "12345678"


def test_missing_fee_and_vat_default_to_zero(parser, receipt_text):
    text = receipt_text.replace("29.90: דמי משלוח\n", "").replace('19.46: מע"מ 17%\n', "")
    details = parser.parse(text)

    assert details.delivery_fee == 0
    assert details.vat_amount == 0
    assert details.total_amount == 133.93
    # total still includes the fee, so the cross-check flags it
    assert len(parser.check(details)) == 1


# ─── Failures ─────────────────────────────────────────────────────────────────

def test_missing_delivery_document(parser, receipt_text):
    with pytest.raises(MissingSection) as exc:
        parser.parse(receipt_text.replace(labels.DELIVERY_DOCUMENT, "מסמך"))
    assert exc.value.label == labels.DELIVERY_DOCUMENT


def test_non_numeric_order_code(parser, receipt_text):
    with pytest.raises(UnparsableField) as exc:
        parser.parse(receipt_text.replace("\n12345678\n", "\n12A45678\n"))
    assert exc.value.field == "order_code"


def test_label_value_count_mismatch(parser, receipt_text):
    text = receipt_text.replace("\n12345678\n", "\n12345678\n99\n")
    with pytest.raises(UnparsableField, match="mismatch"):
        parser.parse(text)


def test_missing_date_labels(parser, receipt_text):
    with pytest.raises(MissingSection) as exc:
        parser.parse(receipt_text.replace(labels.DELIVERY_DATE_LABEL, "אספקה"))
    assert exc.value.label == labels.DELIVERY_DATE_LABEL


def test_missing_phone(parser, receipt_text):
    with pytest.raises(MissingField) as exc:
        parser.parse(receipt_text.replace("0521234567", "אין טלפון"))
    assert exc.value.field == "customer_phone"


def test_missing_items_header(parser, receipt_text):
    with pytest.raises(NoItemsFound):
        parser.parse(receipt_text.replace(labels.ITEMS_HEADER, "פריטים"))


def test_missing_total(parser, receipt_text):
    with pytest.raises(MissingTotal):
        parser.parse(receipt_text.replace("133.93 סכום לתשלום\n", ""))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
