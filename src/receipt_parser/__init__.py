"""
Receipt parser package: Hebrew delivery-receipt text to structured records.

Pipeline
--------
lines → sections → {fields, item lines → assembler, summary} → ReceiptDetails

Usage
-----
from receipt_parser import parse_receipt
details = parse_receipt(text)
"""

from receipt_parser.errors import (
    MissingField,
    MissingSection,
    MissingTotal,
    NoItemsFound,
    ReceiptParseError,
    UnparsableField,
)
from receipt_parser.models import (
    PromotionInfo,
    PromotionOrderEntry,
    PromotionType,
    ReceiptDetails,
    ReceiptItem,
    ReceiptPromotion,
    SellingMethod,
)
from receipt_parser.parser import ReceiptParser, parse_receipt

__all__ = [
    "ReceiptParser",
    "parse_receipt",
    "ReceiptDetails",
    "ReceiptItem",
    "ReceiptPromotion",
    "SellingMethod",
    "PromotionInfo",
    "PromotionOrderEntry",
    "PromotionType",
    "ReceiptParseError",
    "MissingSection",
    "MissingField",
    "UnparsableField",
    "NoItemsFound",
    "MissingTotal",
]
