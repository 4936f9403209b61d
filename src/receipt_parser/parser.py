"""
Receipt Parser
==============
Turns the plain-text rendering of a delivery receipt into ReceiptDetails.

Usage
-----
    parser  = ReceiptParser()
    details = parser.parse(text)

Any missing or malformed section raises a ReceiptParseError subclass; a
partial receipt is never returned.
"""

from typing import Dict, List, Optional

from loguru import logger

from receipt_parser.assembler import assemble_items
from receipt_parser.fields import (
    extract_address,
    extract_customer_info,
    extract_dates,
    extract_order_number,
)
from receipt_parser.lines import split_lines
from receipt_parser.models import ReceiptDetails
from receipt_parser.sections import locate_item_sections
from receipt_parser.summary import extract_summary
from receipt_parser.validation import check_totals
from utils import load_config


class ReceiptParser:
    """Stateless after construction; one instance can be shared freely."""

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict] = None):
        self.config = config if config is not None else load_config(config_path)
        parser_config = self.config.get('parser', {})
        self.label_window = parser_config.get('label_window', 20)
        self.value_window = parser_config.get('value_window', 10)
        self.totals_tolerance = parser_config.get('totals_tolerance', 0.01)

    def parse(self, text: str) -> ReceiptDetails:
        lines = split_lines(text)

        order_code = extract_order_number(lines, self.label_window)
        order_date, delivery_date = extract_dates(lines, self.value_window)
        customer_name, customer_phone = extract_customer_info(lines, self.value_window)
        address = extract_address(lines)
        items = assemble_items(lines, locate_item_sections(lines))
        summary = extract_summary(lines)

        details = ReceiptDetails(
            order_code=order_code,
            order_date=order_date,
            delivery_date=delivery_date,
            customer_name=customer_name,
            customer_phone=customer_phone,
            address=address,
            items=items,
            subtotal=summary.subtotal,
            vat_amount=summary.vat_amount,
            delivery_fee=summary.delivery_fee,
            total_amount=summary.total_amount,
        )

        logger.info(
            f"[ReceiptParser] order={order_code} lines={len(lines)} "
            f"items={len(items)} subtotal={summary.subtotal:.2f} "
            f"total={summary.total_amount:.2f}"
        )
        for warning in self.check(details):
            logger.warning(f"[ReceiptParser] order={order_code}: {warning}")
        return details

    def check(self, details: ReceiptDetails) -> List[str]:
        """Totals warnings for a parsed receipt."""
        return check_totals(details, self.totals_tolerance)


_default_parser: Optional[ReceiptParser] = None


def parse_receipt(text: str) -> ReceiptDetails:
    """Parse with the default configuration."""
    global _default_parser
    if _default_parser is None:
        _default_parser = ReceiptParser()
    return _default_parser.parse(text)
