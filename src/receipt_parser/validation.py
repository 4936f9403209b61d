"""Totals cross-checks for a parsed receipt."""

from typing import List

from receipt_parser.models import ReceiptDetails


TOTALS_TOLERANCE = 0.01


def check_totals(details: ReceiptDetails, tolerance: float = TOTALS_TOLERANCE) -> List[str]:
    """
    Warnings for totals that do not add up; empty when the receipt is consistent.

    Checks
    ------
    subtotal + delivery fee        == total amount
    Σ item totals − Σ discounts    == subtotal
    """
    warnings: List[str] = []

    expected_total = details.subtotal + details.delivery_fee
    if abs(expected_total - details.total_amount) >= tolerance:
        warnings.append(
            f"subtotal + delivery fee = {expected_total:.2f} "
            f"but total amount is {details.total_amount:.2f}"
        )

    items_total = sum(item.total_price for item in details.items)
    discounts = sum(p.discount_amount for item in details.items for p in item.promotions)
    if abs(items_total - discounts - details.subtotal) >= tolerance:
        warnings.append(
            f"items {items_total:.2f} - discounts {discounts:.2f} = "
            f"{items_total - discounts:.2f} but subtotal is {details.subtotal:.2f}"
        )

    return warnings
