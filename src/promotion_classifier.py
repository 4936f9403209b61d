"""
Promotion Classifier
====================
Infers the discount mechanic of a promotion from its free-text message and
computes the numeric conditions that go with it.

Promotion types returned
────────────────────────
  'personal_coupon'   Any coupon code other than "0".
  'buy_x_get_y'       "2+1"           buy 2, get 1 free
  'x_for_y'           "3ב30"          3 units for 30, also "2 יח ..."
  'simple_discount'   "10.00 הנחה ..."  or a message ending in "ישיר"
  'unknown'           Anything else. Classification never raises.

The rules form a precedence chain: a bundle message can look like both
"2+1" and "3ב30", and the first rule that fires wins.
"""

import re
from typing import Callable, List, Optional, Tuple

from loguru import logger

from receipt_parser.models import (
    BuyXGetYConditions,
    PersonalCouponConditions,
    PromotionConditions,
    PromotionInfo,
    PromotionOrderEntry,
    PromotionType,
    SimpleDiscountConditions,
    UnknownConditions,
    XForYConditions,
)


NO_COUPON = "0"

# ─── Message patterns ─────────────────────────────────────────────────────────

_BUY_X_GET_Y      = re.compile(r'\d\+\d', re.ASCII)
_X_FOR_Y          = re.compile(r'\dב\d+', re.ASCII)
_X_UNITS          = re.compile(r'\d יח', re.ASCII)
_LEADING_DECIMAL  = re.compile(r'^\d+\.\d+\s', re.ASCII)
_DIRECT_DISCOUNT  = re.compile(r'ישיר$')

_BUY_GET_QUANTITIES = re.compile(r'(\d+)\+(\d+)', re.ASCII)
_BUNDLE_TERMS       = re.compile(r'(\d+)ב(\d+)', re.ASCII)


def _has_coupon(message: str, coupon_code: Optional[str]) -> bool:
    return bool(coupon_code) and coupon_code != NO_COUPON


_RULES: List[Tuple[PromotionType, Callable[[str, Optional[str]], bool]]] = [
    (PromotionType.PERSONAL_COUPON, _has_coupon),
    (PromotionType.BUY_X_GET_Y,     lambda msg, _: bool(_BUY_X_GET_Y.search(msg))),
    (PromotionType.X_FOR_Y,         lambda msg, _: bool(_X_FOR_Y.search(msg) or _X_UNITS.search(msg))),
    (PromotionType.SIMPLE_DISCOUNT, lambda msg, _: bool(_LEADING_DECIMAL.search(msg) or _DIRECT_DISCOUNT.search(msg))),
]


def infer_promotion_type(message: str, coupon_code: Optional[str] = None) -> PromotionType:
    """First rule that fires, UNKNOWN when none does."""
    for promotion_type, applies in _RULES:
        if applies(message, coupon_code):
            return promotion_type
    return PromotionType.UNKNOWN


def parse_promotion_conditions(
    message: str,
    promotion_type: PromotionType,
    base_price: float,
    actual_price: float,
    quantity: float,
    coupon_code: Optional[str] = None,
) -> PromotionConditions:
    """
    Type-specific conditions.

    Prices are per unit and already rounded by the caller; nothing is
    rounded here.
    """
    if promotion_type == PromotionType.SIMPLE_DISCOUNT:
        percent = (base_price - actual_price) / base_price * 100 if base_price else 0.0
        return SimpleDiscountConditions(
            original_price=base_price,
            discounted_price=actual_price,
            discount_percent=percent,
        )

    if promotion_type == PromotionType.X_FOR_Y:
        m = _BUNDLE_TERMS.search(message)
        if not m:
            return XForYConditions()
        required = int(m.group(1))
        bundle_price = float(m.group(2))
        return XForYConditions(
            required_quantity=required,
            bundle_price=bundle_price,
            effective_price_per_unit=bundle_price / required if required else None,
        )

    if promotion_type == PromotionType.BUY_X_GET_Y:
        m = _BUY_GET_QUANTITIES.search(message)
        if not m:
            return BuyXGetYConditions()
        buy, get = int(m.group(1)), int(m.group(2))
        total = buy + get
        return BuyXGetYConditions(
            buy_quantity=buy,
            get_quantity=get,
            effective_discount=get / total * 100 if total else 0.0,
        )

    if promotion_type == PromotionType.PERSONAL_COUPON:
        return PersonalCouponConditions(
            coupon_code=coupon_code or None,
            discount_amount=base_price * quantity - actual_price,
        )

    return UnknownConditions()


def extract_promotion_info(
    entry: PromotionOrderEntry,
    base_price_per_unit: float,
    actual_price_per_unit: float,
    quantity: float,
) -> PromotionInfo:
    """Classify one promotion of an order entry."""
    promotion_type = infer_promotion_type(entry.promotion_message, entry.coupon_code)
    conditions = parse_promotion_conditions(
        entry.promotion_message,
        promotion_type,
        base_price_per_unit,
        actual_price_per_unit,
        quantity,
        entry.coupon_code,
    )
    logger.debug(
        f"[PromotionClassifier] {entry.promotion_code} "
        f"{entry.promotion_message!r} -> {promotion_type.value}"
    )
    return PromotionInfo(
        code=entry.promotion_code,
        message=entry.promotion_message,
        type=promotion_type,
        conditions=conditions,
        coupon_code=entry.coupon_code,
    )
