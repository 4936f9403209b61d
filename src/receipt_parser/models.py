"""
Receipt and promotion records
Using Pydantic for validation and JSON serialization

Everything the parser returns is a frozen model: an item is built once per
item line and only ever replaced by a copy carrying one more promotion.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SellingMethod(str, Enum):
    """How an item is sold."""
    UNIT = "unit"
    WEIGHT = "weight"


class PromotionType(str, Enum):
    """Discount mechanic inferred from a promotion message."""
    SIMPLE_DISCOUNT = "simple_discount"
    X_FOR_Y = "x_for_y"
    BUY_X_GET_Y = "buy_x_get_y"
    PERSONAL_COUPON = "personal_coupon"
    UNKNOWN = "unknown"


# ─── Receipt Models ───────────────────────────────────────────────────────────

class ReceiptPromotion(BaseModel):
    """Promotion line attached to the item printed above it."""
    model_config = ConfigDict(frozen=True)

    code: str               = Field(..., description="Promotion code")
    description: str        = Field(..., description="Promotion text as printed")
    discount_amount: float  = Field(..., description="Discount magnitude (positive)", ge=0)


class ReceiptItem(BaseModel):
    """One item line of a delivery receipt."""
    model_config = ConfigDict(frozen=True)

    product_code: str        = Field(..., description="'P_' + barcode or item code")
    product_name: str        = Field(...)
    barcode: Optional[str]   = Field(None, description="13-digit barcode when printed")
    ordered_quantity: float  = Field(...)
    supplied_quantity: float = Field(..., description="May differ from ordered (stock-outs)")
    selling_method: SellingMethod = Field(...)
    price: float             = Field(..., description="Per-unit price, 0 for '----'")
    total_price: float       = Field(..., description="Line total, 0 for '----'")
    promotions: List[ReceiptPromotion] = Field(default_factory=list)


class ReceiptDetails(BaseModel):
    """Structured delivery receipt."""
    model_config = ConfigDict(frozen=True)

    order_code: str       = Field(..., description="Zero-padded order number", min_length=8, max_length=8)
    order_date: str       = Field(..., description="Order time and date as printed")
    delivery_date: str    = Field(..., description="Delivery time and date as printed")
    customer_name: str    = Field(...)
    customer_phone: str   = Field(...)
    address: str          = Field(...)
    items: List[ReceiptItem] = Field(default_factory=list)
    subtotal: float       = Field(0.0)
    vat_amount: float     = Field(0.0)
    delivery_fee: float   = Field(0.0)
    total_amount: float   = Field(...)


# ─── Promotion Models ─────────────────────────────────────────────────────────

class SimpleDiscountConditions(BaseModel):
    type: Literal[PromotionType.SIMPLE_DISCOUNT] = PromotionType.SIMPLE_DISCOUNT
    original_price: float
    discounted_price: float
    discount_percent: float


class XForYConditions(BaseModel):
    """'3ב30' style bundle. Fields stay empty for the 'N יח' form."""
    type: Literal[PromotionType.X_FOR_Y] = PromotionType.X_FOR_Y
    required_quantity: Optional[int] = None
    bundle_price: Optional[float] = None
    effective_price_per_unit: Optional[float] = None


class BuyXGetYConditions(BaseModel):
    type: Literal[PromotionType.BUY_X_GET_Y] = PromotionType.BUY_X_GET_Y
    buy_quantity: Optional[int] = None
    get_quantity: Optional[int] = None
    effective_discount: Optional[float] = Field(None, description="Percent of the bundle given away")


class PersonalCouponConditions(BaseModel):
    type: Literal[PromotionType.PERSONAL_COUPON] = PromotionType.PERSONAL_COUPON
    coupon_code: Optional[str] = None
    discount_amount: float


class UnknownConditions(BaseModel):
    type: Literal[PromotionType.UNKNOWN] = PromotionType.UNKNOWN


PromotionConditions = Annotated[
    Union[
        SimpleDiscountConditions,
        XForYConditions,
        BuyXGetYConditions,
        PersonalCouponConditions,
        UnknownConditions,
    ],
    Field(discriminator="type"),
]


class PromotionOrderEntry(BaseModel):
    """Promotion as attached to an order entry by the retailer."""
    promotion_code: str            = Field(...)
    promotion_message: str         = Field(..., description="Free text, e.g. '2+1' or '3ב30'")
    coupon_code: Optional[str]     = Field(None, description="'0' means no coupon")


class PromotionInfo(BaseModel):
    """Classified promotion with computed conditions."""
    code: str
    message: str
    type: PromotionType
    conditions: PromotionConditions
    coupon_code: Optional[str] = None
    participating_products: Optional[List[str]] = Field(
        None, description="Filled by the order-detail step, never by the classifier"
    )
