"""
API Models - Request and Response schemas
Using Pydantic for automatic validation and documentation

Receipt and promotion records themselves live in receipt_parser.models;
these wrap them for the HTTP surface.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from receipt_parser.models import ReceiptDetails


# ─── Receipt Models ───────────────────────────────────────────────────────────

class ReceiptParseRequest(BaseModel):
    """Plain-text rendering of one delivery receipt."""
    text: str = Field(..., description="Receipt text, newline separated", min_length=1)


class ReceiptParseResponse(BaseModel):
    """Parsed receipt plus totals cross-check warnings."""
    status: str             = Field("success", description="Response status")
    receipt: ReceiptDetails = Field(...,       description="Structured receipt")
    warnings: List[str]     = Field(default_factory=list, description="Totals that do not add up")
    processing_time_ms: int = Field(...,       description="Processing time in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "receipt": {
                    "order_code": "12345678",
                    "order_date": "09:41 12/03/24",
                    "delivery_date": "14:00 13/03/24",
                    "customer_name": "ישראל ישראלי",
                    "customer_phone": "0521234567",
                    "address": "הרצל 12 תל אביב 6100000, קומה 3, דירה 7",
                    "items": [
                        {
                            "product_code": "P_7290000066318",
                            "product_name": "חלב תנובה 3% 1 ליטר",
                            "barcode": "7290000066318",
                            "ordered_quantity": 2,
                            "supplied_quantity": 2,
                            "selling_method": "unit",
                            "price": 11.9,
                            "total_price": 23.8,
                            "promotions": [
                                {"code": "904123", "description": "חלב 2 ב-19.00", "discount_amount": 4.8}
                            ],
                        }
                    ],
                    "subtotal": 19.0,
                    "vat_amount": 2.76,
                    "delivery_fee": 0.0,
                    "total_amount": 19.0,
                },
                "warnings": [],
                "processing_time_ms": 2,
            }
        }


# ─── Promotion Models ─────────────────────────────────────────────────────────

class PromotionClassifyRequest(BaseModel):
    """One promotion of an order entry, with the entry's resolved prices."""
    promotion_code: str         = Field(..., description="Promotion code")
    promotion_message: str      = Field(..., description="Free-text promotion message")
    coupon_code: Optional[str]  = Field(None, description="Coupon code, '0' means none")
    base_price: float           = Field(..., description="Base price per unit", ge=0)
    actual_price: float         = Field(..., description="Price per unit after promotion", ge=0)
    quantity: float             = Field(1, description="Ordered quantity", ge=0)


# ─── Health & Error Models ────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",               description="Health status")
    service: str = Field("receipt-parser-api",    description="Service name")
    version: str = Field("1.0.0",                 description="API version")


class ErrorResponse(BaseModel):
    """Error response."""
    status: str           = Field("error", description="Response status")
    error: str            = Field(...,     description="Error type")
    message: str          = Field(...,     description="Error message")
