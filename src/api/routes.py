"""
API Routes - All API endpoints
"""

import time

from fastapi import APIRouter, HTTPException
from loguru import logger

from api.models import (
    ErrorResponse,
    PromotionClassifyRequest,
    ReceiptParseRequest,
    ReceiptParseResponse,
)
from promotion_classifier import extract_promotion_info
from receipt_parser import ReceiptParseError, ReceiptParser
from receipt_parser.models import PromotionInfo, PromotionOrderEntry

# Create router
router = APIRouter()

# Initialize parser
parser = ReceiptParser()

MAX_TEXT_LENGTH = parser.config.get('api', {}).get('max_text_length', 200_000)


# ==================== API ENDPOINTS ====================

@router.post(
    "/receipts/parse",
    response_model=ReceiptParseResponse,
    responses={422: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
    tags=["Receipts"],
)
async def parse_receipt(request: ReceiptParseRequest):
    """
    **Parse a delivery receipt**

    Send the plain-text rendering of a receipt and get the structured
    record back. Any missing section or unparsable field fails the whole
    request; partial receipts are never returned.

    **Returns:**
    - Order code, dates, customer and address
    - Items with quantities, prices and promotions
    - Subtotal, VAT, delivery fee and total
    - Warnings when the totals do not add up

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/receipts/parse \\
      -H "Content-Type: application/json" \\
      -d '{"text": "..."}'
    ```
    """
    if len(request.text) > MAX_TEXT_LENGTH:
        raise HTTPException(
            413,
            detail=ErrorResponse(
                error="TextTooLarge",
                message=f"Receipt text exceeds {MAX_TEXT_LENGTH} characters",
            ).model_dump(),
        )

    start = time.perf_counter()
    try:
        details = parser.parse(request.text)
    except ReceiptParseError as e:
        logger.error(f"Receipt rejected: {type(e).__name__}: {e}")
        raise HTTPException(
            422,
            detail=ErrorResponse(error=type(e).__name__, message=str(e)).model_dump(),
        )

    return ReceiptParseResponse(
        receipt=details,
        warnings=parser.check(details),
        processing_time_ms=int((time.perf_counter() - start) * 1000),
    )


@router.post("/promotions/classify", response_model=PromotionInfo, tags=["Promotions"])
async def classify_promotion(request: PromotionClassifyRequest):
    """
    **Classify a promotion message**

    Infers the promotion type (coupon, 2+1, 3ב30, direct discount) and
    computes its conditions from the entry's per-unit prices.

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/promotions/classify \\
      -H "Content-Type: application/json" \\
      -d '{"promotion_code": "904123", "promotion_message": "2+1", "base_price": 10, "actual_price": 6.67}'
    ```
    """
    entry = PromotionOrderEntry(
        promotion_code=request.promotion_code,
        promotion_message=request.promotion_message,
        coupon_code=request.coupon_code,
    )
    return extract_promotion_info(
        entry,
        request.base_price,
        request.actual_price,
        request.quantity,
    )
