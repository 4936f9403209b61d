"""
API Package
Contains FastAPI routes and models
"""

from api.routes import router
from api.models import (
    ReceiptParseRequest,
    ReceiptParseResponse,
    PromotionClassifyRequest,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    'router',
    'ReceiptParseRequest',
    'ReceiptParseResponse',
    'PromotionClassifyRequest',
    'HealthResponse',
    'ErrorResponse'
]
