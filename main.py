"""
Receipt Parser API - Main Application
FastAPI application for delivery-receipt parsing and promotion classification

Run with: python main.py
Access API docs at: http://localhost:8000/docs
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from api.models import HealthResponse
from api.routes import router
from utils import load_config, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging_config = load_config().get('logging', {})
    setup_logging(
        log_file=logging_config.get('log_file', 'logs/receipt_parser.log'),
        level=logging_config.get('level', 'INFO'),
    )
    yield


# Create FastAPI app
app = FastAPI(
    title="Receipt Parser API",
    description="Parse Hebrew delivery receipts and classify promotion messages",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Receipt Parser API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return HealthResponse()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
