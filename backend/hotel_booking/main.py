"""
Hotel Booking API - Main Application Entry Point

Lets an authenticated attendee view, book and change the hotel room that
comes with their ticket:
- Eligibility rules on enrollment and ticket state
- Room assignment guarded by a unique room constraint
- Redis caching of the booking view with per-user invalidation
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel_booking.core.config import get_settings
from hotel_booking.core.errors import BookingError, ErrorKind
from hotel_booking.core.logging import setup_logging, get_logger
from hotel_booking.core.metrics import metrics_endpoint
from hotel_booking.api.router import api_router
from hotel_booking.api.middleware import RequestLoggingMiddleware
from hotel_booking.db.session import engine
from hotel_booking.services.cache_service import get_redis, close_redis, get_cache_stats

settings = get_settings()
logger = get_logger(__name__)

STATUS_BY_ERROR_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Hotel room booking for ticket holders",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_ERROR_KIND[exc.kind],
        content={"detail": exc.message},
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()
