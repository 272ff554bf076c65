"""
Hotel booking endpoints for the authenticated attendee.
"""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.schemas.booking import BookingIdResponse, BookingRequest, BookingResponse
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.cache_service import (
    get_cached_booking,
    invalidate_booking_cache,
    set_cached_booking,
)
from hotel_booking.services.factory import get_booking_service
from hotel_booking.db.session import get_db
from hotel_booking.core.security import get_current_user_id
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/booking", tags=["Booking"])


@router.get("", response_model=BookingResponse)
async def get_booking_endpoint(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Get the authenticated user's booking with its room.
    Served from Redis when cached; the entry is dropped whenever the
    user creates or changes their booking.
    """
    cached = await get_cached_booking(user_id)
    if cached:
        logger.info("booking_cache_hit", user_id=user_id)
        return JSONResponse(content=cached)

    booking = await service.get_booking(user_id)
    response = BookingResponse.model_validate(booking)

    await set_cached_booking(user_id, response.model_dump(mode="json", by_alias=True))
    return response


@router.post("", response_model=BookingIdResponse)
async def create_booking_endpoint(
    payload: BookingRequest,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: AsyncSession = Depends(get_db),
):
    """
    Book a room. Requires a paid, in-person ticket that includes
    accommodation, and a room nobody else holds.
    """
    booking = await service.create_booking(user_id, payload.room_id)
    # The write must be visible before the cached view is dropped
    await db.commit()
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=booking.id)


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def update_booking_endpoint(
    payload: BookingRequest,
    booking_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: AsyncSession = Depends(get_db),
):
    """Move the user's booking to another free room. The booking id is kept."""
    booking = await service.update_booking(user_id, payload.room_id, booking_id)
    # The write must be visible before the cached view is dropped
    await db.commit()
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=booking.id)
