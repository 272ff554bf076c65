from hotel_booking.schemas.booking import (
    BookingIdResponse,
    BookingRequest,
    BookingResponse,
    RoomResponse,
)

__all__ = [
    "BookingIdResponse", "BookingRequest", "BookingResponse", "RoomResponse",
]
