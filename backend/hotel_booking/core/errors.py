"""
Booking domain errors.

Every business-rule failure carries an ErrorKind. The HTTP layer maps kinds
to status codes in one place (see hotel_booking.main), so services never
know about HTTP.
"""

import enum


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class BookingError(Exception):
    """Base class for expected, client-visible booking failures."""

    kind: ErrorKind = ErrorKind.FORBIDDEN
    default_message = "Booking request rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(kind={self.kind.value}, message={self.message!r})>"


class NotFoundError(BookingError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class ForbiddenError(BookingError):
    kind = ErrorKind.FORBIDDEN
    default_message = "This booking action is not allowed"


class RoomUnavailableError(ForbiddenError):
    """Raised by the store when a write would put two bookings on one room."""

    default_message = "Room unavailable"


# Messages shared between services and tests
NO_ENROLLMENT = "No enrollment for this user"
NO_TICKET = "No ticket for this enrollment"
INELIGIBLE_TICKET = (
    "Ineligible ticket: it may be remote, not include accommodation, "
    "or accommodation has not been paid for yet"
)
NO_BOOKING = "No booking for this user"
NO_BOOKING_TO_UPDATE = "No existing booking to update"
ROOM_UNAVAILABLE = "Room unavailable"
ROOM_NOT_FOUND = "Room does not exist"
BOOKING_NOT_OWNED = "Booking does not belong to user"
