"""
Booking store interface.

The room assignment engine only talks to this contract, so the SQLAlchemy
implementation can be swapped for an in-memory one in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BookingStore(ABC):
    """
    Persistence contract for bookings.

    Implementations:
    - SqlBookingStore: PostgreSQL via SQLAlchemy (unique room_id)
    - InMemoryBookingStore: test double (tests/fakes.py)

    Writes that would put a second booking on a room must raise
    RoomUnavailableError instead of persisting.
    """

    @abstractmethod
    async def find_with_room_by_user_id(self, user_id: int) -> Optional[Any]:
        """Booking of the user with its `room` loaded, or None."""
        pass

    @abstractmethod
    async def find_by_room_id(self, room_id: int) -> Optional[Any]:
        """Booking currently holding the room, or None."""
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Any]:
        """Booking of the user without related rows, or None."""
        pass

    @abstractmethod
    async def create(self, user_id: int, room_id: int) -> Any:
        """
        Persist a new booking.

        Raises:
            RoomUnavailableError: another booking already holds the room
        """
        pass

    @abstractmethod
    async def update_room(self, booking_id: int, room_id: int, user_id: int) -> None:
        """
        Move the user's booking to another room.

        Raises:
            ForbiddenError: booking_id is not a booking of user_id
            RoomUnavailableError: another booking already holds the room
        """
        pass
