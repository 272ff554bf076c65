"""
Room assignment: read, create and move a user's hotel booking.

FLOW
====

create_booking(user_id, room_id)
  1. Eligibility (enrollment + paid in-person ticket with hotel)
  2. Room already held by a booking?      -> Forbidden
  3. Room exists?                         -> NotFound
  4. Insert booking, re-read it by room

update_booking(user_id, room_id, booking_id)
  1. User already has a booking?          -> Forbidden
  2. Room exists?                         -> NotFound
  3. Room already held by a booking?      -> Forbidden
  4. Move booking_id to room_id, re-read it by room

Note the occupancy/existence order differs between create and update. Both
orders are observable by clients and are kept as they are.

CONCURRENCY
===========

Steps 2-4 are check-then-write without a transaction-wide lock. Two requests
for the same free room can both pass the occupancy check. The store's unique
constraint on room_id rejects the second write, and the store raises
RoomUnavailableError, so the loser sees the same Forbidden it would have seen
had it arrived a moment later.
"""

import time
from contextlib import contextmanager
from typing import Any

from hotel_booking.core.errors import (
    NO_BOOKING,
    NO_ENROLLMENT,
    ROOM_NOT_FOUND,
    ROOM_UNAVAILABLE,
    BookingError,
    ForbiddenError,
    NotFoundError,
)
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import booking_latency, record_booking_attempt
from hotel_booking.services.eligibility import EligibilityChecker
from hotel_booking.services.interfaces import BookingStore, EnrollmentRepository, RoomRepository

logger = get_logger(__name__)


@contextmanager
def _instrumented(operation: str):
    start = time.perf_counter()
    try:
        yield
    except BookingError as e:
        record_booking_attempt(operation, e.kind.value)
        logger.info("booking_rejected", operation=operation, kind=e.kind.value, reason=e.message)
        raise
    except Exception:
        record_booking_attempt(operation, "error")
        raise
    else:
        record_booking_attempt(operation, "success")
    finally:
        booking_latency.labels(operation=operation).observe(time.perf_counter() - start)


class BookingService:
    def __init__(
        self,
        eligibility: EligibilityChecker,
        bookings: BookingStore,
        rooms: RoomRepository,
        enrollments: EnrollmentRepository,
    ):
        self.eligibility = eligibility
        self.bookings = bookings
        self.rooms = rooms
        self.enrollments = enrollments

    async def get_booking(self, user_id: int) -> Any:
        """Return the user's booking with its room."""
        with _instrumented("get"):
            enrollment = await self.enrollments.find_with_address_by_user_id(user_id)
            if not enrollment:
                raise NotFoundError(NO_ENROLLMENT)

            booking = await self.bookings.find_with_room_by_user_id(user_id)
            if not booking:
                raise NotFoundError(NO_BOOKING)
            return booking

    async def create_booking(self, user_id: int, room_id: int) -> Any:
        with _instrumented("create"):
            await self.eligibility.check_create_eligibility(user_id)

            if await self.bookings.find_by_room_id(room_id):
                raise ForbiddenError(ROOM_UNAVAILABLE)

            if not await self.rooms.find_by_id(room_id):
                raise NotFoundError(ROOM_NOT_FOUND)

            await self.bookings.create(user_id, room_id)
            booking = await self.bookings.find_by_room_id(room_id)

            logger.info("booking_created", booking_id=booking.id, user_id=user_id, room_id=room_id)
            return booking

    async def update_booking(self, user_id: int, room_id: int, booking_id: int) -> Any:
        with _instrumented("update"):
            current = await self.eligibility.check_update_eligibility(user_id)
            # update_room may mutate `current` in place
            previous_room_id = current.room_id

            if not await self.rooms.find_by_id(room_id):
                raise NotFoundError(ROOM_NOT_FOUND)

            if await self.bookings.find_by_room_id(room_id):
                raise ForbiddenError(ROOM_UNAVAILABLE)

            await self.bookings.update_room(booking_id, room_id, user_id)
            booking = await self.bookings.find_by_room_id(room_id)

            logger.info(
                "booking_room_changed",
                booking_id=booking.id,
                user_id=user_id,
                from_room_id=previous_room_id,
                to_room_id=room_id,
            )
            return booking
