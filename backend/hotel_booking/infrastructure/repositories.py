"""
SQLAlchemy implementations of the booking store and catalog lookups.

All methods run on the request's AsyncSession; the session dependency owns
commit/rollback. Writes rely on the uq_booking_room constraint: if two
requests race past the service's occupancy check, the second flush fails
and is reported as RoomUnavailableError.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.core.errors import BOOKING_NOT_OWNED, ForbiddenError, RoomUnavailableError
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_room_conflict
from hotel_booking.models import Booking, Enrollment, Room, Ticket
from hotel_booking.services.interfaces import (
    BookingStore,
    EnrollmentRepository,
    RoomRepository,
    TicketRepository,
)

logger = get_logger(__name__)


class SqlBookingStore(BookingStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_with_room_by_user_id(self, user_id: int) -> Optional[Booking]:
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.room))
            .where(Booking.user_id == user_id)
            .order_by(Booking.id.asc())
            .limit(1)
        )
        return result.scalars().first()

    async def find_by_room_id(self, room_id: int) -> Optional[Booking]:
        result = await self.db.execute(select(Booking).where(Booking.room_id == room_id))
        return result.scalar_one_or_none()

    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.id.asc())
            .limit(1)
        )
        return result.scalars().first()

    async def create(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            record_room_conflict()
            logger.warning("booking_room_conflict", room_id=room_id, operation="create")
            raise RoomUnavailableError()

        await self.db.refresh(booking)
        return booking

    async def update_room(self, booking_id: int, room_id: int, user_id: int) -> None:
        try:
            result = await self.db.execute(
                update(Booking)
                .where(Booking.id == booking_id, Booking.user_id == user_id)
                .values(room_id=room_id)
            )
        except IntegrityError:
            await self.db.rollback()
            record_room_conflict()
            logger.warning("booking_room_conflict", room_id=room_id, operation="update")
            raise RoomUnavailableError()

        if result.rowcount == 0:
            raise ForbiddenError(BOOKING_NOT_OWNED)


class SqlEnrollmentRepository(EnrollmentRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_with_address_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        result = await self.db.execute(
            select(Enrollment)
            .options(selectinload(Enrollment.address))
            .where(Enrollment.user_id == user_id)
        )
        return result.scalar_one_or_none()


class SqlTicketRepository(TicketRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        result = await self.db.execute(
            select(Ticket)
            .options(selectinload(Ticket.ticket_type))
            .where(Ticket.enrollment_id == enrollment_id)
            .order_by(Ticket.id.asc())
            .limit(1)
        )
        return result.scalars().first()


class SqlRoomRepository(RoomRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, room_id: int) -> Optional[Room]:
        result = await self.db.execute(select(Room).where(Room.id == room_id))
        return result.scalar_one_or_none()
