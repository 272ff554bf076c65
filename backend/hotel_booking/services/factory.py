"""
Service wiring.

Builds a BookingService over the SQLAlchemy repositories for the request's
session. Tests replace get_booking_service through
app.dependency_overrides to run against in-memory stores.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.infrastructure import (
    SqlBookingStore,
    SqlEnrollmentRepository,
    SqlRoomRepository,
    SqlTicketRepository,
)
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.eligibility import EligibilityChecker


def build_booking_service(db: AsyncSession) -> BookingService:
    bookings = SqlBookingStore(db)
    enrollments = SqlEnrollmentRepository(db)
    eligibility = EligibilityChecker(
        enrollments=enrollments,
        tickets=SqlTicketRepository(db),
        bookings=bookings,
    )
    return BookingService(
        eligibility=eligibility,
        bookings=bookings,
        rooms=SqlRoomRepository(db),
        enrollments=enrollments,
    )


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return build_booking_service(db)
