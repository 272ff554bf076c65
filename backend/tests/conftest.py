"""
Pytest fixtures: in-memory stores, the booking service, and an HTTP client
whose service dependency is wired to those stores.

Runs without PostgreSQL or Redis.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from hotel_booking.main import app
from hotel_booking.core.security import create_access_token
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.eligibility import EligibilityChecker
from hotel_booking.db.session import get_db
from hotel_booking.services.factory import get_booking_service

from fakes import (
    FakeDatabase,
    FakeSession,
    InMemoryBookingStore,
    InMemoryEnrollmentRepository,
    InMemoryRoomRepository,
    InMemoryTicketRepository,
)

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def eligibility(fake_db: FakeDatabase) -> EligibilityChecker:
    return EligibilityChecker(
        enrollments=InMemoryEnrollmentRepository(fake_db),
        tickets=InMemoryTicketRepository(fake_db),
        bookings=InMemoryBookingStore(fake_db),
    )


@pytest.fixture
def booking_service(fake_db: FakeDatabase, eligibility: EligibilityChecker) -> BookingService:
    return BookingService(
        eligibility=eligibility,
        bookings=InMemoryBookingStore(fake_db),
        rooms=InMemoryRoomRepository(fake_db),
        enrollments=InMemoryEnrollmentRepository(fake_db),
    )


@pytest_asyncio.fixture
async def client(
    booking_service: BookingService, fake_session: FakeSession
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose service and session dependencies are the in-memory ones."""

    async def override_get_db():
        yield fake_session

    app.dependency_overrides[get_booking_service] = lambda: booking_service
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers_for() -> Callable[[int], dict]:
    def _headers(user_id: int) -> dict:
        token = create_access_token(data={"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def auth_headers(auth_headers_for) -> dict:
    return auth_headers_for(USER_ID)
