"""
Tests for booking eligibility rules.
"""

import pytest

from hotel_booking.core.errors import (
    INELIGIBLE_TICKET,
    NO_BOOKING_TO_UPDATE,
    NO_ENROLLMENT,
    NO_TICKET,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
)
from hotel_booking.models.ticket import TicketStatus

USER_ID = 1


@pytest.mark.asyncio
async def test_create_without_enrollment(eligibility):
    with pytest.raises(NotFoundError) as exc_info:
        await eligibility.check_create_eligibility(USER_ID)
    assert exc_info.value.message == NO_ENROLLMENT
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_create_without_ticket(eligibility, fake_db):
    fake_db.add_enrollment(USER_ID)

    with pytest.raises(NotFoundError) as exc_info:
        await eligibility.check_create_eligibility(USER_ID)
    assert exc_info.value.message == NO_TICKET


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "is_remote, includes_hotel, status",
    [
        (True, True, TicketStatus.PAID),
        (False, False, TicketStatus.PAID),
        (False, True, TicketStatus.RESERVED),
        (True, False, TicketStatus.RESERVED),
    ],
)
async def test_create_with_ineligible_ticket(eligibility, fake_db, is_remote, includes_hotel, status):
    enrollment = fake_db.add_enrollment(USER_ID)
    fake_db.add_ticket(enrollment, is_remote=is_remote, includes_hotel=includes_hotel, status=status)

    with pytest.raises(ForbiddenError) as exc_info:
        await eligibility.check_create_eligibility(USER_ID)
    assert exc_info.value.message == INELIGIBLE_TICKET
    assert exc_info.value.kind is ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_create_with_paid_in_person_hotel_ticket(eligibility, fake_db):
    enrollment = fake_db.add_enrollment(USER_ID)
    ticket = fake_db.add_ticket(enrollment)

    context = await eligibility.check_create_eligibility(USER_ID)

    assert context.enrollment is enrollment
    assert context.ticket is ticket


@pytest.mark.asyncio
async def test_oldest_ticket_decides(eligibility, fake_db):
    """With several tickets on one enrollment, the first one issued counts."""
    enrollment = fake_db.add_enrollment(USER_ID)
    fake_db.add_ticket(enrollment, is_remote=True)
    fake_db.add_ticket(enrollment)

    with pytest.raises(ForbiddenError):
        await eligibility.check_create_eligibility(USER_ID)


@pytest.mark.asyncio
async def test_update_without_booking_is_forbidden(eligibility, fake_db):
    """Missing booking on update is Forbidden even for an eligible user."""
    fake_db.add_eligible_user(USER_ID)

    with pytest.raises(ForbiddenError) as exc_info:
        await eligibility.check_update_eligibility(USER_ID)
    assert exc_info.value.message == NO_BOOKING_TO_UPDATE


@pytest.mark.asyncio
async def test_update_ignores_ticket_state(eligibility, fake_db):
    """Ticket state is only checked when booking, not when changing rooms."""
    enrollment = fake_db.add_enrollment(USER_ID)
    fake_db.add_ticket(enrollment, is_remote=True, includes_hotel=False, status=TicketStatus.RESERVED)
    booking = fake_db.add_booking(USER_ID, fake_db.add_room())

    assert await eligibility.check_update_eligibility(USER_ID) is booking


@pytest.mark.asyncio
async def test_update_does_not_require_enrollment(eligibility, fake_db):
    booking = fake_db.add_booking(USER_ID, fake_db.add_room())

    assert await eligibility.check_update_eligibility(USER_ID) is booking
