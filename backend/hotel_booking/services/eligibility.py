"""
Booking eligibility rules.

Creating a booking requires an enrollment and a paid, in-person ticket whose
type includes accommodation. Changing rooms only requires that the user
already holds a booking: ticket state is checked once, at creation, and later
ticket changes never block a room change.
"""

from dataclasses import dataclass
from typing import Any

from hotel_booking.core.errors import (
    INELIGIBLE_TICKET,
    NO_BOOKING_TO_UPDATE,
    NO_ENROLLMENT,
    NO_TICKET,
    ForbiddenError,
    NotFoundError,
)
from hotel_booking.core.logging import get_logger
from hotel_booking.models.ticket import TicketStatus
from hotel_booking.services.interfaces import BookingStore, EnrollmentRepository, TicketRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class EligibilityContext:
    enrollment: Any
    ticket: Any


def ticket_allows_hotel(ticket: Any) -> bool:
    ticket_type = ticket.ticket_type
    if ticket_type.is_remote or not ticket_type.includes_hotel:
        return False
    return ticket.status != TicketStatus.RESERVED


class EligibilityChecker:
    def __init__(
        self,
        enrollments: EnrollmentRepository,
        tickets: TicketRepository,
        bookings: BookingStore,
    ):
        self.enrollments = enrollments
        self.tickets = tickets
        self.bookings = bookings

    async def check_create_eligibility(self, user_id: int) -> EligibilityContext:
        """
        Resolve the user's enrollment and ticket and verify the ticket
        qualifies for a hotel room.

        Raises:
            NotFoundError: no enrollment, or no ticket for the enrollment
            ForbiddenError: remote ticket, no hotel included, or not paid
        """
        enrollment = await self.enrollments.find_with_address_by_user_id(user_id)
        if not enrollment:
            raise NotFoundError(NO_ENROLLMENT)

        ticket = await self.tickets.find_by_enrollment_id(enrollment.id)
        if not ticket:
            logger.warning("ticket_missing_for_enrollment", enrollment_id=enrollment.id)
            raise NotFoundError(NO_TICKET)

        if not ticket_allows_hotel(ticket):
            logger.info(
                "ticket_ineligible",
                ticket_id=ticket.id,
                is_remote=ticket.ticket_type.is_remote,
                includes_hotel=ticket.ticket_type.includes_hotel,
                status=str(ticket.status),
            )
            raise ForbiddenError(INELIGIBLE_TICKET)

        return EligibilityContext(enrollment=enrollment, ticket=ticket)

    async def check_update_eligibility(self, user_id: int) -> Any:
        """
        Return the user's current booking. Enrollment and ticket are not
        consulted: holding a booking is enough to change rooms.

        Raises:
            ForbiddenError: the user has no booking (Forbidden, not NotFound)
        """
        booking = await self.bookings.find_by_user_id(user_id)
        if not booking:
            raise ForbiddenError(NO_BOOKING_TO_UPDATE)
        return booking
