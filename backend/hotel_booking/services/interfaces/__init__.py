"""
Service interfaces for dependency inversion.
Allows swapping storage implementations without changing business logic.
"""

from .booking_store import BookingStore
from .catalog import EnrollmentRepository, RoomRepository, TicketRepository

__all__ = ['BookingStore', 'EnrollmentRepository', 'RoomRepository', 'TicketRepository']
