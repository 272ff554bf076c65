"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .repositories import (
    SqlBookingStore,
    SqlEnrollmentRepository,
    SqlRoomRepository,
    SqlTicketRepository,
)

__all__ = [
    'SqlBookingStore',
    'SqlEnrollmentRepository',
    'SqlRoomRepository',
    'SqlTicketRepository',
]
