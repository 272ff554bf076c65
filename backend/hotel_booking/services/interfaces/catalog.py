"""
Read-only collaborators owned by other subsystems: enrollments, tickets and
the hotel room catalog.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class EnrollmentRepository(ABC):
    @abstractmethod
    async def find_with_address_by_user_id(self, user_id: int) -> Optional[Any]:
        pass


class TicketRepository(ABC):
    @abstractmethod
    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Any]:
        """
        Ticket of the enrollment with `ticket_type` loaded, or None.
        When an enrollment has several tickets the oldest one is returned.
        """
        pass


class RoomRepository(ABC):
    @abstractmethod
    async def find_by_id(self, room_id: int) -> Optional[Any]:
        pass
