"""
Tickets and ticket types.

A ticket qualifies for a hotel booking only when its type is in-person and
includes accommodation, and the ticket itself has been paid.
"""

import enum

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class TicketStatus(str, enum.Enum):
    RESERVED = "RESERVED"
    PAID = "PAID"


class TicketType(Base, TimestampMixin):
    __tablename__ = "ticket_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Integer, nullable=False)  # cents
    is_remote = Column(Boolean, nullable=False, default=False)
    includes_hotel = Column(Boolean, nullable=False, default=False)

    tickets = relationship("Ticket", back_populates="ticket_type")

    def __repr__(self) -> str:
        return (
            f"<TicketType(id={self.id}, remote={self.is_remote}, "
            f"hotel={self.includes_hotel})>"
        )


class Ticket(Base, TimestampMixin):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_type_id = Column(Integer, ForeignKey("ticket_types.id"), nullable=False)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, index=True)
    status = Column(
        Enum(TicketStatus, name="ticket_status"),
        nullable=False,
        default=TicketStatus.RESERVED,
    )

    ticket_type = relationship("TicketType", back_populates="tickets")
    enrollment = relationship("Enrollment", back_populates="tickets")

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, enrollment={self.enrollment_id}, status={self.status})>"
