"""
Booking model: one room assigned to one user.

Key design decisions:
- Unique constraint on room_id: a room can be held by a single booking.
  This is what closes the check-then-write race between two requests
  targeting the same free room; the loser gets an IntegrityError.
- No uniqueness on user_id. One booking per user is enforced by the
  service layer only.
- Bookings are never deleted; a room change updates room_id in place.
"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)

    # Relationships
    user = relationship("User", back_populates="bookings")
    room = relationship("Room", back_populates="booking")

    __table_args__ = (
        UniqueConstraint("room_id", name="uq_booking_room"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, room={self.room_id})>"
