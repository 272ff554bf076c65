"""
User model. Accounts are owned by the auth service; this table is only
referenced by enrollments and bookings.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # Relationships
    enrollment = relationship("Enrollment", back_populates="user", uselist=False)
    bookings = relationship("Booking", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
