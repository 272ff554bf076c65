"""Initial schema: users, enrollments, tickets, hotels, rooms, bookings.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ticket_status = sa.Enum("RESERVED", "PAID", name="ticket_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cpf", sa.String(14), nullable=False, unique=True),
        sa.Column("birthday", sa.String(10), nullable=True),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_enrollments_id", "enrollments", ["id"])

    op.create_table(
        "addresses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("cep", sa.String(9), nullable=False),
        sa.Column("street", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("state", sa.String(2), nullable=False),
        sa.Column("number", sa.String(20), nullable=False),
        sa.Column("neighborhood", sa.String(255), nullable=False),
        sa.Column("address_detail", sa.String(255), nullable=True),
        sa.Column("enrollment_id", sa.Integer(), sa.ForeignKey("enrollments.id"), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_addresses_id", "addresses", ["id"])

    op.create_table(
        "ticket_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("is_remote", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("includes_hotel", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_ticket_types_id", "ticket_types", ["id"])

    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ticket_type_id", sa.Integer(), sa.ForeignKey("ticket_types.id"), nullable=False),
        sa.Column("enrollment_id", sa.Integer(), sa.ForeignKey("enrollments.id"), nullable=False),
        sa.Column("status", ticket_status, nullable=False, server_default="RESERVED"),
        *_timestamps(),
    )
    op.create_index("ix_tickets_id", "tickets", ["id"])
    op.create_index("ix_tickets_enrollment_id", "tickets", ["enrollment_id"])

    op.create_table(
        "hotels",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("image", sa.String(1000), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_hotels_id", "hotels", ["id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("hotel_id", sa.Integer(), sa.ForeignKey("hotels.id"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="check_room_capacity_positive"),
    )
    op.create_index("ix_rooms_id", "rooms", ["id"])
    op.create_index("ix_rooms_hotel_id", "rooms", ["hotel_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("room_id", sa.Integer(), sa.ForeignKey("rooms.id"), nullable=False),
        *_timestamps(),
        # ROOM UNIQUENESS: the last line of defense against double booking.
        # The service checks occupancy before writing, but two requests can
        # pass that check together; this constraint rejects the second insert.
        sa.UniqueConstraint("room_id", name="uq_booking_room"),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("rooms")
    op.drop_table("hotels")
    op.drop_table("tickets")
    op.drop_table("ticket_types")
    op.drop_table("addresses")
    op.drop_table("enrollments")
    op.drop_table("users")
    ticket_status.drop(op.get_bind(), checkfirst=True)
