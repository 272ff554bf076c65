"""
Pydantic schemas for booking-related request/response validation.

The wire format is camelCase (roomId, bookingId, hotelId, and a capitalized
"Room" key on the booking view); Python attributes stay snake_case.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingRequest(BaseModel):
    room_id: int = Field(..., gt=0, alias="roomId")

    model_config = ConfigDict(populate_by_name=True)


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class BookingResponse(BaseModel):
    id: int
    room: RoomResponse = Field(alias="Room")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class BookingIdResponse(BaseModel):
    booking_id: int = Field(alias="bookingId")

    model_config = ConfigDict(populate_by_name=True)
