"""
Tests for the booking endpoints: auth, status codes and wire format.
"""

import pytest
from httpx import AsyncClient

from hotel_booking.core.errors import ROOM_UNAVAILABLE
from hotel_booking.models.ticket import TicketStatus

URL = "/api/v1/booking"
USER_ID = 1
OTHER_USER_ID = 2


@pytest.mark.asyncio
async def test_get_booking_unauthenticated(client: AsyncClient):
    """Missing token returns 401."""
    response = await client.get(URL)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_booking_invalid_token(client: AsyncClient):
    response = await client.get(URL, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_booking_token_without_user_id(client: AsyncClient):
    from hotel_booking.core.security import create_access_token

    token = create_access_token(data={"sub": "someone"})
    response = await client.get(URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_booking_without_enrollment(client: AsyncClient, auth_headers):
    response = await client.get(URL, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_booking_without_booking(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)

    response = await client.get(URL, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_booking(client: AsyncClient, auth_headers, fake_db):
    """Booking view carries the room with camelCase keys."""
    fake_db.add_enrollment(USER_ID)
    room = fake_db.add_room(hotel_id=7, name="Suite", capacity=3)
    booking = fake_db.add_booking(USER_ID, room)

    response = await client.get(URL, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == booking.id
    assert data["Room"]["id"] == room.id
    assert data["Room"]["name"] == "Suite"
    assert data["Room"]["capacity"] == 3
    assert data["Room"]["hotelId"] == 7
    assert set(data["Room"]) == {"id", "name", "capacity", "hotelId", "createdAt", "updatedAt"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "ticket_kwargs",
    [
        {"is_remote": True},
        {"includes_hotel": False},
        {"status": TicketStatus.RESERVED},
    ],
)
async def test_create_booking_ineligible_ticket(client: AsyncClient, auth_headers, fake_db, ticket_kwargs):
    enrollment = fake_db.add_enrollment(USER_ID)
    fake_db.add_ticket(enrollment, **ticket_kwargs)
    room = fake_db.add_room()

    response = await client.post(URL, json={"roomId": room.id}, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_booking_without_enrollment(client: AsyncClient, auth_headers, fake_db):
    room = fake_db.add_room()

    response = await client.post(URL, json={"roomId": room.id}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_booking_room_taken(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)
    room = fake_db.add_room()
    fake_db.add_booking(OTHER_USER_ID, room)

    response = await client.post(URL, json={"roomId": room.id}, headers=auth_headers)
    assert response.status_code == 403
    assert response.json() == {"detail": ROOM_UNAVAILABLE}


@pytest.mark.asyncio
async def test_create_booking_room_missing(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)

    response = await client.post(URL, json={"roomId": 9999}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"roomId": 0}, {"roomId": "abc"}])
async def test_create_booking_invalid_body(client: AsyncClient, auth_headers, fake_db, body):
    fake_db.add_eligible_user(USER_ID)

    response = await client.post(URL, json=body, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_booking_without_booking(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)
    room = fake_db.add_room()

    response = await client.put(f"{URL}/1", json={"roomId": room.id}, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_booking_room_missing(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)
    booking = fake_db.add_booking(USER_ID, fake_db.add_room())

    response = await client.put(f"{URL}/{booking.id}", json={"roomId": 9999}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_booking_room_taken(client: AsyncClient, auth_headers, fake_db):
    fake_db.add_eligible_user(USER_ID)
    booking = fake_db.add_booking(USER_ID, fake_db.add_room())
    taken = fake_db.add_room(name="102")
    fake_db.add_booking(OTHER_USER_ID, taken)

    response = await client.put(f"{URL}/{booking.id}", json={"roomId": taken.id}, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_booking_lifecycle(client: AsyncClient, auth_headers_for, fake_db):
    """Book a room, see it refused to another user, then move to a second room."""
    fake_db.add_eligible_user(USER_ID)
    fake_db.add_eligible_user(OTHER_USER_ID)
    first_room = fake_db.add_room(name="101")
    second_room = fake_db.add_room(name="102")
    headers = auth_headers_for(USER_ID)

    created = await client.post(URL, json={"roomId": first_room.id}, headers=headers)
    assert created.status_code == 200
    booking_id = created.json()["bookingId"]
    assert isinstance(booking_id, int)

    view = await client.get(URL, headers=headers)
    assert view.json()["id"] == booking_id
    assert view.json()["Room"]["id"] == first_room.id

    stolen = await client.post(URL, json={"roomId": first_room.id}, headers=auth_headers_for(OTHER_USER_ID))
    assert stolen.status_code == 403

    moved = await client.put(f"{URL}/{booking_id}", json={"roomId": second_room.id}, headers=headers)
    assert moved.status_code == 200
    assert moved.json() == {"bookingId": booking_id}

    view = await client.get(URL, headers=headers)
    assert view.json()["Room"]["id"] == second_room.id


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient, auth_headers):
    response = await client.get(URL, headers={**auth_headers, "X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["cache"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient, auth_headers):
    await client.get(URL, headers=auth_headers)

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "hotel_booking_attempts_total" in response.text
