"""Tests for the REST backend client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from sinema.schemas import (
    BookingCreate,
    MovieSessionCreate,
    RoomCreate,
    ScreenCreate,
    Seat,
    SeatCreate,
    SeatUpdate,
    Theater,
    TheaterCreate,
)
from sinema.services.api_client import ApiError, CinemaApi, ResourceClient

BACKEND_URL = "http://backend.test/api/v1"


# ---------------------------------------------------------------------------
# Create then list, one entity of each kind
# ---------------------------------------------------------------------------


class TestCreateAndList:
    async def test_theater(self, api: CinemaApi) -> None:
        created = await api.theaters.create(
            TheaterCreate(name="Le Grand Rex", insee_code="75102", website="https://legrandrex.com")
        )
        theaters = await api.theaters.get_all()
        assert [t.id for t in theaters] == [created.id]
        assert theaters[0].name == "Le Grand Rex"
        assert theaters[0].wheelchair is False

    async def test_screen(self, api: CinemaApi) -> None:
        created = await api.screens.create(ScreenCreate(size_x=12.5, size_y=6))
        assert (await api.screens.get_by_id(created.id)).size_x == 12.5

    async def test_room(self, api: CinemaApi) -> None:
        await api.rooms.create(
            RoomCreate(name="Salle 1", size_x=20, size_y=15, screen_id="s1", theater_id="t1")
        )
        rooms = await api.rooms.get_all()
        assert rooms[0].theater_id == "t1"

    async def test_seat_reads_back_availability(self, api: CinemaApi) -> None:
        await api.seats.create(
            SeatCreate(name="A1", position_x=1, position_y=1, is_available=False, room_id="r1")
        )
        seats = await api.seats.get_all()
        assert seats[0].available is False

    async def test_movie_session(self, api: CinemaApi) -> None:
        await api.movie_sessions.create(
            MovieSessionCreate(
                movie_id="m1", date_time="2025-03-05T13:30:00.000Z", room_id="r1", type_id="2D"
            )
        )
        sessions = await api.movie_sessions.get_all()
        assert sessions[0].bookable is True
        assert sessions[0].date_time == "2025-03-05T13:30:00.000Z"

    async def test_booking(self, api: CinemaApi) -> None:
        created = await api.bookings.create(BookingCreate(screening_id="ms1", seat_id="a1"))
        assert created.screening_id == "ms1"
        assert len(await api.bookings.get_all()) == 1


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class TestWireFormat:
    async def test_payload_is_camel_case(self, api: CinemaApi, backend) -> None:
        await api.seats.create(
            SeatCreate(name="A1", position_x=1, position_y=2, is_available=True, room_id="r1")
        )
        assert backend.bodies["seats"][0] == {
            "name": "A1",
            "positionX": 1,
            "positionY": 2,
            "isAvailable": True,
            "roomId": "r1",
        }

    async def test_none_fields_are_omitted(self, api: CinemaApi, backend) -> None:
        await api.theaters.create(TheaterCreate(name="Rex", insee_code="1", website="https://x"))
        body = backend.bodies["theaters"][0]
        assert "id" not in body
        assert "pictureUrl" not in body
        assert body["threeD"] is False

    async def test_update_sends_put_with_id(self, api: CinemaApi, backend) -> None:
        seat = backend.add("seats", name="A1", positionX=1, positionY=1, available=True, roomId="r1")
        updated = await api.seats.update(
            seat["id"],
            SeatUpdate(id=seat["id"], name="A2", position_x=1, position_y=1, room_id="r1"),
        )
        assert ("PUT", f"seats/{seat['id']}") in backend.requests
        assert backend.bodies["seats"][0]["id"] == seat["id"]
        assert updated.name == "A2"

    async def test_unknown_fields_are_ignored(self, api: CinemaApi, backend) -> None:
        backend.add("screens", sizeX=10, sizeY=5, manufacturer="Harkness")
        screens = await api.screens.get_all()
        assert screens[0].size_y == 5


# ---------------------------------------------------------------------------
# Delete and errors
# ---------------------------------------------------------------------------


SAMPLE_ITEMS = {
    "theaters": {"name": "Rex", "inseeCode": "1", "website": "https://x"},
    "rooms": {"name": "Salle 1", "sizeX": 10, "sizeY": 8, "screenId": "s", "theaterId": "t"},
    "screens": {"sizeX": 12, "sizeY": 5},
    "seats": {"name": "A1", "positionX": 1, "positionY": 1, "available": True, "roomId": "r"},
    "movie-sessions": {"movieId": "m", "dateTime": "2025-03-05T13:30:00.000Z", "roomId": "r"},
    "bookings": {"screeningId": "ms", "seatId": "a1", "status": "PENDING"},
}


class TestDelete:
    @pytest.mark.parametrize("key", list(SAMPLE_ITEMS))
    async def test_deleted_entity_leaves_collection(self, api: CinemaApi, backend, key: str) -> None:
        client = next(client for client in api.resources() if client.key == key)
        kept = backend.add(key, **SAMPLE_ITEMS[key])
        removed = backend.add(key, **SAMPLE_ITEMS[key])

        await client.delete(removed["id"])

        assert ("DELETE", f"{key}/{removed['id']}") in backend.requests
        assert [item.id for item in await client.get_all()] == [kept["id"]]

    async def test_delete_ignores_references(self, api: CinemaApi, backend) -> None:
        theater = backend.add("theaters", name="Rex", inseeCode="1", website="https://x")
        backend.add("rooms", name="Salle 1", sizeX=1, sizeY=1, screenId="s", theaterId=theater["id"])
        await api.theaters.delete(theater["id"])
        assert len(await api.rooms.get_all()) == 1

    async def test_no_content_yields_none(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        client = ResourceClient("/theaters", Theater, base_url=BACKEND_URL, transport=transport)
        assert await client.get_by_id("x") is None
        assert await client.get_all() == []


class TestApiError:
    async def test_error_status_raises(self, api: CinemaApi, backend) -> None:
        backend.fail["rooms"] = 500
        with pytest.raises(ApiError) as exc_info:
            await api.rooms.get_all()
        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "API Error: 500 Internal Server Error"

    async def test_missing_entity_raises(self, api: CinemaApi) -> None:
        with pytest.raises(ApiError) as exc_info:
            await api.theaters.get_by_id("nope")
        assert exc_info.value.status_code == 404

    async def test_network_error_has_no_status(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = ResourceClient(
            "/theaters", Theater, base_url=BACKEND_URL, transport=httpx.MockTransport(refuse)
        )
        with pytest.raises(ApiError) as exc_info:
            await client.get_all()
        assert exc_info.value.status_code is None
        assert "Connection refused" in str(exc_info.value)


def test_client_keys_match_collection_names() -> None:
    api = CinemaApi(base_url=BACKEND_URL)
    assert [client.key for client in api.resources()] == [
        "theaters",
        "rooms",
        "screens",
        "seats",
        "movie-sessions",
        "bookings",
    ]


async def test_timeout_becomes_api_error() -> None:
    client = ResourceClient("/seats", Seat, base_url=BACKEND_URL)
    with patch.object(
        httpx.AsyncClient, "request", AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
    ):
        with pytest.raises(ApiError) as exc_info:
            await client.get_all()
    assert exc_info.value.status_code is None
    assert str(exc_info.value) == "API Error: timed out"
