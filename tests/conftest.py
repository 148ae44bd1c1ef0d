"""Shared test fixtures."""

import json
import uuid
from collections import defaultdict

import httpx
import pytest
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from sinema.dependencies import get_api, get_query_cache
from sinema.main import include_pages
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache

BACKEND_URL = "http://backend.test/api/v1"

COLLECTIONS = ("theaters", "rooms", "screens", "seats", "movie-sessions", "bookings")


class FakeBackend:
    """
    In-memory stand-in for the cinema REST backend.

    Collections are stored as lists of camelCase dicts, exactly as the
    backend would serve them. ``fail`` maps a collection to the HTTP status
    every request on it should return. ``requests`` records (method, path)
    for each request received.
    """

    def __init__(self) -> None:
        self.data: dict[str, list[dict]] = {name: [] for name in COLLECTIONS}
        self.fail: dict[str, int] = {}
        self.requests: list[tuple[str, str]] = []
        self.bodies: dict[str, list[dict]] = defaultdict(list)

    def add(self, collection: str, **item) -> dict:
        item.setdefault("id", uuid.uuid4().hex)
        self.data[collection].append(item)
        return item

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1/")
        self.requests.append((request.method, path))
        collection, _, item_id = path.partition("/")

        if collection not in self.data:
            return httpx.Response(404)
        if collection in self.fail:
            return httpx.Response(self.fail[collection])

        items = self.data[collection]
        if request.method == "GET" and not item_id:
            return httpx.Response(200, json=items)

        if request.method == "POST" and not item_id:
            body = json.loads(request.content)
            self.bodies[collection].append(body)
            created = {"id": body.pop("id", None) or uuid.uuid4().hex, **body}
            if "isAvailable" in created:
                created["available"] = created.pop("isAvailable")
            if "isBookable" in created:
                created["bookable"] = created.pop("isBookable")
            items.append(created)
            return httpx.Response(201, json=created)

        existing = next((item for item in items if item["id"] == item_id), None)
        if existing is None:
            return httpx.Response(404)

        if request.method == "GET":
            return httpx.Response(200, json=existing)
        if request.method == "PUT":
            body = json.loads(request.content)
            self.bodies[collection].append(dict(body))
            if "isAvailable" in body:
                body["available"] = body.pop("isAvailable")
            if "isBookable" in body:
                body["bookable"] = body.pop("isBookable")
            existing.update(body)
            return httpx.Response(200, json=existing)
        if request.method == "DELETE":
            items.remove(existing)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def api(backend: FakeBackend) -> CinemaApi:
    return CinemaApi(base_url=BACKEND_URL, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache(stale_seconds=60, gc_seconds=300, retry=1)


@pytest.fixture
def test_app(api: CinemaApi, cache: QueryCache) -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, wired to the fake backend."""
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    include_pages(app)
    app.dependency_overrides[get_api] = lambda: api
    app.dependency_overrides[get_query_cache] = lambda: cache
    return app


@pytest.fixture
async def client(test_app: FastAPI):
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seeded(backend: FakeBackend) -> dict[str, dict]:
    """A small chain: one theater, one screen, two rooms, seats, a session and bookings."""
    theater = backend.add(
        "theaters",
        id="t1",
        name="Le Grand Rex",
        inseeCode="75102",
        website="https://legrandrex.com",
        wheelchair=True,
        threeD=False,
    )
    screen = backend.add("screens", id="scr1", sizeX=12, sizeY=5.5)
    room_a = backend.add(
        "rooms", id="r1", name="Salle A", sizeX=20, sizeY=15, screenId="scr1", theaterId="t1"
    )
    room_b = backend.add(
        "rooms", id="r2", name="Salle B", sizeX=10, sizeY=8, screenId="scr1", theaterId="t1"
    )
    seat_a1 = backend.add(
        "seats", id="a1", name="A1", positionX=0, positionY=1, available=True, roomId="r1"
    )
    seat_a2 = backend.add(
        "seats", id="a2", name="A2", positionX=1, positionY=1, available=False, roomId="r1"
    )
    seat_b1 = backend.add(
        "seats", id="b1", name="B1", positionX=0, positionY=0, available=True, roomId="r2"
    )
    session = backend.add(
        "movie-sessions",
        id="ms1",
        movieId="movie-0042-dune",
        dateTime="2025-03-05T13:30:00.000Z",
        roomId="r1",
        typeId="2D",
        bookable=True,
        externalUrl="",
    )
    confirmed = backend.add(
        "bookings",
        id="booking-confirmed-1",
        screeningId="ms1",
        seatId="a1",
        userId="user-123456789",
        status="CONFIRMED",
    )
    pending = backend.add(
        "bookings",
        id="booking-pending-2",
        screeningId="ms1",
        seatId="zz",
        userId="user-987654321",
        status="PENDING",
    )
    return {
        "theater": theater,
        "screen": screen,
        "room_a": room_a,
        "room_b": room_b,
        "seat_a1": seat_a1,
        "seat_a2": seat_a2,
        "seat_b1": seat_b1,
        "session": session,
        "confirmed": confirmed,
        "pending": pending,
    }
