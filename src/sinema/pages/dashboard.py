"""Dashboard with per-entity counters."""

from dataclasses import dataclass
from datetime import date, datetime

from fastapi import APIRouter, Depends
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.pages.shell import load_collections, render
from sinema.schemas import Booking, MovieSession
from sinema.schemas.booking import STATUS_PENDING
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.utils.formatting import display_tz, is_on_day

router = APIRouter()


@dataclass
class Stat:
    title: str
    value: int
    description: str
    url: str
    color: str


QUICK_LINKS = [
    ("Gérer les cinémas", "/theaters"),
    ("Gérer les salles", "/rooms"),
    ("Gérer les projections", "/movie-sessions"),
    ("Gérer les réservations", "/bookings"),
]


def sessions_on(sessions: list[MovieSession], day: date) -> list[MovieSession]:
    return [session for session in sessions if is_on_day(session.date_time, day)]


def pending(bookings: list[Booking]) -> list[Booking]:
    return [booking for booking in bookings if booking.status == STATUS_PENDING]


def build_stats(lists: dict[str, list], today: date) -> list[Stat]:
    bookings = lists.get("bookings", [])
    return [
        Stat("Cinémas", len(lists.get("theaters", [])), "Cinémas administrés", "/theaters", "blue"),
        Stat("Salles", len(lists.get("rooms", [])), "Salles de projection", "/rooms", "purple"),
        Stat("Sièges", len(lists.get("seats", [])), "Sièges disponibles", "/seats", "green"),
        Stat(
            "Projections aujourd'hui",
            len(sessions_on(lists.get("movie_sessions", []), today)),
            "Séances du jour",
            "/movie-sessions",
            "orange",
        ),
        Stat("Réservations en attente", len(pending(bookings)), "À confirmer", "/bookings", "red"),
        Stat("Total des réservations", len(bookings), "Toutes réservations", "/bookings", "teal"),
    ]


@router.get("/")
async def dashboard(
    request: Request,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    """Collections that fail to load count as zero."""
    data = await load_collections(
        cache,
        None,
        None,
        api.theaters,
        api.rooms,
        api.seats,
        api.movie_sessions,
        api.bookings,
    )
    today = datetime.now(display_tz()).date()
    return render(
        request,
        "dashboard.html",
        {"stats": build_stats(data.lists, today), "quick_links": QUICK_LINKS},
    )
