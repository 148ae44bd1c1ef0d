"""Booking management page."""

from fastapi import APIRouter, Depends, Query
from markupsafe import Markup
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.forms import BookingForm
from sinema.pages.shell import (
    EntityPage,
    FormOutcome,
    Messages,
    add_url,
    delete_entity,
    edit_url,
    failed_status,
    find_by_id,
    item_url,
    load_collections,
    open_dialog,
    render,
    submit_form,
)
from sinema.schemas import Booking, MovieSession, Seat
from sinema.schemas.booking import STATUS_CONFIRMED, STATUS_PENDING
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.utils.formatting import format_long_datetime, truncate
from sinema.views.table import Column, DataTable

router = APIRouter()

UNKNOWN_DATE = "Date inconnue"
UNKNOWN_MOVIE = "Film inconnu"
UNKNOWN_SEAT = "Siège inconnu"

PAGE = EntityPage(
    path="/bookings",
    title="Gestion des Réservations",
    description="Administrez les réservations pour vos séances de cinéma.",
    form=BookingForm,
    add_label="Ajouter une réservation",
    add_title="Ajouter une nouvelle réservation",
    edit_title="Modifier la réservation",
    search_placeholder="Rechercher une réservation...",
    messages=Messages(
        created="Réservation ajoutée avec succès",
        updated="Réservation mise à jour avec succès",
        deleted="Réservation supprimée avec succès",
        create_failed="Erreur lors de l'ajout de la réservation",
        update_failed="Erreur lors de la mise à jour de la réservation",
        delete_failed="Erreur lors de la suppression de la réservation",
        load_failed="Erreur lors du chargement des réservations",
    ),
    confirm_delete=lambda booking: "Êtes-vous sûr de vouloir supprimer cette réservation ?",
)


def status_class(status: str) -> str:
    """CONFIRMED and PENDING have their own style; anything else reads as cancelled."""
    if status == STATUS_CONFIRMED:
        return "status-confirmed"
    if status == STATUS_PENDING:
        return "status-pending"
    return "status-cancelled"


def status_badge(booking: Booking) -> str:
    return Markup('<span class="{}">{}</span>').format(status_class(booking.status), booking.status)


def session_movie(sessions: list[MovieSession], screening_id: str) -> str:
    session = find_by_id(sessions, screening_id)
    return session.movie_id if session else UNKNOWN_MOVIE


def session_date(sessions: list[MovieSession], screening_id: str) -> str:
    session = find_by_id(sessions, screening_id)
    return format_long_datetime(session.date_time) if session else UNKNOWN_DATE


def seat_name(seats: list[Seat], seat_id: str) -> str:
    seat = find_by_id(seats, seat_id)
    return seat.name if seat else UNKNOWN_SEAT


def booking_columns(sessions: list[MovieSession], seats: list[Seat]) -> list[Column]:
    return [
        Column("ID Réservation", "id", render=lambda b: truncate(b.id), css_class="text-muted"),
        Column("Utilisateur", "user_id", render=lambda b: truncate(b.user_id), css_class="text-muted"),
        Column("Film", "screening_id", render=lambda b: truncate(session_movie(sessions, b.screening_id))),
        Column("Date et heure", "screening_id", render=lambda b: session_date(sessions, b.screening_id)),
        Column("Siège", "seat_id", render=lambda b: seat_name(seats, b.seat_id)),
        Column("Statut", "status", render=status_badge),
    ]


async def render_bookings(
    request: Request,
    api: CinemaApi,
    cache: QueryCache,
    q: str = "",
    outcome: FormOutcome | None = None,
) -> Response:
    data = await load_collections(cache, PAGE, api.bookings, api.movie_sessions, api.seats)
    bookings = data["bookings"]

    table = DataTable(
        items=bookings,
        columns=booking_columns(data["movie_sessions"], data["seats"]),
        query=q,
        add_url=add_url(request, PAGE),
        add_label=PAGE.add_label,
        search_placeholder=PAGE.search_placeholder,
        edit_url=lambda booking: edit_url(request, PAGE, booking),
        delete_url=lambda booking: item_url(request, PAGE, f"/{booking.id}/delete"),
        delete_confirm=PAGE.confirm_delete,
    )
    dialog = open_dialog(
        request,
        PAGE,
        bookings,
        data,
        outcome,
        screening_id=request.query_params.get("screening_id"),
    )
    status_code = failed_status(outcome) if outcome else 200
    return render(
        request,
        "list.html",
        {"page": PAGE, "data": data, "table": table, "dialog": dialog},
        status_code,
    )


@router.get("/bookings")
async def list_bookings(
    request: Request,
    q: str = Query("", description="Free-text search"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await render_bookings(request, api, cache, q)


@router.post("/bookings")
async def create_booking(
    request: Request,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.bookings, cache)
    if isinstance(outcome, Response):
        return outcome
    return await render_bookings(request, api, cache, q, outcome)


@router.post("/bookings/{booking_id}")
async def update_booking(
    request: Request,
    booking_id: str,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.bookings, cache, booking_id)
    if isinstance(outcome, Response):
        return outcome
    return await render_bookings(request, api, cache, q, outcome)


@router.post("/bookings/{booking_id}/delete")
async def delete_booking(
    request: Request,
    booking_id: str,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await delete_entity(request, PAGE, api.bookings, cache, booking_id)
