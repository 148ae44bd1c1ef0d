"""Seat management page, optionally scoped to one room."""

from fastapi import APIRouter, Depends, Query
from markupsafe import Markup
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.forms import SeatForm
from sinema.forms.seat import seats_in_room
from sinema.pages.rooms import theater_name
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
from sinema.schemas import Room, Seat
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.utils.formatting import yes_no
from sinema.views.table import Column, DataTable

router = APIRouter()

UNKNOWN_ROOM = "Salle inconnue"

PAGE = EntityPage(
    path="/seats",
    title="Gestion des Sièges",
    description=(
        "Administrez les sièges de vos salles de cinéma, leurs positions et leur disponibilité."
    ),
    form=SeatForm,
    add_label="Ajouter un siège",
    add_title="Ajouter un siège",
    edit_title="Modifier le siège",
    search_placeholder="Rechercher un siège...",
    messages=Messages(
        created="Siège ajouté avec succès",
        updated="Siège mis à jour avec succès",
        deleted="Siège supprimé avec succès",
        create_failed="Erreur lors de l'ajout du siège",
        update_failed="Erreur lors de la mise à jour du siège",
        delete_failed="Erreur lors de la suppression du siège",
        load_failed="Erreur lors du chargement des sièges",
    ),
    confirm_delete=lambda seat: f"Êtes-vous sûr de vouloir supprimer le siège {seat.name} ?",
)


def room_name(rooms: list[Room], room_id: str) -> str:
    room = find_by_id(rooms, room_id)
    return room.name if room else UNKNOWN_ROOM


def availability(seat: Seat) -> str:
    css_class = "text-ok" if seat.available else "text-danger"
    return Markup('<span class="{}">{}</span>').format(css_class, yes_no(seat.available))


def seat_columns(rooms: list[Room]) -> list[Column]:
    return [
        Column("Nom", "name"),
        Column("Salle", "room_id", render=lambda seat: room_name(rooms, seat.room_id)),
        Column("Position X", "position_x"),
        Column("Position Y", "position_y"),
        Column("Disponible", "available", render=availability),
    ]


async def render_seats(
    request: Request,
    api: CinemaApi,
    cache: QueryCache,
    q: str = "",
    room_id: str | None = None,
    outcome: FormOutcome | None = None,
) -> Response:
    data = await load_collections(cache, PAGE, api.seats, api.rooms, api.theaters)
    rooms, theaters = data["rooms"], data["theaters"]
    room_id = room_id or None
    seats = seats_in_room(data["seats"], room_id)
    selected_room = find_by_id(rooms, room_id)

    table = DataTable(
        items=seats,
        columns=seat_columns(rooms),
        query=q,
        add_url=add_url(request, PAGE),
        add_label=PAGE.add_label,
        search_placeholder=PAGE.search_placeholder,
        edit_url=lambda seat: edit_url(request, PAGE, seat),
        delete_url=lambda seat: item_url(request, PAGE, f"/{seat.id}/delete"),
        delete_confirm=PAGE.confirm_delete,
    )
    dialog = open_dialog(
        request, PAGE, data["seats"], data, outcome, preselected_room_id=room_id
    )
    status_code = failed_status(outcome) if outcome else 200
    return render(
        request,
        "seats.html",
        {
            "page": PAGE,
            "data": data,
            "table": table,
            "dialog": dialog,
            "room_choices": [
                (room.id, f"{room.name} ({theater_name(theaters, room.theater_id)})")
                for room in rooms
            ],
            "selected_room_id": room_id or "",
            "selected_room": selected_room,
            "selected_theater": (
                theater_name(theaters, selected_room.theater_id) if selected_room else None
            ),
            "seat_count": len(seats),
        },
        status_code,
    )


@router.get("/seats")
async def list_seats(
    request: Request,
    q: str = Query("", description="Free-text search"),
    room_id: str | None = Query(None, alias="roomId", description="Only show this room's seats"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await render_seats(request, api, cache, q, room_id)


@router.post("/seats")
async def create_seat(
    request: Request,
    q: str = Query(""),
    room_id: str | None = Query(None, alias="roomId"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.seats, cache)
    if isinstance(outcome, Response):
        return outcome
    return await render_seats(request, api, cache, q, room_id, outcome)


@router.post("/seats/{seat_id}")
async def update_seat(
    request: Request,
    seat_id: str,
    q: str = Query(""),
    room_id: str | None = Query(None, alias="roomId"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.seats, cache, seat_id)
    if isinstance(outcome, Response):
        return outcome
    return await render_seats(request, api, cache, q, room_id, outcome)


@router.post("/seats/{seat_id}/delete")
async def delete_seat(
    request: Request,
    seat_id: str,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await delete_entity(request, PAGE, api.seats, cache, seat_id)
