"""Room management page."""

from fastapi import APIRouter, Depends, Query
from markupsafe import Markup
from starlette.datastructures import URL
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.forms import RoomForm
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
from sinema.schemas import Room, Theater
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.views.table import Column, DataTable

router = APIRouter()

UNKNOWN_THEATER = "Cinéma inconnu"

PAGE = EntityPage(
    path="/rooms",
    title="Gestion des Salles",
    description="Administrez les salles de vos cinémas, leurs tailles et leurs configurations.",
    form=RoomForm,
    add_label="Ajouter une salle",
    add_title="Ajouter une salle",
    edit_title="Modifier la salle",
    search_placeholder="Rechercher une salle...",
    messages=Messages(
        created="Salle ajoutée avec succès",
        updated="Salle mise à jour avec succès",
        deleted="Salle supprimée avec succès",
        create_failed="Erreur lors de l'ajout de la salle",
        update_failed="Erreur lors de la mise à jour de la salle",
        delete_failed="Erreur lors de la suppression de la salle",
        load_failed="Erreur lors du chargement des salles",
    ),
    confirm_delete=lambda room: f"Êtes-vous sûr de vouloir supprimer la salle {room.name} ?",
)


def theater_name(theaters: list[Theater], theater_id: str) -> str:
    theater = find_by_id(theaters, theater_id)
    return theater.name if theater else UNKNOWN_THEATER


def seats_link(room: Room) -> str:
    url = URL("/seats").include_query_params(roomId=room.id)
    return Markup('<a href="{}">Gérer les sièges</a>').format(str(url))


def room_columns(theaters: list[Theater]) -> list[Column]:
    return [
        Column("Nom", "name"),
        Column("Cinéma", "theater_id", render=lambda room: theater_name(theaters, room.theater_id)),
        Column("Dimensions", "size_x", render=lambda room: f"{room.size_x:g} x {room.size_y:g} m"),
        Column("Sièges", "seats", render=seats_link),
    ]


async def render_rooms(
    request: Request,
    api: CinemaApi,
    cache: QueryCache,
    q: str = "",
    outcome: FormOutcome | None = None,
) -> Response:
    data = await load_collections(cache, PAGE, api.rooms, api.theaters, api.screens)
    rooms = data["rooms"]

    table = DataTable(
        items=rooms,
        columns=room_columns(data["theaters"]),
        query=q,
        add_url=add_url(request, PAGE),
        add_label=PAGE.add_label,
        search_placeholder=PAGE.search_placeholder,
        edit_url=lambda room: edit_url(request, PAGE, room),
        delete_url=lambda room: item_url(request, PAGE, f"/{room.id}/delete"),
        delete_confirm=PAGE.confirm_delete,
    )
    dialog = open_dialog(request, PAGE, rooms, data, outcome)
    status_code = failed_status(outcome) if outcome else 200
    return render(
        request,
        "list.html",
        {"page": PAGE, "data": data, "table": table, "dialog": dialog},
        status_code,
    )


@router.get("/rooms")
async def list_rooms(
    request: Request,
    q: str = Query("", description="Free-text search"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await render_rooms(request, api, cache, q)


@router.post("/rooms")
async def create_room(
    request: Request,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.rooms, cache)
    if isinstance(outcome, Response):
        return outcome
    return await render_rooms(request, api, cache, q, outcome)


@router.post("/rooms/{room_id}")
async def update_room(
    request: Request,
    room_id: str,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.rooms, cache, room_id)
    if isinstance(outcome, Response):
        return outcome
    return await render_rooms(request, api, cache, q, outcome)


@router.post("/rooms/{room_id}/delete")
async def delete_room(
    request: Request,
    room_id: str,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await delete_entity(request, PAGE, api.rooms, cache, room_id)
