"""Movie session (screening) management page."""

from fastapi import APIRouter, Depends, Query
from markupsafe import Markup
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.forms import MovieSessionForm
from sinema.pages.rooms import UNKNOWN_THEATER, theater_name
from sinema.pages.seats import room_name
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
from sinema.schemas import MovieSession, Room, Theater
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.utils.formatting import format_long_datetime, truncate, yes_no
from sinema.views.table import Column, DataTable

router = APIRouter()

PAGE = EntityPage(
    path="/movie-sessions",
    title="Gestion des Projections",
    description="Administrez les séances de projection, leurs horaires et leurs disponibilités.",
    form=MovieSessionForm,
    add_label="Ajouter une projection",
    add_title="Ajouter une projection",
    edit_title="Modifier la projection",
    search_placeholder="Rechercher une projection...",
    messages=Messages(
        created="Séance ajoutée avec succès",
        updated="Séance mise à jour avec succès",
        deleted="Séance supprimée avec succès",
        create_failed="Erreur lors de l'ajout de la séance",
        update_failed="Erreur lors de la mise à jour de la séance",
        delete_failed="Erreur lors de la suppression de la séance",
        load_failed="Erreur lors du chargement des séances",
    ),
    confirm_delete=lambda session: "Êtes-vous sûr de vouloir supprimer cette séance ?",
)


def theater_of_room(rooms: list[Room], theaters: list[Theater], room_id: str) -> str:
    room = find_by_id(rooms, room_id)
    if room is None:
        return UNKNOWN_THEATER
    return theater_name(theaters, room.theater_id)


def bookable_flag(session: MovieSession) -> str:
    css_class = "text-ok" if session.bookable else "text-danger"
    return Markup('<span class="{}">{}</span>').format(css_class, yes_no(session.bookable))


def external_link(session: MovieSession) -> str:
    if not session.external_url:
        return Markup('<span class="text-muted">Non défini</span>')
    return Markup('<a href="{0}" target="_blank" rel="noreferrer">{0}</a>').format(
        session.external_url
    )


def session_columns(rooms: list[Room], theaters: list[Theater]) -> list[Column]:
    return [
        Column("Film ID", "movie_id", render=lambda s: truncate(s.movie_id)),
        Column("Date et heure", "date_time", render=lambda s: format_long_datetime(s.date_time)),
        Column("Cinéma", "room_id", render=lambda s: theater_of_room(rooms, theaters, s.room_id)),
        Column("Salle", "room_id", render=lambda s: room_name(rooms, s.room_id)),
        Column("Réservable", "bookable", render=bookable_flag),
        Column("Lien externe", "external_url", render=external_link),
    ]


async def render_movie_sessions(
    request: Request,
    api: CinemaApi,
    cache: QueryCache,
    q: str = "",
    outcome: FormOutcome | None = None,
) -> Response:
    data = await load_collections(cache, PAGE, api.movie_sessions, api.rooms, api.theaters)
    sessions = data["movie_sessions"]

    table = DataTable(
        items=sessions,
        columns=session_columns(data["rooms"], data["theaters"]),
        query=q,
        add_url=add_url(request, PAGE),
        add_label=PAGE.add_label,
        search_placeholder=PAGE.search_placeholder,
        edit_url=lambda session: edit_url(request, PAGE, session),
        delete_url=lambda session: item_url(request, PAGE, f"/{session.id}/delete"),
        delete_confirm=PAGE.confirm_delete,
    )
    dialog = open_dialog(request, PAGE, sessions, data, outcome)
    status_code = failed_status(outcome) if outcome else 200
    return render(
        request,
        "list.html",
        {"page": PAGE, "data": data, "table": table, "dialog": dialog},
        status_code,
    )


@router.get("/movie-sessions")
async def list_movie_sessions(
    request: Request,
    q: str = Query("", description="Free-text search"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await render_movie_sessions(request, api, cache, q)


@router.post("/movie-sessions")
async def create_movie_session(
    request: Request,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.movie_sessions, cache)
    if isinstance(outcome, Response):
        return outcome
    return await render_movie_sessions(request, api, cache, q, outcome)


@router.post("/movie-sessions/{session_id}")
async def update_movie_session(
    request: Request,
    session_id: str,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.movie_sessions, cache, session_id)
    if isinstance(outcome, Response):
        return outcome
    return await render_movie_sessions(request, api, cache, q, outcome)


@router.post("/movie-sessions/{session_id}/delete")
async def delete_movie_session(
    request: Request,
    session_id: str,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await delete_entity(request, PAGE, api.movie_sessions, cache, session_id)
