"""Theater management page."""

from fastapi import APIRouter, Depends, Query
from markupsafe import Markup
from starlette.requests import Request
from starlette.responses import Response

from sinema.dependencies import get_api, get_query_cache
from sinema.forms import TheaterForm
from sinema.pages.shell import (
    EntityPage,
    FormOutcome,
    Messages,
    add_url,
    delete_entity,
    edit_url,
    failed_status,
    item_url,
    load_collections,
    open_dialog,
    render,
    submit_form,
)
from sinema.schemas import Theater
from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache
from sinema.utils.formatting import yes_no
from sinema.views.table import Column, DataTable

router = APIRouter()

PAGE = EntityPage(
    path="/theaters",
    title="Gestion des Cinémas",
    description="Administrez vos cinémas, leurs informations et leurs caractéristiques.",
    form=TheaterForm,
    add_label="Ajouter un cinéma",
    add_title="Ajouter un cinéma",
    edit_title="Modifier le cinéma",
    search_placeholder="Rechercher un cinéma...",
    messages=Messages(
        created="Cinéma ajouté avec succès",
        updated="Cinéma mis à jour avec succès",
        deleted="Cinéma supprimé avec succès",
        create_failed="Erreur lors de l'ajout du cinéma",
        update_failed="Erreur lors de la mise à jour du cinéma",
        delete_failed="Erreur lors de la suppression du cinéma",
        load_failed="Erreur lors du chargement des cinémas",
    ),
    confirm_delete=lambda theater: f"Êtes-vous sûr de vouloir supprimer {theater.name} ?",
)


def website_link(theater: Theater) -> str:
    return Markup('<a href="{0}" target="_blank" rel="noreferrer">{0}</a>').format(theater.website)


COLUMNS = [
    Column("Nom", "name"),
    Column("Code INSEE", "insee_code"),
    Column("Site web", "website", render=website_link),
    Column("Accès PMR", "wheelchair", render=lambda theater: yes_no(theater.wheelchair)),
    Column("3D", "three_d", render=lambda theater: yes_no(theater.three_d)),
]


async def render_theaters(
    request: Request,
    api: CinemaApi,
    cache: QueryCache,
    q: str = "",
    outcome: FormOutcome | None = None,
) -> Response:
    data = await load_collections(cache, PAGE, api.theaters)
    theaters = data["theaters"]

    table = DataTable(
        items=theaters,
        columns=COLUMNS,
        query=q,
        add_url=add_url(request, PAGE),
        add_label=PAGE.add_label,
        search_placeholder=PAGE.search_placeholder,
        edit_url=lambda theater: edit_url(request, PAGE, theater),
        delete_url=lambda theater: item_url(request, PAGE, f"/{theater.id}/delete"),
        delete_confirm=PAGE.confirm_delete,
    )
    dialog = open_dialog(request, PAGE, theaters, data, outcome)
    status_code = failed_status(outcome) if outcome else 200
    return render(
        request,
        "list.html",
        {"page": PAGE, "data": data, "table": table, "dialog": dialog},
        status_code,
    )


@router.get("/theaters")
async def list_theaters(
    request: Request,
    q: str = Query("", description="Free-text search"),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await render_theaters(request, api, cache, q)


@router.post("/theaters")
async def create_theater(
    request: Request,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.theaters, cache)
    if isinstance(outcome, Response):
        return outcome
    return await render_theaters(request, api, cache, q, outcome)


@router.post("/theaters/{theater_id}")
async def update_theater(
    request: Request,
    theater_id: str,
    q: str = Query(""),
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    outcome = await submit_form(request, PAGE, api.theaters, cache, theater_id)
    if isinstance(outcome, Response):
        return outcome
    return await render_theaters(request, api, cache, q, outcome)


@router.post("/theaters/{theater_id}/delete")
async def delete_theater(
    request: Request,
    theater_id: str,
    api: CinemaApi = Depends(get_api),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    return await delete_entity(request, PAGE, api.theaters, cache, theater_id)
