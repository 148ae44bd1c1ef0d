"""Building blocks shared by the entity pages.

Each page fetches its primary collection plus the auxiliary collections it
needs for display joins and dropdowns, renders them through the generic
table, and owns a form dialog whose state lives in the query string:

- no ``dialog`` parameter: closed
- ``dialog=add``: create mode
- ``dialog=edit&id=<id>``: edit mode for that item
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates
from starlette.datastructures import URL
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from sinema.forms.base import EntityForm, Field, FormResult
from sinema.services.api_client import ApiError, ResourceClient
from sinema.services.notifications import notify, notify_error, pop_notifications
from sinema.services.query_cache import QueryCache
from sinema.views.table import EMPTY_PLACEHOLDER

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.globals["EMPTY_PLACEHOLDER"] = EMPTY_PLACEHOLDER

NAVIGATION = [
    ("Cinémas", "/theaters"),
    ("Salles", "/rooms"),
    ("Sièges", "/seats"),
    ("Projections", "/movie-sessions"),
    ("Réservations", "/bookings"),
]

# Query parameters that describe the dialog rather than the list
DIALOG_PARAMS = ("dialog", "id", "screening_id")


@dataclass
class Messages:
    """Notification texts for one entity."""

    created: str
    updated: str
    deleted: str
    create_failed: str
    update_failed: str
    delete_failed: str
    load_failed: str


@dataclass
class EntityPage:
    """Static description of one entity management page."""

    path: str
    title: str
    description: str
    form: type[EntityForm]
    add_label: str
    add_title: str
    edit_title: str
    search_placeholder: str
    messages: Messages
    confirm_delete: Callable[[Any], str]


@dataclass
class PageData:
    """Collections loaded for a page, keyed by list name ("movie_sessions", ...)."""

    lists: dict[str, list] = field(default_factory=dict)
    load_error: str | None = None
    stale_warning: str | None = None

    def __getitem__(self, name: str) -> list:
        return self.lists.get(name, [])


@dataclass
class Dialog:
    mode: str  # "add" or "edit"
    entity_id: str | None
    title: str
    action: str
    close_url: str
    submit_label: str
    fields: list[Field]
    values: dict[str, Any]
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class FormOutcome:
    """A rejected submission, rendered back into the open dialog."""

    existing_id: str | None
    result: FormResult


def list_name(client: ResourceClient) -> str:
    return client.key.replace("-", "_")


async def load_collections(
    cache: QueryCache,
    page: EntityPage | None,
    primary: ResourceClient | None,
    *auxiliary: ResourceClient,
) -> PageData:
    """
    Fetch the page's collections concurrently.

    A failing primary collection yields the page's load error message when
    nothing was cached before, or a warning banner over the stale data when
    something was. Failing auxiliary collections fall back to their stale
    data or to an empty list, so joins show "unknown" labels.
    """
    clients = [client for client in (primary, *auxiliary) if client is not None]
    results = await asyncio.gather(
        *(cache.fetch_all(client) for client in clients),
        return_exceptions=True,
    )

    data = PageData()
    for client, result in zip(clients, results):
        name = list_name(client)
        if isinstance(result, ApiError):
            entry = cache.peek(client.key)
            data.lists[name] = entry.data or []
            if client is primary and page is not None:
                if entry.has_data:
                    data.stale_warning = (
                        f"{page.messages.load_failed}. Les données affichées peuvent être obsolètes."
                    )
                else:
                    data.load_error = page.messages.load_failed
        elif isinstance(result, BaseException):
            raise result
        else:
            data.lists[name] = result
    return data


def find_by_id(items: Sequence[Any], id: str | None) -> Any | None:
    return next((item for item in items if item.id == id), None)


def list_url(request: Request, page: EntityPage) -> str:
    """The page URL, keeping list parameters (search, filters) but no dialog state."""
    params = [(k, v) for k, v in request.query_params.multi_items() if k not in DIALOG_PARAMS]
    return str(URL(page.path).include_query_params(**dict(params)))


def add_url(request: Request, page: EntityPage) -> str:
    return str(URL(list_url(request, page)).include_query_params(dialog="add"))


def edit_url(request: Request, page: EntityPage, item: Any) -> str:
    return str(URL(list_url(request, page)).include_query_params(dialog="edit", id=item.id))


def item_url(request: Request, page: EntityPage, suffix: str) -> str:
    """Form action for *suffix* ("" or "/<id>" or "/<id>/delete") keeping list parameters."""
    base = list_url(request, page)
    path, _, query = base.partition("?")
    return f"{path}{suffix}" + (f"?{query}" if query else "")


def open_dialog(
    request: Request,
    page: EntityPage,
    items: Sequence[Any],
    data: PageData,
    outcome: FormOutcome | None = None,
    **initial_context: Any,
) -> Dialog | None:
    """Build the dialog described by the query string, or by a rejected submission."""
    errors: dict[str, str] = {}

    if outcome is not None:
        existing_id = outcome.existing_id
        values = outcome.result.values
        errors = outcome.result.errors
    else:
        mode = request.query_params.get("dialog")
        if mode == "add":
            existing_id = None
            values = page.form.initial(None, **initial_context)
        elif mode == "edit":
            item = find_by_id(items, request.query_params.get("id"))
            if item is None:
                return None
            existing_id = item.id
            values = page.form.initial(item, **initial_context)
        else:
            return None

    editing = existing_id is not None
    return Dialog(
        mode="edit" if editing else "add",
        entity_id=existing_id,
        title=page.edit_title if editing else page.add_title,
        action=item_url(request, page, f"/{existing_id}" if editing else ""),
        close_url=list_url(request, page),
        submit_label="Mettre à jour" if editing else "Ajouter",
        fields=page.form.layout(values, **data.lists),
        values=values,
        errors=errors,
    )


def render(
    request: Request,
    template: str,
    context: dict[str, Any],
    status_code: int = 200,
) -> Response:
    """Render *template* inside the dashboard layout."""
    return templates.TemplateResponse(
        request,
        template,
        {
            "navigation": NAVIGATION,
            "notifications": pop_notifications(request),
            **context,
        },
        status_code=status_code,
    )


async def submit_form(
    request: Request,
    page: EntityPage,
    client: ResourceClient,
    cache: QueryCache,
    existing_id: str | None = None,
) -> Response | FormOutcome:
    """
    Validate a submitted form and send it to the backend.

    Editing an existing entity sends an update, otherwise a create. On
    success the collection is invalidated and the browser is redirected to
    the list. On failure the outcome is returned so the page can render the
    dialog again with the entered values; the collection is left alone.
    """
    result = page.form.parse(dict(await request.form()))
    form = result.form
    if form is None or not result.is_valid:
        return FormOutcome(existing_id=existing_id, result=result)

    payload = form.to_payload(existing_id)
    messages = page.messages
    try:
        if existing_id is not None:
            await client.update(existing_id, payload)
        else:
            await client.create(payload)
    except ApiError as e:
        logger.error(f"Saving {client.key} failed: {e}")
        notify_error(request, messages.update_failed if existing_id else messages.create_failed)
        return FormOutcome(existing_id=existing_id, result=result)

    logger.info(f"{'Updated' if existing_id else 'Created'} {client.key} entry {existing_id or ''}".rstrip())
    cache.invalidate(client.key)
    notify(request, messages.updated if existing_id else messages.created)
    return RedirectResponse(list_url(request, page), status_code=303)


async def delete_entity(
    request: Request,
    page: EntityPage,
    client: ResourceClient,
    cache: QueryCache,
    id: str,
) -> Response:
    """Delete an entity, whatever still refers to it, and go back to the list."""
    try:
        await client.delete(id)
    except ApiError as e:
        logger.error(f"Deleting {client.key} entry {id} failed: {e}")
        notify_error(request, page.messages.delete_failed)
    else:
        logger.info(f"Deleted {client.key} entry {id}")
        cache.invalidate(client.key)
        notify(request, page.messages.deleted)
    return RedirectResponse(list_url(request, page), status_code=303)


def failed_status(outcome: FormOutcome) -> int:
    """422 for field errors, 502 when the backend rejected a valid form."""
    return 422 if outcome.result.errors else 502
