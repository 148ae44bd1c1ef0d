"""Generic searchable table used by every list page."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

EMPTY_PLACEHOLDER = "Aucune donnée disponible"


@dataclass
class Column:
    """
    Column descriptor.

    Without a ``render`` callable the cell shows the item's ``key``
    attribute as text, or an empty string when it is missing. Zero and
    False are values, not missing. ``css_class`` is set on every cell of
    the column.
    """

    header: str
    key: str
    render: Callable[[Any], str] | None = None
    css_class: str | None = None

    def cell(self, item: Any) -> str:
        if self.render is not None:
            return self.render(item)
        value = getattr(item, self.key, None)
        if value is None:
            return ""
        return str(value)


def matches(item: BaseModel, query: str) -> bool:
    """True when any string field of *item* contains *query*, ignoring case."""
    needle = query.lower()
    for name in type(item).model_fields:
        value = getattr(item, name)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def filter_items(items: Sequence[BaseModel], query: str) -> list[BaseModel]:
    """Keep the items matching *query*; an empty query keeps everything."""
    if not query:
        return list(items)
    return [item for item in items if matches(item, query)]


@dataclass
class Row:
    id: str
    cells: list[str]
    cell_classes: list[str | None] = field(default_factory=list)
    edit_url: str | None = None
    delete_url: str | None = None
    delete_confirm: str | None = None


@dataclass
class DataTable:
    """
    A collection rendered as a table with a free-text search box.

    Filtering happens over the already fetched items. Add, edit and delete
    affordances are shown only when the matching URL builder is provided.
    """

    items: Sequence[BaseModel]
    columns: list[Column]
    query: str = ""
    add_url: str | None = None
    add_label: str = "Ajouter"
    search_placeholder: str = "Rechercher..."
    edit_url: Callable[[Any], str] | None = None
    delete_url: Callable[[Any], str] | None = None
    delete_confirm: Callable[[Any], str] = field(
        default=lambda item: "Êtes-vous sûr de vouloir supprimer cet élément ?"
    )

    @property
    def filtered(self) -> list[BaseModel]:
        return filter_items(self.items, self.query)

    @property
    def has_actions(self) -> bool:
        return self.edit_url is not None or self.delete_url is not None

    @property
    def colspan(self) -> int:
        return len(self.columns) + (1 if self.has_actions else 0)

    @property
    def headers(self) -> list[str]:
        headers = [column.header for column in self.columns]
        if self.has_actions:
            headers.append("Actions")
        return headers

    @property
    def rows(self) -> list[Row]:
        rows = []
        for item in self.filtered:
            rows.append(
                Row(
                    id=item.id,
                    cells=[column.cell(item) for column in self.columns],
                    cell_classes=[column.css_class for column in self.columns],
                    edit_url=self.edit_url(item) if self.edit_url else None,
                    delete_url=self.delete_url(item) if self.delete_url else None,
                    delete_confirm=self.delete_confirm(item) if self.delete_url else None,
                )
            )
        return rows
