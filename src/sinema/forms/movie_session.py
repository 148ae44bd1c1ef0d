"""Movie session form."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar

from pydantic import field_validator

from sinema.forms.base import EntityForm, Field, RequiredText
from sinema.schemas import (
    SESSION_TYPES,
    MovieSession,
    MovieSessionCreate,
    MovieSessionUpdate,
    Room,
)
from sinema.utils.formatting import display_tz, local_input_to_iso, to_local_input


class MovieSessionForm(EntityForm):
    required_messages: ClassVar[dict[str, str]] = {
        "movie_id": "L'ID du film est requis",
        "date_time": "La date et l'heure sont requises",
        "room_id": "La salle est requise",
        "type_id": "Le type de séance est requis",
    }

    movie_id: RequiredText
    date_time: RequiredText
    room_id: RequiredText
    type_id: RequiredText
    external_url: str = ""
    is_bookable: bool = False

    @field_validator("date_time")
    @classmethod
    def convert_local_datetime(cls, value: str) -> str:
        try:
            return local_input_to_iso(value)
        except ValueError:
            raise ValueError("Date et heure invalides") from None

    @field_validator("type_id")
    @classmethod
    def check_session_type(cls, value: str) -> str:
        if value not in SESSION_TYPES:
            raise ValueError("Type de séance inconnu")
        return value

    def to_create(self) -> MovieSessionCreate:
        return MovieSessionCreate(**self.model_dump())

    def to_update(self, id: str) -> MovieSessionUpdate:
        return MovieSessionUpdate(id=id, **self.model_dump())

    @classmethod
    def initial(cls, entity: MovieSession | None = None, **context: Any) -> dict[str, Any]:
        if entity is None:
            return {
                "movie_id": "",
                "date_time": f"{datetime.now(display_tz()):%Y-%m-%dT%H:%M}",
                "room_id": "",
                "type_id": "",
                "external_url": "",
                "is_bookable": True,
            }
        return {
            "movie_id": entity.movie_id,
            "date_time": to_local_input(entity.date_time),
            "room_id": entity.room_id,
            "type_id": entity.type_id,
            "external_url": entity.external_url,
            "is_bookable": entity.bookable,
        }

    @classmethod
    def layout(
        cls,
        values: Mapping[str, Any],
        rooms: list[Room] | None = None,
        **lists: Any,
    ) -> list[Field]:
        return [
            Field("movie_id", "ID du film"),
            Field("date_time", "Date et heure", kind="datetime-local"),
            Field(
                "room_id",
                "Salle",
                kind="select",
                placeholder="Sélectionnez une salle",
                choices=[(room.id, room.name) for room in rooms or []],
            ),
            Field(
                "type_id",
                "Type de séance",
                kind="select",
                placeholder="Sélectionnez un type",
                choices=list(SESSION_TYPES.items()),
            ),
            Field("external_url", "Lien externe", kind="url"),
            Field("is_bookable", "Réservable", kind="checkbox"),
        ]
