"""Room form."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sinema.forms.base import EntityForm, Field, RequiredText
from sinema.schemas import Room, RoomCreate, RoomUpdate, Screen, Theater


def screen_label(screen: Screen) -> str:
    return f"Écran {screen.id[:6]} ({screen.size_x:g} x {screen.size_y:g} m)"


class RoomForm(EntityForm):
    required_messages: ClassVar[dict[str, str]] = {
        "name": "Le nom est requis",
        "theater_id": "Le cinéma est requis",
        "screen_id": "L'écran est requis",
        "size_x": "La largeur est requise",
        "size_y": "La longueur est requise",
    }

    name: RequiredText
    theater_id: RequiredText
    screen_id: RequiredText
    size_x: float
    size_y: float

    def to_create(self) -> RoomCreate:
        return RoomCreate(**self.model_dump())

    def to_update(self, id: str) -> RoomUpdate:
        return RoomUpdate(id=id, **self.model_dump())

    @classmethod
    def initial(cls, entity: Room | None = None, **context: Any) -> dict[str, Any]:
        if entity is None:
            return {"name": "", "theater_id": "", "screen_id": "", "size_x": 0, "size_y": 0}
        return {
            "name": entity.name,
            "theater_id": entity.theater_id,
            "screen_id": entity.screen_id,
            "size_x": entity.size_x,
            "size_y": entity.size_y,
        }

    @classmethod
    def layout(
        cls,
        values: Mapping[str, Any],
        theaters: list[Theater] | None = None,
        screens: list[Screen] | None = None,
        **lists: Any,
    ) -> list[Field]:
        return [
            Field("name", "Nom"),
            Field(
                "theater_id",
                "Cinéma",
                kind="select",
                placeholder="Sélectionnez un cinéma",
                choices=[(theater.id, theater.name) for theater in theaters or []],
            ),
            Field(
                "screen_id",
                "Écran",
                kind="select",
                placeholder="Sélectionnez un écran",
                choices=[(screen.id, screen_label(screen)) for screen in screens or []],
            ),
            Field("size_x", "Largeur (m)", kind="number", step="0.1"),
            Field("size_y", "Longueur (m)", kind="number", step="0.1"),
        ]
