"""Seat form."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sinema.forms.base import EntityForm, Field, RequiredText
from sinema.schemas import Room, Seat, SeatCreate, SeatUpdate


def seats_in_room(seats: list[Seat], room_id: str | None) -> list[Seat]:
    """Seats belonging to *room_id*, or every seat when no room is given."""
    if not room_id:
        return list(seats)
    return [seat for seat in seats if seat.room_id == room_id]


class SeatForm(EntityForm):
    required_messages: ClassVar[dict[str, str]] = {
        "name": "Le nom est requis",
        "room_id": "La salle est requise",
        "position_x": "La position X est requise",
        "position_y": "La position Y est requise",
    }

    name: RequiredText
    room_id: RequiredText
    position_x: int
    position_y: int
    is_available: bool = False

    def to_create(self) -> SeatCreate:
        return SeatCreate(**self.model_dump())

    def to_update(self, id: str) -> SeatUpdate:
        return SeatUpdate(id=id, **self.model_dump())

    @classmethod
    def initial(
        cls,
        entity: Seat | None = None,
        preselected_room_id: str | None = None,
        **context: Any,
    ) -> dict[str, Any]:
        if entity is None:
            return {
                "name": "",
                "room_id": preselected_room_id or "",
                "position_x": 0,
                "position_y": 0,
                "is_available": True,
            }
        return {
            "name": entity.name,
            "room_id": entity.room_id,
            "position_x": entity.position_x,
            "position_y": entity.position_y,
            "is_available": entity.available,
        }

    @classmethod
    def layout(
        cls,
        values: Mapping[str, Any],
        rooms: list[Room] | None = None,
        **lists: Any,
    ) -> list[Field]:
        return [
            Field("name", "Nom"),
            Field(
                "room_id",
                "Salle",
                kind="select",
                placeholder="Sélectionnez une salle",
                choices=[(room.id, room.name) for room in rooms or []],
            ),
            Field("position_x", "Position X", kind="number"),
            Field("position_y", "Position Y", kind="number"),
            Field("is_available", "Disponible", kind="checkbox"),
        ]
