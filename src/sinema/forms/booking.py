"""Booking form."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sinema.forms.base import EntityForm, Field, RequiredText
from sinema.schemas import Booking, BookingCreate, BookingUpdate, MovieSession, Seat
from sinema.utils.formatting import format_short_datetime


def session_label(session: MovieSession) -> str:
    return f"{session.movie_id[:6]}... - {format_short_datetime(session.date_time)}"


def seat_label(seat: Seat) -> str:
    return f"{seat.name} - Position ({seat.position_x}, {seat.position_y})"


def bookable_seats(
    sessions: list[MovieSession],
    seats: list[Seat],
    screening_id: str | None,
) -> list[Seat]:
    """
    Seats that can be offered for the selected session.

    Only available seats in the session's room qualify. Nothing is offered
    until a known session is selected.
    """
    session = next((s for s in sessions if s.id == screening_id), None)
    if session is None:
        return []
    return [seat for seat in seats if seat.room_id == session.room_id and seat.available]


class BookingForm(EntityForm):
    required_messages: ClassVar[dict[str, str]] = {
        "screening_id": "La séance est requise",
        "seat_id": "Le siège est requis",
    }

    screening_id: RequiredText
    seat_id: RequiredText

    def to_create(self) -> BookingCreate:
        return BookingCreate(**self.model_dump())

    def to_update(self, id: str) -> BookingUpdate:
        return BookingUpdate(id=id, **self.model_dump())

    @classmethod
    def initial(
        cls,
        entity: Booking | None = None,
        screening_id: str | None = None,
        **context: Any,
    ) -> dict[str, Any]:
        if entity is None:
            return {"screening_id": screening_id or "", "seat_id": ""}
        return {
            "screening_id": screening_id or entity.screening_id,
            "seat_id": entity.seat_id,
        }

    @classmethod
    def layout(
        cls,
        values: Mapping[str, Any],
        movie_sessions: list[MovieSession] | None = None,
        seats: list[Seat] | None = None,
        **lists: Any,
    ) -> list[Field]:
        screening_id = values.get("screening_id") or None
        offered = bookable_seats(movie_sessions or [], seats or [], screening_id)

        if not screening_id:
            seat_placeholder = "Sélectionnez d'abord une séance"
        elif not offered:
            seat_placeholder = "Aucun siège disponible"
        else:
            seat_placeholder = "Sélectionnez un siège"

        return [
            Field(
                "screening_id",
                "Séance",
                kind="select",
                placeholder="Sélectionnez une séance",
                choices=[(s.id, session_label(s)) for s in movie_sessions or []],
                reload=True,
            ),
            Field(
                "seat_id",
                "Siège",
                kind="select",
                placeholder=seat_placeholder,
                choices=[(seat.id, seat_label(seat)) for seat in offered],
                disabled=not screening_id,
            ),
        ]
