"""Pydantic schemas for movie session data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse

# Session type codes offered by the session form, with their display names
SESSION_TYPES: dict[str, str] = {
    "2D": "2D Standard",
    "3D": "3D",
    "IMAX": "IMAX",
    "DBOX": "D-BOX",
    "VOST": "VOST",
    "VF": "VF",
}


class MovieSession(EntityResponse):
    """
    A scheduled screening of a movie in a room.

    ``date_time`` is kept as the string the backend sent so that it stays
    searchable and can be shown verbatim when it cannot be parsed.
    """

    external_url: str = ""
    movie_id: str
    date_time: str
    room_id: str
    type_id: str = ""
    bookable: bool = True
    updated_at: datetime | None = None


class MovieSessionCreate(ApiModel):
    """Payload for POST /movie-sessions."""

    is_bookable: bool = True
    external_url: str = ""
    movie_id: str
    date_time: str
    room_id: str
    type_id: str


class MovieSessionUpdate(MovieSessionCreate):
    """Payload for PUT /movie-sessions/{id}."""

    id: str
