"""Pydantic schemas for seat data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse


class Seat(EntityResponse):
    """A bookable position within a room."""

    room_id: str
    name: str
    position_x: int
    position_y: int
    available: bool = True
    updated_at: datetime | None = None


class SeatCreate(ApiModel):
    """
    Payload for POST /seats.

    The backend reads availability as ``isAvailable`` on writes but
    returns it as ``available``.
    """

    name: str
    position_x: int
    position_y: int
    is_available: bool = True
    room_id: str


class SeatUpdate(SeatCreate):
    """Payload for PUT /seats/{id}."""

    id: str
