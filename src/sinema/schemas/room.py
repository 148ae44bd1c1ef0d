"""Pydantic schemas for room data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse
from sinema.schemas.seat import Seat


class RoomCreate(ApiModel):
    """Payload for POST /rooms."""

    name: str
    size_x: float
    size_y: float
    screen_id: str
    theater_id: str


class RoomUpdate(RoomCreate):
    """Payload for PUT /rooms/{id}."""

    id: str


class Room(RoomCreate, EntityResponse):
    """A screening room within a theater."""

    updated_at: datetime | None = None
    seats: list[Seat] | None = None
