"""Pydantic schemas for screen data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse


class ScreenCreate(ApiModel):
    """Payload for POST /screens."""

    size_x: float
    size_y: float


class ScreenUpdate(ScreenCreate):
    """Payload for PUT /screens/{id}."""

    id: str


class Screen(ScreenCreate, EntityResponse):
    """Projection surface dimensions, in metres."""

    updated_at: datetime | None = None
