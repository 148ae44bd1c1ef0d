"""Pydantic schemas for theater data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse


class TheaterBase(ApiModel):
    """Base theater schema with common fields."""

    name: str
    insee_code: str
    website: str
    wheelchair: bool = False
    three_d: bool = False


class Theater(TheaterBase, EntityResponse):
    """A physical cinema location."""

    picture_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TheaterCreate(TheaterBase):
    """Payload for POST /theaters."""

    id: str | None = None
    picture_url: str | None = None


class TheaterUpdate(TheaterCreate):
    """Payload for PUT /theaters/{id}."""

    id: str
