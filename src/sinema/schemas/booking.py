"""Pydantic schemas for booking data."""

from datetime import datetime

from sinema.schemas.base import ApiModel, EntityResponse

STATUS_CONFIRMED = "CONFIRMED"
STATUS_PENDING = "PENDING"


class Booking(EntityResponse):
    """A reservation binding a user, a movie session and a seat."""

    screening_id: str
    seat_id: str
    user_id: str = ""
    status: str = ""
    updated_at: datetime | None = None


class BookingCreate(ApiModel):
    """Payload for POST /bookings."""

    screening_id: str
    seat_id: str


class BookingUpdate(BookingCreate):
    """Payload for PUT /bookings/{id}."""

    id: str
