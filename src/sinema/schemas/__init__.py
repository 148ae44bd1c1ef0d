"""Pydantic schemas for the entities served by the REST backend."""

from sinema.schemas.booking import Booking, BookingCreate, BookingUpdate
from sinema.schemas.movie_session import (
    SESSION_TYPES,
    MovieSession,
    MovieSessionCreate,
    MovieSessionUpdate,
)
from sinema.schemas.room import Room, RoomCreate, RoomUpdate
from sinema.schemas.screen import Screen, ScreenCreate, ScreenUpdate
from sinema.schemas.seat import Seat, SeatCreate, SeatUpdate
from sinema.schemas.theater import Theater, TheaterCreate, TheaterUpdate

__all__ = [
    "Booking",
    "BookingCreate",
    "BookingUpdate",
    "MovieSession",
    "MovieSessionCreate",
    "MovieSessionUpdate",
    "SESSION_TYPES",
    "Room",
    "RoomCreate",
    "RoomUpdate",
    "Screen",
    "ScreenCreate",
    "ScreenUpdate",
    "Seat",
    "SeatCreate",
    "SeatUpdate",
    "Theater",
    "TheaterCreate",
    "TheaterUpdate",
]
