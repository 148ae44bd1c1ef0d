"""Entity forms: field validation and create/update payload mapping."""

from sinema.forms.base import EntityForm, Field, FormResult
from sinema.forms.booking import BookingForm
from sinema.forms.movie_session import MovieSessionForm
from sinema.forms.room import RoomForm
from sinema.forms.seat import SeatForm
from sinema.forms.theater import TheaterForm

__all__ = [
    "BookingForm",
    "EntityForm",
    "Field",
    "FormResult",
    "MovieSessionForm",
    "RoomForm",
    "SeatForm",
    "TheaterForm",
]
