"""Display helpers shared by the list pages and forms."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from sinema.config import settings

FRENCH_MONTHS = [
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
]


def display_tz() -> ZoneInfo:
    return ZoneInfo(settings.display_timezone)


def parse_datetime(value: str) -> datetime | None:
    """
    Parse an ISO-8601 date-time sent by the backend.

    Aware values are converted to the display timezone; naive values are
    taken as already local.

    Returns:
        The parsed datetime, or None if the value is not ISO-8601
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(display_tz())
    return parsed


def format_long_datetime(value: str) -> str:
    """Format as "05 mars 2025 14:30", falling back to the raw value."""
    parsed = parse_datetime(value)
    if parsed is None:
        return value
    month = FRENCH_MONTHS[parsed.month - 1]
    return f"{parsed.day:02d} {month} {parsed.year} {parsed:%H:%M}"


def format_short_datetime(value: str) -> str:
    """Format as "05/03/2025 14:30", falling back to the raw value."""
    parsed = parse_datetime(value)
    if parsed is None:
        return value
    return f"{parsed:%d/%m/%Y %H:%M}"


def to_local_input(value: str) -> str:
    """Value for a datetime-local input: "YYYY-MM-DDTHH:MM"."""
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return f"{parsed:%Y-%m-%dT%H:%M}"


def local_input_to_iso(value: str) -> str:
    """
    Convert a datetime-local input value to an ISO-8601 UTC string.

    Raises:
        ValueError: If the value is not a date-time
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=display_tz())
    utc = parsed.astimezone(UTC)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def is_on_day(value: str, day: date) -> bool:
    """True when the date-time *value* falls on *day* in the display timezone."""
    parsed = parse_datetime(value)
    return parsed is not None and parsed.date() == day


def truncate(value: str, length: int = 8) -> str:
    return f"{value[:length]}..."


def yes_no(flag: bool) -> str:
    return "Oui" if flag else "Non"
