"""Transient notifications carried across redirects in the session cookie."""

from typing import TypedDict

from starlette.requests import Request

SESSION_KEY = "notifications"

SUCCESS = "success"
ERROR = "error"


class Notification(TypedDict):
    category: str
    message: str


def notify(request: Request, message: str, category: str = SUCCESS) -> None:
    """Queue a notification shown on the next rendered page."""
    pending = list(request.session.get(SESSION_KEY, []))
    pending.append({"category": category, "message": message})
    request.session[SESSION_KEY] = pending


def notify_error(request: Request, message: str) -> None:
    notify(request, message, ERROR)


def pop_notifications(request: Request) -> list[Notification]:
    """Return and clear every queued notification."""
    return request.session.pop(SESSION_KEY, [])
