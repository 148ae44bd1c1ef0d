"""HTTP client for the cinema REST backend."""

import logging
from typing import Any, Generic, TypeVar

import httpx

from sinema.config import settings
from sinema.schemas import Booking, MovieSession, Room, Screen, Seat, Theater
from sinema.schemas.base import ApiModel, EntityResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=EntityResponse)


class ApiError(Exception):
    """
    Transport failure talking to the backend.

    Raised for any non-2xx response and for network errors. It is the only
    error kind surfaced by the client: not-found, validation and server
    errors are not told apart.
    """

    def __init__(self, status_code: int | None, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(f"API Error: {reason}")
        else:
            super().__init__(f"API Error: {status_code} {reason}")


class ResourceClient(Generic[ModelT]):
    """
    CRUD gateway for one backend resource path.

    Every call issues exactly one HTTP request. There are no retries,
    batching or pagination: ``get_all`` always returns the full collection.
    """

    def __init__(
        self,
        path: str,
        model: type[ModelT],
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize a resource client.

        Args:
            path: Resource path relative to the base URL, e.g. "/rooms"
            model: Pydantic model used to parse responses
            base_url: Backend base URL (uses settings if not provided)
            timeout: Request timeout in seconds (uses settings if not provided)
            transport: Optional httpx transport, mainly for tests
        """
        self.path = path
        self.model = model
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.transport = transport

    @property
    def key(self) -> str:
        """Collection name used as the query cache key."""
        return self.path.strip("/")

    async def _request(
        self,
        method: str,
        endpoint: str = "",
        payload: ApiModel | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{self.path}{endpoint}"
        body = payload.model_dump(by_alias=True, exclude_none=True) if payload else None
        logger.debug(f"{method} {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(None, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error(f"{method} {url} returned {response.status_code}")
            raise ApiError(response.status_code, response.reason_phrase)

        return response

    def _parse(self, response: httpx.Response) -> Any:
        # 204 No Content is an empty success
        if response.status_code == 204:
            return None
        return response.json()

    async def get_all(self) -> list[ModelT]:
        """Fetch the whole collection."""
        data = self._parse(await self._request("GET"))
        return [self.model.model_validate(item) for item in data or []]

    async def get_by_id(self, id: str) -> ModelT | None:
        """Fetch a single entity."""
        data = self._parse(await self._request("GET", f"/{id}"))
        return self.model.model_validate(data) if data is not None else None

    async def create(self, dto: ApiModel) -> ModelT | None:
        """POST a create payload and return the created entity."""
        data = self._parse(await self._request("POST", payload=dto))
        return self.model.model_validate(data) if data is not None else None

    async def update(self, id: str, dto: ApiModel) -> ModelT | None:
        """PUT an update payload and return the updated entity."""
        data = self._parse(await self._request("PUT", f"/{id}", payload=dto))
        return self.model.model_validate(data) if data is not None else None

    async def delete(self, id: str) -> None:
        """Delete an entity. References held by other entities are not checked."""
        await self._request("DELETE", f"/{id}")


class CinemaApi:
    """One resource client per backend entity, sharing connection settings."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        options: dict[str, Any] = {
            "base_url": base_url,
            "timeout": timeout,
            "transport": transport,
        }
        self.theaters = ResourceClient("/theaters", Theater, **options)
        self.rooms = ResourceClient("/rooms", Room, **options)
        self.screens = ResourceClient("/screens", Screen, **options)
        self.seats = ResourceClient("/seats", Seat, **options)
        self.movie_sessions = ResourceClient("/movie-sessions", MovieSession, **options)
        self.bookings = ResourceClient("/bookings", Booking, **options)

    def resources(self) -> list[ResourceClient]:
        return [
            self.theaters,
            self.rooms,
            self.screens,
            self.seats,
            self.movie_sessions,
            self.bookings,
        ]
