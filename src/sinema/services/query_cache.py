"""In-process cache of backend collections."""

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from sinema.config import settings
from sinema.services.api_client import ApiError, ResourceClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


@dataclass
class QueryEntry:
    """Cached state of one collection."""

    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    error: Exception | None = None
    updated_at: float | None = None
    accessed_at: float = 0.0
    invalidated: bool = False

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None


class QueryCache:
    """
    Cache of backend collections keyed by collection name.

    Data younger than the freshness window is served without a request.
    Older or invalidated data is re-fetched on next access, with one
    automatic retry. A failed re-fetch keeps the previous data in the entry
    so pages can still show it. Entries that nobody read during the
    retention window are dropped by ``collect_garbage``.

    Nothing is locked: concurrent fetches of the same key each hit the
    backend and the last one to finish wins.
    """

    def __init__(
        self,
        stale_seconds: float | None = None,
        gc_seconds: float | None = None,
        retry: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stale_seconds = stale_seconds if stale_seconds is not None else settings.query_stale_seconds
        self.gc_seconds = gc_seconds if gc_seconds is not None else settings.query_gc_seconds
        self.retry = retry if retry is not None else settings.query_retry
        self._clock = clock
        self._entries: dict[str, QueryEntry] = {}

    def peek(self, key: str) -> QueryEntry:
        """Return the entry for *key* without fetching (idle if unknown)."""
        return self._entries.get(key) or QueryEntry()

    def is_fresh(self, entry: QueryEntry) -> bool:
        if entry.invalidated or entry.updated_at is None:
            return False
        return self._clock() - entry.updated_at < self.stale_seconds

    async def fetch(self, key: str, fetcher: Callable[[], Awaitable[T]]) -> T:
        """
        Return cached data for *key*, fetching it when missing or stale.

        Args:
            key: Collection name
            fetcher: Coroutine function returning the collection

        Returns:
            The collection

        Raises:
            ApiError: When every attempt failed
        """
        entry = self._entries.setdefault(key, QueryEntry())
        entry.accessed_at = self._clock()

        if self.is_fresh(entry):
            logger.debug(f"Query cache hit: {key}")
            return entry.data

        logger.debug(f"Query cache miss: {key}")
        entry.status = QueryStatus.LOADING
        attempts = self.retry + 1
        attempt = 1

        while True:
            try:
                data = await fetcher()
            except ApiError as e:
                if attempt >= attempts:
                    entry.status = QueryStatus.ERROR
                    entry.error = e
                    logger.error(f"Query {key!r} failed after {attempts} attempts: {e}")
                    raise
                logger.warning(f"Query {key!r} failed (attempt {attempt}/{attempts}): {e}")
                attempt += 1
                continue

            entry.data = data
            entry.error = None
            entry.updated_at = self._clock()
            entry.invalidated = False
            entry.status = QueryStatus.LOADED
            return data

    async def fetch_all(self, client: ResourceClient) -> list:
        """Fetch the full collection served by *client*."""
        return await self.fetch(client.key, client.get_all)

    def invalidate(self, key: str) -> None:
        """Mark *key* stale so the next access re-fetches it."""
        entry = self._entries.get(key)
        if entry is not None:
            entry.invalidated = True
            logger.debug(f"Query invalidated: {key}")

    def statuses(self) -> dict[str, str]:
        return {key: entry.status.value for key, entry in self._entries.items()}

    def collect_garbage(self) -> int:
        """
        Drop entries not accessed during the retention window.

        Returns:
            Number of entries dropped
        """
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.accessed_at >= self.gc_seconds
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Query cache dropped {len(expired)} expired entries: {', '.join(expired)}")
        return len(expired)
