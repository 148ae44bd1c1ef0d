"""Shared FastAPI dependencies."""

from sinema.services.api_client import CinemaApi
from sinema.services.query_cache import QueryCache

# Process-wide instances; tests override the dependencies below
cinema_api = CinemaApi()
query_cache = QueryCache()


def get_api() -> CinemaApi:
    return cinema_api


def get_query_cache() -> QueryCache:
    return query_cache
