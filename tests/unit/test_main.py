"""Tests for application wiring."""

from unittest.mock import patch

from sinema.dependencies import query_cache
from sinema.main import app, lifespan


async def test_lifespan_schedules_cache_gc() -> None:
    with patch("sinema.main.AsyncIOScheduler") as scheduler_cls:
        scheduler = scheduler_cls.return_value
        async with lifespan(app):
            scheduler.start.assert_called_once()
            job = scheduler.add_job.call_args
            assert job.args[0] == query_cache.collect_garbage
            assert job.kwargs["trigger"].interval.total_seconds() == 300
        scheduler.shutdown.assert_called_once_with(wait=False)


def test_app_routes() -> None:
    paths = {route.path for route in app.routes}
    for path in ("/", "/health", "/theaters", "/rooms", "/seats", "/movie-sessions", "/bookings"):
        assert path in paths
