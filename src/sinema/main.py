"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request
from starlette.responses import Response

from sinema.config import settings
from sinema.dependencies import query_cache
from sinema.pages import bookings, dashboard, health, movie_sessions, rooms, seats, theaters
from sinema.pages.shell import render

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: drop cache entries nobody has read during the retention window
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        query_cache.collect_garbage,
        trigger=IntervalTrigger(seconds=settings.query_gc_seconds),
        id="query_cache_gc",
        name="Query cache garbage collection",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, query cache collected every {settings.query_gc_seconds}s")
    logger.info(f"Using REST backend at {settings.api_base_url}")

    yield

    # Shutdown: stop the scheduler gracefully
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")


async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    return render(request, "not_found.html", {"path": request.url.path}, status_code=404)


def include_pages(app: FastAPI) -> None:
    """Register every page router on *app*."""
    app.include_router(health.router)
    app.include_router(dashboard.router, tags=["dashboard"])
    app.include_router(theaters.router, tags=["theaters"])
    app.include_router(rooms.router, tags=["rooms"])
    app.include_router(seats.router, tags=["seats"])
    app.include_router(movie_sessions.router, tags=["movie-sessions"])
    app.include_router(bookings.router, tags=["bookings"])
    app.add_exception_handler(StarletteHTTPException, http_error)


# Create FastAPI app
app = FastAPI(
    title="Sinema Admin",
    description="Administration dashboard for a cinema chain",
    version="0.1.0",
    lifespan=lifespan,
)

# Notifications travel in the signed session cookie
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)

include_pages(app)


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("sinema.main:app", host=settings.app_host, port=settings.app_port)
