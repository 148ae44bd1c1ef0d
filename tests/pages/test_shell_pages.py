"""Tests for the layout, health check and unknown routes."""

from httpx import AsyncClient

from sinema.services.query_cache import QueryCache


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["queries"] == {}

    async def test_reports_query_statuses(self, client: AsyncClient, backend, seeded) -> None:
        backend.fail["rooms"] = 500
        await client.get("/seats")
        data = (await client.get("/health")).json()
        assert data["queries"] == {"seats": "loaded", "rooms": "error", "theaters": "loaded"}


class TestNotFound:
    async def test_unknown_path(self, client: AsyncClient) -> None:
        response = await client.get("/projections")
        assert response.status_code == 404
        assert "404" in response.text
        assert "<code>/projections</code>" in response.text
        assert 'href="/"' in response.text

    async def test_method_not_allowed_is_not_a_page(self, client: AsyncClient) -> None:
        response = await client.put("/theaters")
        assert response.status_code == 405


class TestLayout:
    async def test_navigation(self, client: AsyncClient) -> None:
        response = await client.get("/rooms")
        for path in ("/theaters", "/rooms", "/seats", "/movie-sessions", "/bookings"):
            assert f'href="{path}"' in response.text
        assert '<a href="/rooms" class="active">Salles</a>' in response.text


class TestCacheSharing:
    async def test_auxiliary_lists_come_from_cache(
        self, client: AsyncClient, backend, seeded
    ) -> None:
        await client.get("/rooms")
        await client.get("/movie-sessions")
        assert backend.requests.count(("GET", "theaters")) == 1
        assert backend.requests.count(("GET", "rooms")) == 1

    async def test_save_invalidates_collection(
        self, client: AsyncClient, backend, cache: QueryCache, seeded
    ) -> None:
        await client.get("/rooms")
        await client.post("/rooms/r1/delete")
        assert cache.peek("rooms").invalidated is True
        await client.get("/rooms")
        assert backend.requests.count(("GET", "rooms")) == 2
