"""Tests for the movie session management page."""

from httpx import AsyncClient

SESSION_FORM = {
    "movie_id": "movie-0077-alien",
    "date_time": "2025-07-14T21:00",
    "room_id": "r2",
    "type_id": "VOST",
    "external_url": "",
    "is_bookable": "on",
}


class TestListSessions:
    async def test_columns(self, client: AsyncClient, seeded) -> None:
        response = await client.get("/movie-sessions")
        assert response.status_code == 200
        assert "movie-00..." in response.text
        assert "05 mars 2025 14:30" in response.text
        assert "Le Grand Rex" in response.text
        assert "Salle A" in response.text
        assert '<span class="text-muted">Non défini</span>' in response.text

    async def test_external_link(self, client: AsyncClient, backend, seeded) -> None:
        backend.data["movie-sessions"][0]["externalUrl"] = "https://billetterie.example/ms1"
        response = await client.get("/movie-sessions")
        assert 'href="https://billetterie.example/ms1"' in response.text

    async def test_unknown_room(self, client: AsyncClient, backend, seeded) -> None:
        backend.data["movie-sessions"][0]["roomId"] = "gone"
        response = await client.get("/movie-sessions")
        assert "Salle inconnue" in response.text
        assert "Cinéma inconnu" in response.text

    async def test_unparseable_date_shown_raw(self, client: AsyncClient, backend, seeded) -> None:
        backend.data["movie-sessions"][0]["dateTime"] = "bientôt"
        response = await client.get("/movie-sessions")
        assert "bientôt" in response.text


class TestSessionDialog:
    async def test_type_choices(self, client: AsyncClient, seeded) -> None:
        response = await client.get("/movie-sessions", params={"dialog": "add"})
        assert '<option value="DBOX">D-BOX</option>' in response.text
        assert 'type="datetime-local"' in response.text

    async def test_edit_shows_local_time(self, client: AsyncClient, seeded) -> None:
        response = await client.get("/movie-sessions", params={"dialog": "edit", "id": "ms1"})
        assert 'value="2025-03-05T14:30"' in response.text
        assert '<option value="2D" selected>2D Standard</option>' in response.text


class TestSaveSession:
    async def test_create_sends_utc_datetime(self, client: AsyncClient, backend, seeded) -> None:
        response = await client.post("/movie-sessions", data=SESSION_FORM)
        assert response.status_code == 303
        assert backend.bodies["movie-sessions"][0] == {
            "isBookable": True,
            "externalUrl": "",
            "movieId": "movie-0077-alien",
            "dateTime": "2025-07-14T19:00:00.000Z",
            "roomId": "r2",
            "typeId": "VOST",
        }

        page = await client.get("/movie-sessions")
        assert "14 juillet 2025 21:00" in page.text

    async def test_missing_fields(self, client: AsyncClient, seeded) -> None:
        response = await client.post("/movie-sessions", data={"movie_id": "", "date_time": ""})
        assert response.status_code == 422
        assert "La date et" in response.text
        assert "La salle est requise" in response.text
        assert "Le type de séance est requis" in response.text

    async def test_update_not_bookable(self, client: AsyncClient, backend, seeded) -> None:
        form = {key: value for key, value in SESSION_FORM.items() if key != "is_bookable"}
        response = await client.post("/movie-sessions/ms1", data=form)
        assert response.status_code == 303
        assert backend.bodies["movie-sessions"][0]["isBookable"] is False
        page = await client.get("/movie-sessions")
        assert '<span class="text-danger">Non</span>' in page.text

    async def test_delete_does_not_touch_bookings(self, client: AsyncClient, backend, seeded) -> None:
        response = await client.post("/movie-sessions/ms1/delete")
        assert response.status_code == 303
        assert backend.data["movie-sessions"] == []
        assert len(backend.data["bookings"]) == 2
