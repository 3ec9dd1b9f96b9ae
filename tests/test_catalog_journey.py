"""End-to-end walk through registration, the admin gate and the catalog."""

import pytest

from movie_api.boot import ensure_default_admin
from tests.factories import bearer


@pytest.mark.asyncio
async def test_reader_and_admin_journey(public_client, context):
    # A regular reader signs up
    response = await public_client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.io", "password": "pw1"},
    )
    assert response.status_code == 201
    ann = response.json()
    assert ann["isAdmin"] is False
    assert context.tokens.verify(ann["token"]) is not None

    # Readers cannot add movies
    response = await public_client.post("/api/movies", json={"title": "Dune"}, headers=bearer(ann["token"]))
    assert response.status_code == 403
    assert response.json() == {"message": "Admin only"}

    # The bootstrapped admin logs in and adds one
    await ensure_default_admin(context.session_maker, context.settings)
    response = await public_client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "admin123"},
    )
    assert response.status_code == 200
    admin = response.json()
    assert admin["isAdmin"] is True

    response = await public_client.post("/api/movies", json={"title": "Dune"}, headers=bearer(admin["token"]))
    assert response.status_code == 201
    movie = response.json()
    assert movie["title"] == "Dune"
    assert movie["rating"] == 0

    # Everyone can read it, without a token
    listed = await public_client.get("/api/movies")
    assert [m["id"] for m in listed.json()] == [movie["id"]]

    # The admin removes it
    response = await public_client.delete(f"/api/movies/{movie['id']}", headers=bearer(admin["token"]))
    assert response.json() == {"message": "Movie deleted"}
    assert (await public_client.get("/api/movies")).json() == []
