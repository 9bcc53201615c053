from datetime import datetime, timedelta, timezone

import pytest

from bigjohn.repositories import spotify_repository
from bigjohn.service import spotify_service
from conftest import AUTH_HEADERS

BASE = datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_spotify_returns_latest_five_newest_first(client, monkeypatch):
    dates = iter(BASE + timedelta(days=day) for day in (1, 5, 3, 2, 7, 6, 4))
    monkeypatch.setattr(spotify_repository, "utcnow", lambda: next(dates))

    for day in (1, 5, 3, 2, 7, 6, 4):
        response = client.post("/api/spotify", json={"embedUrl": f"<iframe src='day-{day}'></iframe>"}, headers=AUTH_HEADERS)
        assert response.status_code == 201

    embeds = client.get("/api/spotify").json()
    assert [embed["embedUrl"] for embed in embeds] == [
        "<iframe src='day-7'></iframe>",
        "<iframe src='day-6'></iframe>",
        "<iframe src='day-5'></iframe>",
        "<iframe src='day-4'></iframe>",
        "<iframe src='day-3'></iframe>",
    ]


def test_spotify_is_an_empty_array_when_nothing_saved(client):
    response = client.get("/api/spotify")
    assert response.status_code == 200
    assert response.json() == []


def test_delete_spotify_embed(client):
    created = client.post("/api/spotify", json={"embedUrl": "https://open.spotify.com/embed/x"}, headers=AUTH_HEADERS).json()

    response = client.delete(f"/api/spotify/{created['_id']}", headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert client.get("/api/spotify").json() == []

    missing = client.delete(f"/api/spotify/{created['_id']}", headers=AUTH_HEADERS)
    assert missing.status_code == 404
    assert missing.json() == {"message": "Spotify embed not found"}


def test_saving_embed_requires_token(client):
    response = client.post("/api/spotify", json={"embedUrl": "x"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_repository_orders_by_upload_date(db):
    for day in (1, 5, 3):
        await spotify_repository.create_embed(f"embed-{day}", db, upload_date=BASE + timedelta(days=day))

    embeds = await spotify_service.get_latest_embeds(db)
    assert [embed.embedUrl for embed in embeds] == ["embed-5", "embed-3", "embed-1"]
