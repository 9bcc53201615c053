import uuid
from datetime import datetime, timedelta

from bigjohn.richtext.document import Document
from bigjohn.richtext.draftCodec import DraftRawCodec
from bigjohn.util.timeUtil import utcnow
from conftest import AUTH_HEADERS


def _create(client, **overrides):
    post = {"title": "New single out", "content": '{"blocks": [], "entityMap": {}}', "link": None, "imageUrl": None}
    post.update(overrides)
    response = client.post("/api/news", json=post, headers=AUTH_HEADERS)
    assert response.status_code == 201
    return response.json()


def test_welcome_message(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the BigJohn API"}


def test_news_is_public_and_starts_empty(client):
    response = client.get("/api/news")
    assert response.status_code == 200
    assert response.json() == []


def test_create_assigns_id_and_upload_date(client):
    created = _create(client, title="Tour dates", link="https://tickets.example.com")

    assert created["title"] == "Tour dates"
    assert created["link"] == "https://tickets.example.com"
    assert created["_id"] == created["id"]
    uuid.UUID(created["id"])
    assert created["uploadDate"]


def test_create_ignores_client_supplied_id(client):
    created = _create(client, id="not-this-one", uploadDate="1999-01-01T00:00:00Z")
    assert created["id"] != "not-this-one"
    uploaded = datetime.fromisoformat(created["uploadDate"].replace("Z", "+00:00"))
    assert abs(uploaded - utcnow()) < timedelta(seconds=5)


def test_news_listed_newest_first(client):
    first = _create(client, title="first")
    second = _create(client, title="second")

    titles = [post["title"] for post in client.get("/api/news").json()]
    assert titles.index(second["title"]) < titles.index(first["title"])


def test_replace_overwrites_every_field(client):
    created = _create(client, title="draft", link="https://old.example.com", imageUrl="https://img/1.png")

    response = client.put(
        f"/api/news/{created['id']}",
        json={"title": "final", "content": "{}"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == created["id"]
    assert updated["title"] == "final"
    assert updated["link"] is None
    assert updated["imageUrl"] is None
    assert updated["uploadDate"] >= created["uploadDate"]


def test_replace_unknown_post_is_404(client):
    response = client.put(f"/api/news/{uuid.uuid4()}", json={"title": "x"}, headers=AUTH_HEADERS)
    assert response.status_code == 404
    assert response.json() == {"message": "Post not found"}


def test_malformed_id_is_404(client):
    response = client.delete("/api/news/definitely-not-an-id", headers=AUTH_HEADERS)
    assert response.status_code == 404
    assert response.json() == {"message": "Post not found"}


def test_delete_returns_removed_post(client):
    created = _create(client, title="gone soon")

    response = client.delete(f"/api/news/{created['id']}", headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert response.json()["title"] == "gone soon"
    assert client.get("/api/news").json() == []

    again = client.delete(f"/api/news/{created['id']}", headers=AUTH_HEADERS)
    assert again.status_code == 404


def test_writes_require_a_token(client):
    response = client.post("/api/news", json={"title": "x"})
    assert response.status_code == 401
    assert response.json() == {"message": "Missing bearer token"}

    response = client.post("/api/news", json={"title": "x"}, headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}
    assert client.get("/api/news").json() == []


def test_rich_text_content_survives_the_round_trip(client):
    codec = DraftRawCodec()
    document = Document.from_plain_text("# Release party\nFriday at nine")
    document.toggle_inline_style(1, 0, 6, "BOLD")
    document.apply_link(1, 10, 4, "https://venue.test")
    document.insert_image("https://media.test/flyer.png")

    _create(client, title="Party", content=codec.serialize(document))

    (fetched,) = client.get("/api/news").json()
    assert codec.deserialize(fetched["content"]) == document
