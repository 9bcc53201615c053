import pytest
from fastapi.testclient import TestClient

from bigjohn.config import Settings
from bigjohn.errors.contentErrors import AuthError, IdentityProviderError
from bigjohn.richtext.document import Document
from bigjohn.richtext.draftCodec import DraftRawCodec
from bigjohn.web.app import create_web_app
from bigjohn.web.guards import EDITOR_LOGIN_PATH, HOME_PATH, editor_guard, vip_guard
from conftest import GOOD_TOKEN, FakeApi

EDITOR_PASSWORD = "letmein"
SPOTIFY_IFRAME = '<iframe src="https://open.spotify.com/embed/track/abc"></iframe>'


class FakeWebIdentity:
    def __init__(self, fail_exchange=False):
        self.fail_exchange = fail_exchange

    def new_state(self):
        return "state-123"

    def authorize_url(self, state):
        return f"https://login.test/authorize?state={state}"

    def logout_url(self, return_to):
        return f"https://login.test/v2/logout?returnTo={return_to}"

    async def exchange_code(self, code):
        if self.fail_exchange:
            raise IdentityProviderError("Token request failed with status 403")
        return {"access_token": GOOD_TOKEN}

    def verify_token(self, token):
        if token != GOOD_TOKEN:
            raise AuthError("Invalid token")
        return {"sub": "auth0|fan"}


@pytest.fixture
def web_api():
    codec = DraftRawCodec()
    return FakeApi(
        news=[{
            "_id": "n1",
            "id": "n1",
            "title": "New single",
            "content": codec.serialize(Document.from_plain_text("Out on Friday")),
            "uploadDate": "2024-06-01T10:00:00Z",
        }],
        embeds=[{"_id": "s1", "id": "s1", "embedUrl": SPOTIFY_IFRAME, "uploadDate": "2024-06-01T10:00:00Z"}],
        vip=[{
            "_id": "v1",
            "id": "v1",
            "title": "Secret demo",
            "description": "For members",
            "mediaUrl": {"imageUrl": None, "videoUrl": None, "audioUrl": "https://media.test/demo.mp3"},
            "mediaType": "mixed",
            "uploadDate": "2024-06-02T10:00:00Z",
        }],
    )


@pytest.fixture
def web_client(web_api):
    settings = Settings(editor_password=EDITOR_PASSWORD, session_secret="test-secret")
    app = create_web_app(settings, api=web_api, identity=FakeWebIdentity())
    with TestClient(app, follow_redirects=False) as client:
        yield client


def _login(client):
    assert client.get("/login").headers["location"] == "https://login.test/authorize?state=state-123"
    response = client.get("/callback", params={"code": "abc", "state": "state-123"})
    assert response.status_code == 303
    assert response.headers["location"] == "/"


def _unlock_editor(client):
    response = client.post("/johns-news/login", data={"password": EDITOR_PASSWORD})
    assert response.status_code == 303
    assert response.headers["location"] == "/johns-news"


class FakeStatus:
    def __init__(self, authenticated=False, editor=False):
        self.is_authenticated = authenticated
        self.editor_unlocked = editor
        self.access_token = GOOD_TOKEN if authenticated else None
        self.user_id = "auth0|fan" if authenticated else None


def test_guards_decide_redirect_targets():
    assert editor_guard(FakeStatus()) == EDITOR_LOGIN_PATH
    assert editor_guard(FakeStatus(editor=True)) is None
    assert vip_guard(FakeStatus()) == HOME_PATH
    assert vip_guard(FakeStatus(authenticated=True)) is None


def test_home_page_renders_feed_for_anonymous_visitor(web_client, web_api):
    response = web_client.get("/")

    assert response.status_code == 200
    assert "NEW SINGLE" in response.text
    assert "<p>Out on Friday</p>" in response.text
    assert SPOTIFY_IFRAME in response.text
    assert "Register / Login" in response.text
    assert "track_user" not in web_api.call_names()


def test_home_page_survives_mistyped_news_content(web_client, web_api):
    web_api.news.append({
        "_id": "n2",
        "id": "n2",
        "title": "Broken post",
        "content": '{"blocks": [{"text": 5}]}',
        "uploadDate": "2024-06-03T10:00:00Z",
    })

    response = web_client.get("/")

    assert response.status_code == 200
    assert "<p>Invalid content</p>" in response.text
    assert "<p>Out on Friday</p>" in response.text


def test_home_page_strips_script_from_embeds(web_client, web_api):
    web_api.embeds = [{"_id": "s2", "id": "s2", "embedUrl": "<script>alert(1)</script>", "uploadDate": "2024-06-04T10:00:00Z"}]

    response = web_client.get("/")

    assert response.status_code == 200
    assert "<script>alert(1)</script>" not in response.text


def test_vip_redirects_anonymous_visitor_home(web_client):
    response = web_client.get("/vip")
    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_login_flow_unlocks_vip_and_tracks_visit(web_client, web_api):
    _login(web_client)

    response = web_client.get("/vip")

    assert response.status_code == 200
    assert "Secret demo" in response.text
    assert "https://media.test/demo.mp3" in response.text
    assert ("track_user", "auth0|fan", GOOD_TOKEN) in web_api.calls
    assert ("fetch_vip", GOOD_TOKEN) in web_api.calls


def test_callback_with_wrong_state_does_not_log_in(web_client):
    web_client.get("/login")
    web_client.get("/callback", params={"code": "abc", "state": "forged"})
    assert web_client.get("/vip").status_code == 303


def test_failed_code_exchange_does_not_log_in(web_api):
    app = create_web_app(Settings(session_secret="s"), api=web_api, identity=FakeWebIdentity(fail_exchange=True))
    with TestClient(app, follow_redirects=False) as client:
        client.get("/login")
        client.get("/callback", params={"code": "abc", "state": "state-123"})
        assert client.get("/vip").status_code == 303


def test_logout_clears_session(web_client):
    _login(web_client)
    response = web_client.get("/logout")

    assert response.status_code == 303
    assert response.headers["location"].startswith("https://login.test/v2/logout")
    assert web_client.get("/vip").status_code == 303


def test_editor_requires_password(web_client):
    response = web_client.get("/johns-news")
    assert response.status_code == 303
    assert response.headers["location"] == "/johns-news/login"

    wrong = web_client.post("/johns-news/login", data={"password": "nope"})
    assert wrong.status_code == 401
    assert "Incorrect password" in wrong.text

    _unlock_editor(web_client)
    page = web_client.get("/johns-news")
    assert page.status_code == 200
    assert "News Editor" in page.text
    assert "New single" in page.text


def test_editor_actions_require_password(web_client, web_api):
    response = web_client.post("/johns-news/action", data={"action": "save", "title": "x"})
    assert response.status_code == 303
    assert response.headers["location"] == "/johns-news/login"
    assert "save_news" not in web_api.call_names()


def test_editor_save_action(web_client, web_api):
    _login(web_client)
    _unlock_editor(web_client)

    response = web_client.post(
        "/johns-news/action",
        data={"action": "save", "title": "Tour", "content": "# Dates\nBerlin", "link": ""},
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/johns-news"

    (_, post, token) = next(call for call in web_api.calls if call[0] == "save_news")
    assert token == GOOD_TOKEN
    assert post["title"] == "Tour"
    assert post["link"] is None

    page = web_client.get("/johns-news")
    assert "News post saved!" in page.text
    assert "Visitors, last 30 days" in page.text


def test_editor_style_action_updates_preview(web_client):
    _unlock_editor(web_client)
    web_client.post("/johns-news/action", data={
        "action": "style",
        "content": "Hello world",
        "block_index": "0",
        "offset": "0",
        "length": "5",
        "style": "BOLD",
    })

    page = web_client.get("/johns-news")
    assert "<strong>Hello</strong> world" in page.text


def test_editor_rejects_bad_block_index(web_client):
    _unlock_editor(web_client)
    web_client.post("/johns-news/action", data={"action": "block", "block_index": "9", "block_type": "header-one"})

    page = web_client.get("/johns-news")
    assert "No block at index 9" in page.text


def test_editor_vip_upload_action(web_client, web_api):
    _unlock_editor(web_client)
    web_client.post(
        "/johns-news/action",
        data={"action": "vip_submit", "vip_title": "Live set", "vip_description": "Berlin"},
        files={"video": ("set.mp4", b"mp4", "video/mp4")},
    )

    (_, title, description, files, _) = next(call for call in web_api.calls if call[0] == "upload_vip")
    assert (title, description) == ("Live set", "Berlin")
    assert files["video"].content == b"mp4"
    assert files["audio"] is None


def test_editor_delete_spotify_action(web_client, web_api):
    _unlock_editor(web_client)
    web_client.post("/johns-news/action", data={"action": "delete_spotify", "embed_id": "s1"})
    assert web_api.embeds == []
