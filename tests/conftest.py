import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from bigjohn.config import Settings
from bigjohn.db.database import create_engine, create_session_factory, init_models
from bigjohn.errors.contentErrors import AuthError, IdentityProviderError, MediaUploadError
from bigjohn.main import create_app
from bigjohn.web.apiClient import ApiClientError

MEMORY_DB = "sqlite+aiosqlite://"
GOOD_TOKEN = "good-token"
AUTH_HEADERS = {"Authorization": f"Bearer {GOOD_TOKEN}"}


class FakeMediaStore:
    """In-memory stand-in for S3MediaStore."""

    def __init__(self, fail_on=()):
        self.objects = {}
        self.deleted = []
        self.fail_on = set(fail_on)

    async def upload(self, body, filename, content_type=None):
        if filename in self.fail_on:
            raise MediaUploadError(filename, "simulated outage")
        url = f"https://media.test/{len(self.objects) + len(self.deleted)}-{filename}"
        self.objects[url] = body
        return url

    async def delete(self, url):
        self.deleted.append(url)
        return self.objects.pop(url, None) is not None


class FakeIdentity:
    def __init__(self, emails=None, fail_directory=False):
        self.emails = emails if emails is not None else ["fan@example.com", "john@example.com"]
        self.fail_directory = fail_directory

    def verify_token(self, token):
        if token != GOOD_TOKEN:
            raise AuthError("Invalid token")
        return {"sub": "auth0|tester"}

    async def list_user_emails(self, page=0, per_page=50):
        if self.fail_directory:
            raise IdentityProviderError("User directory query failed with status 503")
        start = page * per_page
        return self.emails[start:start + per_page]


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def settings():
    return Settings(async_database_url=MEMORY_DB)


@pytest.fixture
def client(settings, media_store, identity):
    app = create_app(settings, engine=create_engine(MEMORY_DB), media_store=media_store, identity=identity)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def db():
    engine = create_engine(MEMORY_DB)
    await init_models(engine)
    async with create_session_factory(engine)() as session:
        yield session
    await engine.dispose()


class FakeApi:
    """Records every call the web client makes and serves canned documents."""

    def __init__(self, news=None, embeds=None, vip=None, fail=()):
        self.news = list(news or [])
        self.embeds = list(embeds or [])
        self.vip = list(vip or [])
        self.fail = set(fail)
        self.calls = []
        self._counter = 0

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise ApiClientError("POST", f"/api/{name}", "simulated failure", status=500)

    def _document(self, fields):
        self._counter += 1
        doc_id = f"doc-{self._counter}"
        return {**fields, "id": doc_id, "_id": doc_id, "uploadDate": f"2024-06-{self._counter:02d}T12:00:00Z"}

    def call_names(self):
        return [call[0] for call in self.calls]

    async def fetch_news(self, token=None):
        self._record("fetch_news", token)
        return list(self.news)

    async def save_news(self, post, token):
        self._record("save_news", post, token)
        created = self._document(post)
        self.news.append(created)
        return created

    async def update_news(self, post_id, post, token):
        self._record("update_news", post_id, post, token)
        for existing in self.news:
            if existing["_id"] == post_id:
                existing.update(post)
                return existing
        return None

    async def delete_news(self, post_id, token):
        self._record("delete_news", post_id, token)
        self.news = [post for post in self.news if post["_id"] != post_id]
        return {}

    async def fetch_spotify(self, token=None):
        self._record("fetch_spotify", token)
        return list(self.embeds)

    async def save_spotify(self, embed_url, token):
        self._record("save_spotify", embed_url, token)
        created = self._document({"embedUrl": embed_url})
        self.embeds.append(created)
        return created

    async def delete_spotify(self, embed_id, token):
        self._record("delete_spotify", embed_id, token)
        self.embeds = [embed for embed in self.embeds if embed["_id"] != embed_id]
        return {}

    async def fetch_vip(self, token=None):
        self._record("fetch_vip", token)
        return list(self.vip)

    async def upload_vip(self, title, description, files, token):
        self._record("upload_vip", title, description, files, token)
        media_url = {f"{field}Url": None for field in ("image", "video", "audio")}
        for field, pending in files.items():
            if pending is not None:
                media_url[f"{field}Url"] = f"https://media.test/{pending.filename}"
        created = self._document({"title": title, "description": description, "mediaUrl": media_url, "mediaType": "mixed"})
        self.vip.append(created)
        return created

    async def delete_vip(self, content_id, token):
        self._record("delete_vip", content_id, token)
        self.vip = [post for post in self.vip if post["_id"] != content_id]
        return {}

    async def upload_image(self, pending, token):
        self._record("upload_image", pending, token)
        return f"https://media.test/{pending.filename}"

    async def track_user(self, user_id, token):
        self._record("track_user", user_id, token)
        return True

    async def fetch_daily_active_users(self, token):
        self._record("fetch_daily_active_users", token)
        return [{"date": "2024-06-01", "users": 3}]


@pytest.fixture
def fake_api():
    return FakeApi()
