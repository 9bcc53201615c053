import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from bigjohn.config import Settings
from bigjohn.main import build_identity
from bigjohn.richtext.draftCodec import DraftRawCodec
from bigjohn.web import pages
from bigjohn.web.apiClient import BigJohnApiClient
from bigjohn.web.guards import GuardRedirect
from bigjohn.web.views import EditorRegistry

logger = logging.getLogger(__name__)


def create_web_app(
    settings: Optional[Settings] = None,
    api=None,
    identity=None,
    codec=None,
) -> FastAPI:
    """Build the server rendered site that talks to the API at `settings.backend_url`."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="BigJohn", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.api = api or BigJohnApiClient(settings.backend_url)
    app.state.identity = identity or build_identity(settings)
    app.state.codec = codec or DraftRawCodec()
    app.state.editors = EditorRegistry(app.state.api, app.state.codec)

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, same_site="lax")

    @app.exception_handler(GuardRedirect)
    async def guard_redirect_handler(request: Request, exc: GuardRedirect):
        return RedirectResponse(exc.location, status_code=303)

    app.include_router(pages.router)
    return app
