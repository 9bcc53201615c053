import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bigjohn.auth.auth0 import Auth0Client
from bigjohn.aws.mediaStore import S3MediaStore
from bigjohn.config import Settings
from bigjohn.db.database import create_engine, create_session_factory, init_models
from bigjohn.errors.contentErrors import AuthError, ContentNotFoundError
from bigjohn.routers import dau_router, news_router, spotify_router, user_router, vip_router

logger = logging.getLogger(__name__)


def build_identity(settings: Settings) -> Auth0Client:
    return Auth0Client(
        domain=settings.auth0_domain,
        audience=settings.auth0_audience,
        client_id=settings.auth0_client_id,
        client_secret=settings.auth0_client_secret,
        callback_url=settings.auth0_callback_url,
    )


def build_media_store(settings: Settings) -> S3MediaStore:
    return S3MediaStore(
        bucket_name=settings.s3_bucket_name,
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        public_base_url=settings.s3_public_base_url,
    )


def create_app(
    settings: Optional[Settings] = None,
    engine=None,
    media_store=None,
    identity=None,
) -> FastAPI:
    """
    Build the API service. Every external collaborator can be passed in; whatever
    is left out is constructed from `settings` (by default read from the environment).
    """
    settings = settings or Settings.from_env()
    engine = engine or create_engine(settings.async_database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        logger.info("✅ Database ready")
        yield
        await engine.dispose()

    app = FastAPI(title="BigJohn API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.media_store = media_store or build_media_store(settings)
    app.state.identity = identity or build_identity(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ContentNotFoundError)
    async def not_found_handler(request: Request, exc: ContentNotFoundError):
        return JSONResponse(status_code=404, content={"message": str(exc)})

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        logger.info("⚠️ Rejected %s %s: %s", request.method, request.url.path, exc.reason)
        return JSONResponse(
            status_code=401,
            content={"message": exc.reason},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.get("/")
    def root():
        return {"message": "Welcome to the BigJohn API"}

    app.include_router(news_router.router, prefix="/api", tags=["news"])
    app.include_router(spotify_router.router, prefix="/api", tags=["spotify"])
    app.include_router(vip_router.router, prefix="/api", tags=["vip"])
    app.include_router(dau_router.router, prefix="/api", tags=["dau"])
    app.include_router(user_router.router, tags=["users"])

    return app
