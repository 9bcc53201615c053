import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return ["http://localhost:3000"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """
    Environment driven configuration for both the API service and the web client.

    Every field maps onto one environment variable of the same name in upper case,
    read after `load_dotenv()` so a local `.env` file works during development.
    """
    async_database_url: str = "sqlite+aiosqlite:///./bigjohn.db"
    sql_echo: bool = False

    auth0_domain: Optional[str] = None
    auth0_audience: Optional[str] = None
    auth0_client_id: Optional[str] = None
    auth0_client_secret: Optional[str] = None
    auth0_callback_url: str = "http://localhost:3000/callback"

    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: Optional[str] = None
    s3_bucket_name: Optional[str] = None
    s3_public_base_url: Optional[str] = None

    allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    port: int = 8080
    log_level: str = "INFO"

    # web client
    web_port: int = 3000
    backend_url: str = "http://localhost:8080"
    editor_password: Optional[str] = None
    session_secret: str = "change-me"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            async_database_url=os.getenv("ASYNC_DATABASE_URL", cls.async_database_url),
            sql_echo=_as_bool(os.getenv("SQL_ECHO")),
            auth0_domain=os.getenv("AUTH0_DOMAIN"),
            auth0_audience=os.getenv("AUTH0_AUDIENCE"),
            auth0_client_id=os.getenv("AUTH0_CLIENT_ID"),
            auth0_client_secret=os.getenv("AUTH0_CLIENT_SECRET"),
            auth0_callback_url=os.getenv("AUTH0_CALLBACK_URL", cls.auth0_callback_url),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
            aws_region=os.getenv("AWS_REGION"),
            s3_bucket_name=os.getenv("S3_BUCKET_NAME"),
            s3_public_base_url=os.getenv("S3_PUBLIC_BASE_URL"),
            allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS")),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            web_port=int(os.getenv("WEB_PORT", cls.web_port)),
            backend_url=os.getenv("BACKEND_URL", cls.backend_url).rstrip("/"),
            editor_password=os.getenv("EDITOR_PASSWORD"),
            session_secret=os.getenv("SESSION_SECRET", cls.session_secret),
        )
