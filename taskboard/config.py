import os
from pydantic import BaseModel


_ASYNC_PG_SCHEME = "postgresql+asyncpg://"


class Settings(BaseModel):
    """Process configuration, read once at startup."""

    database_url: str
    db_pool_size: int = 5
    db_max_overflow: int = 10
    host: str = "127.0.0.1"
    port: int = 42069
    log_level: str = "INFO"


def normalize_database_url(url: str) -> str:
    # libpq style URLs need the async driver named explicitly
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return _ASYNC_PG_SCHEME + url[len(prefix):]
    return url


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def load_settings() -> Settings:
    """Build settings from the environment; `.env` is loaded by server.py beforehand."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is not configured")

    return Settings(
        database_url=normalize_database_url(database_url),
        db_pool_size=_int_env("DB_POOL_SIZE", 5),
        db_max_overflow=_int_env("DB_MAX_OVERFLOW", 10),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int_env("PORT", 42069),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
