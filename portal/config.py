"""Runtime configuration sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Tuple


DEFAULT_DATABASE_URL = "sqlite:///./db/database.sqlite"
DEFAULT_JWT_SECRET = "dev-secret-change-me"


def _normalize_bool(value: str | None, default: bool) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _normalize_list(value: str | None) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(entry.strip() for entry in value.split(",") if entry.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    media_root: Path = Path(".")
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_seconds: int = 3600
    token_revocation_enabled: bool = False
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    auto_create_schema: bool = True
    default_admin_username: str | None = None
    default_admin_password: str | None = field(default=None, repr=False)

    @property
    def documents_dir(self) -> Path:
        return self.media_root / "documents"

    @property
    def images_dir(self) -> Path:
        return self.media_root / "images"


def load_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    expire_raw = os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", "3600")
    try:
        expire_seconds = int(expire_raw)
    except ValueError:
        raise ValueError(f"ACCESS_TOKEN_EXPIRE_SECONDS must be an integer, got {expire_raw!r}")
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        media_root=Path(os.getenv("MEDIA_ROOT") or "."),
        jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
        jwt_algorithm=os.getenv("JWT_ALGORITHM") or "HS256",
        access_token_expire_seconds=expire_seconds,
        token_revocation_enabled=_normalize_bool(os.getenv("TOKEN_REVOCATION_ENABLED"), default=False),
        cors_origins=_normalize_list(os.getenv("CORS_ORIGINS")) or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        auto_create_schema=_normalize_bool(os.getenv("AUTO_CREATE_SCHEMA"), default=True),
        default_admin_username=os.getenv("DEFAULT_ADMIN_USERNAME") or None,
        default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD") or None,
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings sourced from the environment."""
    return load_settings()


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
