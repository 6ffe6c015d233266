"""
API dependency helpers.

Everything a handler needs (database session, settings, asset store, the
authenticated user) is resolved from the application instance that received
the request, so several apps with different settings can coexist in a process.
"""
from typing import Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from portal.config import Settings
from portal.db import models
from portal.db.database import session_scope
from portal.services.access_control import verify_credential
from portal.services.asset_store import AssetStore


def get_db(request: Request) -> Iterator[Session]:
    yield from session_scope(request.app.state.session_factory)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_asset_store(request: Request) -> AssetStore:
    return request.app.state.asset_store


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    return bearer_token(authorization)


# Contract:
# Returns the authenticated sqlalchemy User.
# Raises AuthError (401 missing token, 403 otherwise) when the token is rejected.
def get_current_user(
    token: Optional[str] = Depends(get_current_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> models.User:
    return verify_credential(db, token, settings)
