"""
Bearer credential issuing and verification.

Tokens are stateless: verification checks signature and expiry and then
confirms the encoded user still exists under the encoded name. When token
revocation is enabled in the settings, logout records the token id and
verification rejects it.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from portal.config import Settings
from portal.db import models
from portal.db.repositories import tokens as token_repo
from portal.db.repositories import users as user_repo
from portal.errors import AuthError
from portal.utils.token_crypto import (
    TokenClaims,
    TokenRejected,
    TokenRejection,
    decode_token,
    issue_token,
)

logger = logging.getLogger(__name__)

_REJECTION_MESSAGES = {
    TokenRejection.MISSING: "Access token not provided; authorization is required for this resource",
    TokenRejection.MALFORMED: "Token is invalid",
    TokenRejection.EXPIRED: "Token has expired",
    TokenRejection.SUBJECT_GONE: "User was deleted or does not exist",
    TokenRejection.REVOKED: "Token has been revoked",
}


def rejection_error(reason: TokenRejection) -> AuthError:
    status_code = 401 if reason is TokenRejection.MISSING else 403
    return AuthError(_REJECTION_MESSAGES[reason], code=reason.value, status_code=status_code)


def issue_credential(user: models.User, settings: Settings, now: Optional[int] = None) -> str:
    return issue_token(
        user.id,
        user.username,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.access_token_expire_seconds,
        now=now,
    )


def decode_credential(token: Optional[str], settings: Settings) -> TokenClaims:
    try:
        return decode_token(token or "", secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    except TokenRejected as e:
        raise rejection_error(e.reason)


def verify_credential(db: Session, token: Optional[str], settings: Settings) -> models.User:
    """Resolve a bearer token to its user or raise AuthError naming why it was rejected."""
    claims = decode_credential(token, settings)
    if settings.token_revocation_enabled and token_repo.is_revoked(db, claims.jti):
        raise rejection_error(TokenRejection.REVOKED)
    user = user_repo.get_user(db, claims.user_id)
    # A row holding the id under another name is not the subject the token was issued to
    if user is None or user.username != claims.username:
        logger.info("auth_subject_gone: user_id=%s", claims.user_id)
        raise rejection_error(TokenRejection.SUBJECT_GONE)
    return user


def revoke_credential(db: Session, token: str, settings: Settings) -> bool:
    """Record the token as revoked; return False when revocation is disabled."""
    if not settings.token_revocation_enabled:
        return False
    claims = decode_credential(token, settings)
    token_repo.purge_expired(db)
    token_repo.revoke_token(
        db,
        jti=claims.jti,
        user_id=claims.user_id,
        expires_at=datetime.fromtimestamp(claims.expires_at, tz=timezone.utc),
    )
    logger.info("auth_token_revoked: user_id=%s", claims.user_id)
    return True
