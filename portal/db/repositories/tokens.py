"""
Repository for revoked bearer tokens.

Only consulted when token revocation is enabled in the settings.
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from portal.db import models


def _now() -> datetime:
    return datetime.now(timezone.utc)


def revoke_token(db: Session, *, jti: str, user_id: int, expires_at: datetime) -> models.RevokedToken:
    existing = db.get(models.RevokedToken, jti)
    if existing is not None:
        return existing
    row = models.RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at, revoked_at=_now())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def is_revoked(db: Session, jti: str) -> bool:
    return db.get(models.RevokedToken, jti) is not None


def purge_expired(db: Session) -> int:
    """Drop entries whose tokens have expired anyway; return the number removed."""
    removed = (
        db.query(models.RevokedToken)
        .filter(models.RevokedToken.expires_at < _now())
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed
