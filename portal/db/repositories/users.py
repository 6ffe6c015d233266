"""
User repository functions.

Registration, lookup and credential verification for administrative users.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.db import models
from portal.errors import AuthError, ConflictError
from portal.utils.token_crypto import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    # Exact, case-sensitive match
    return db.query(models.User).filter(models.User.username == username).first()


def register_user(db: Session, username: str, password: str) -> models.User:
    """Create a user; raise ConflictError when the username is taken."""
    if get_user_by_username(db, username) is not None:
        raise ConflictError("A user with this username is already registered", code="USERNAME_TAKEN")
    user = models.User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A user with this username is already registered", code="USERNAME_TAKEN")
    db.refresh(user)
    logger.info("user_registered: id=%s username=%s", user.id, user.username)
    return user


def authenticate(db: Session, username: str, password: str) -> models.User:
    user = get_user_by_username(db, username)
    if user is None:
        raise AuthError("No user with this username exists", code="USER_NOT_FOUND")
    if not verify_password(password, user.password_hash):
        raise AuthError("Wrong password", code="INVALID_PASSWORD")
    return user
