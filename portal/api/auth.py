"""
Auth API endpoints.

Registration and login are public; `me` and `logout` require a bearer token.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.api.deps import get_current_token, get_current_user, get_db, get_settings
from portal.api.helpers import clean, dump, ok
from portal.config import Settings
from portal.db import models, schemas
from portal.db.repositories import users as user_repo
from portal.errors import ValidationError
from portal.services.access_control import issue_credential, revoke_credential

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


def _credentials(payload: schemas.Credentials):
    username = clean(payload.username)
    password = payload.password
    if not username or not password:
        raise ValidationError("Username and password are required", code="MISSING_FIELDS")
    return username, password


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: schemas.Credentials, db: Session = Depends(get_db)):
    username, password = _credentials(payload)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            code="WEAK_PASSWORD",
        )
    user = user_repo.register_user(db, username, password)
    return ok(message="User registered successfully", user=dump(schemas.UserBase, user))


@router.post("/login")
def login(
    payload: schemas.Credentials,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    username, password = _credentials(payload)
    user = user_repo.authenticate(db, username, password)
    token = issue_credential(user, settings)
    logger.info("user_login: id=%s", user.id)
    return ok(message="Login successful", token=token, user=dump(schemas.UserBase, user))


@router.get("/me")
def me(current_user: models.User = Depends(get_current_user)):
    return ok(user=dump(schemas.User, current_user))


@router.post("/logout")
def logout(
    current_user: models.User = Depends(get_current_user),
    token: Optional[str] = Depends(get_current_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    revoked = revoke_credential(db, token, settings)
    if revoked:
        return ok(message="Logged out successfully; the token has been revoked")
    return ok(message="Logged out successfully; discard the token on the client")
