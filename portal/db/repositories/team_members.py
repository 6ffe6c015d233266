"""
Team member repository functions.

CHAIRMAN and DEPUTY_CHAIRMAN may each be held by at most one row. The check
runs at create time and whenever an update assigns one of those roles, against
every row other than the one being updated. Check and write happen under a
process-wide lock so two requests cannot both pass the check, and the
`uq_team_members_singleton_role` partial index rejects anything that slips past.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.db import models
from portal.db.repositories.base import apply_changes
from portal.errors import NotFoundError, RoleConflictError
from portal.utils.choices import (
    ROLE_CHAIRMAN,
    ROLE_DEPUTY_CHAIRMAN,
    ROLE_SUPERVISOR,
    is_singleton_role,
)

logger = logging.getLogger(__name__)

_ROLE_WRITE_LOCK = threading.Lock()


def _not_found(member_id: int) -> NotFoundError:
    return NotFoundError(f"Team member {member_id} does not exist", code="TEAM_MEMBER_NOT_FOUND")


def find_existing_by_role(db: Session, role: str, exclude_id: Optional[int] = None) -> Optional[models.TeamMember]:
    """Return another holder of a singleton role, or None (always None for SUPERVISOR)."""
    if not is_singleton_role(role):
        return None
    q = db.query(models.TeamMember).filter(models.TeamMember.role == role)
    if exclude_id is not None:
        q = q.filter(models.TeamMember.id != exclude_id)
    return q.first()


def _commit_role_write(db: Session, role: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("team_member_role_conflict: role=%s source=index", role)
        raise RoleConflictError(role)


def create_team_member(db: Session, *, role: str, name: str, description: str, image_src: str) -> models.TeamMember:
    with _ROLE_WRITE_LOCK:
        if find_existing_by_role(db, role) is not None:
            logger.info("team_member_role_conflict: role=%s", role)
            raise RoleConflictError(role)
        member = models.TeamMember(role=role, name=name, description=description, image_src=image_src)
        db.add(member)
        _commit_role_write(db, role)
    db.refresh(member)
    return member


def get_team_member(db: Session, member_id: int) -> Optional[models.TeamMember]:
    return db.query(models.TeamMember).filter(models.TeamMember.id == member_id).first()


def get_team_members(db: Session) -> List[models.TeamMember]:
    return (
        db.query(models.TeamMember)
        .order_by(models.TeamMember.role, models.TeamMember.created_at.asc(), models.TeamMember.id.asc())
        .all()
    )


def get_team_members_by_role(db: Session, role: str) -> List[models.TeamMember]:
    return (
        db.query(models.TeamMember)
        .filter(models.TeamMember.role == role)
        .order_by(models.TeamMember.created_at.asc(), models.TeamMember.id.asc())
        .all()
    )


def get_chairman(db: Session) -> Optional[models.TeamMember]:
    return db.query(models.TeamMember).filter(models.TeamMember.role == ROLE_CHAIRMAN).first()


def get_deputy_chairman(db: Session) -> Optional[models.TeamMember]:
    return db.query(models.TeamMember).filter(models.TeamMember.role == ROLE_DEPUTY_CHAIRMAN).first()


def get_supervisors(db: Session) -> List[models.TeamMember]:
    return get_team_members_by_role(db, ROLE_SUPERVISOR)


def update_team_member(db: Session, member_id: int, changes: Mapping[str, Any]) -> models.TeamMember:
    """Apply the supplied fields; untouched fields keep their values."""
    with _ROLE_WRITE_LOCK:
        member = get_team_member(db, member_id)
        if member is None:
            raise _not_found(member_id)
        role = changes.get("role")
        if role and find_existing_by_role(db, role, exclude_id=member_id) is not None:
            logger.info("team_member_role_conflict: role=%s member_id=%s", role, member_id)
            raise RoleConflictError(role)
        apply_changes(member, changes)
        _commit_role_write(db, role or member.role)
    db.refresh(member)
    return member


def delete_team_member(db: Session, member_id: int) -> str:
    """Delete the member and return the image path it referenced."""
    member = get_team_member(db, member_id)
    if member is None:
        raise _not_found(member_id)
    image_src = member.image_src
    db.delete(member)
    db.commit()
    return image_src
