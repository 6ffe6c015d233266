"""
Team member API endpoints.

CHAIRMAN and DEPUTY_CHAIRMAN are singleton roles; a create or update that
would give one of them a second holder fails with 400 `ROLE_CONFLICT`. The
fixed role routes are declared before `/{member_id}`.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from portal.api.deps import get_asset_store, get_current_user, get_db
from portal.api.helpers import (
    check_role,
    clean,
    collect_changes,
    dump,
    has_upload,
    ok,
    reclaim_on_failure,
    require_fields,
    store_upload,
)
from portal.db import models, schemas
from portal.db.repositories import team_members as team_repo
from portal.errors import NotFoundError
from portal.services.asset_store import IMAGE_UPLOADS, AssetStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/team-members", tags=["team-members"])


def _not_found(member_id: int) -> NotFoundError:
    return NotFoundError(f"Team member {member_id} does not exist", code="TEAM_MEMBER_NOT_FOUND")


@router.get("")
def list_team_members(db: Session = Depends(get_db)):
    return ok(members=[dump(schemas.TeamMember, m) for m in team_repo.get_team_members(db)])


@router.get("/chairman")
def get_chairman(db: Session = Depends(get_db)):
    member = team_repo.get_chairman(db)
    if member is None:
        raise NotFoundError("No chairman is assigned", code="CHAIRMAN_NOT_FOUND")
    return ok(member=dump(schemas.TeamMember, member))


@router.get("/deputy-chairman")
def get_deputy_chairman(db: Session = Depends(get_db)):
    member = team_repo.get_deputy_chairman(db)
    if member is None:
        raise NotFoundError("No deputy chairman is assigned", code="DEPUTY_CHAIRMAN_NOT_FOUND")
    return ok(member=dump(schemas.TeamMember, member))


@router.get("/supervisors")
def get_supervisors(db: Session = Depends(get_db)):
    return ok(members=[dump(schemas.TeamMember, m) for m in team_repo.get_supervisors(db)])


@router.get("/{member_id}")
def get_team_member(member_id: int, db: Session = Depends(get_db)):
    member = team_repo.get_team_member(db, member_id)
    if member is None:
        raise _not_found(member_id)
    return ok(member=dump(schemas.TeamMember, member))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_team_member(
    role: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    role, name, description = clean(role), clean(name), clean(description)
    require_fields(role=role, name=name, description=description, image=has_upload(image))
    check_role(role)
    asset = store_upload(store, image, IMAGE_UPLOADS)
    with reclaim_on_failure(store, asset):
        member = team_repo.create_team_member(
            db, role=role, name=name, description=description, image_src=asset.url
        )
    logger.info("team_member_created: id=%s role=%s", member.id, member.role)
    return ok(message="Team member created successfully", member=dump(schemas.TeamMember, member))


@router.put("/{member_id}")
def update_team_member(
    member_id: int,
    role: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    existing = team_repo.get_team_member(db, member_id)
    if existing is None:
        raise _not_found(member_id)
    fields = {
        "role": check_role(clean(role)),
        "name": clean(name),
        "description": clean(description),
    }
    asset = None
    previous_image = None
    if has_upload(image):
        previous_image = existing.image_src
        asset = store_upload(store, image, IMAGE_UPLOADS)
        fields["image_src"] = asset.url
    with reclaim_on_failure(store, asset):
        changes = collect_changes(**fields)
        member = team_repo.update_team_member(db, member_id, changes)
    # Superseded image goes only after the new row is committed
    if previous_image and previous_image != member.image_src:
        store.reclaim(previous_image)
    return ok(message="Team member updated successfully", member=dump(schemas.TeamMember, member))


@router.delete("/{member_id}")
def delete_team_member(
    member_id: int,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    image_src = team_repo.delete_team_member(db, member_id)
    store.reclaim(image_src)
    return ok(message="Team member deleted successfully")
