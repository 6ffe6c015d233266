"""
Projects API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from portal.api.deps import get_asset_store, get_current_user, get_db
from portal.api.helpers import (
    check_target,
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
from portal.db.repositories import projects as project_repo
from portal.errors import NotFoundError
from portal.services.asset_store import IMAGE_UPLOADS, AssetStore

router = APIRouter(prefix="/projects", tags=["projects"])


def _not_found(project_id: int) -> NotFoundError:
    return NotFoundError(f"Project {project_id} does not exist", code="PROJECT_NOT_FOUND")


@router.get("")
def list_projects(target: Optional[str] = None, db: Session = Depends(get_db)):
    target = check_target(clean(target))
    projects = project_repo.get_projects(db, target=target)
    return ok(
        projects=[dump(schemas.Project, p) for p in projects],
        filters={"target": target},
    )


@router.get("/{project_id}")
def get_project(project_id: int, db: Session = Depends(get_db)):
    project = project_repo.get_project(db, project_id)
    if project is None:
        raise _not_found(project_id)
    return ok(project=dump(schemas.Project, project))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    target: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    title, description, target = clean(title), clean(description), clean(target)
    require_fields(title=title, description=description, target=target, image=has_upload(image))
    check_target(target)
    asset = store_upload(store, image, IMAGE_UPLOADS)
    with reclaim_on_failure(store, asset):
        project = project_repo.create_project(
            db, title=title, description=description, image_src=asset.url, target=target
        )
    return ok(message="Project created successfully", project=dump(schemas.Project, project))


@router.put("/{project_id}")
def update_project(
    project_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    target: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    if project_repo.get_project(db, project_id) is None:
        raise _not_found(project_id)
    fields = {
        "title": clean(title),
        "description": clean(description),
        "target": check_target(clean(target)),
    }
    asset = None
    if has_upload(image):
        asset = store_upload(store, image, IMAGE_UPLOADS)
        fields["image_src"] = asset.url
    with reclaim_on_failure(store, asset):
        changes = collect_changes(**fields)
        project, replaced_image = project_repo.update_project(db, project_id, changes)
    store.reclaim(replaced_image)
    return ok(message="Project updated successfully", project=dump(schemas.Project, project))


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    image_src = project_repo.delete_project(db, project_id)
    store.reclaim(image_src)
    return ok(message="Project deleted successfully")
