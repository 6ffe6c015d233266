"""
Project repository functions.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from portal.db import models
from portal.db.repositories.base import apply_changes
from portal.errors import NotFoundError


def _not_found(project_id: int) -> NotFoundError:
    return NotFoundError(f"Project {project_id} does not exist", code="PROJECT_NOT_FOUND")


def create_project(db: Session, *, title: str, description: str, image_src: str, target: str) -> models.Project:
    project = models.Project(title=title, description=description, image_src=image_src, target=target)
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def get_project(db: Session, project_id: int) -> Optional[models.Project]:
    return db.query(models.Project).filter(models.Project.id == project_id).first()


def get_projects(db: Session, target: Optional[str] = None) -> List[models.Project]:
    q = db.query(models.Project)
    if target:
        q = q.filter(models.Project.target == target)
    return q.order_by(models.Project.created_at.desc(), models.Project.id.desc()).all()


def update_project(db: Session, project_id: int, changes: Mapping[str, Any]) -> Tuple[models.Project, Optional[str]]:
    project = get_project(db, project_id)
    if project is None:
        raise _not_found(project_id)
    previous_image = project.image_src
    apply_changes(project, changes)
    db.commit()
    db.refresh(project)
    return project, (previous_image if project.image_src != previous_image else None)


def delete_project(db: Session, project_id: int) -> str:
    project = get_project(db, project_id)
    if project is None:
        raise _not_found(project_id)
    image_src = project.image_src
    db.delete(project)
    db.commit()
    return image_src
