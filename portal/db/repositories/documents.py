"""
Document repository functions.

Each document row references exactly one stored file via `file_url`. Delete
and file-replacing updates hand back the superseded URL so the caller can
reclaim the file once the new state is committed.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from portal.db import models
from portal.db.repositories.base import apply_changes
from portal.errors import NotFoundError
from portal.utils.choices import TARGET_EMPLOYEE, TARGET_STUDENT


def _not_found(document_id: int) -> NotFoundError:
    return NotFoundError(f"Document {document_id} does not exist", code="DOCUMENT_NOT_FOUND")


def create_document(
    db: Session,
    *,
    title: str,
    target: str,
    file_name: str,
    file_mime_type: str,
    file_url: str,
    file_size: int,
) -> models.Document:
    document = models.Document(
        title=title,
        target=target,
        file_name=file_name,
        file_mime_type=file_mime_type,
        file_url=file_url,
        file_size=file_size,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document


def get_document(db: Session, document_id: int) -> Optional[models.Document]:
    return db.query(models.Document).filter(models.Document.id == document_id).first()


def get_documents(db: Session, target: Optional[str] = None) -> List[models.Document]:
    q = db.query(models.Document)
    if target:
        q = q.filter(models.Document.target == target)
    return q.order_by(models.Document.created_at.desc(), models.Document.id.desc()).all()


def update_document(db: Session, document_id: int, changes: Mapping[str, Any]) -> Tuple[models.Document, Optional[str]]:
    """Apply changes; return the document and the replaced file URL, if any."""
    document = get_document(db, document_id)
    if document is None:
        raise _not_found(document_id)
    previous_url = document.file_url
    apply_changes(document, changes)
    db.commit()
    db.refresh(document)
    replaced = previous_url if document.file_url != previous_url else None
    return document, replaced


def delete_document(db: Session, document_id: int) -> str:
    """Delete the document and return the file URL it referenced."""
    document = get_document(db, document_id)
    if document is None:
        raise _not_found(document_id)
    file_url = document.file_url
    db.delete(document)
    db.commit()
    return file_url


def get_document_stats(db: Session) -> Dict[str, int]:
    rows = (
        db.query(models.Document.target, func.count(models.Document.id))
        .group_by(models.Document.target)
        .all()
    )
    by_target = {target: count for target, count in rows}
    return {
        "total": sum(by_target.values()),
        "employee": by_target.get(TARGET_EMPLOYEE, 0),
        "student": by_target.get(TARGET_STUDENT, 0),
    }
