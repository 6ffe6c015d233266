"""
Documents API endpoints.

Document routes take integer ids (`{document_id:int}`) so that any other
`/documents/<name>` path falls through to the static file mount serving the
stored files.
"""
import logging
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
from portal.db.repositories import documents as document_repo
from portal.errors import NotFoundError
from portal.services.asset_store import DOCUMENT_UPLOADS, AssetStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("")
def list_documents(target: Optional[str] = None, db: Session = Depends(get_db)):
    target = check_target(clean(target))
    documents = document_repo.get_documents(db, target=target)
    return ok(
        documents=[dump(schemas.Document, d) for d in documents],
        filters={"target": target},
    )


@router.get("/stats")
def document_stats(db: Session = Depends(get_db)):
    stats = document_repo.get_document_stats(db)
    return ok(stats=schemas.DocumentStats(**stats).model_dump())


@router.get("/{document_id:int}")
def get_document(document_id: int, db: Session = Depends(get_db)):
    document = document_repo.get_document(db, document_id)
    if document is None:
        raise NotFoundError(f"Document {document_id} does not exist", code="DOCUMENT_NOT_FOUND")
    return ok(document=dump(schemas.Document, document))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_document(
    title: Optional[str] = Form(None),
    target: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    title, target = clean(title), clean(target)
    require_fields(title=title, target=target, file=has_upload(file))
    check_target(target)
    asset = store_upload(store, file, DOCUMENT_UPLOADS)
    with reclaim_on_failure(store, asset):
        document = document_repo.create_document(
            db,
            title=title,
            target=target,
            file_name=asset.display_name,
            file_mime_type=asset.mime_type,
            file_url=asset.url,
            file_size=asset.size,
        )
    logger.info("document_created: id=%s url=%s", document.id, document.file_url)
    return ok(message="Document uploaded successfully", document=dump(schemas.Document, document))


@router.put("/{document_id:int}")
def update_document(
    document_id: int,
    title: Optional[str] = Form(None),
    target: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    if document_repo.get_document(db, document_id) is None:
        raise NotFoundError(f"Document {document_id} does not exist", code="DOCUMENT_NOT_FOUND")
    fields = {"title": clean(title), "target": check_target(clean(target))}
    if not has_upload(file):
        changes = collect_changes(**fields)
        document, _ = document_repo.update_document(db, document_id, changes)
        return ok(message="Document updated successfully", document=dump(schemas.Document, document))

    asset = store_upload(store, file, DOCUMENT_UPLOADS)
    changes = collect_changes(
        **fields,
        file_name=asset.display_name,
        file_mime_type=asset.mime_type,
        file_url=asset.url,
        file_size=asset.size,
    )
    with reclaim_on_failure(store, asset):
        document, replaced_url = document_repo.update_document(db, document_id, changes)
    store.reclaim(replaced_url)
    return ok(message="Document updated successfully", document=dump(schemas.Document, document))


@router.delete("/{document_id:int}")
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    file_url = document_repo.delete_document(db, document_id)
    store.reclaim(file_url)
    return ok(message="Document deleted successfully")
