"""
Categories API endpoints.

Categories group dictionary items for one audience. Reads are public, writes
require a bearer token. Item routes are nested under their category and
refuse to touch an item that belongs to a different category.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.api.deps import get_current_user, get_db
from portal.api.helpers import check_target, clean, collect_changes, dump, ok, require_fields
from portal.db import models, schemas
from portal.db.repositories import categories as category_repo
from portal.errors import NotFoundError, ValidationError

router = APIRouter(prefix="/categories", tags=["categories"])


def _owned_item(db: Session, category_id: int, item_id: int) -> models.DictionaryItem:
    item = category_repo.get_item(db, item_id)
    if item is None:
        raise NotFoundError(f"Item {item_id} does not exist", code="ITEM_NOT_FOUND")
    if item.category_id != category_id:
        raise ValidationError(
            f"Item {item_id} does not belong to category {category_id}",
            code="CATEGORY_MISMATCH",
        )
    return item


@router.get("")
def list_categories(target: Optional[str] = None, db: Session = Depends(get_db)):
    target = check_target(clean(target))
    categories = category_repo.get_categories(db, target=target)
    return ok(
        categories=[dump(schemas.Category, c) for c in categories],
        filters={"target": target},
    )


@router.get("/{category_id}")
def get_category(category_id: int, db: Session = Depends(get_db)):
    category = category_repo.get_category(db, category_id)
    if category is None:
        raise NotFoundError(f"Category {category_id} does not exist", code="CATEGORY_NOT_FOUND")
    return ok(category=dump(schemas.Category, category))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    title, target = clean(payload.title), clean(payload.target)
    require_fields(title=title, target=target)
    check_target(target)
    category = category_repo.create_category(db, title=title, target=target)
    return ok(message="Category created successfully", category=dump(schemas.Category, category))


@router.put("/{category_id}")
def update_category(
    category_id: int,
    payload: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    if category_repo.get_category(db, category_id) is None:
        raise NotFoundError(f"Category {category_id} does not exist", code="CATEGORY_NOT_FOUND")
    changes = collect_changes(title=clean(payload.title), target=check_target(clean(payload.target)))
    category = category_repo.update_category(db, category_id, changes)
    return ok(message="Category updated successfully", category=dump(schemas.Category, category))


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    category_repo.delete_category(db, category_id)
    return ok(message="Category deleted successfully")


@router.post("/{category_id}/items", status_code=status.HTTP_201_CREATED)
def add_item(
    category_id: int,
    payload: schemas.DictionaryItemCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    title, description = clean(payload.title), clean(payload.description)
    require_fields(title=title, description=description)
    item = category_repo.add_item(db, category_id, title=title, description=description)
    return ok(message="Item added successfully", item=dump(schemas.DictionaryItem, item))


@router.put("/{category_id}/items/{item_id}")
def update_item(
    category_id: int,
    item_id: int,
    payload: schemas.DictionaryItemUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _owned_item(db, category_id, item_id)
    changes = collect_changes(title=clean(payload.title), description=clean(payload.description))
    item = category_repo.update_item(db, item_id, changes)
    return ok(message="Item updated successfully", item=dump(schemas.DictionaryItem, item))


@router.delete("/{category_id}/items/{item_id}")
def delete_item(
    category_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _owned_item(db, category_id, item_id)
    category_repo.delete_item(db, item_id)
    return ok(message="Item deleted successfully")
