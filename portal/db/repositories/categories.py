"""
Category and dictionary item repository functions.

A category owns its items; deleting it removes them in the same transaction.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session, selectinload

from portal.db import models
from portal.db.repositories.base import apply_changes
from portal.errors import NotFoundError


def _category_not_found(category_id: int) -> NotFoundError:
    return NotFoundError(f"Category {category_id} does not exist", code="CATEGORY_NOT_FOUND")


def _item_not_found(item_id: int) -> NotFoundError:
    return NotFoundError(f"Item {item_id} does not exist", code="ITEM_NOT_FOUND")


def create_category(db: Session, *, title: str, target: str) -> models.Category:
    category = models.Category(title=title, target=target)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def get_category(db: Session, category_id: int) -> Optional[models.Category]:
    return (
        db.query(models.Category)
        .options(selectinload(models.Category.entries))
        .filter(models.Category.id == category_id)
        .first()
    )


def get_categories(db: Session, target: Optional[str] = None) -> List[models.Category]:
    """List categories newest first, optionally narrowed to one audience."""
    q = db.query(models.Category).options(selectinload(models.Category.entries))
    if target:
        q = q.filter(models.Category.target == target)
    return q.order_by(models.Category.created_at.desc(), models.Category.id.desc()).all()


def update_category(db: Session, category_id: int, changes: Mapping[str, Any]) -> models.Category:
    category = get_category(db, category_id)
    if category is None:
        raise _category_not_found(category_id)
    apply_changes(category, changes)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    if category is None:
        raise _category_not_found(category_id)
    db.delete(category)
    db.commit()


def add_item(db: Session, category_id: int, *, title: str, description: str) -> models.DictionaryItem:
    exists = db.query(models.Category.id).filter(models.Category.id == category_id).first()
    if exists is None:
        raise _category_not_found(category_id)
    item = models.DictionaryItem(category_id=category_id, title=title, description=description)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def get_item(db: Session, item_id: int) -> Optional[models.DictionaryItem]:
    return db.query(models.DictionaryItem).filter(models.DictionaryItem.id == item_id).first()


def get_items_by_category(db: Session, category_id: int) -> List[models.DictionaryItem]:
    return (
        db.query(models.DictionaryItem)
        .filter(models.DictionaryItem.category_id == category_id)
        .order_by(models.DictionaryItem.id.asc())
        .all()
    )


def update_item(db: Session, item_id: int, changes: Mapping[str, Any]) -> models.DictionaryItem:
    item = get_item(db, item_id)
    if item is None:
        raise _item_not_found(item_id)
    apply_changes(item, changes)
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: int) -> None:
    item = get_item(db, item_id)
    if item is None:
        raise _item_not_found(item_id)
    db.delete(item)
    db.commit()
