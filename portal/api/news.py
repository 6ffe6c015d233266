"""
News API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from portal.api.deps import get_asset_store, get_current_user, get_db
from portal.api.helpers import (
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
from portal.db.repositories import news as news_repo
from portal.errors import NotFoundError
from portal.services.asset_store import IMAGE_UPLOADS, AssetStore

router = APIRouter(prefix="/news", tags=["news"])


def _not_found(news_id: int) -> NotFoundError:
    return NotFoundError(f"News item {news_id} does not exist", code="NEWS_NOT_FOUND")


@router.get("")
def list_news(db: Session = Depends(get_db)):
    return ok(news=[dump(schemas.News, n) for n in news_repo.get_all_news(db)])


@router.get("/{news_id}")
def get_news(news_id: int, db: Session = Depends(get_db)):
    news = news_repo.get_news(db, news_id)
    if news is None:
        raise _not_found(news_id)
    return ok(news=dump(schemas.News, news))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_news(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    title, description, date = clean(title), clean(description), clean(date)
    require_fields(title=title, description=description, date=date, image=has_upload(image))
    asset = store_upload(store, image, IMAGE_UPLOADS)
    with reclaim_on_failure(store, asset):
        news = news_repo.create_news(db, title=title, description=description, date=date, image_src=asset.url)
    return ok(message="News created successfully", news=dump(schemas.News, news))


@router.put("/{news_id}")
def update_news(
    news_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    if news_repo.get_news(db, news_id) is None:
        raise _not_found(news_id)
    fields = {"title": clean(title), "description": clean(description), "date": clean(date)}
    asset = None
    if has_upload(image):
        asset = store_upload(store, image, IMAGE_UPLOADS)
        fields["image_src"] = asset.url
    with reclaim_on_failure(store, asset):
        changes = collect_changes(**fields)
        news, replaced_image = news_repo.update_news(db, news_id, changes)
    store.reclaim(replaced_image)
    return ok(message="News updated successfully", news=dump(schemas.News, news))


@router.delete("/{news_id}")
def delete_news(
    news_id: int,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user: models.User = Depends(get_current_user),
):
    image_src = news_repo.delete_news(db, news_id)
    store.reclaim(image_src)
    return ok(message="News deleted successfully")
