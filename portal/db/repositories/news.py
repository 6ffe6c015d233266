"""
News repository functions.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from portal.db import models
from portal.db.repositories.base import apply_changes
from portal.errors import NotFoundError


def _not_found(news_id: int) -> NotFoundError:
    return NotFoundError(f"News item {news_id} does not exist", code="NEWS_NOT_FOUND")


def create_news(db: Session, *, title: str, description: str, date: str, image_src: str) -> models.News:
    news = models.News(title=title, description=description, date=date, image_src=image_src)
    db.add(news)
    db.commit()
    db.refresh(news)
    return news


def get_news(db: Session, news_id: int) -> Optional[models.News]:
    return db.query(models.News).filter(models.News.id == news_id).first()


def get_all_news(db: Session) -> List[models.News]:
    # Display date first, then newest record
    return (
        db.query(models.News)
        .order_by(models.News.date.desc(), models.News.created_at.desc(), models.News.id.desc())
        .all()
    )


def update_news(db: Session, news_id: int, changes: Mapping[str, Any]) -> Tuple[models.News, Optional[str]]:
    news = get_news(db, news_id)
    if news is None:
        raise _not_found(news_id)
    previous_image = news.image_src
    apply_changes(news, changes)
    db.commit()
    db.refresh(news)
    return news, (previous_image if news.image_src != previous_image else None)


def delete_news(db: Session, news_id: int) -> str:
    news = get_news(db, news_id)
    if news is None:
        raise _not_found(news_id)
    image_src = news.image_src
    db.delete(news)
    db.commit()
    return image_src
