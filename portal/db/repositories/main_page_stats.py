"""
Homepage statistics repository.

There is exactly one row (id=1); it is created with zero counters the first
time it is read and is never deleted.
"""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.db import models
from portal.db.repositories.base import apply_changes


def get_stats(db: Session) -> models.MainPageStats:
    stats = db.get(models.MainPageStats, models.MAIN_PAGE_STATS_ID)
    if stats is not None:
        return stats
    stats = models.MainPageStats(
        id=models.MAIN_PAGE_STATS_ID,
        projects_count=0,
        payments_count=0,
        choice_count=0,
    )
    db.add(stats)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the row first
        db.rollback()
        return db.get(models.MainPageStats, models.MAIN_PAGE_STATS_ID)
    db.refresh(stats)
    return stats


def update_stats(db: Session, changes: Mapping[str, Any]) -> models.MainPageStats:
    """Overwrite the supplied counters; the others keep their values."""
    stats = get_stats(db)
    apply_changes(stats, changes)
    db.commit()
    db.refresh(stats)
    return stats
