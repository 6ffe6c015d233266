"""
Homepage statistics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal.api.deps import get_current_user, get_db
from portal.api.helpers import collect_changes, dump, ok
from portal.db import models, schemas
from portal.db.repositories import main_page_stats as stats_repo

router = APIRouter(prefix="/main-page-stats", tags=["main-page-stats"])

# API field name -> column
_COLUMNS = {
    "projectsCount": "projects_count",
    "paymentsCount": "payments_count",
    "choiceCount": "choice_count",
}


@router.get("")
def get_stats(db: Session = Depends(get_db)):
    return ok(stats=dump(schemas.MainPageStats, stats_repo.get_stats(db)))


@router.put("")
def update_stats(
    payload: schemas.MainPageStatsUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    changes = collect_changes(**{_COLUMNS[k]: v for k, v in payload.model_dump().items()})
    stats = stats_repo.update_stats(db, changes)
    return ok(message="Statistics updated successfully", stats=dump(schemas.MainPageStats, stats))
