"""Helpers shared by the repository modules."""
from typing import Any, Mapping

from portal.db.models import now_utc


def apply_changes(row, changes: Mapping[str, Any]) -> None:
    """Set each supplied column and refresh `updated_at`."""
    for key, value in changes.items():
        setattr(row, key, value)
    row.updated_at = now_utc()
