"""
Shared request-shaping helpers for the routers.

Input fields are trimmed before use; required-field, enumerated-value and
empty-update checks raise `ValidationError` before any repository is called.
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import UploadFile

from portal.errors import ValidationError, invalid_choice
from portal.services.asset_store import AssetStore, StoredAsset, UploadPolicy
from portal.utils.choices import ALL_ROLES, ALL_TARGETS, is_valid_role, is_valid_target


def ok(**body: Any) -> Dict[str, Any]:
    return {"success": True, **body}


def dump(schema, row) -> Dict[str, Any]:
    return schema.model_validate(row).model_dump(mode="json")


def clean(value: Optional[str]) -> Optional[str]:
    """Trim a string input; blank strings count as absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def has_upload(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def require_fields(**fields: Any) -> None:
    missing = [name for name, value in fields.items() if value is None or value is False]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", code="MISSING_FIELDS")


def check_target(target: Optional[str]) -> Optional[str]:
    if target is not None and not is_valid_target(target):
        raise invalid_choice("target", ALL_TARGETS)
    return target


def check_role(role: Optional[str]) -> Optional[str]:
    if role is not None and not is_valid_role(role):
        raise invalid_choice("role", ALL_ROLES)
    return role


def collect_changes(**fields: Any) -> Dict[str, Any]:
    """Keep only the supplied fields; raise NO_UPDATE_DATA when nothing is left."""
    changes = {name: value for name, value in fields.items() if value is not None}
    if not changes:
        raise ValidationError("No data provided for update", code="NO_UPDATE_DATA")
    return changes


def store_upload(store: AssetStore, upload: UploadFile, policy: UploadPolicy) -> StoredAsset:
    return store.ingest_stream(upload.file, upload.content_type, policy, upload.filename)


@contextmanager
def reclaim_on_failure(store: AssetStore, asset: Optional[StoredAsset]) -> Iterator[None]:
    """Remove a freshly stored asset if the database write that references it fails."""
    try:
        yield
    except Exception:
        if asset is not None:
            store.reclaim(asset.url)
        raise
