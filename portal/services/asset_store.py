"""
Filesystem storage for uploaded documents and images.

Files are written under `<media_root>/documents` and `<media_root>/images`
with generated names and are addressed by the public URL path the API returns
(`/documents/<name>`, `/images/<name>`). The client-supplied file name is
never used for the stored file.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, FrozenSet, Optional

from portal.errors import UploadError
from portal.utils.filenames import generate_stored_name, normalize_display_name

logger = logging.getLogger(__name__)

_READ_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    directory: str
    prefix: str
    allowed_mime_types: FrozenSet[str]
    max_bytes: int
    allowed_label: str


DOCUMENT_UPLOADS = UploadPolicy(
    directory="documents",
    prefix="document",
    allowed_mime_types=frozenset({
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "image/jpeg",
        "image/png",
        "image/gif",
    }),
    max_bytes=10 * 1024 * 1024,
    allowed_label="PDF, DOC, DOCX, TXT, JPG, PNG, GIF",
)

IMAGE_UPLOADS = UploadPolicy(
    directory="images",
    prefix="image",
    allowed_mime_types=frozenset({
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    }),
    max_bytes=5 * 1024 * 1024,
    allowed_label="JPG, PNG, GIF, WEBP",
)


@dataclass(frozen=True)
class StoredAsset:
    url: str
    size: int
    mime_type: str
    display_name: str


def _read_limited(stream: BinaryIO, max_bytes: int, policy: UploadPolicy) -> bytes:
    chunks = []
    total = 0
    while True:
        chunk = stream.read(_READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise _too_large(policy)
        chunks.append(chunk)
    return b"".join(chunks)


def _too_large(policy: UploadPolicy) -> UploadError:
    limit_mb = policy.max_bytes // (1024 * 1024)
    return UploadError(f"File is too large. Maximum file size: {limit_mb}MB", code="FILE_TOO_LARGE")


class AssetStore:
    def __init__(self, root: Path):
        self.root = Path(root)
        for policy in (DOCUMENT_UPLOADS, IMAGE_UPLOADS):
            (self.root / policy.directory).mkdir(parents=True, exist_ok=True)

    def directory(self, policy: UploadPolicy) -> Path:
        return self.root / policy.directory

    def check_mime_type(self, declared_mime_type: Optional[str], policy: UploadPolicy) -> str:
        mime_type = (declared_mime_type or "").split(";", 1)[0].strip().lower()
        if mime_type not in policy.allowed_mime_types:
            raise UploadError(
                f"Unsupported file type. Allowed: {policy.allowed_label}",
                code="UNSUPPORTED_FILE_TYPE",
            )
        return mime_type

    def ingest(
        self,
        data: bytes,
        declared_mime_type: Optional[str],
        policy: UploadPolicy,
        original_name: Optional[str] = None,
    ) -> StoredAsset:
        """Validate type and size, write the bytes under a generated name, return its URL."""
        mime_type = self.check_mime_type(declared_mime_type, policy)
        if len(data) > policy.max_bytes:
            raise _too_large(policy)
        stored_name = generate_stored_name(policy.prefix, original_name)
        target = self.directory(policy) / stored_name
        target.write_bytes(data)
        logger.info("asset_stored: url=/%s/%s size=%s mime=%s", policy.directory, stored_name, len(data), mime_type)
        return StoredAsset(
            url=f"/{policy.directory}/{stored_name}",
            size=len(data),
            mime_type=mime_type,
            display_name=normalize_display_name(original_name),
        )

    def ingest_stream(
        self,
        stream: BinaryIO,
        declared_mime_type: Optional[str],
        policy: UploadPolicy,
        original_name: Optional[str] = None,
    ) -> StoredAsset:
        """Like `ingest`, reading at most one byte past the ceiling from the stream."""
        self.check_mime_type(declared_mime_type, policy)
        data = _read_limited(stream, policy.max_bytes, policy)
        return self.ingest(data, declared_mime_type, policy, original_name)

    def resolve(self, url: Optional[str]) -> Optional[Path]:
        """Map a public asset URL to its file, or None when it points outside the store."""
        if not url:
            return None
        parts = url.strip("/").split("/")
        if len(parts) != 2:
            return None
        directory, name = parts
        if directory not in (DOCUMENT_UPLOADS.directory, IMAGE_UPLOADS.directory):
            return None
        if name in ("", ".", "..") or "\\" in name:
            return None
        return self.root / directory / name

    def reclaim(self, url: Optional[str]) -> None:
        """Delete the stored file if present; absent files and foreign URLs are ignored."""
        path = self.resolve(url)
        if path is None:
            if url:
                logger.warning("asset_reclaim_skipped: url=%s reason=outside_store", url)
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("asset_reclaim_failed: url=%s error=%s", url, e)
            return
        logger.info("asset_reclaimed: url=%s", url)
