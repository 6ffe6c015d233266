import io
import logging

import pytest

from portal.errors import ErrorKind, UploadError
from portal.services.asset_store import DOCUMENT_UPLOADS, IMAGE_UPLOADS, AssetStore


@pytest.fixture
def store(tmp_path):
    return AssetStore(tmp_path)


def test_store_creates_asset_directories(tmp_path):
    AssetStore(tmp_path / "media")
    assert (tmp_path / "media" / "documents").is_dir()
    assert (tmp_path / "media" / "images").is_dir()


def test_ingest_document_writes_file_under_generated_name(store, tmp_path):
    asset = store.ingest(b"%PDF-1.4", "application/pdf", DOCUMENT_UPLOADS, "My Report (v2).pdf")
    assert asset.url.startswith("/documents/document-")
    assert asset.url.endswith(".pdf")
    assert asset.size == 8
    assert asset.mime_type == "application/pdf"
    assert asset.display_name == "My_Report_v2.pdf"
    stored = tmp_path / asset.url.lstrip("/")
    assert stored.read_bytes() == b"%PDF-1.4"
    assert "Report" not in stored.name


def test_ingest_rejects_disallowed_type(store, tmp_path):
    with pytest.raises(UploadError) as exc:
        store.ingest(b"PK\x03\x04", "application/zip", DOCUMENT_UPLOADS, "a.zip")
    assert exc.value.kind is ErrorKind.UPLOAD
    assert exc.value.code == "UNSUPPORTED_FILE_TYPE"
    assert "PDF, DOC, DOCX, TXT, JPG, PNG, GIF" in exc.value.message
    assert list((tmp_path / "documents").iterdir()) == []


def test_image_policy_differs_from_document_policy(store):
    store.ingest(b"RIFF", "image/webp", IMAGE_UPLOADS, "a.webp")
    store.ingest(b"x", "image/jpg", IMAGE_UPLOADS, "a.jpg")
    with pytest.raises(UploadError):
        store.ingest(b"RIFF", "image/webp", DOCUMENT_UPLOADS, "a.webp")
    with pytest.raises(UploadError):
        store.ingest(b"%PDF", "application/pdf", IMAGE_UPLOADS, "a.pdf")


def test_ingest_rejects_oversized_file(store):
    data = b"\x00" * (IMAGE_UPLOADS.max_bytes + 1)
    with pytest.raises(UploadError) as exc:
        store.ingest(data, "image/png", IMAGE_UPLOADS, "big.png")
    assert exc.value.code == "FILE_TOO_LARGE"
    assert "5MB" in exc.value.message


def test_ingest_accepts_file_at_ceiling(store):
    asset = store.ingest(b"\x00" * IMAGE_UPLOADS.max_bytes, "image/png", IMAGE_UPLOADS, "edge.png")
    assert asset.size == IMAGE_UPLOADS.max_bytes


def test_ingest_stream_stops_reading_past_ceiling(store):
    stream = io.BytesIO(b"\x00" * (IMAGE_UPLOADS.max_bytes + 10))
    with pytest.raises(UploadError) as exc:
        store.ingest_stream(stream, "image/png", IMAGE_UPLOADS, "big.png")
    assert exc.value.code == "FILE_TOO_LARGE"


def test_ingest_stream_checks_type_before_reading(store):
    stream = io.BytesIO(b"data")
    with pytest.raises(UploadError):
        store.ingest_stream(stream, "application/zip", IMAGE_UPLOADS, "a.zip")
    assert stream.tell() == 0


def test_mime_type_parameters_are_ignored(store):
    asset = store.ingest(b"hello", "text/plain; charset=utf-8", DOCUMENT_UPLOADS, "notes.txt")
    assert asset.mime_type == "text/plain"


def test_reclaim_is_idempotent(store, tmp_path):
    asset = store.ingest(b"x", "image/png", IMAGE_UPLOADS, "a.png")
    path = tmp_path / asset.url.lstrip("/")
    assert path.exists()
    store.reclaim(asset.url)
    assert not path.exists()
    store.reclaim(asset.url)


def test_reclaim_ignores_paths_outside_store(store, tmp_path, caplog):
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")
    with caplog.at_level(logging.WARNING, logger="portal.services.asset_store"):
        store.reclaim("/images/../keep.txt")
        store.reclaim("/etc/passwd")
    assert outside.exists()
    assert "asset_reclaim_skipped" in caplog.text


def test_reclaim_of_nothing_is_noop(store):
    store.reclaim(None)
    store.reclaim("")
