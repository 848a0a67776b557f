"""Disk storage for card attachments.

Files land in ``UPLOAD_DIR`` under a generated name and are served back from
``/uploads``. Size and count ceilings are enforced here, before any
attachment descriptor is written.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import TypedDict

from fastapi import UploadFile

from kanban.core.config import get_settings
from kanban.core.errors import UploadRejected

logger = logging.getLogger(__name__)

CHUNK_BYTES = 64 * 1024


class StoredFile(TypedDict):
    filename: str
    original_name: str
    size: int
    mimetype: str
    url: str


def _safe_suffix(name: str) -> str:
    suffix = Path(name).suffix
    if not suffix or len(suffix) > 16 or not suffix[1:].isalnum():
        return ""
    return suffix.lower()


def _generated_name(original: str) -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{_safe_suffix(original)}"


def _write_limited(upload: UploadFile, target: Path, max_bytes: int) -> int:
    written = 0
    with target.open("wb") as handle:
        while True:
            chunk = upload.file.read(CHUNK_BYTES)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                break
            handle.write(chunk)

    if written > max_bytes:
        target.unlink(missing_ok=True)
        raise UploadRejected(f"File too large. Maximum size is {max_bytes / (1024 * 1024):g}MB.")
    return written


def store_uploads(files: list[UploadFile]) -> list[StoredFile]:
    settings = get_settings()
    if len(files) > settings.max_upload_files:
        raise UploadRejected(f"Too many files. Maximum {settings.max_upload_files} files allowed.")

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    stored: list[StoredFile] = []
    try:
        for upload in files:
            original = upload.filename or "upload"
            filename = _generated_name(original)
            size = _write_limited(upload, upload_dir / filename, settings.max_upload_bytes)
            stored.append(
                {
                    "filename": filename,
                    "original_name": original,
                    "size": size,
                    "mimetype": upload.content_type or "application/octet-stream",
                    "url": f"{settings.base_url}/uploads/{filename}",
                }
            )
    except UploadRejected:
        for item in stored:
            (upload_dir / item["filename"]).unlink(missing_ok=True)
        raise

    logger.info("Stored %d upload(s) in %s", len(stored), upload_dir)
    return stored
