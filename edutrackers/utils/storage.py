"""Local object storage for assignment and submission attachments.

Objects live under ``<storage_dir>/<bucket>/<identity_id>/<kind>/<timestamp>.<ext>``.
The rest of the application only ever sees the returned key/URL as an opaque
string.
"""

import re
import time
from pathlib import Path, PurePosixPath
from typing import Optional

from fastapi import UploadFile

KIND_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def ensure_directory(path: Path) -> None:
    """Create ``path`` and its parents if missing."""

    path.mkdir(parents=True, exist_ok=True)


def object_key(identity_id: str, kind: str, filename: Optional[str]) -> str:
    """Owner-prefixed key for a new object, keeping the upload's extension."""

    if not KIND_PATTERN.match(kind):
        raise ValueError(f"object kind {kind!r} must be a single path segment")
    suffix = PurePosixPath(filename or "").suffix.lower()
    return f"{identity_id}/{kind}/{int(time.time() * 1000)}{suffix}"


def resolve_object(root: Path, bucket: str, key: str) -> Path:
    """Absolute path of ``bucket/key`` under ``root``; rejects keys escaping the bucket."""

    if any(part in ("", ".", "..") for part in key.replace("\\", "/").split("/")):
        raise ValueError(f"object key {key!r} has an empty or relative segment")
    base = (root / bucket).resolve()
    path = (base / key).resolve()
    if base != path and base not in path.parents:
        raise ValueError(f"object key {key!r} escapes bucket {bucket!r}")
    return path


def key_owner(key: str) -> str:
    """First path segment of a key, i.e. the identity that uploaded it."""

    return PurePosixPath(key).parts[0] if key else ""


async def save_upload_file(
    upload: UploadFile, destination: Path, overwrite: bool = True
) -> int:
    """Write an upload to ``destination`` and return its size in bytes."""

    ensure_directory(destination.parent)
    if destination.exists() and not overwrite:
        raise FileExistsError(f"{destination} already exists and overwrite is False")

    data = await upload.read()
    with destination.open("wb") as f:
        f.write(data)
    await upload.seek(0)
    return len(data)
