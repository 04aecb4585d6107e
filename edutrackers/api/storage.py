"""Attachment upload and download.

Any authenticated caller may upload, anyone may download, and only the
uploader (the first segment of the object key) may delete.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import BaseModel

from edutrackers.config import get_settings
from edutrackers.dependencies import get_current_profile
from edutrackers.errors import AuthorizationDenied
from edutrackers.models import Bucket, Profile
from edutrackers.utils.storage import key_owner, object_key, resolve_object, save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter()


class StoredObject(BaseModel):
    bucket: Bucket
    key: str
    url: str
    file_name: str
    size_bytes: int


def _resolve(bucket: Bucket, key: str):
    try:
        return resolve_object(get_settings().storage_dir, bucket.value, key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/{bucket}", response_model=StoredObject, status_code=status.HTTP_201_CREATED)
async def upload(
    bucket: Bucket,
    file: UploadFile = File(...),
    kind: str = Form(default="files"),
    current: Profile = Depends(get_current_profile),
):
    """Store an upload and return its opaque URL for use as ``file_url``."""
    try:
        key = object_key(current.id, kind, file.filename)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    size = await save_upload_file(file, _resolve(bucket, key))
    logger.info("stored %s/%s (%d bytes)", bucket.value, key, size)
    return {
        "bucket": bucket,
        "key": key,
        "url": f"/api/storage/{bucket.value}/{key}",
        "file_name": file.filename or key.rsplit("/", 1)[-1],
        "size_bytes": size,
    }


@router.get("/{bucket}/{key:path}")
async def download(bucket: Bucket, key: str):
    path = _resolve(bucket, key)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="object not found")
    return FileResponse(path)


@router.delete("/{bucket}/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_object(bucket: Bucket, key: str, current: Profile = Depends(get_current_profile)):
    path = _resolve(bucket, key)
    if key_owner(key) != current.id:
        raise AuthorizationDenied("storage.objects", "delete")
    if not path.is_file():
        raise HTTPException(status_code=404, detail="object not found")
    path.unlink()
