"""Closet photo uploads.

Files are handled one at a time in submission order. Each file either ends
up stored and ready to tag, or marked as an error; a failure never touches
the files before or after it.
"""
import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from capsule_closet.core.config import settings
from capsule_closet.storage import r2 as storage_r2
from capsule_closet.storage.keys import closet_image_key

logger = logging.getLogger("uvicorn.error")

STATUS_TAGGING = "tagging"
STATUS_ERROR = "error"

_EXT_BY_CONTENT_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/heic": "heic",
    "image/gif": "gif",
}


@dataclass
class IncomingFile:
    filename: str
    content_type: str
    data: bytes


@dataclass
class UploadResult:
    filename: str
    status: str
    image_url: Optional[str] = None
    key: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    error: Optional[str] = None


def _ext_for(f: IncomingFile) -> str:
    if f.filename and "." in f.filename:
        ext = f.filename.rsplit(".", 1)[-1].lower()
        if ext.isalnum() and len(ext) <= 5:
            return ext
    return _EXT_BY_CONTENT_TYPE.get(f.content_type, "jpg")


def image_files(files: Sequence[IncomingFile]) -> List[IncomingFile]:
    return [f for f in files if (f.content_type or "").startswith("image/")]


def remaining_slots(existing_count: int) -> int:
    return max(0, settings.CLOSET_MAX_ITEMS - existing_count)


def process_upload(user_id: str, f: IncomingFile) -> UploadResult:
    if len(f.data) > settings.UPLOAD_MAX_BYTES:
        return UploadResult(filename=f.filename, status=STATUS_ERROR, error="file_too_large")
    try:
        with Image.open(io.BytesIO(f.data)) as im:
            width, height = im.size
            im.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as e:
        logger.warning("uploads: unreadable image user_id=%s file=%s reason=%s", user_id, f.filename, e)
        return UploadResult(filename=f.filename, status=STATUS_ERROR, error="invalid_image")

    key = closet_image_key(user_id, _ext_for(f))
    try:
        storage_r2.put_object(key, f.data, f.content_type)
    except (ClientError, BotoCoreError) as e:
        logger.error("uploads: put failed user_id=%s key=%s reason=%s", user_id, key, e)
        return UploadResult(filename=f.filename, status=STATUS_ERROR, error="upload_failed")

    return UploadResult(
        filename=f.filename,
        status=STATUS_TAGGING,
        image_url=storage_r2.object_url(key),
        key=key,
        width=width,
        height=height,
    )


def process_uploads(user_id: str, files: Sequence[IncomingFile], existing_count: int) -> tuple[List[UploadResult], int]:
    """Upload the image files that still fit in the closet.

    Returns the per-file results and how many submitted files were dropped
    (non-images and anything past the closet cap).
    """
    images = image_files(files)
    accepted = images[: remaining_slots(existing_count)]
    dropped = len(files) - len(accepted)
    results = [process_upload(user_id, f) for f in accepted]
    logger.info(
        "uploads: user_id=%s accepted=%d dropped=%d errors=%d",
        user_id,
        len(accepted),
        dropped,
        sum(1 for r in results if r.status == STATUS_ERROR),
    )
    return results, dropped
