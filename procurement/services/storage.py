"""File uploads for attachments, bill photos and generated documents.

Files go to a Supabase storage bucket when a client is configured and to
Django's ``default_storage`` (under a folder named after the bucket)
otherwise. Either way the caller receives a URL to store on the record.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import time

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from .supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

INDENT_ATTACHMENT_BUCKET = "indent_attachment"
COMPARISON_SHEET_BUCKET = "comparison_sheet"
PO_BUCKET = "po_image"
BILL_PHOTO_BUCKET = "store_in_images"
BILTY_IMAGE_BUCKET = "fullkitting-photos"
PRODUCT_PHOTO_BUCKET = "photo_of_product"
BILL_COPY_BUCKET = "bill_copy_attached"
BILL_IMAGE_BUCKET = "bill_image_status"
UPLOAD_FAILED = "Upload Failed"


class StorageError(Exception):
    """Raised when a file could not be stored."""


def epoch_ms() -> int:
    return int(time.time() * 1000)


def extension_of(upload, default: str = "bin") -> str:
    name = getattr(upload, "name", "") or ""
    ext = os.path.splitext(name)[1].lstrip(".").lower()
    return ext or default


def timestamped_name(stem: str, ext: str, sep: str = "_") -> str:
    safe_stem = stem.replace("/", "-").replace(" ", "_")
    return f"{safe_stem}{sep}{epoch_ms()}.{ext}"


def _read(upload) -> bytes:
    if isinstance(upload, (bytes, bytearray)):
        return bytes(upload)
    if hasattr(upload, "seek"):
        upload.seek(0)
    return upload.read()


def upload_file(bucket: str, upload, filename: str, content_type: str | None = None) -> str:
    """Store ``upload`` as ``filename`` in ``bucket`` and return its URL.

    ``upload`` may be raw bytes or any file-like object.
    """

    data = _read(upload)
    content_type = (
        content_type
        or getattr(upload, "content_type", None)
        or mimetypes.guess_type(filename)[0]
        or "application/octet-stream"
    )
    client = get_supabase_client()
    try:
        if client is not None:
            bucket_api = client.storage.from_(bucket)
            bucket_api.upload(filename, data, {"content-type": content_type})
            url = bucket_api.get_public_url(filename)
        else:
            saved = default_storage.save(f"{bucket}/{filename}", ContentFile(data))
            url = default_storage.url(saved)
    except Exception as exc:
        logger.error("Upload of %s to %s failed: %s", filename, bucket, exc)
        raise StorageError(f"Could not upload {filename}") from exc
    logger.info("Uploaded %s to %s", filename, bucket)
    return url


__all__ = [
    "StorageError",
    "UPLOAD_FAILED",
    "upload_file",
    "timestamped_name",
    "extension_of",
]
