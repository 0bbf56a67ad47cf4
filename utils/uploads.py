"""
Upload helpers: type/size filtering and storage under MEDIA_ROOT.
"""

import logging
import os
import secrets
import time

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
IMAGE_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}

RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}
RESUME_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class UploadRejected(Exception):
    """Uploaded file failed type or size checks."""


def validate_upload(
    file: UploadedFile,
    extensions: set[str],
    mime_types: set[str],
    max_bytes: int,
    kind: str = "image",
) -> str:
    """Check extension, content type and size. Returns the lowercased extension."""
    ext = os.path.splitext(file.name or "")[1].lower()
    content_type = (file.content_type or "").lower()

    if ext not in extensions or content_type not in mime_types:
        allowed = ", ".join(sorted(e.lstrip(".") for e in extensions))
        raise UploadRejected(f"Only {kind} files are allowed ({allowed})")

    if file.size is not None and file.size > max_bytes:
        raise UploadRejected(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")

    return ext


def save_image(file: UploadedFile, folder: str, prefix: str, max_bytes: int) -> str:
    """Validate and store an image, returning its public URL."""
    ext = validate_upload(file, IMAGE_EXTENSIONS, IMAGE_MIME_TYPES, max_bytes)

    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    name = default_storage.save(f"{folder}/{prefix}-{unique_suffix}{ext}", file)

    logger.info(f"[Upload] Stored {file.name} as {name}")
    return f"{settings.MEDIA_URL}{name}"
