"""
Simulated file storage.

Uploads are validated and acknowledged with a synthetic storage id; no bytes
are persisted.
"""

from __future__ import annotations

import base64
import binascii
import time

from hirehub.core.config import settings

RESUME_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class UploadRejected(ValueError):
    """Raised when an upload payload fails validation."""


def _now_ms() -> int:
    return int(time.time() * 1000)


def decode_payload(data: str) -> bytes:
    """Decode a base64 payload, accepting data-URL prefixes."""
    if "," in data and data.strip().startswith("data:"):
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise UploadRejected("File data is not valid base64")


def _check_size(content: bytes, max_mb: int) -> None:
    if len(content) > max_mb * 1024 * 1024:
        raise UploadRejected(f"File exceeds the {max_mb}MB limit")


def store_resume(file_name: str, file_data: str, mime_type: str) -> str:
    if mime_type not in RESUME_MIME_TYPES:
        raise UploadRejected("Only PDF, DOC or DOCX resumes are accepted")
    content = decode_payload(file_data)
    if not content:
        raise UploadRejected(f"{file_name} is empty")
    _check_size(content, settings.MAX_RESUME_SIZE_MB)
    return f"resume_{_now_ms()}"


def store_profile_image(image_data: str) -> str:
    content = decode_payload(image_data)
    _check_size(content, settings.MAX_IMAGE_SIZE_MB)
    return f"img_{_now_ms()}"


def file_url(storage_id: str) -> str:
    return f"{settings.FILE_BASE_URL.rstrip('/')}/{storage_id}"
