"""
Uploaded resume validation and storage.

Uploads are checked for size, MIME type and extension, then copied into the
uploads directory under a collision-free name. Generated summaries live in a
separate directory (see dossier.contexts.rendering.generator).
"""

import hashlib
import mimetypes
import os
import re
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dossier.contexts.intake.exceptions import UploadValidationError

load_dotenv()
UPLOADS_PATH = Path(os.getenv("UPLOADS_PATH", "uploads"))

MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = ("application/pdf",)
ALLOWED_EXTENSIONS = (".pdf",)


@dataclass
class StoredUpload:
    """
    An upload copied into the uploads directory.

    Attributes:
        path: Location of the stored copy
        original_name: File name as supplied by the applicant
        size: Size in bytes
        checksum: SHA-256 hex digest of the contents
    """

    path: Path
    original_name: str
    size: int
    checksum: str


def validate_upload(upload_path: Path, content_type: Optional[str] = None) -> None:
    """
    Check that an upload is an acceptable PDF.

    Args:
        upload_path: File to check
        content_type: MIME type reported by the client (guessed from the name if None)

    Raises:
        UploadValidationError: If the file is missing, too large, or not a PDF
    """
    if not upload_path.is_file():
        raise UploadValidationError(f"Uploaded file not found: {upload_path}")

    if upload_path.stat().st_size > MAX_FILE_SIZE:
        raise UploadValidationError("File size exceeds 10MB limit")

    if content_type is None:
        content_type, _ = mimetypes.guess_type(upload_path.name)
    if content_type not in ALLOWED_MIME_TYPES:
        raise UploadValidationError("Only PDF files are allowed")

    if upload_path.suffix.lower() not in ALLOWED_EXTENSIONS:
        raise UploadValidationError("Only PDF files are allowed")


def generate_safe_filename(original_name: str) -> str:
    """
    Build a unique storage name from the applicant's file name.

    Format: <epoch ms>-<16 hex chars>-<stem with unsafe chars as "_", max 50><ext>

    Example:
        >>> generate_safe_filename("My Resume (final).pdf")
        '1760880000000-9f86d081884c7d65-My_Resume__final_.pdf'
    """
    path = Path(original_name)
    extension = path.suffix
    base_name = re.sub(r"[^a-zA-Z0-9\-_]", "_", path.stem)[:50]
    timestamp = int(time.time() * 1000)
    return f"{timestamp}-{secrets.token_hex(8)}-{base_name}{extension}"


def file_checksum(data: bytes) -> str:
    """SHA-256 hex digest."""
    return hashlib.sha256(data).hexdigest()


def store_upload(
    upload_path: Path,
    original_name: Optional[str] = None,
    content_type: Optional[str] = None,
    uploads_dir: Optional[Path] = None,
) -> StoredUpload:
    """
    Validate an upload and copy it into the uploads directory.

    Args:
        upload_path: File supplied by the applicant
        original_name: Name to record (default: upload_path.name)
        content_type: MIME type reported by the client
        uploads_dir: Destination (default: UPLOADS_PATH env)

    Returns:
        StoredUpload describing the stored copy

    Raises:
        UploadValidationError: If the upload is rejected
    """
    upload_path = Path(upload_path)
    validate_upload(upload_path, content_type)

    original_name = original_name or upload_path.name
    uploads_dir = Path(uploads_dir) if uploads_dir is not None else UPLOADS_PATH
    uploads_dir.mkdir(parents=True, exist_ok=True)

    stored_path = uploads_dir / generate_safe_filename(original_name)
    shutil.copyfile(upload_path, stored_path)
    data = stored_path.read_bytes()

    return StoredUpload(
        path=stored_path,
        original_name=original_name,
        size=len(data),
        checksum=file_checksum(data),
    )
