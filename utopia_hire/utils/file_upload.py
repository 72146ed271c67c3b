"""
File Upload Utility - Validate uploaded images and resumes.

Supported formats:
- Images: JPEG, PNG, WebP (+ SVG for company logos), max 2MB
- Resumes: PDF (checked with PyPDF2), DOCX (checked with python-docx), DOC, max 5MB
"""

import io
import time
from typing import Set

from docx import Document
from fastapi import HTTPException, UploadFile
from PyPDF2 import PdfReader

MAX_IMAGE_SIZE_MB = 2
MAX_RESUME_SIZE_MB = 5

PDF_TYPE = "application/pdf"
DOC_TYPE = "application/msword"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

AVATAR_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
LOGO_TYPES = AVATAR_TYPES | {"image/svg+xml"}
RESUME_TYPES = {PDF_TYPE, DOC_TYPE, DOCX_TYPE}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension (without the dot)."""
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def file_suffix(filename: str) -> str:
    """Extension with its leading dot, or an empty string when there is none."""
    extension = get_file_extension(filename)
    return f".{extension}" if extension else ""


def timestamp_ms() -> int:
    return int(time.time() * 1000)


async def read_upload(
    file: UploadFile,
    allowed_types: Set[str],
    max_size_mb: int,
    type_error: str,
) -> bytes:
    """
    Read an uploaded file after checking its content type and size.

    Raises:
        HTTPException(400) on a missing file, wrong type or oversized content
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if file.content_type not in allowed_types:
        raise HTTPException(status_code=400, detail=type_error)

    content = await file.read()
    if len(content) > max_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File size too large. Maximum size is {max_size_mb}MB"
        )
    return content


def check_resume_readable(content: bytes, content_type: str) -> None:
    """Open PDF/DOCX resumes to reject corrupt files. DOC files are stored as-is."""
    try:
        if content_type == PDF_TYPE:
            reader = PdfReader(io.BytesIO(content))
            len(reader.pages)
        elif content_type == DOCX_TYPE:
            Document(io.BytesIO(content))
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail="Could not read resume file. File may be empty or corrupted."
        ) from e
