"""
Upload Routes - files stored in GridFS buckets

POST   /upload-avatar        - Profile picture (replaces the previous one)
DELETE /upload-avatar        - Remove profile picture
POST   /upload-logo          - Company logo
DELETE /upload-logo          - Remove company logo
POST   /upload-resume        - Resume file, linked to the profile
POST   /upload-temp-resume   - Resume file for one-off use (profile untouched)
POST   /upload               - Generic file upload
GET    /files/{bucket}/{path} - Download a stored file
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy import func, update

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write
from utopia_hire.db.tables import profiles
from utopia_hire.schemas.schemas import UploadResponse
from utopia_hire.services.profile_service import get_profile
from utopia_hire.services.storage_service import FileStorage, get_file_storage
from utopia_hire.utils.file_upload import (
    AVATAR_TYPES, LOGO_TYPES, MAX_IMAGE_SIZE_MB, MAX_RESUME_SIZE_MB, RESUME_TYPES,
    check_resume_readable, file_suffix, read_upload, timestamp_ms
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

RESUME_TYPE_ERROR = "Only PDF, DOC, and DOCX files are allowed"


def _store(storage: FileStorage, bucket: str, path: str, content: bytes, content_type: str) -> str:
    try:
        return storage.upload(bucket, path, content, content_type)
    except Exception as e:
        logger.error("Upload of %s/%s failed: %s", bucket, path, e)
        raise HTTPException(status_code=500, detail="Failed to upload file")


def _update_profile(user_id: int, **values) -> None:
    execute_write(
        update(profiles)
        .where(profiles.c.user_id == user_id)
        .values(**values, updated_at=func.now())
    )


# ============================================================
# AVATAR
# ============================================================

@router.post("/upload-avatar", response_model=UploadResponse)
async def upload_avatar(
    avatar: Optional[UploadFile] = File(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    user_id = user["user_id"]
    content = await read_upload(
        avatar, AVATAR_TYPES, MAX_IMAGE_SIZE_MB,
        "Invalid file type. Only JPEG, PNG, and WebP are allowed"
    )

    profile = get_profile(user_id)
    old_path = storage.path_from_url("avatars", profile["profile_picture"]) if profile else None
    if old_path:
        storage.remove("avatars", [old_path])

    path = f"{user_id}-{timestamp_ms()}{file_suffix(avatar.filename)}"
    url = _store(storage, "avatars", path, content, avatar.content_type)
    _update_profile(user_id, profile_picture=url)

    return UploadResponse(url=url, path=path)


@router.delete("/upload-avatar")
async def delete_avatar(
    path: Optional[str] = Query(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    user_id = user["user_id"]
    if path:
        if not path.startswith(f"{user_id}-"):
            raise HTTPException(status_code=403, detail="Unauthorized")
        storage.remove("avatars", [path])

    _update_profile(user_id, profile_picture=None)
    return {"success": True}


# ============================================================
# COMPANY LOGO
# ============================================================

@router.post("/upload-logo", response_model=UploadResponse)
async def upload_logo(
    logo: Optional[UploadFile] = File(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    content = await read_upload(
        logo, LOGO_TYPES, MAX_IMAGE_SIZE_MB,
        "Invalid file type. Only JPEG, PNG, WebP, and SVG are allowed"
    )

    path = f"logos/{user['user_id']}_{timestamp_ms()}{file_suffix(logo.filename)}"
    url = _store(storage, "company_logos", path, content, logo.content_type)

    return UploadResponse(url=url, path=path, message="Logo uploaded successfully")


@router.delete("/upload-logo")
async def delete_logo(
    path: Optional[str] = Query(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    if not path:
        raise HTTPException(status_code=400, detail="No file path provided")
    if not path.startswith(f"logos/{user['user_id']}_"):
        raise HTTPException(status_code=403, detail="Unauthorized")

    storage.remove("company_logos", [path])
    return {"message": "Logo deleted successfully"}


# ============================================================
# RESUMES
# ============================================================

@router.post("/upload-resume")
async def upload_resume(
    file: Optional[UploadFile] = File(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    """Store the resume and point the profile at it (also ends onboarding)."""
    user_id = user["user_id"]
    content = await read_upload(file, RESUME_TYPES, MAX_RESUME_SIZE_MB, RESUME_TYPE_ERROR)
    check_resume_readable(content, file.content_type)

    path = f"resumes/{user_id}-{timestamp_ms()}{file_suffix(file.filename)}"
    url = _store(storage, "resumes", path, content, file.content_type)
    _update_profile(user_id, resume_url=url, is_resume_latex=False, first_login=False)

    return {"success": True, "url": url, "path": path}


@router.post("/upload-temp-resume")
async def upload_temp_resume(
    file: Optional[UploadFile] = File(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    content = await read_upload(file, RESUME_TYPES, MAX_RESUME_SIZE_MB, RESUME_TYPE_ERROR)
    check_resume_readable(content, file.content_type)

    path = f"temp/{user['user_id']}_{timestamp_ms()}{file_suffix(file.filename)}"
    url = _store(storage, "resumes", path, content, file.content_type)

    return {"success": True, "url": url, "path": path, "message": "Resume uploaded successfully"}


# ============================================================
# GENERIC FILES
# ============================================================

@router.post("/upload")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage)
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    content = await file.read()
    path = f"{timestamp_ms()}-{file.filename}"
    url = _store(storage, "uploads", path, content, file.content_type)

    return {"success": True, "path": path, "publicUrl": url}


@router.get("/files/{bucket}/{path:path}")
async def download_file(bucket: str, path: str, storage: FileStorage = Depends(get_file_storage)):
    stored = storage.open(bucket, path)
    if stored is None:
        raise HTTPException(status_code=404, detail="File not found")

    content_type = (stored.metadata or {}).get("content_type") or "application/octet-stream"
    return StreamingResponse(stored, media_type=content_type)
