import logging
from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile

from portfolio.api.deps import get_content_store, get_current_admin
from portfolio.api.responses import failure
from portfolio.core.content_logger import log_content
from portfolio.schemas.auth import AdminOut
from portfolio.schemas.content import ImageUploadResponse, ResumeUploadResponse
from portfolio.services.blob_service import BlobStorageService, BlobUploadError, get_blob_storage, resume_pathname
from portfolio.services.content_store import ContentMergeError, ContentStore, ContentStoreError
from portfolio.services.image_service import ImageUploadError, ImageUploadService, get_image_uploader

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

RESUME_SECTION_KEY = "connect"
RESUME_URL_FIELD = "resumeUrl"


@router.post("/upload-resume", response_model=ResumeUploadResponse)
async def upload_resume(
    resume: UploadFile | None = File(None),
    store: ContentStore = Depends(get_content_store),
    blobs: BlobStorageService = Depends(get_blob_storage),
    admin: AdminOut = Depends(get_current_admin),
) -> Any:
    """Upload a resume and attach its public URL to the ``connect`` section."""
    if resume is None:
        return failure(400, "No file uploaded.")

    data = await resume.read()
    try:
        url = await blobs.put(resume_pathname(), data, content_type=resume.content_type)
        await store.upsert_merged(RESUME_SECTION_KEY, {RESUME_URL_FIELD: url})
    except ContentMergeError as exc:
        return failure(409, "Failed to upload resume.", exc)
    except (BlobUploadError, ContentStoreError) as exc:
        logger.error(f"Error uploading resume: {exc}")
        return failure(500, "Failed to upload resume.", exc)

    log_content("resume_upload", "Resume attached", key=RESUME_SECTION_KEY, url=url, admin=admin.email)
    return ResumeUploadResponse(message="Upload successful!", url=url)


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile | None = File(None),
    images: ImageUploadService = Depends(get_image_uploader),
    admin: AdminOut = Depends(get_current_admin),
) -> Any:
    """Upload an image to the CDN. The caller stores the returned URL in whichever section uses it."""
    if file is None:
        return failure(400, "No file uploaded")

    data = await file.read()
    try:
        uploaded = await images.upload(file.filename or "upload", data, content_type=file.content_type)
    except ImageUploadError as exc:
        logger.error(f"Image upload error: {exc}")
        return failure(500, "Something went wrong", exc)

    log_content("image_upload", "Image uploaded", url=uploaded.secure_url, public_id=uploaded.public_id)
    return ImageUploadResponse(
        message="Image uploaded successfully",
        imageUrl=uploaded.secure_url,
        publicId=uploaded.public_id,
    )
