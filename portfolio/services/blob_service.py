import logging
import uuid

import httpx

from portfolio.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

BLOB_API_VERSION = "7"
RESUME_PREFIX = "resumes"


class BlobUploadError(Exception):
    pass


def resume_pathname() -> str:
    """Unique object name for an uploaded resume."""
    return f"{RESUME_PREFIX}/{uuid.uuid4()}.pdf"


class BlobStorageService:
    """Uploads binaries to the blob store and returns their public URL."""

    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    async def put(self, pathname: str, data: bytes, content_type: str | None = None) -> str:
        if not self.settings.blob_read_write_token:
            raise BlobUploadError("BLOB_READ_WRITE_TOKEN is not configured")
        headers = {
            "Authorization": f"Bearer {self.settings.blob_read_write_token}",
            "x-api-version": BLOB_API_VERSION,
            "x-add-random-suffix": "0",
        }
        if content_type:
            headers["x-content-type"] = content_type

        logger.info("Blob upload start: pathname=%s bytes=%s", pathname, len(data))
        async with httpx.AsyncClient(
            base_url=self.settings.blob_api_url, timeout=60, transport=self._transport
        ) as client:
            try:
                response = await client.put(f"/{pathname}", content=data, headers=headers)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"Blob upload rejected: {e.response.status_code} - {e.response.text}")
                raise BlobUploadError(f"Blob store returned {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error(f"Blob upload failed: {type(e).__name__}: {e}")
                raise BlobUploadError(f"Blob store unreachable: {e}") from e

        url = response.json().get("url")
        if not url:
            raise BlobUploadError("Blob store response did not include a url")
        logger.info("Blob upload complete: pathname=%s url=%s", pathname, url)
        return url


def get_blob_storage() -> BlobStorageService:
    return BlobStorageService()
