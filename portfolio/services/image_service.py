import hashlib
import logging
import time
from dataclasses import dataclass

import httpx

from portfolio.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"


class ImageUploadError(Exception):
    pass


@dataclass(frozen=True)
class UploadedImage:
    secure_url: str
    public_id: str


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted ``k=v`` pairs joined by '&', followed by the secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class ImageUploadService:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    async def upload(self, filename: str, data: bytes, content_type: str | None = None) -> UploadedImage:
        s = self.settings
        if not (s.cloudinary_cloud_name and s.cloudinary_api_key and s.cloudinary_api_secret):
            raise ImageUploadError("Cloudinary credentials are not configured")

        params = {"timestamp": str(int(time.time()))}
        form = {
            **params,
            "api_key": s.cloudinary_api_key,
            "signature": sign_params(params, s.cloudinary_api_secret),
        }
        files = {"file": (filename, data, content_type or "application/octet-stream")}

        async with httpx.AsyncClient(base_url=CLOUDINARY_API_URL, timeout=60, transport=self._transport) as client:
            try:
                response = await client.post(f"/{s.cloudinary_cloud_name}/image/upload", data=form, files=files)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"Cloudinary upload rejected: {e.response.status_code} - {e.response.text}")
                raise ImageUploadError(f"Cloudinary returned {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error(f"Cloudinary upload failed: {type(e).__name__}: {e}")
                raise ImageUploadError(f"Cloudinary unreachable: {e}") from e

        body = response.json()
        try:
            return UploadedImage(secure_url=body["secure_url"], public_id=body["public_id"])
        except KeyError as e:
            raise ImageUploadError(f"Cloudinary response missing {e}") from e


def get_image_uploader() -> ImageUploadService:
    return ImageUploadService()
