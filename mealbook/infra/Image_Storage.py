"""
Recipe image validation and storage.

validate_image() enforces the upload limits before any storage call.
Two backends share the awaitable upload(owner_id, data, filename) -> url
contract; neither blocks the event loop:

  * LocalImageStorage writes under static/pictures and returns a /static URL
  * HttpImageStorage pushes the bytes to an object-storage HTTP endpoint
    and returns the bucket's public URL for the stored object
"""
import logging
import time
from pathlib import Path
from typing import Optional, Union

import httpx
from starlette.concurrency import run_in_threadpool

from mealbook.infra.paths import PICTURES_DIR
from mealbook.utilities.constants import ALLOWED_IMAGE_TYPES, MAX_IMAGE_SIZE

logger = logging.getLogger(__name__)


class ImageValidationError(Exception):
    """Raised when an image fails validation."""
    pass


class ImageUploadError(Exception):
    """Raised when the storage backend rejects or fails an upload."""
    pass


def validate_image(content_type: Optional[str], size: int) -> str:
    """Check size and MIME type; return the file extension to store under.

    Raises:
        ImageValidationError: If the image is too large or of a disallowed type
    """
    if size > MAX_IMAGE_SIZE:
        raise ImageValidationError("Image size must be less than 5MB")
    ext = ALLOWED_IMAGE_TYPES.get((content_type or "").lower())
    if ext is None:
        raise ImageValidationError("Only JPG, PNG, and WEBP images are allowed")
    return ext


def _object_key(owner_id: str, filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "jpg"
    return f"{owner_id}/{int(time.time() * 1000)}.{ext}"


class LocalImageStorage:
    def __init__(self, root: Union[str, Path] = PICTURES_DIR, url_prefix: str = "/static/pictures"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _write(self, file_path: Path, data: bytes):
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "wb") as f:
            f.write(data)

    async def upload(self, owner_id: str, data: bytes, filename: str) -> str:
        key = _object_key(owner_id, filename)
        if ".." in key:
            raise ImageUploadError("Invalid storage key")
        file_path = self.root / key
        try:
            await run_in_threadpool(self._write, file_path, data)
        except OSError as e:
            raise ImageUploadError(str(e)) from e
        logger.info("Saved %s bytes to %s", len(data), file_path)
        return f"{self.url_prefix}/{key}"


class HttpImageStorage:
    """Object storage reachable over HTTP (``POST {base}/object/{bucket}/{key}``)."""

    def __init__(self, base_url: str, bucket: str, token: str = "", timeout: float = 10.0,
                 client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.token = token
        self.timeout = timeout
        self._client = client

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{key}"

    async def upload(self, owner_id: str, data: bytes, filename: str) -> str:
        key = _object_key(owner_id, filename)
        ext = key.rsplit(".", 1)[-1]
        content_type = "image/jpeg" if ext == "jpg" else f"image/{ext}"
        headers = {"Content-Type": content_type}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.base_url}/object/{self.bucket}/{key}"
        try:
            if self._client is not None:
                response = await self._client.post(url, content=data, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, content=data, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Image upload to %s failed: %s", url, e)
            raise ImageUploadError(str(e)) from e
        if response.status_code >= 400:
            logger.error("Image upload rejected (%s): %s", response.status_code, response.text)
            raise ImageUploadError(response.text or f"HTTP {response.status_code}")
        return self.public_url(key)


def build_image_storage(base_url: str = "", bucket: str = "recipe-images", token: str = "",
                        timeout: float = 10.0):
    if base_url:
        return HttpImageStorage(base_url, bucket, token=token, timeout=timeout)
    return LocalImageStorage()
