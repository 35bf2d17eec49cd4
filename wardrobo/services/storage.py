"""Image storage backends for uploaded garment photos."""
from __future__ import annotations

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = (3, 60)
DEFAULT_UPLOAD_DIR = "public/uploads"
UPLOAD_URL_PREFIX = "/uploads"
BLOB_API_URL = "https://blob.vercel-storage.com"
BLOB_KEY_PREFIX = "wardrobo"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


class StorageError(Exception):
    """Raised when an uploaded file cannot be persisted."""


def safe_filename(name: Optional[str]) -> str:
    return _UNSAFE_CHARS.sub("_", name or "upload")


def timestamped_filename(name: Optional[str]) -> str:
    return f"{int(time.time() * 1000)}-{safe_filename(name)}"


class BaseImageStorage:
    def save(self, filename: Optional[str], data: bytes, content_type: Optional[str]) -> str:
        """Persist ``data`` and return the public URL."""
        raise NotImplementedError


class LocalImageStorage(BaseImageStorage):
    """Writes files under a directory served at ``/uploads``."""

    def __init__(self, upload_dir: str | os.PathLike = DEFAULT_UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX) -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename: Optional[str], data: bytes, content_type: Optional[str]) -> str:
        stored_name = timestamped_filename(filename)
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            (self.upload_dir / stored_name).write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Could not write {stored_name}: {exc}") from exc
        logger.info("Stored upload locally as %s (%d bytes)", stored_name, len(data))
        return f"{self.url_prefix}/{stored_name}"


class BlobImageStorage(BaseImageStorage):
    """Uploads files to Vercel Blob with public access."""

    def __init__(self, token: str, base_url: str = BLOB_API_URL, key_prefix: str = BLOB_KEY_PREFIX) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.key_prefix = key_prefix

    def save(self, filename: Optional[str], data: bytes, content_type: Optional[str]) -> str:
        key = f"{self.key_prefix}/{timestamped_filename(filename)}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "x-api-version": "7",
            "x-content-type": content_type or "application/octet-stream",
            "x-add-random-suffix": "0",
        }
        try:
            response = requests.put(f"{self.base_url}/{key}", data=data, headers=headers, timeout=_DEFAULT_TIMEOUT)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise StorageError(f"Blob upload failed for {key}: {exc}") from exc
        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url:
            raise StorageError("Unexpected blob storage response structure")
        logger.info("Stored upload in blob storage as %s", key)
        return url


def storage_from_env() -> BaseImageStorage:
    token = os.getenv("BLOB_READ_WRITE_TOKEN")
    if token:
        return BlobImageStorage(token, base_url=os.getenv("BLOB_API_URL", BLOB_API_URL))
    return LocalImageStorage(os.getenv("UPLOAD_DIR", DEFAULT_UPLOAD_DIR))


_image_storage: Optional[BaseImageStorage] = None


def get_image_storage() -> BaseImageStorage:
    global _image_storage
    if _image_storage is None:
        _image_storage = storage_from_env()
    return _image_storage


def reset_image_storage_for_tests() -> None:
    global _image_storage
    _image_storage = None
