# services/storage.py — public staging storage for raw uploads (Cloudinary)
from __future__ import annotations
import io
import logging
import posixpath

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from config import StorageSettings
from errors import StorageUploadError

log = logging.getLogger(__name__)


class ObjectStorage:
    """
    Stores bytes under `[base_folder/]bucket/path` and hands back a public URL.
    Writes never overwrite: an existing key is reported as a failed upload.
    Credentials go with every call instead of the global cloudinary.config().
    """

    def __init__(self, settings: StorageSettings, uploader=None):
        self.settings = settings
        self.uploader = uploader or cloudinary.uploader

    def _key(self, bucket: str, path: str) -> str:
        stem = posixpath.splitext(path.strip("/"))[0]
        parts = [p for p in (self.settings.base_folder, bucket, stem) if p]
        return "/".join(parts)

    def upload(self, bucket: str, path: str, data: bytes, mime_type: str | None = None) -> str:
        key = self._key(bucket, path)
        try:
            res = self.uploader.upload(
                io.BytesIO(data),
                public_id=key,
                resource_type="image",
                overwrite=False,
                unique_filename=False,
                cloud_name=self.settings.cloud_name,
                api_key=self.settings.api_key,
                api_secret=self.settings.api_secret,
                timeout=self.settings.timeout,
            )
        except CloudinaryError as e:
            raise StorageUploadError(f"Storage upload failed: {e}") from e
        if res.get("existing"):
            raise StorageUploadError(f"Storage upload failed: {bucket}/{path} already exists")
        url = res.get("secure_url") or res.get("url")
        if not url:
            raise StorageUploadError(f"Storage upload failed: no public URL for {bucket}/{path}")
        log.info("stored %s (%s, %d bytes)", key, mime_type or "?", len(data))
        return url
