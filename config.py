# config.py — settings structs read from the environment (.env via python-dotenv)
from __future__ import annotations
import os
from dataclasses import dataclass, field

MB = 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif",
})


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw not in (None, "") else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    try:
        return float(raw) if raw not in (None, "") else default
    except ValueError:
        return default


@dataclass(frozen=True)
class WixSettings:
    api_key: str = ""
    site_id: str = ""
    account_id: str = ""
    data_base_url: str = "https://www.wixapis.com/wix-data/v2"
    media_base_url: str = "https://www.wixapis.com/site-media/v1"
    root_folder_id: str = "media-root"
    default_folder_id: str = "media-root"
    gallery_folder_id: str | None = None
    news_folder_id: str | None = None
    query_limit: int = 1000
    timeout: float = 30.0

    def folder_override(self, media_type: str) -> str | None:
        if media_type == "news":
            return self.news_folder_id
        if media_type == "gallery":
            return self.gallery_folder_id
        return None


@dataclass(frozen=True)
class StorageSettings:
    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""
    base_folder: str = ""
    timeout: int = 60


@dataclass(frozen=True)
class UploadLimits:
    max_image_bytes: int = 100 * MB
    max_thumbnail_bytes: int = 5 * MB
    allowed_mime_types: frozenset = ALLOWED_MIME_TYPES
    max_bulk_files: int = 100
    max_request_bytes: int = 1024 * MB
    max_gallery_media: int = 15


@dataclass(frozen=True)
class Settings:
    wix: WixSettings = field(default_factory=WixSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    limits: UploadLimits = field(default_factory=UploadLimits)
    secret_key: str = "supersecret"

    @classmethod
    def from_env(cls) -> "Settings":
        wix = WixSettings(
            api_key=os.getenv("WIX_API_KEY", ""),
            site_id=os.getenv("WIX_SITE_ID", ""),
            account_id=os.getenv("WIX_ACCOUNT_ID", ""),
            root_folder_id=os.getenv("WIX_ROOT_FOLDER_ID") or "media-root",
            default_folder_id=os.getenv("WIX_DEFAULT_FOLDER_ID") or "media-root",
            gallery_folder_id=os.getenv("WIX_GALLERY_FOLDER_ID") or None,
            news_folder_id=os.getenv("WIX_NEWS_FOLDER_ID") or None,
            timeout=_env_float("WIX_TIMEOUT", 30.0),
        )
        storage = StorageSettings(
            cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
            base_folder=(os.getenv("CLOUDINARY_FOLDER") or "").strip("/"),
            timeout=_env_int("STORAGE_TIMEOUT", 60),
        )
        limits = UploadLimits(
            max_image_bytes=_env_int("MAX_IMAGE_MB", 100) * MB,
            max_thumbnail_bytes=_env_int("MAX_THUMBNAIL_MB", 5) * MB,
            max_request_bytes=_env_int("MAX_REQUEST_MB", 1024) * MB,
        )
        return cls(wix=wix, storage=storage, limits=limits,
                   secret_key=os.getenv("SECRET_KEY", "supersecret"))
