# services/uploader.py — local file → storage → Wix import → response
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from config import UploadLimits
from errors import AdminError, ValidationError, MediaImportError
from models import ImportRequest
from paths import derive_folder_path, path_segments, unique_filename

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Upload:
    filename: str
    mime_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_file_storage(cls, fs) -> "Upload":
        return cls(filename=fs.filename or "", mime_type=fs.mimetype or "", data=fs.read())


@dataclass
class BulkUploadResult:
    items: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"items": self.items, "errors": self.errors}


def validate_upload(upload: Upload | None, max_bytes: int, limits: UploadLimits) -> Upload:
    if upload is None or not upload.filename:
        raise ValidationError("No file provided")
    if upload.mime_type not in limits.allowed_mime_types:
        raise ValidationError("Invalid file type. Only images are allowed.")
    if upload.size > max_bytes:
        raise ValidationError(f"File size too large. Maximum {max_bytes // (1024 * 1024)}MB allowed.")
    return upload


class MediaUploader:
    def __init__(self, storage, media, resolver, limits: UploadLimits | None = None,
                 max_workers: int = 8):
        self.storage = storage
        self.media = media
        self.resolver = resolver
        self.limits = limits or UploadLimits()
        self.max_workers = max_workers

    def _stage(self, upload: Upload, folder_path: str, media_type: str) -> tuple[str, str]:
        filename = unique_filename(upload.filename)
        key = "/".join(path_segments(folder_path) + [filename])
        log.info("uploading %s to storage as %s/%s", upload.filename, media_type, key)
        url = self.storage.upload(media_type, key, upload.data, upload.mime_type)
        return filename, url

    def _import_one(self, upload: Upload, title: str, media_type: str,
                    folder_id: str | None, display_name: str):
        folder_path = derive_folder_path(title, media_type)
        folder_id = folder_id or self.resolver.resolve_or_default(folder_path)
        filename, url = self._stage(upload, folder_path, media_type)
        asset = self.media.import_file(ImportRequest(
            url=url,
            display_name=display_name,
            parent_folder_id=folder_id,
            mime_type=upload.mime_type,
        ))
        log.info("imported %s as media %s into folder %s", filename, asset.id, folder_id)
        return asset, filename, folder_path

    def upload_image(self, upload: Upload, title: str, media_type: str = "gallery",
                     folder_id: str | None = None) -> dict:
        asset, filename, _ = self._import_one(upload, title, media_type, folder_id, title)
        return {"src": asset.url, "title": filename, "alt": filename, "type": "image"}

    def upload_thumbnail(self, upload: Upload, title: str, media_type: str = "gallery",
                         folder_id: str | None = None) -> dict:
        asset, filename, folder_path = self._import_one(
            upload, title, media_type, folder_id, f"{title}-thumbnail")
        return asset.to_json(filename=filename, path=folder_path)

    def bulk_upload(self, uploads: list[Upload], title: str,
                    media_type: str = "gallery") -> BulkUploadResult:
        if not uploads:
            return BulkUploadResult()
        if len(uploads) > self.limits.max_bulk_files:
            raise ValidationError(
                f"Cannot upload more than {self.limits.max_bulk_files} files at once")

        folder_path = derive_folder_path(title, media_type)
        folder_id = self.resolver.resolve_or_default(folder_path)

        # storage writes are independent; completion order does not matter
        workers = max(1, min(self.max_workers, len(uploads)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._stage, u, folder_path, media_type) for u in uploads]

        failed: list[tuple[int, str]] = []
        staged: list[tuple[int, ImportRequest]] = []
        for i, (upload, fut) in enumerate(zip(uploads, futures)):
            try:
                _, url = fut.result()
            except AdminError as e:
                failed.append((i, f"Failed to upload {upload.filename}: {e.message}"))
                continue
            staged.append((i, ImportRequest(
                url=url,
                display_name=upload.filename,
                parent_folder_id=folder_id,
                mime_type=upload.mime_type,
            )))

        result = BulkUploadResult()
        if staged:
            outcomes = self.media.bulk_import([req for _, req in staged])
            for (i, _), outcome in zip(staged, outcomes):
                if outcome.ok:
                    result.items.append(outcome.asset.to_json(
                        filename=uploads[i].filename, path=folder_path))
                else:
                    failed.append((i, f"Failed to upload {uploads[i].filename}: {outcome.error}"))

        result.errors = [msg for _, msg in sorted(failed)]
        if not result.items:
            raise MediaImportError("All file uploads failed:\n" + "\n".join(result.errors))
        if result.errors:
            log.warning("some files failed to upload:\n%s", "\n".join(result.errors))
        return result
