# api/upload.py — image, thumbnail and bulk uploads (storage → Wix import)
from flask import Blueprint, request, current_app

from api.common import ok
from errors import ValidationError
from extensions import services
from paths import MEDIA_TYPES, thumbnail_url
from services.uploader import Upload, validate_upload

upload_bp = Blueprint("upload", __name__)


def _form():
    title = (request.form.get("title") or "").strip() or "untitled"
    media_type = (request.form.get("mediaType") or "").strip() or "gallery"
    if media_type not in MEDIA_TYPES:
        raise ValidationError(f"Invalid media type: {media_type}")
    folder_id = (request.form.get("folderId") or "").strip() or None
    return title, media_type, folder_id


def _file(max_bytes: int) -> Upload:
    fs = request.files.get("file")
    if not fs or fs.filename == "":
        raise ValidationError("No file provided")
    return validate_upload(Upload.from_file_storage(fs), max_bytes, services().settings.limits)


@upload_bp.post("")
def upload_image():
    svc = services()
    title, media_type, folder_id = _form()
    upload = _file(svc.settings.limits.max_image_bytes)
    folder_id = folder_id or svc.settings.wix.folder_override(media_type)
    current_app.logger.info("upload %s (%d bytes) for %s %r", upload.filename, upload.size, media_type, title)
    return ok(svc.uploader.upload_image(upload, title, media_type, folder_id))


@upload_bp.post("/thumbnail")
def upload_thumbnail():
    svc = services()
    title, media_type, folder_id = _form()
    upload = _file(svc.settings.limits.max_thumbnail_bytes)
    res = svc.uploader.upload_thumbnail(upload, title, media_type, folder_id)
    return ok({
        "id": res["id"],
        "url": res["url"],
        "filename": res["filename"],
        "path": res["path"],
        "thumbnail": thumbnail_url(res["url"], 300, 300),
    })


@upload_bp.post("/bulk")
def upload_bulk():
    svc = services()
    title, media_type, _ = _form()
    files = [f for f in request.files.getlist("files") if f and f.filename]
    if not files:
        raise ValidationError("No file provided")
    if len(files) > svc.settings.limits.max_bulk_files:
        raise ValidationError(f"Cannot upload more than {svc.settings.limits.max_bulk_files} files at once")
    limit = svc.settings.limits.max_image_bytes
    uploads = [validate_upload(Upload.from_file_storage(f), limit, svc.settings.limits) for f in files]
    return ok(svc.uploader.bulk_upload(uploads, title, media_type).to_json())
