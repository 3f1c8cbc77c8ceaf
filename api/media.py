# api/media.py — imported Wix media files (list, details, delete)
from flask import Blueprint, request

from api.common import ok, json_object
from errors import ValidationError, NotFoundError
from extensions import services

media_bp = Blueprint("media", __name__)


# ─── LIST ────────────────────────────────────────────────────────────────────
@media_bp.get("")
def list_media():
    parent = (request.args.get("parentFolderId") or "").strip() or None
    return ok([m.to_json() for m in services().media.list_files(parent)])


@media_bp.get("/<file_id>")
def get_media(file_id):
    asset = services().media.get_file(file_id)
    if not asset:
        raise NotFoundError("Media not found")
    return ok(asset.to_json())


# ─── DELETE ──────────────────────────────────────────────────────────────────
@media_bp.delete("/bulk")
def bulk_delete():
    ids = json_object().get("ids") or []
    if not isinstance(ids, list) or not ids:
        raise ValidationError("No ids provided")
    media = services().media
    deleted = [fid for fid in ids if media.delete_file(str(fid))]
    return ok({"deleted": deleted, "missing": [fid for fid in ids if fid not in deleted]})


@media_bp.delete("/<file_id>")
def delete_media(file_id):
    if not services().media.delete_file(file_id):
        raise NotFoundError("Media not found")
    return ok({"deleted": file_id})
