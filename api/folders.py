# api/folders.py — Wix Media Manager folders (list, recursive list, find-or-create)
from flask import Blueprint, request

from api.common import ok, json_object
from errors import ValidationError, NotFoundError
from extensions import services

folders_bp = Blueprint("folders", __name__)


@folders_bp.get("")
def list_folders():
    svc = services()
    root = svc.settings.wix.root_folder_id
    if (request.args.get("all") or "").lower() == "true":
        folders = svc.media.list_all_folders(root)
    else:
        parent = (request.args.get("parentFolderId") or "").strip() or root
        folders = svc.media.list_folders(parent)
    return ok([f.to_json() for f in folders])


@folders_bp.post("")
def create_folder():
    # same name under the same parent → existing folder is returned
    data = json_object()
    name = (data.get("displayName") or "").strip()
    if not name:
        raise ValidationError("Missing 'displayName'")
    svc = services()
    parent = (data.get("parentFolderId") or "").strip() or svc.settings.wix.root_folder_id
    folder_id = svc.resolver.find_or_create(name, parent)
    return ok({"id": folder_id, "displayName": name, "parentFolderId": parent})


@folders_bp.get("/<folder_id>")
def get_folder(folder_id):
    folder = services().media.get_folder(folder_id)
    if not folder:
        raise NotFoundError("Folder not found")
    return ok(folder.to_json())
