# api/content.py — Gallery / News CRUD, proxied to the Wix Data API
from flask import Blueprint

from api.common import ok, json_object
from errors import ValidationError
from extensions import services


def _check_media_cap(data: dict, field: str, cap: int):
    media = data.get(field)
    if media is None:
        return
    if not isinstance(media, list):
        raise ValidationError(f"'{field}' must be a list")
    if len(media) > cap:
        raise ValidationError(f"A gallery can hold at most {cap} media items")


def content_blueprint(name: str, collection: str, media_field: str | None = None) -> Blueprint:
    bp = Blueprint(name, __name__)

    def _validate(data: dict) -> dict:
        if media_field:
            _check_media_cap(data, media_field, services().settings.limits.max_gallery_media)
        return data

    @bp.get("")
    def list_items():
        items = services().data.query(collection)
        return ok([it.to_json() for it in items])

    @bp.post("")
    def create_item():
        data = _validate(json_object())
        return ok(services().data.create(collection, data).to_json())

    @bp.get("/<item_id>")
    def get_item(item_id):
        return ok(services().data.get(collection, item_id).to_json())

    @bp.put("/<item_id>")
    def update_item(item_id):
        data = _validate(json_object())
        return ok(services().data.update(collection, item_id, data).to_json())

    @bp.delete("/<item_id>")
    def delete_item(item_id):
        services().data.delete(collection, item_id)
        return ok()

    return bp


gallery_bp = content_blueprint("gallery", "Gallery", media_field="media")
news_bp    = content_blueprint("news", "News")
