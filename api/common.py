# api/common.py — response envelope + request helpers shared by the blueprints
from flask import jsonify, request

from errors import ValidationError


def ok(data=None, status: int = 200):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, status: int = 500):
    return jsonify({"success": False, "error": message}), status


def json_object() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
