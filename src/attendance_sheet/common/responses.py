from __future__ import annotations

from flask import jsonify, request


def json_error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def json_body() -> dict:
    """Request JSON as a dict; malformed or non-object bodies read as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
