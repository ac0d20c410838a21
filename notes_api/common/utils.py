from datetime import datetime, timezone
from flask import jsonify


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def message(text, status=200, **extra):
    return jsonify({"message": text, **extra}), status
