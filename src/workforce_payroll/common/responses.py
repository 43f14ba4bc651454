from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, Decimals, enums and dates into JSON-friendly values.

    Decimals become strings so money keeps its two decimal places.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data: Any = None, *, message: str | None = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def fail(message: str, status: int, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    body.update({k: to_jsonable(v) for k, v in extra.items() if v is not None})
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def api_errors(view):
    """Map domain exceptions raised by a JSON view to HTTP responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400, field=e.field)
        except NotFoundError as e:
            return fail(str(e), 404)
        except ConflictError as e:
            return fail(str(e), 409)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return fail("Internal server error", 500)

    return wrapper
