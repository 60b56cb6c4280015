"""Request and response plumbing shared by the HTTP controllers."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

_NUMBER_TYPES = (int, float)


class ValidationError(Exception):
    """A request body is well formed but lacks required values."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = tuple(fields)
        super().__init__("missing required fields: " + ", ".join(self.fields))


@dataclass
class Request:
    """An incoming HTTP request as the controllers see it."""

    method: str = "GET"
    path: str = "/"
    body: str | bytes | None = None
    query: dict[str, str] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class Response:
    """A status code and the JSON envelope sent back to the client."""

    status: int
    payload: dict[str, Any]

    def json(self) -> str:
        """Serialise the payload, including dataclasses and timestamps."""
        return json.dumps(self.payload, default=_encode)


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat()
    if moment.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, datetime):
        return _rfc3339(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"cannot serialise {type(value).__name__}")


def success_response(data: Any, message: str, status: int) -> Response:
    """Build a success envelope; ``data`` is left out when it is None."""
    payload: dict[str, Any] = {"status": "Success", "message": message}
    if data is not None:
        payload["data"] = data
    return Response(int(status), payload)


def error_response(status: int, message: str, error_code: int) -> Response:
    """Build a failure envelope carrying an application error code."""
    return Response(
        int(status), {"status": "Fail", "message": message, "error_code": error_code}
    )


def _int_param(raw: str | None, default: int, minimum: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def get_pagination_params(request: Request) -> tuple[int, int]:
    """Read ``limit`` and ``offset`` from the query string, with defaults."""
    limit = _int_param(request.query.get("limit"), DEFAULT_LIMIT, 1)
    offset = _int_param(request.query.get("offset"), DEFAULT_OFFSET, 0)
    return limit, offset


def get_filter_param(request: Request, key: str) -> str:
    """Return a query-string value, or an empty string when absent."""
    return request.query.get(key, "")


def _zero(kind: type) -> Any:
    return kind()


def _coerce(name: str, value: Any, kind: type) -> Any:
    if value is None:
        return _zero(kind)
    if kind is str:
        if not isinstance(value, str):
            raise ValueError(f"field {name!r}: expected a string")
        return value
    if kind is float:
        if isinstance(value, bool) or not isinstance(value, _NUMBER_TYPES):
            raise ValueError(f"field {name!r}: expected a number")
        return float(value)
    raise TypeError(f"unsupported field type {kind.__name__}")


def decode_body(request: Request, fields: Mapping[str, type]) -> dict[str, Any]:
    """Decode a JSON object body into the given required fields.

    Raises ValueError when the body is not a JSON object of the right
    shape, and ValidationError when a required field is empty or zero.
    """
    raw = request.body
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not raw or not raw.strip():
        raise ValueError("empty request body")
    document = json.loads(raw)
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError("request body must be a JSON object")
    values = {
        name: _coerce(name, document.get(name), kind) for name, kind in fields.items()
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValidationError(missing)
    return values


def apply_pagination(items: Iterable[Any], limit: int, offset: int) -> list[Any]:
    """Return the window of ``items`` starting at ``offset``, at most ``limit`` long."""
    sequence = list(items)
    start = max(offset, 0)
    if start >= len(sequence):
        return []
    if limit <= 0:
        return sequence[start:]
    return sequence[start : start + limit]