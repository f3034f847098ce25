"""One-line JSON logs for request handling and the fetch pipeline.

Fetch events (``fetch.blocked``, ``fetch.rejected``, ``fetch.complete``) and
request events share one record shape: ``ts``, ``level``, ``msg``, then the
leading fields in a fixed order, then any remaining extras sorted by name.
URLs are logged without query string, fragment or credentials.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from mimetype_api.core.settings import get_settings

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

LEADING_FIELDS = ("component", "request_id", "kind", "url", "duration_ms")
URL_FIELDS = frozenset({"url", "location"})
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def set_request_id(request_id: str | None) -> Token[str | None]:
    return _request_id_var.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id_var.reset(token)


def get_request_id() -> str | None:
    return _request_id_var.get()


def redact_url(value: str) -> str:
    try:
        parts = urlsplit(value)
    except ValueError:
        return "[unparsable]"
    netloc = parts.netloc.rpartition("@")[2]
    query = "redacted" if parts.query else ""
    return urlunsplit((parts.scheme, netloc, parts.path, query, ""))


def _field(key: str, value: Any) -> Any:
    if key in URL_FIELDS and isinstance(value, str):
        return redact_url(value)
    return value


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        extras.setdefault("component", record.name)
        request_id = extras.get("request_id") or get_request_id()
        if request_id:
            extras["request_id"] = request_id

        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        for key in LEADING_FIELDS:
            if key in extras:
                payload[key] = _field(key, extras.pop(key))
        for key in sorted(extras):
            payload[key] = _field(key, extras[key])

        if record.exc_info and record.exc_info[1] is not None:
            payload["error_type"] = type(record.exc_info[1]).__name__
            payload["error"] = str(record.exc_info[1])[:500]

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=True, default=str)


def configure_logging() -> None:
    root = logging.getLogger()
    if any(isinstance(handler.formatter, JsonLogFormatter) for handler in root.handlers):
        return

    level_name = get_settings().LOG_LEVEL.strip().upper() or "INFO"
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
