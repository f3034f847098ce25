import json
import logging
import sys

from mimetype_api.core.logging import JsonLogFormatter, redact_url, reset_request_id, set_request_id


def _record(msg: str = "fetch.blocked", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("fetch", logging.WARNING, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_fetch_event_fields_come_first_in_fixed_order() -> None:
    token = set_request_id("req-42")
    try:
        line = JsonLogFormatter().format(
            _record(
                address="10.0.0.1",
                duration_ms=12,
                url="http://internal.example/",
                kind="BlockedIP",
                component="fetch",
            )
        )
    finally:
        reset_request_id(token)

    payload = json.loads(line)
    assert list(payload) == [
        "ts",
        "level",
        "msg",
        "component",
        "request_id",
        "kind",
        "url",
        "duration_ms",
        "address",
    ]
    assert payload["msg"] == "fetch.blocked"
    assert payload["request_id"] == "req-42"
    assert payload["ts"].endswith("Z")


def test_url_fields_drop_query_fragment_and_credentials() -> None:
    payload = json.loads(
        JsonLogFormatter().format(
            _record(
                "fetch.rejected",
                url="https://user:pw@example.com/file.png?sig=abc123#frag",
                location="https://cdn.example/next?token=xyz",
            )
        )
    )

    assert payload["url"] == "https://example.com/file.png?redacted"
    assert payload["location"] == "https://cdn.example/next?redacted"
    assert "abc123" not in json.dumps(payload)


def test_redact_url_keeps_plain_urls_and_tolerates_garbage() -> None:
    assert redact_url("https://example.com/a/b") == "https://example.com/a/b"
    assert redact_url("http://[::1") == "[unparsable]"


def test_component_defaults_to_logger_name_and_exceptions_are_summarized() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("api.request", logging.ERROR, __file__, 1, "request.error", None, None)
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonLogFormatter().format(record))

    assert payload["component"] == "api.request"
    assert payload["error_type"] == "RuntimeError"
    assert payload["error"] == "boom"
