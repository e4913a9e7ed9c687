"""Unit tests for JSON logging."""

import json
import logging
from uuid import UUID

from fefelina_access.infrastructure.observability import JSONFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fefelina_access.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Session %s",
        args=("login",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_message_and_extra_fields() -> None:
    payload = json.loads(JSONFormatter().format(_record(epoch=3, identity="andre")))

    assert payload["message"] == "Session login"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "fefelina_access.test"
    assert payload["epoch"] == 3
    assert payload["identity"] == "andre"
    assert "msg" not in payload


def test_non_serializable_extra_uses_str() -> None:
    client_id = UUID("00000000-0000-0000-0000-00000000000a")
    payload = json.loads(JSONFormatter().format(_record(client_id=client_id)))

    assert payload["client_id"] == str(client_id)


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("debug", "json")
        configure_logging("warning", "text")

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
