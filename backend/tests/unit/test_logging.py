import json
import logging

from referencedata.utils.logging import JsonFormatter, RequestIdFilter, request_id_var


def _record(message: str = "ftap_search total=%s", *args) -> logging.LogRecord:
    return logging.LogRecord("referencedata.test", logging.INFO, __file__, 1, message, args or (15,), None)


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.request_id = "req-1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "ftap_search total=15"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "referencedata.test"
    assert payload["request_id"] == "req-1"


def test_request_id_filter_uses_context():
    token = request_id_var.set("abc-123")
    try:
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "abc-123"
    finally:
        request_id_var.reset(token)

    record = _record()
    RequestIdFilter().filter(record)
    assert not hasattr(record, "request_id")
