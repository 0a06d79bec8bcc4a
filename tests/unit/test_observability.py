"""
Name: Observability Unit Tests

Responsibilities:
  - Test JSON formatter with request context
  - Test ScanTimer helper
  - Test metrics helpers (endpoint normalization, relocation outcomes)

Notes:
  - Context vars are set directly and cleared after each test
"""

import json
import logging
import sys
import time

import pytest

pytestmark = pytest.mark.unit


class TestScanTimer:
    """R: Stopwatch used around each relocation."""

    def test_stop_returns_elapsed_seconds(self):
        from marginalia.timing import ScanTimer

        timer = ScanTimer().start()
        time.sleep(0.001)
        elapsed = timer.stop()

        assert elapsed > 0
        assert elapsed == timer.elapsed_seconds
        assert timer.elapsed_ms > 0
        assert timer.running is False

    def test_context_manager(self):
        from marginalia.timing import ScanTimer

        with ScanTimer() as t:
            assert t.running

        assert t.elapsed_ms >= 0
        assert not t.running

    def test_not_started_raises(self):
        from marginalia.timing import ScanTimer

        with pytest.raises(RuntimeError, match="not started"):
            ScanTimer().stop()

    def test_unstarted_timer_reports_zero(self):
        from marginalia.timing import ScanTimer

        assert ScanTimer().elapsed_seconds == 0.0
        assert ScanTimer().running is False


class TestJSONFormatter:
    """R: Structured log lines enriched from request context."""

    @pytest.fixture(autouse=True)
    def _clear_context(self):
        from marginalia.context import clear_context

        clear_context()
        yield
        clear_context()

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="marginalia",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="comments relocated",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_includes_request_context(self):
        from marginalia.context import request_id_var, user_id_var
        from marginalia.logger import JSONFormatter

        request_id_var.set("req-1")
        user_id_var.set("user-1")

        payload = json.loads(JSONFormatter().format(self._record()))

        assert payload["message"] == "comments relocated"
        assert payload["level"] == "INFO"
        assert payload["request_id"] == "req-1"
        assert payload["user_id"] == "user-1"

    def test_includes_extra_fields(self):
        from marginalia.logger import JSONFormatter

        payload = json.loads(JSONFormatter().format(self._record(unresolved=2)))

        assert payload["unresolved"] == 2

    def test_drops_sensitive_fields(self):
        from marginalia.logger import JSONFormatter

        record = self._record(document_text="full body", comment_text="secret note")
        payload = json.loads(JSONFormatter().format(record))

        assert "document_text" not in payload
        assert "comment_text" not in payload

    def test_includes_exception(self):
        from marginalia.logger import JSONFormatter

        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "boom"

    def test_context_dict_omits_empty_values(self):
        from marginalia.context import get_context_dict, http_path_var

        http_path_var.set("/v1/comments")

        assert get_context_dict() == {"path": "/v1/comments"}


class TestMetrics:
    def test_normalizes_ids_in_endpoint(self):
        from marginalia.metrics import _normalize_endpoint

        path = "/v1/comments/123e4567-e89b-12d3-a456-426614174000"

        assert _normalize_endpoint(path) == "/v1/comments/{id}"
        assert _normalize_endpoint("/v1/texts/42") == "/v1/texts/{id}"

    @pytest.mark.parametrize(
        "code,bucket",
        [(200, "2xx"), (404, "4xx"), (503, "5xx"), (301, "other")],
    )
    def test_status_bucket(self, code, bucket):
        from marginalia.metrics import _status_bucket

        assert _status_bucket(code) == bucket

    def test_records_relocation_outcome(self):
        from marginalia.metrics import get_metrics_response, record_relocation_metrics

        record_relocation_metrics("fuzzy", 0.01)
        body, content_type = get_metrics_response()

        assert b'marginalia_anchor_relocations_total{outcome="fuzzy"}' in body
        assert b"marginalia_window_scan_seconds" in body
        assert content_type.startswith("text/plain")
