"""Tests for the JSON text codec."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from datacontracts import codec
from datacontracts.core.errors import DecodeError, EncodeError, ErrorCategory


class TestLoads:
    def test_parses_tree(self):
        assert codec.loads('{"takes": [1, 2], "ok": true}') == {"takes": [1, 2], "ok": True}

    def test_accepts_bytes(self):
        assert codec.loads(b'{"a": null}') == {"a": None}

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            codec.loads('{"a": ')
        error = exc_info.value
        assert error.category == ErrorCategory.PARSE
        assert error.message.startswith("Invalid JSON")
        assert error.context.metadata["line"] == 1
        assert "column" in error.context.metadata
        assert error.cause is not None


class TestDumps:
    def test_compact_by_default(self):
        assert codec.dumps({"version": "4.0", "takes": 100}) == '{"version":"4.0","takes":100}'

    def test_indent(self):
        assert codec.dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_indent_from_settings(self, monkeypatch):
        monkeypatch.setenv("DATACONTRACTS_JSON_INDENT", "2")
        assert codec.dumps({"a": 1}) == '{\n  "a": 1\n}'

    def test_non_ascii_kept(self):
        assert codec.dumps({"name": "café"}) == '{"name":"café"}'

    def test_ensure_ascii(self):
        assert codec.dumps({"name": "café"}, ensure_ascii=True) == '{"name":"caf\\u00e9"}'

    def test_timestamps_as_iso(self):
        tree = {
            "at": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            "on": date(2020, 1, 2),
        }
        assert codec.dumps(tree) == '{"at":"2020-01-02T03:04:05+00:00","on":"2020-01-02"}'

    def test_decimal_as_number(self):
        assert codec.dumps({"price": Decimal("1.5")}) == '{"price":1.5}'

    def test_unencodable_value(self):
        with pytest.raises(EncodeError) as exc_info:
            codec.dumps({"x": object()})
        assert exc_info.value.category == ErrorCategory.PARSE

    def test_nan_rejected(self):
        with pytest.raises(EncodeError):
            codec.dumps({"x": float("nan")})
