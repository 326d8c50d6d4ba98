"""Tests for datacontracts.core.errors module."""

import json

import pytest

from datacontracts.core.errors import (
    ContractError,
    ContractNotFoundError,
    DecodeError,
    EncodeError,
    ErrorCategory,
    ErrorContext,
    InvalidValueError,
)


class TestErrorCategory:
    """Test ErrorCategory enum."""

    def test_all_categories_defined(self):
        """Verify all categories are available."""
        categories = [
            ErrorCategory.VALIDATION,
            ErrorCategory.PARSE,
            ErrorCategory.CONFIG,
            ErrorCategory.INTERNAL,
        ]
        assert len(categories) == len(ErrorCategory)

    def test_category_is_string(self):
        assert ErrorCategory.PARSE == "PARSE"


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.path is None
        assert ctx.record_type is None
        assert ctx.metadata == {}

    def test_to_dict_includes_set_fields(self):
        """to_dict includes only non-None fields, with metadata flattened."""
        ctx = ErrorContext(path="a.b", metadata={"line": 3})
        d = ctx.to_dict()
        assert d == {"path": "a.b", "line": 3}
        assert "record_type" not in d


class TestContractError:
    """Test base ContractError."""

    def test_default_category_is_internal(self):
        error = ContractError("Something went wrong")
        assert error.category == ErrorCategory.INTERNAL
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_explicit_category(self):
        error = ContractError("bad", category=ErrorCategory.CONFIG)
        assert error.category == ErrorCategory.CONFIG

    def test_cause_is_chained(self):
        original = ValueError("root")
        error = ContractError("wrapped", cause=original)
        assert error.cause is original
        assert error.__cause__ is original

    def test_with_context_sets_known_fields(self):
        error = ContractError("x").with_context(path="outer.inner", record_type="Order")
        assert error.context.path == "outer.inner"
        assert error.context.record_type == "Order"

    def test_with_context_unknown_keys_go_to_metadata(self):
        error = ContractError("x").with_context(source="payload.json")
        assert error.context.metadata == {"source": "payload.json"}

    def test_with_context_returns_self(self):
        error = ContractError("x")
        assert error.with_context(path="p") is error

    def test_to_dict(self):
        error = ContractError("boom", cause=KeyError("k")).with_context(path="a")
        d = error.to_dict()
        assert d["error_type"] == "ContractError"
        assert d["message"] == "boom"
        assert d["category"] == "INTERNAL"
        assert d["context"] == {"path": "a"}
        assert "k" in d["cause"]

    def test_to_dict_is_json_serializable(self):
        error = ContractError("boom").with_context(line=1)
        json.dumps(error.to_dict())

    def test_repr(self):
        assert repr(ContractError("boom")) == "ContractError('boom', category=INTERNAL)"


class TestInvalidValueError:
    """Test the marshalling error raised by validation and deserialization."""

    def test_message_format(self):
        error = InvalidValueError("nested.item.y", -1)
        assert str(error) == 'Value "-1" is not valid for member "nested.item.y"'

    def test_carries_name_and_value(self):
        error = InvalidValueError("count", "abc")
        assert error.member_name == "count"
        assert error.member_value == "abc"
        assert error.path == "count"
        assert error.value == "abc"

    def test_path_is_in_context(self):
        error = InvalidValueError("a.b", None)
        assert error.context.path == "a.b"
        assert error.to_dict()["context"]["path"] == "a.b"

    def test_category_is_validation(self):
        assert InvalidValueError("x", 1).category == ErrorCategory.VALIDATION

    def test_is_contract_error(self):
        with pytest.raises(ContractError):
            raise InvalidValueError("x", 1)

    def test_value_kept_literally(self):
        value = {"raw": [1, 2]}
        assert InvalidValueError("x", value).member_value is value


class TestOtherErrors:
    """Test codec and CLI error types."""

    def test_codec_errors_are_parse(self):
        assert DecodeError("bad").category == ErrorCategory.PARSE
        assert EncodeError("bad").category == ErrorCategory.PARSE

    def test_contract_not_found(self):
        error = ContractNotFoundError("shop.models:Order", "no module named 'shop'")
        assert error.target == "shop.models:Order"
        assert error.category == ErrorCategory.CONFIG
        assert str(error) == "Contract 'shop.models:Order' not found: no module named 'shop'"
