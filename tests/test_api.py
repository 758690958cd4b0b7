"""Unit tests for the public API functions: compare_json, compare_json_text, is_match."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from json_semantic_assert import (
    CompareMode,
    ComparisonResult,
    FieldFailure,
    FieldUnexpected,
    JSONPathCustomization,
    PathCustomization,
    QueryDocument,
    compare_json,
    compare_json_text,
    is_match,
)


class TestCompareJson:
    """Tests for the compare_json() function."""

    def test_identical_documents_pass(self) -> None:
        result = compare_json({"a": 1}, {"a": 1})
        assert isinstance(result, ComparisonResult)
        assert result.passed

    def test_default_mode_is_strict(self) -> None:
        result = compare_json({"foo": "bar"}, {"foo": "bar", "baz": "bax"})
        assert result.field_unexpected == [FieldUnexpected("baz", "bax")]

    def test_mode_passthrough_string(self) -> None:
        assert compare_json({"foo": "bar"}, {"foo": "bar", "baz": "bax"}, mode="lenient").passed

    def test_customizations_passthrough(self) -> None:
        result = compare_json(
            {"id": 1, "ts": 0},
            {"id": 1, "ts": 123},
            customizations=[JSONPathCustomization.ignore("$.ts")],
        )
        assert result.passed

    def test_query_document_passthrough(self) -> None:
        result = compare_json(
            {"items": [{"v": 1}]},
            {"items": [{"v": 99}]},
            customizations=[JSONPathCustomization.ignore("$.items[?(@.v > 10)].v")],
            query_document=QueryDocument.ACTUAL,
        )
        assert result.passed

    def test_calls_do_not_share_state(self) -> None:
        customizations = [PathCustomization.ignore("a")]
        first = compare_json({"a": 1}, {"a": 2}, customizations=customizations)
        second = compare_json({"a": 1, "b": 1}, {"a": 2, "b": 2}, customizations=customizations)
        assert first.passed
        assert second.field_failures == [FieldFailure("b", 1, 2)]

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError):
            compare_json({}, {}, mode="fuzzy")


class TestCompareJsonText:
    """Tests for compare_json_text()."""

    def test_parses_and_compares(self) -> None:
        assert compare_json_text('{"a": [1, 2]}', '{"a": [2, 1]}').passed

    def test_strict_order_text(self) -> None:
        result = compare_json_text("[1, 2]", "[2, 1]", mode=CompareMode.STRICT_ORDER)
        assert result.failed

    def test_floats_parsed_as_decimal(self) -> None:
        result = compare_json_text('{"p": 8.95}', '{"p": 8.96}')
        assert result.field_failures == [FieldFailure("p", Decimal("8.95"), Decimal("8.96"))]

    def test_int_and_float_text_equal(self) -> None:
        assert compare_json_text('{"p": 1}', '{"p": 1.0}').passed

    def test_bytes_accepted(self) -> None:
        assert compare_json_text(b'{"a": 1}', b'{"a": 1}').passed

    def test_malformed_text_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            compare_json_text('{"a": ', "{}")


class TestIsMatch:
    """Tests for is_match()."""

    def test_returns_bool(self) -> None:
        assert is_match({"a": 1}, {"a": 1}) is True
        assert is_match({"a": 1}, {"a": 2}) is False

    def test_mode_ordering(self) -> None:
        assert is_match([1, 2], [2, 1], CompareMode.STRICT)
        assert is_match([1, 2], [2, 1], CompareMode.LENIENT)
        assert is_match([1, 2], [2, 1], CompareMode.NON_EXTENSIBLE)
        assert not is_match([1, 2], [2, 1], CompareMode.STRICT_ORDER)

    def test_extensibility(self) -> None:
        expected, actual = {"foo": "bar"}, {"foo": "bar", "baz": "bax"}
        assert is_match(expected, actual, "lenient")
        assert not is_match(expected, actual, "non_extensible")
        assert not is_match(expected, actual, "strict_order")
