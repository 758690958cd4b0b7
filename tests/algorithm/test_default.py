"""Tests for DefaultComparator: structural comparison under every mode.

Covers:
- Scalars: numeric equality across int/float/Decimal, type mismatches
- Objects: missing and unexpected fields per mode
- Arrays: ordered vs unordered, length rule, multisets, similarity pairing
- Scalar multisets: value buckets, linear in the array size
- compare_values into an existing result
- Idempotence and debug logging
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import pytest

from json_semantic_assert.algorithm.config import CompareMode
from json_semantic_assert.algorithm.default import DefaultComparator
from json_semantic_assert.result import ComparisonResult, FieldFailure, FieldMissing, FieldUnexpected

ALL_MODES = list(CompareMode)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_default_mode_is_strict(self) -> None:
        assert DefaultComparator().mode is CompareMode.STRICT

    def test_mode_from_string(self) -> None:
        cmp = DefaultComparator("lenient")
        assert cmp.mode is CompareMode.LENIENT
        assert cmp.policy.extensible

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError):
            DefaultComparator("loose")


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestScalars:
    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_identical_documents_pass(self, mode: CompareMode) -> None:
        doc = {"id": 1, "name": "Joe", "tags": ["a", "b"], "ok": True, "none": None}
        assert DefaultComparator(mode).compare_json(doc, doc).passed

    def test_int_equals_float(self) -> None:
        assert DefaultComparator().compare_json({"a": 1}, {"a": 1.0}).passed

    def test_decimal_equals_float(self) -> None:
        assert DefaultComparator().compare_json({"a": Decimal("8.95")}, {"a": 8.95}).passed

    def test_different_numbers_fail(self) -> None:
        result = DefaultComparator().compare_json({"a": 1}, {"a": 2})
        assert result.field_failures == [FieldFailure("a", 1, 2)]

    def test_bool_is_not_number(self) -> None:
        result = DefaultComparator().compare_json({"a": True}, {"a": 1})
        assert result.field_failures == [FieldFailure("a", True, 1)]

    def test_string_is_not_number(self) -> None:
        assert DefaultComparator().compare_json({"a": "1"}, {"a": 1}).failed

    def test_null_vs_value_fails(self) -> None:
        result = DefaultComparator().compare_json({"a": None}, {"a": {"b": 1}})
        assert result.field_failures == [FieldFailure("a", None, {"b": 1})]

    def test_object_vs_array_at_root(self) -> None:
        result = DefaultComparator().compare_json({"a": 1}, [1])
        assert result.field_failures == [FieldFailure("", {"a": 1}, [1])]

    def test_top_level_scalars(self) -> None:
        assert DefaultComparator().compare_json("x", "x").passed
        assert DefaultComparator().compare_json("x", "y").failed

    def test_non_json_value_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            DefaultComparator().compare_json({"a": object()}, {"a": 1})


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


class TestObjects:
    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_missing_field(self, mode: CompareMode) -> None:
        result = DefaultComparator(mode).compare_json({"id": 1, "name": "Joe"}, {"id": 1})
        assert result.field_missing == [FieldMissing("name", "Joe")]

    def test_extra_field_allowed_when_lenient(self) -> None:
        cmp = DefaultComparator(CompareMode.LENIENT)
        assert cmp.compare_json({"foo": "bar"}, {"foo": "bar", "baz": "bax"}).passed

    @pytest.mark.parametrize(
        "mode", [CompareMode.STRICT, CompareMode.NON_EXTENSIBLE, CompareMode.STRICT_ORDER]
    )
    def test_extra_field_unexpected_otherwise(self, mode: CompareMode) -> None:
        result = DefaultComparator(mode).compare_json({"foo": "bar"}, {"foo": "bar", "baz": "bax"})
        assert result.field_unexpected == [FieldUnexpected("baz", "bax")]
        assert result.field_failures == []

    def test_nested_paths(self) -> None:
        result = DefaultComparator().compare_json(
            {"store": {"bicycle": {"price": 19.95}}},
            {"store": {"bicycle": {"price": 1.0}}},
        )
        assert result.field_failures == [FieldFailure("store.bicycle.price", 19.95, 1.0)]


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrayOrder:
    def test_reordered_passes_when_unordered(self) -> None:
        for mode in (CompareMode.STRICT, CompareMode.LENIENT, CompareMode.NON_EXTENSIBLE):
            assert DefaultComparator(mode).compare_json([1, 2], [2, 1]).passed

    def test_reordered_fails_under_strict_order(self) -> None:
        result = DefaultComparator(CompareMode.STRICT_ORDER).compare_json([1, 2], [2, 1])
        assert result.field_failures == [FieldFailure("[0]", 1, 2), FieldFailure("[1]", 2, 1)]

    def test_empty_arrays(self) -> None:
        assert DefaultComparator(CompareMode.STRICT_ORDER).compare_json([], []).passed


class TestArrayLength:
    @pytest.mark.parametrize("mode", [CompareMode.NON_EXTENSIBLE, CompareMode.STRICT_ORDER])
    def test_length_mismatch_single_failure(self, mode: CompareMode) -> None:
        result = DefaultComparator(mode).compare_json({"a": [1, 2, 3]}, {"a": [1, 2]})
        assert result.field_failures == [
            FieldFailure("a", 3, 2, "Expected 3 values but got 2")
        ]
        assert result.outcome_count == 1

    def test_surplus_expected_is_missing_under_strict(self) -> None:
        result = DefaultComparator().compare_json({"a": [1, 2, 3]}, {"a": [3, 1]})
        assert result.field_missing == [FieldMissing("a[1]", 2)]
        assert result.field_failures == []

    def test_surplus_actual_is_unexpected_under_strict(self) -> None:
        result = DefaultComparator().compare_json({"a": [1, 2]}, {"a": [1, 2, 3]})
        assert result.field_unexpected == [FieldUnexpected("a[2]", 3)]

    def test_surplus_actual_allowed_when_lenient(self) -> None:
        cmp = DefaultComparator(CompareMode.LENIENT)
        assert cmp.compare_json([{"a": 1}], [{"a": 2}, {"a": 1}]).passed


class TestUnorderedPairing:
    def test_multiset_mismatch(self) -> None:
        result = DefaultComparator().compare_json([1, 1, 2], [1, 2, 2])
        assert result.field_failures == [FieldFailure("[1]", 1, 2)]
        assert result.field_missing == []
        assert result.field_unexpected == []

    def test_objects_paired_by_exact_match_first(self) -> None:
        result = DefaultComparator().compare_json(
            [{"id": 1, "n": "a"}, {"id": 2, "n": "b"}],
            [{"id": 2, "n": "b"}, {"id": 1, "n": "x"}],
        )
        assert result.field_failures == [FieldFailure("[0].n", "a", "x")]

    def test_leftovers_paired_by_similarity(self) -> None:
        result = DefaultComparator().compare_json(
            [{"a": 1, "b": 1}, {"a": 2, "b": 2}],
            [{"a": 2, "b": 9}, {"a": 1, "b": 9}],
        )
        assert result.field_failures == [FieldFailure("[0].b", 1, 9), FieldFailure("[1].b", 2, 9)]

    def test_nested_arrays_unordered(self) -> None:
        assert DefaultComparator().compare_json([[1, 2], [3]], [[3], [2, 1]]).passed


class TestScalarMultisets:
    @staticmethod
    def _count_node_comparisons(
        monkeypatch: pytest.MonkeyPatch, cmp: DefaultComparator
    ) -> list[str]:
        calls: list[str] = []
        original = cmp.compare_nodes

        def spy_compare_nodes(path: str, *args: Any) -> None:
            calls.append(path)
            original(path, *args)

        monkeypatch.setattr(cmp, "compare_nodes", spy_compare_nodes)
        return calls

    def test_reversed_large_array_compared_linearly(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cmp = DefaultComparator(CompareMode.STRICT)
        calls = self._count_node_comparisons(monkeypatch, cmp)
        n = 2500
        result = cmp.compare_json(list(range(n)), list(reversed(range(n))))
        assert result.passed
        # Only the root: matched scalars are never compared one by one.
        assert len(calls) == 1

    def test_disjoint_large_arrays_paired_once_each(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cmp = DefaultComparator(CompareMode.LENIENT)
        calls = self._count_node_comparisons(monkeypatch, cmp)
        n = 1000
        result = cmp.compare_json(list(range(n)), list(range(n, 2 * n)))
        assert len(result.field_failures) == n
        assert len(calls) == n + 1
        assert result.field_failures[0] == FieldFailure("[0]", 0, n)
        assert result.field_failures[-1] == FieldFailure(f"[{n - 1}]", n - 1, 2 * n - 1)

    def test_numbers_share_buckets_across_types(self) -> None:
        expected = [1, 2.5, Decimal("3"), Decimal("0.1")]
        actual = [0.1, 3, Decimal("2.5"), 1.0]
        assert DefaultComparator().compare_json(expected, actual).passed

    def test_bool_and_string_do_not_match_numbers(self) -> None:
        result = DefaultComparator().compare_json([1, "2", None], [True, 2, None])
        assert [f.path for f in result.field_failures] == ["[0]", "[1]"]

    def test_repeated_values_counted(self) -> None:
        result = DefaultComparator().compare_json(["a", "a", "b"], ["b", "a", "c"])
        assert result.field_failures == [FieldFailure("[1]", "a", "c")]

    def test_infinity_matches_nan_does_not(self) -> None:
        inf, nan = float("inf"), float("nan")
        assert DefaultComparator().compare_json([inf, 1], [1, Decimal("Infinity")]).passed
        result = DefaultComparator().compare_json([nan], [nan])
        assert len(result.field_failures) == 1

    def test_surplus_scalars_unexpected_under_strict(self) -> None:
        result = DefaultComparator(CompareMode.STRICT).compare_json([3, 1], [1, 2, 3, 4])
        assert result.field_unexpected == [FieldUnexpected("[1]", 2), FieldUnexpected("[3]", 4)]


# ---------------------------------------------------------------------------
# compare_values
# ---------------------------------------------------------------------------


class TestCompareValues:
    def test_records_under_prefix(self) -> None:
        result = ComparisonResult()
        DefaultComparator().compare_values("items[2]", {"a": 1}, {"a": 2}, result)
        assert result.field_failures == [FieldFailure("items[2].a", 1, 2)]

    def test_appends_to_existing_result(self) -> None:
        result = ComparisonResult().missing("x", 1)
        DefaultComparator().compare_values("y", 1, 2, result)
        assert result.outcome_count == 2


# ---------------------------------------------------------------------------
# Statelessness and logging
# ---------------------------------------------------------------------------


class TestStatelessness:
    def test_idempotent(self) -> None:
        cmp = DefaultComparator()
        expected = {"a": [1, {"b": 2}], "c": "d"}
        actual = {"a": [{"b": 3}, 1], "e": None}
        assert cmp.compare_json(expected, actual) == cmp.compare_json(expected, actual)

    def test_each_call_returns_fresh_result(self) -> None:
        cmp = DefaultComparator()
        first = cmp.compare_json({"a": 1}, {"a": 2})
        second = cmp.compare_json({"a": 1}, {"a": 1})
        assert first is not second
        assert second.passed

    def test_summary_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="json_semantic_assert")
        DefaultComparator().compare_json({"a": 1}, {"a": 2})
        assert any("1 failure(s)" in r.getMessage() for r in caplog.records)
