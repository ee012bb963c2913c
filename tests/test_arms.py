"""Tests for arm-table normalization (match_plus._arms)."""

from __future__ import annotations

import pytest

from match_plus import ANY, MatchArm, MatchError, normalize_arms
from match_plus.testing import returns


class TestNormalizeArms:
    def test_flat_arms(self) -> None:
        h = returns("x")
        assert normalize_arms([["a", 1, h]], ["f", "g"]) == [MatchArm(("a", 1), h)]

    def test_tuple_flat_arm(self) -> None:
        h = returns("x")
        assert normalize_arms([("a", ANY, h)], None) == [MatchArm(("a", ANY), h)]

    def test_match_arm_passthrough(self) -> None:
        original = MatchArm(("a",), returns("x"))
        (arm,) = normalize_arms([original], ["f"])
        assert arm is original

    def test_mapping_arm(self) -> None:
        h = returns("x")
        assert normalize_arms([{"conditions": ["a"], "handler": h}], ["f"]) == [MatchArm(("a",), h)]

    def test_mixed_forms(self) -> None:
        h = returns("x")
        arms = normalize_arms([MatchArm((1,), h), [2, h], {"conditions": (3,), "handler": h}], ["n"])
        assert [a.conditions for a in arms] == [(1,), (2,), (3,)]

    def test_handler_only_arm_without_fields(self) -> None:
        h = returns("x")
        assert normalize_arms([[h]], None) == [MatchArm((), h)]

    def test_generator_table(self) -> None:
        h = returns("x")
        arms = normalize_arms(([i, h] for i in range(3)), ["n"])
        assert len(arms) == 3

    def test_condition_count_mismatch(self) -> None:
        with pytest.raises(MatchError, match="invalid match arms conditions"):
            normalize_arms([["a", returns("x")]], ["f", "g"])

    def test_count_unchecked_without_fields(self) -> None:
        h = returns("x")
        arms = normalize_arms([["a", h], ["a", "b", h]], None)
        assert [len(a.conditions) for a in arms] == [1, 2]

    def test_non_callable_handler(self) -> None:
        with pytest.raises(MatchError, match="no function found at end of arm"):
            normalize_arms([["a", "b"]], None)

    def test_non_callable_match_arm_handler(self) -> None:
        with pytest.raises(MatchError, match="no function found at end of arm"):
            normalize_arms([MatchArm(("a",), "nope")], ["f"])  # type: ignore[arg-type]

    def test_empty_flat_arm(self) -> None:
        with pytest.raises(MatchError, match="invalid match arm"):
            normalize_arms([[]], None)

    @pytest.mark.parametrize("entry", ["a", 5, {"conditions": "ab", "handler": print}, {"handler": print}])
    def test_malformed_entry(self, entry: object) -> None:
        with pytest.raises(MatchError, match="invalid match arm|arm conditions must be a list"):
            normalize_arms([entry], None)

    @pytest.mark.parametrize("table", ["abc", {"a": 1}, 5, None])
    def test_table_must_be_a_list(self, table: object) -> None:
        with pytest.raises(MatchError, match="match arms must be a list"):
            normalize_arms(table, None)  # type: ignore[arg-type]

    def test_empty_table(self) -> None:
        assert normalize_arms([], ["f"]) == []
