"""Tests for the ANY sentinel and option enums."""

import copy
import pickle

from match_plus import ANY, CallFnArgs, CriteriaType, MatchMode, PrioritizationMode
from match_plus._types import _Wildcard


class TestWildcard:
    def test_singleton(self) -> None:
        assert _Wildcard() is ANY

    def test_repr(self) -> None:
        assert repr(ANY) == "ANY"

    def test_survives_copy_and_pickle(self) -> None:
        assert copy.copy(ANY) is ANY
        assert copy.deepcopy([ANY])[0] is ANY
        assert pickle.loads(pickle.dumps(ANY)) is ANY

    def test_not_equal_to_data(self) -> None:
        assert ANY != "ANY"
        assert ANY != {"value": "any", "type": "match_override"}


class TestEnums:
    def test_members_compare_to_strings(self) -> None:
        assert PrioritizationMode.EXACT_MATCH == "EXACT_MATCH"
        assert MatchMode("TRUTHY") is MatchMode.TRUTHY

    def test_full_data_shared_by_two_axes(self) -> None:
        assert CriteriaType.FULL_DATA == CallFnArgs.FULL_DATA == "FULL_DATA"
