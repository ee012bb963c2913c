"""Core types, enums and the wildcard sentinel for match_plus.

- MatchableItem is the data union a Matcher operates on
- ANY is the wildcard condition (matches anything, costs one point of precision)
- The four option axes are StrEnums so plain strings compare equal to members
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from numbers import Number
from typing import Any, Final, final

# Flat data only: records are read one level deep, sequences by index.
type MatchableScalar = str | bytes | bool | Number | None
type MatchableItem = Mapping[Any, Any] | Sequence[MatchableScalar] | MatchableScalar


class MatchError(Exception):
    """The single error kind raised by match_plus.

    Causes are distinguished by message text only.
    """


@final
class _Wildcard:
    """Type of the ANY sentinel. There is exactly one instance."""

    __slots__ = ()
    _instance: _Wildcard | None = None

    def __new__(cls) -> _Wildcard:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"

    def __reduce__(self) -> str:
        return "ANY"

    def __copy__(self) -> _Wildcard:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Wildcard:
        return self


# Compared by identity, never by value.
ANY: Final = _Wildcard()


class PrioritizationMode(StrEnum):
    """How ties among matching arms are broken."""

    ORDER = "ORDER"
    EXACT_MATCH = "EXACT_MATCH"


class MatchMode(StrEnum):
    """How a condition is compared against an extracted value."""

    TYPE_CHECK = "TYPE_CHECK"
    TYPE_COERCED = "TYPE_COERCED"
    TRUTHY = "TRUTHY"


class CriteriaType(StrEnum):
    """Whether extraction reads named fields or passes the whole data."""

    PROPERTIES = "PROPERTIES"
    FULL_DATA = "FULL_DATA"


class CallFnArgs(StrEnum):
    """What the winning handler is called with."""

    USE_MATCH_ON = "USE_MATCH_ON"
    FULL_DATA = "FULL_DATA"
