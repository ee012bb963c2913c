"""Criteria extraction — data + selected fields → value tuple.

Also owns the shape classification (scalar / sequence / record) that the
Matcher uses to validate data changes and to snapshot data for handlers.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Number
from typing import TYPE_CHECKING, Any, Literal

from match_plus._types import CriteriaType, MatchError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from match_plus._types import MatchableItem

type Shape = Literal["scalar", "sequence", "record"]

# Sentinel field list used whenever the whole data value is the criterion.
FULL_DATA_FIELDS: tuple[str, ...] = ("FULL_DATA",)


def shape_of(data: Any) -> Shape:
    """Classify data into its shape class.

    Raises:
        MatchError: If the value is not matchable.
    """
    if data is None or isinstance(data, str | bytes | bool | Number):
        return "scalar"
    if isinstance(data, list | tuple):
        return "sequence"
    if isinstance(data, Mapping):
        return "record"
    msg = f"unsupported data type: {type(data).__name__}"
    raise MatchError(msg)


def snapshot(data: MatchableItem) -> MatchableItem:
    """One-level copy of data. Nested values are shared, not cloned."""
    match shape_of(data):
        case "record":
            return dict(data)  # type: ignore[arg-type]
        case "sequence" if isinstance(data, list):
            return list(data)
        case _:
            return data


def extract_criteria(
    data: MatchableItem,
    match_on: Sequence[str | int],
    criteria_type: CriteriaType,
) -> tuple[Any, ...]:
    """Produce the ordered value tuple that arms are matched against.

    FULL_DATA yields ``(data,)`` without copying. PROPERTIES reads one
    value per field; absent fields yield None, which is matched like any
    other value.

    Raises:
        MatchError: If PROPERTIES is requested against scalar data.
    """
    if criteria_type == CriteriaType.FULL_DATA:
        return (data,)

    shape = shape_of(data)
    if shape == "scalar":
        msg = "criteria type must be FULL_DATA when using non-record data"
        raise MatchError(msg)
    if shape == "sequence":
        return tuple(_index(data, field) for field in match_on)  # type: ignore[arg-type]
    return tuple(data.get(field) for field in match_on)  # type: ignore[union-attr]


def _index(data: Sequence[Any], field: str | int) -> Any:
    """Read a sequence slot by numeric field name; None when out of range."""
    if isinstance(field, bool):
        return None
    if isinstance(field, int):
        i = field
    elif isinstance(field, str) and field.strip().isdecimal():
        i = int(field)
    else:
        return None
    if 0 <= i < len(data):
        return data[i]
    return None
