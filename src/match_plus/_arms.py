"""Match arms and arm-table normalization.

An arm table may be written two ways:

    # flat: conditions positionally aligned with the fields, handler last
    [["animal", 252288, on_exact], [ANY, ANY, on_other]]

    # normalized: explicit conditions + handler
    [MatchArm(("animal", 252288), on_exact), {"conditions": [ANY, ANY], "handler": on_other}]

Both forms (mixed freely) are normalized into MatchArm on ingestion; the
resolver only ever sees MatchArm.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from match_plus._types import MatchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class MatchArm:
    """Pairs a condition tuple with the handler to call when it wins.

    Each condition is a literal value or the ANY wildcard.
    """

    conditions: tuple[Any, ...]
    handler: Callable[..., Any]


def normalize_arms(
    table: Iterable[Any],
    match_on: Sequence[Any] | None,
) -> list[MatchArm]:
    """Normalize an arm table and validate it against the selected fields.

    When ``match_on`` is None the condition counts are not checked; the
    handler slot always is.

    Raises:
        MatchError: If an entry is malformed, has a non-callable handler,
            or its condition count disagrees with ``match_on``.
    """
    if isinstance(table, str | bytes | Mapping) or not _is_iterable(table):
        msg = f"match arms must be a list of arms, got {type(table).__name__}"
        raise MatchError(msg)

    arms = [_normalize_arm(entry) for entry in table]
    if match_on is not None:
        for arm in arms:
            if len(arm.conditions) != len(match_on):
                msg = (
                    "invalid match arms conditions for given criteria, try resetting criteria first "
                    f"(expected {len(match_on)} condition(s), got {len(arm.conditions)})"
                )
                raise MatchError(msg)
    return arms


def _normalize_arm(entry: Any) -> MatchArm:
    match entry:
        case MatchArm():
            arm = entry
        case {"conditions": conditions, "handler": handler}:
            if isinstance(conditions, str | bytes) or not isinstance(conditions, list | tuple):
                msg = f"arm conditions must be a list, got {type(conditions).__name__}"
                raise MatchError(msg)
            arm = MatchArm(tuple(conditions), handler)
        case [*conditions, handler]:
            arm = MatchArm(tuple(conditions), handler)
        case _:
            msg = f"invalid match arm: {entry!r}"
            raise MatchError(msg)

    if not callable(arm.handler):
        msg = "invalid match arms, no function found at end of arm"
        raise MatchError(msg)
    return arm


def _is_iterable(value: Any) -> bool:
    try:
        iter(value)
    except TypeError:
        return False
    return True
