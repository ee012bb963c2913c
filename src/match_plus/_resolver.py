"""Arm resolution — score every arm against the extracted values, pick one.

Scoring: each ANY used by an arm adds one point of imprecision; a literal
condition must compare equal under the active MatchMode or the arm is
rejected. The lowest-scoring arm wins, earliest table position breaking
ties.

Selection stops early on the first accepted arm in ORDER mode, and on the
first arm scoring 0 in any mode (nothing can beat it).
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from numbers import Complex, Number, Real
from typing import TYPE_CHECKING, Any

from match_plus._types import (
    ANY,
    MatchError,
    MatchMode,
    PrioritizationMode,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from match_plus._arms import MatchArm

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Comparison modes
# ═══════════════════════════════════════════════════════════════════════════════


def _kind(value: Any) -> type | str:
    """Equality kind for TYPE_CHECK. int, float, Fraction and Decimal share one."""
    if isinstance(value, bool):
        return bool
    if isinstance(value, Real | Decimal):
        return "real"
    if isinstance(value, Complex):
        return "complex"
    return type(value)


def type_check_equal(condition: Any, value: Any) -> bool:
    """Strict equality: same kind and equal. ``"5"`` vs ``5`` is a mismatch."""
    return _kind(condition) == _kind(value) and condition == value


# ASCII decimal literals only: no digit separators, no non-ASCII digits,
# no inf/nan.
_NUMERIC_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_numeric(text: str, *, exact: bool) -> Number | None:
    """Parse a numeric string; None if it is not an ASCII decimal literal.

    Blank strings are 0. Integer literals parse to int; other literals to
    Decimal when ``exact`` and to float otherwise.
    """
    text = text.strip()
    if not text:
        return 0
    if _NUMERIC_LITERAL.fullmatch(text) is None:
        return None
    if exact:
        return Decimal(text)
    if "." in text or "e" in text or "E" in text:
        return float(text)
    return int(text)


def _as_number(value: Any, *, exact: bool) -> Number | None:
    """Numeric view of a value for TYPE_COERCED, or None if it has none.

    bool → int, numeric string → number (see _parse_numeric), numbers as-is.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Number):
        return value
    if isinstance(value, str):
        return _parse_numeric(value, exact=exact)
    return None


def coerced_equal(condition: Any, value: Any) -> bool:
    """Loose equality with an explicit, closed set of coercions.

    - None equals only None
    - two strings compare as strings
    - bool is treated as 0/1 when compared with a number or a string
    - an ASCII decimal literal string equals the number it denotes; it is
      parsed exactly when the other side is a Decimal or Fraction
    - everything else falls back to ``==``
    """
    if condition is None or value is None:
        return condition is value
    if isinstance(condition, str) and isinstance(value, str):
        return condition == value

    numeric_pair = isinstance(condition, Number | str) and isinstance(value, Number | str)
    if numeric_pair:
        exact = isinstance(condition, Decimal | Fraction) or isinstance(value, Decimal | Fraction)
        left = _as_number(condition, exact=exact)
        right = _as_number(value, exact=exact)
        if left is None or right is None:
            return False
        try:
            return bool(left == right)
        except (TypeError, InvalidOperation):
            return False
    return bool(condition == value)


def truthy_equal(condition: Any, value: Any) -> bool:
    """Both sides reduced to their truthiness."""
    return bool(condition) == bool(value)


COMPARATORS: dict[MatchMode, Callable[[Any, Any], bool]] = {
    MatchMode.TYPE_CHECK: type_check_equal,
    MatchMode.TYPE_COERCED: coerced_equal,
    MatchMode.TRUTHY: truthy_equal,
}


# ═══════════════════════════════════════════════════════════════════════════════
# Scoring and selection
# ═══════════════════════════════════════════════════════════════════════════════


def score_arm(
    arm: MatchArm,
    values: Sequence[Any],
    compare: Callable[[Any, Any], bool],
) -> int | None:
    """Return the arm's imprecision score, or None if it does not match.

    Short-circuits on the first mismatching position.
    """
    conditions = arm.conditions
    score = 0
    for i, value in enumerate(values):
        if i >= len(conditions):
            return None
        condition = conditions[i]
        if condition is ANY:
            score += 1
            continue
        if not compare(condition, value):
            return None
    return score


def resolve_arm(
    values: Sequence[Any],
    arms: Sequence[MatchArm],
    match_mode: MatchMode,
    prioritization_mode: PrioritizationMode,
) -> MatchArm:
    """Select the winning arm for the extracted values.

    Raises:
        MatchError: If no arm matches.
    """
    compare = COMPARATORS[MatchMode(match_mode)]
    stop_at_first = prioritization_mode == PrioritizationMode.ORDER

    best: MatchArm | None = None
    best_index = -1
    best_score = 0
    for index, arm in enumerate(arms):
        score = score_arm(arm, values, compare)
        if score is None:
            continue
        if best is None or score < best_score:
            best, best_index, best_score = arm, index, score
            if best_score == 0 or stop_at_first:
                break

    if best is None:
        msg = "no matching arm determined"
        raise MatchError(msg)

    logger.debug(
        "selected arm %d of %d (score=%d, mode=%s, priority=%s)",
        best_index,
        len(arms),
        best_score,
        match_mode,
        prioritization_mode,
    )
    return best
