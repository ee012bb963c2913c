"""Matcher options and their config-driven construction.

Options are a frozen record of four independent axes. Partial updates go
through MatchOptions.merge(), which returns a new record. Config loading
follows the same path as the rest of the package:
  dict / YAML file → parse_options() → MatchOptions
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml

from match_plus._types import (
    CallFnArgs,
    CriteriaType,
    MatchError,
    MatchMode,
    PrioritizationMode,
)


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Behaviour switches for a Matcher.

    Defaults: first matching arm wins, strict typed equality, named-field
    criteria, and handlers called with the extracted values.
    """

    prioritization_mode: PrioritizationMode = PrioritizationMode.ORDER
    match_mode: MatchMode = MatchMode.TYPE_CHECK
    criteria_type: CriteriaType = CriteriaType.PROPERTIES
    call_fn_args: CallFnArgs = CallFnArgs.USE_MATCH_ON

    def merge(self, partial: Mapping[str, Any] | MatchOptions) -> MatchOptions:
        """Return a copy with the given axes overwritten.

        Axes missing from ``partial`` keep their current value. A full
        MatchOptions overwrites every axis.

        Raises:
            MatchError: If a key is not an option axis or a value is not
                a member of that axis.
        """
        if isinstance(partial, MatchOptions):
            return partial
        if not isinstance(partial, Mapping):
            msg = f"options must be a mapping, got {type(partial).__name__}"
            raise MatchError(msg)
        return replace(self, **_coerce_axes(partial))


# Axis name → enum type, in declaration order.
_AXES: dict[str, type[StrEnum]] = {
    "prioritization_mode": PrioritizationMode,
    "match_mode": MatchMode,
    "criteria_type": CriteriaType,
    "call_fn_args": CallFnArgs,
}


def _coerce_axes(partial: Mapping[str, Any]) -> dict[str, StrEnum]:
    unknown = sorted(str(k) for k in partial if k not in _AXES)
    if unknown:
        msg = f"unknown option(s): {', '.join(unknown)} (expected one of {', '.join(_AXES)})"
        raise MatchError(msg)

    values: dict[str, StrEnum] = {}
    for key, raw in partial.items():
        enum_type = _AXES[key]
        try:
            values[key] = enum_type(raw)
        except ValueError as e:
            allowed = ", ".join(m.value for m in enum_type)
            msg = f"invalid value for option {key!r}: {raw!r} (expected one of {allowed})"
            raise MatchError(msg) from e
    return values


DEFAULT_OPTIONS = MatchOptions()


def parse_options(data: Mapping[str, Any]) -> MatchOptions:
    """Parse a mapping of axis name → value name into MatchOptions.

    Axes that are absent take their defaults.

    Raises:
        MatchError: If the mapping is malformed.
    """
    if isinstance(data, MatchOptions):
        return data
    return DEFAULT_OPTIONS.merge(data)


def load_options(path: str | Path) -> MatchOptions:
    """Load MatchOptions from a YAML file.

    An empty document yields the defaults.

    Raises:
        MatchError: If the document is not a mapping or holds bad options.
    """
    with Path(path).open() as f:
        data = yaml.safe_load(f)
    if data is None:
        return DEFAULT_OPTIONS
    return parse_options(data)
