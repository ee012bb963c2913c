"""Matcher — mutable match state with a chainable setter API.

A Matcher owns four things: the data, the selected fields (match_on), the
arm table, and the options. Setters validate first and mutate second, so a
failed call leaves the matcher as it was.

    >>> from match_plus import ANY, generate
    >>> m = generate({"kind": "animal", "id": 252288}, prioritization_mode="EXACT_MATCH")
    >>> m.set_match_on(["kind", "id"]).set_match_arms([
    ...     ["animal", 252, lambda kind, id: "low"],
    ...     ["animal", 252288, lambda kind, id: "exact"],
    ...     [ANY, ANY, lambda kind, id: "none"],
    ... ]).match()
    'exact'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from match_plus._arms import MatchArm, normalize_arms
from match_plus._criteria import (
    FULL_DATA_FIELDS,
    extract_criteria,
    shape_of,
    snapshot,
)
from match_plus._options import DEFAULT_OPTIONS, MatchOptions
from match_plus._resolver import resolve_arm
from match_plus._types import CallFnArgs, CriteriaType, MatchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from match_plus._types import MatchableItem

type Criteria = str | int | list[str | int] | tuple[str | int, ...] | Mapping[Any, Any]


class Matcher:
    """Stateful match table: data, selected fields, arms and options.

    Not safe for concurrent mutation; callers serialize access.

    INV: once data and arms are set, match() is deterministic and
    repeatable until the next mutation.
    """

    __slots__ = ("data", "match_arms", "match_on", "options")

    def __init__(self, options: MatchOptions = DEFAULT_OPTIONS) -> None:
        self.data: MatchableItem = None
        self.match_on: list[str | int] | None = None
        self.match_arms: list[MatchArm] | None = None
        self.options: MatchOptions = options

    def __repr__(self) -> str:
        arms = "unset" if self.match_arms is None else len(self.match_arms)
        return (
            f"Matcher(data={self.data!r}, match_on={self.match_on!r}, "
            f"arms={arms}, options={self.options!r})"
        )

    # ── Setters ─────────────────────────────────────────────────────────────

    def set_data(self, data: MatchableItem) -> Matcher:
        """Replace the data.

        Scalars and sequences switch the matcher to FULL_DATA criteria.
        Records and lists are stored as one-level copies.
        """
        shape = shape_of(data)
        if shape != "record":
            self.options = self.options.merge({"criteria_type": CriteriaType.FULL_DATA})
            self.match_on = list(FULL_DATA_FIELDS)
        self.data = snapshot(data)
        return self

    def append_data(self, data: MatchableItem) -> Matcher:
        """Merge into the current data.

        Sequences concatenate, records shallow-merge (new keys win),
        scalars replace.

        Raises:
            MatchError: If the shape class of ``data`` differs from the
                current data.
        """
        current = shape_of(self.data)
        if shape_of(data) != current:
            msg = (
                "invalid type change when appending data "
                f"({current} → {shape_of(data)})"
            )
            raise MatchError(msg)

        match current:
            case "sequence":
                merged = [*self.data, *data]  # type: ignore[misc]
                self.data = merged if isinstance(self.data, list) else tuple(merged)
            case "record":
                self.data = {**self.data, **data}  # type: ignore[dict-item]
            case _:
                self.data = data
        return self

    def set_match_on(self, criteria: Criteria) -> Matcher:
        """Select the fields to match on.

        Accepts a field name, a list of names, or a mapping whose keys
        become the names. Does nothing while the data is a scalar.
        """
        if shape_of(self.data) == "scalar":
            return self
        self.match_on = _criteria_fields(criteria)
        self.options = self.options.merge({"criteria_type": CriteriaType.PROPERTIES})
        return self

    def set_match_arms(self, match_arms: Iterable[Any]) -> Matcher:
        """Install an arm table, normalizing flat arms into MatchArm.

        Raises:
            MatchError: If an arm has no callable handler, or its condition
                count differs from the selected fields.
        """
        self.match_arms = normalize_arms(match_arms, self.match_on)
        return self

    def set_options(
        self, options: Mapping[str, Any] | MatchOptions | None = None, /, **overrides: Any
    ) -> Matcher:
        """Merge option axes into the current options."""
        merged = self.options
        if options is not None:
            merged = merged.merge(options)
        if overrides:
            merged = merged.merge(overrides)
        self.options = merged
        return self

    # ── Matching ────────────────────────────────────────────────────────────

    def match(
        self,
        match_on: Criteria | None = None,
        match_arms: Iterable[Any] | None = None,
    ) -> Any:
        """Resolve the winning arm and return its handler's result.

        ``match_on`` and ``match_arms`` override the stored fields and arms
        and persist on the matcher as if the setters had been called. Both
        are validated before either is stored.

        Raises:
            MatchError: If fields or arms are not set, criteria extraction
                fails, or no arm matches. Handler exceptions propagate
                unchanged.
        """
        fields = self.match_on
        options = self.options
        if match_on is not None and shape_of(self.data) != "scalar":
            fields = _criteria_fields(match_on)
            options = options.merge({"criteria_type": CriteriaType.PROPERTIES})
        if fields is None:
            msg = "matchable properties must be set to Matcher when not provided in match"
            raise MatchError(msg)

        arms = self.match_arms
        if match_arms is not None:
            arms = normalize_arms(match_arms, fields)
        if arms is None:
            msg = "match arms must be set to Matcher when not provided in match"
            raise MatchError(msg)

        self.match_on, self.match_arms, self.options = fields, arms, options

        values = extract_criteria(self.data, fields, options.criteria_type)
        arm = resolve_arm(values, arms, options.match_mode, options.prioritization_mode)

        if options.call_fn_args == CallFnArgs.USE_MATCH_ON:
            return arm.handler(*values)
        return arm.handler(snapshot(self.data))


def _criteria_fields(criteria: Criteria) -> list[str | int]:
    match criteria:
        case str() | int():
            fields = [criteria]
        case list() | tuple():
            fields = list(criteria)
        case Mapping():
            fields = list(criteria.keys())
        case _:
            msg = f"criteria must be a field name, a list of field names or a mapping, got {type(criteria).__name__}"
            raise MatchError(msg)

    for field in fields:
        if isinstance(field, bool) or not isinstance(field, str | int):
            msg = f"criteria must be field names (str or int), got {type(field).__name__}: {field!r}"
            raise MatchError(msg)
    return fields


def generate(
    data: MatchableItem,
    options: Mapping[str, Any] | MatchOptions | None = None,
    /,
    **overrides: Any,
) -> Matcher:
    """Create a Matcher for ``data`` with default options plus overrides.

    Raises:
        MatchError: If an option is invalid or the data is not matchable.
    """
    matcher = Matcher()
    matcher.set_options(options, **overrides)
    return matcher.set_data(data)


def match_once(
    data: MatchableItem,
    match_on: Criteria,
    match_arms: Iterable[Any],
    options: Mapping[str, Any] | MatchOptions | None = None,
) -> Any:
    """Build a throwaway Matcher and match once."""
    return (
        generate(data, options)
        .set_match_on(match_on)
        .set_match_arms(match_arms)
        .match()
    )
