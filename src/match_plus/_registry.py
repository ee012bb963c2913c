"""Handler registry for config-driven arm tables.

Handlers are code, so a YAML/JSON arm table refers to them by name. The
registry resolves those names:

    builder = HandlerRegistryBuilder()
    builder.handler("greet", lambda name, age: f"hello {name}")
    registry = builder.build()

    config = parse_arm_table(yaml.safe_load(text))
    matcher.set_match_arms(registry.load_arms(config))

Config shape::

    arms:
      - when: ["animal", 252288]
        handler: exact
      - when: [{any: true}, {any: true}]
        handler: fallback
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from match_plus._arms import MatchArm
from match_plus._types import ANY, MatchError

if TYPE_CHECKING:
    from collections.abc import Callable

MAX_ARMS = 1024


class UnknownHandlerError(MatchError):
    """An arm config names a handler that was never registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            msg = f"unknown handler: {name!r} (registered: {', '.join(self.available)})"
        else:
            msg = f"unknown handler: {name!r} (no handlers are registered)"
        super().__init__(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Config types and parsing
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ArmConfig:
    """One arm as written in config: conditions plus a handler name."""

    conditions: tuple[Any, ...]
    handler: str


def parse_arm_table(data: Mapping[str, Any]) -> tuple[ArmConfig, ...]:
    """Parse an ``{"arms": [...]}`` mapping into ArmConfigs.

    A condition written as ``{"any": true}`` becomes the ANY wildcard.

    Raises:
        MatchError: If the mapping is malformed or holds more than
            MAX_ARMS arms.
    """
    if not isinstance(data, Mapping):
        msg = f"expected mapping, got {type(data).__name__}"
        raise MatchError(msg)

    raw_arms = data.get("arms")
    if raw_arms is None:
        msg = "missing required field 'arms'"
        raise MatchError(msg)
    if not isinstance(raw_arms, list):
        msg = f"'arms' must be a list, got {type(raw_arms).__name__}"
        raise MatchError(msg)
    if len(raw_arms) > MAX_ARMS:
        msg = f"too many arms: {len(raw_arms)} exceeds maximum {MAX_ARMS}"
        raise MatchError(msg)

    return tuple(_parse_arm(arm) for arm in raw_arms)


def _parse_arm(data: Any) -> ArmConfig:
    if not isinstance(data, Mapping):
        msg = f"arm must be a mapping, got {type(data).__name__}"
        raise MatchError(msg)

    if "when" not in data:
        msg = "arm missing required field 'when'"
        raise MatchError(msg)
    if "handler" not in data:
        msg = "arm missing required field 'handler'"
        raise MatchError(msg)

    when = data["when"]
    if not isinstance(when, list):
        msg = f"'when' must be a list, got {type(when).__name__}"
        raise MatchError(msg)
    handler = data["handler"]
    if not isinstance(handler, str):
        msg = f"'handler' must be a string, got {type(handler).__name__}"
        raise MatchError(msg)

    return ArmConfig(conditions=tuple(_parse_condition(c) for c in when), handler=handler)


def _parse_condition(value: Any) -> Any:
    if isinstance(value, Mapping):
        if dict(value) == {"any": True}:
            return ANY
        msg = f"mapping conditions must be {{any: true}}, got {dict(value)!r}"
        raise MatchError(msg)
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# Builder and registry
# ═══════════════════════════════════════════════════════════════════════════════


class HandlerRegistryBuilder:
    """Collects named handlers, then freezes them into a HandlerRegistry."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}

    def handler(self, name: str, fn: Callable[..., Any]) -> HandlerRegistryBuilder:
        """Register a handler under ``name``. Later registrations replace earlier ones."""
        if not callable(fn):
            msg = f"handler {name!r} is not callable"
            raise MatchError(msg)
        self._handlers[name] = fn
        return self

    def build(self) -> HandlerRegistry:
        """Freeze the registry. No further registration is possible."""
        return HandlerRegistry(_handlers=MappingProxyType(dict(self._handlers)))


@dataclass(frozen=True, slots=True)
class HandlerRegistry:
    """Immutable name → handler table. Built via HandlerRegistryBuilder."""

    _handlers: MappingProxyType[str, Callable[..., Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def contains_handler(self, name: str) -> bool:
        return name in self._handlers

    def handler_names(self) -> list[str]:
        """Return all registered handler names (sorted)."""
        return sorted(self._handlers.keys())

    def load_arms(self, config: tuple[ArmConfig, ...] | list[ArmConfig]) -> list[MatchArm]:
        """Resolve handler names into a ready-to-install arm table.

        Raises:
            UnknownHandlerError: If an arm names an unregistered handler.
        """
        arms = []
        for arm in config:
            fn = self._handlers.get(arm.handler)
            if fn is None:
                raise UnknownHandlerError(arm.handler, list(self._handlers.keys()))
            arms.append(MatchArm(conditions=arm.conditions, handler=fn))
        return arms
