"""Test utilities for match_plus.

Small handler helpers for tests and examples: constant handlers and a
recorder that remembers what it was called with. These are NOT meant for
production tables, where handlers do real work.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from match_plus._registry import HandlerRegistryBuilder


def returns(value: Any) -> Callable[..., Any]:
    """Build a handler that ignores its arguments and returns ``value``.

    >>> from match_plus import ANY, match_once
    >>> from match_plus.testing import returns
    >>> match_once({"x": 1}, "x", [[1, returns("one")], [ANY, returns("other")]])
    'one'
    """

    def handler(*_args: Any) -> Any:
        return value

    handler.__name__ = f"returns_{value!r}"
    return handler


@dataclass(slots=True)
class CallRecorder:
    """Handler that records the positional arguments of every call."""

    result: Any = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.result

    @property
    def call_count(self) -> int:
        return len(self.calls)


def register_results(
    builder: HandlerRegistryBuilder, results: Mapping[str, Any]
) -> HandlerRegistryBuilder:
    """Register one constant handler per ``name: value`` entry."""
    for name, value in results.items():
        builder.handler(name, returns(value))
    return builder
