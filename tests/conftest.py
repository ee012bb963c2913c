"""Conformance fixture loader for match_plus.

Loads YAML fixtures from tests/fixtures/ and turns each case into a
ready-to-run Matcher for parametrized testing.

Fixture document shape::

    name: exact_match_prefers_literals
    options: {prioritization_mode: EXACT_MATCH}
    match_on: [item1, id]
    results: {low: found low, exact: found high}
    arms:
      - when: [animal, 252]
        handler: low
    cases:
      - name: exact_id
        data: {item1: animal, id: 252288}
        expect: found high
      - name: no_arm
        data: {item1: plant, id: 1}
        expect_error: no matching arm
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from match_plus import (
    HandlerRegistryBuilder,
    Matcher,
    generate,
    parse_arm_table,
    parse_options,
)
from match_plus.testing import register_results

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    matcher: Matcher
    expect: Any
    expect_error: str | None

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── YAML → match_plus conversion ──────────────────────────────────────────


def build_matcher(doc: dict[str, Any], data: Any) -> Matcher:
    """Build a Matcher from a fixture document and one case's data."""
    registry = register_results(HandlerRegistryBuilder(), doc.get("results", {})).build()
    arms = registry.load_arms(parse_arm_table({"arms": doc["arms"]}))

    matcher = generate(data, parse_options(doc.get("options", {})))
    if "match_on" in doc:
        matcher.set_match_on(doc["match_on"])
    return matcher.set_match_arms(arms)


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_fixtures() -> list[FixtureCase]:
    """Load every conformance fixture under tests/fixtures/."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=f"{path.stem}/{doc['name']}",
                        case_name=case["name"],
                        matcher=build_matcher(doc, case["data"]),
                        expect=case.get("expect"),
                        expect_error=case.get("expect_error"),
                    )
                )
    return cases
