"""Conformance tests for match_plus.

Loads the YAML fixtures from tests/fixtures/ and runs every case through
the config-driven path: parse_arm_table → HandlerRegistry → Matcher.

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

import pytest
from conftest import FixtureCase, load_fixtures

from match_plus import MatchError

_cases = load_fixtures()
_positive = [c for c in _cases if c.expect_error is None]
_errors = [c for c in _cases if c.expect_error is not None]


@pytest.mark.parametrize("case", _positive, ids=[c.id for c in _positive])
def test_conformance(case: FixtureCase) -> None:
    actual = case.matcher.match()
    assert actual == case.expect, (
        f"Fixture '{case.fixture_name}' case '{case.case_name}': "
        f"expected {case.expect!r}, got {actual!r}"
    )


@pytest.mark.parametrize("case", _errors, ids=[c.id for c in _errors])
def test_conformance_error(case: FixtureCase) -> None:
    with pytest.raises(MatchError, match=case.expect_error):
        case.matcher.match()


def test_fixtures_loaded() -> None:
    assert len(_positive) >= 20
    assert _errors
