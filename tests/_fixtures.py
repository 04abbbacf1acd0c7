"""Conformance fixture loader for reqmatch.

Loads YAML fixtures from tests/fixtures/ and converts them to reqmatch
types for parametrized testing. Each document holds a list of expectations
and cases; a case pairs a request description with the expected
diagnostics (null when every expectation holds).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from reqmatch import parse_expectation, parse_matchers_config, parse_request_config

if TYPE_CHECKING:
    from reqmatch import Matcher, Matchers, Request

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    matchers: Matchers
    request: Request
    expect: list[Matcher] | None


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_fixtures() -> list[FixtureCase]:
    """Load all conformance fixtures, in file order."""
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
            fixture_name = doc["name"]
            matchers = parse_matchers_config({"expectations": doc["expectations"]})
            for case in doc["cases"]:
                expect = case["expect"]
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        matchers=matchers,
                        request=parse_request_config(case["request"]),
                        expect=None if expect is None else [parse_expectation(e) for e in expect],
                    )
                )
    return cases
