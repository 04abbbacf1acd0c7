"""Matchers — ordered set of expectations evaluated against one request.

Unlike first-match-wins routing, every expectation is checked:
- is_matched() is True only when all expectations hold
- validate() collects every diagnostic in the order the expectations were given
- is_matched(r) == (validate(r) is None) for every request
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from reqmatch._expectation import MATCHER_TYPES

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from reqmatch._expectation import Matcher
    from reqmatch._request import Request

logger = logging.getLogger("reqmatch")


class MatcherError(Exception):
    """Errors from expectation set construction."""


@dataclass(frozen=True, slots=True)
class Matchers:
    """Immutable, ordered collection of expectation variants.

    No de-duplication or reordering happens. ``add()`` returns a new
    collection with the expectation appended; the receiver is unchanged.

    Raises:
        MatcherError: If an element is not an expectation variant.
    """

    matchers: tuple[Matcher, ...] = ()

    def __post_init__(self) -> None:
        for index, matcher in enumerate(self.matchers):
            if not isinstance(matcher, MATCHER_TYPES):
                msg = (
                    f"expectation #{index} must be an expectation variant, "
                    f"got {type(matcher).__name__}"
                )
                raise MatcherError(msg)

    @classmethod
    def of(cls, *matchers: Matcher) -> Matchers:
        return cls(matchers=matchers)

    @classmethod
    def from_iterable(cls, matchers: Iterable[Matcher]) -> Matchers:
        return cls(matchers=tuple(matchers))

    def add(self, matcher: Matcher) -> Matchers:
        """Return a new Matchers with ``matcher`` appended."""
        return Matchers(matchers=(*self.matchers, matcher))

    def is_matched(self, request: Request) -> bool:
        """True iff every expectation holds for ``request``."""
        return all(m.validate(request) is None for m in self.matchers)

    def validate(self, request: Request) -> list[Matcher] | None:
        """Evaluate every expectation and collect the diagnostics.

        Evaluation does not stop at the first failure. Returns None when
        every expectation holds, otherwise the observed-state variants in
        the same order as the failing expectations.
        """
        reports = [
            report
            for report in (m.validate(request) for m in self.matchers)
            if report is not None
        ]
        if not reports:
            return None
        logger.debug(
            "%d of %d expectations failed for %s", len(reports), len(self.matchers), request
        )
        return reports

    def __len__(self) -> int:
        return len(self.matchers)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self.matchers)


def format_report(request: Request, reports: Iterable[Matcher]) -> str:
    """Render a request and its diagnostics as a multi-line report.

    >>> from reqmatch import Method, parse
    >>> print(format_report(parse("/a"), [Method("GET")]))
    [GET /a]
      - Method("GET")
    """
    lines = [str(request)]
    lines.extend(f"  - {report}" for report in reports)
    return "\n".join(lines)
