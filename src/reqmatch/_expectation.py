"""Expectation variants — one closed union for rules and their diagnostics.

Each variant is a frozen dataclass with ``validate(request)``:
- returns None when the request satisfies the rule
- returns a variant of the same union describing what was actually observed

The returned diagnostic always validates against the same request, so it
doubles as a corrected expectation:

    >>> from reqmatch import Method, Request
    >>> Method("post").validate(Request())
    Method(value='GET')

Existence variants (``*Exists``/``*Miss``) only test presence. Equality
variants (``*Eq``) test content; a query key present without a value is
reported as QueryExists, not as a value mismatch.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from reqmatch._request import _quote

if TYPE_CHECKING:
    from reqmatch._request import Request


class _Variant:
    """Shared rendering: ``Kind("arg", ...)``, or the bare kind name."""

    __slots__ = ()

    def __str__(self) -> str:
        args = ", ".join(_quote(getattr(self, f.name)) for f in fields(self))  # type: ignore[arg-type]
        name = type(self).__name__
        return f"{name}({args})" if args else name


@dataclass(frozen=True, slots=True)
class Method(_Variant):
    """Method equals ``value``, ignoring case.

    The diagnostic carries the request's method verbatim.
    """

    value: str

    def validate(self, request: Request) -> Matcher | None:
        if request.method.upper() == self.value.upper():
            return None
        return Method(request.method)


@dataclass(frozen=True, slots=True)
class Path(_Variant):
    """Path equals ``value`` exactly (case-sensitive)."""

    value: str

    def validate(self, request: Request) -> Matcher | None:
        if request.path == self.value:
            return None
        return Path(request.path)


@dataclass(frozen=True, slots=True)
class QueryExists(_Variant):
    """Query key is present, with or without a value."""

    key: str

    def validate(self, request: Request) -> Matcher | None:
        if self.key in request.query:
            return None
        return QueryMiss(self.key)


@dataclass(frozen=True, slots=True)
class QueryMiss(_Variant):
    """Query key is absent."""

    key: str

    def validate(self, request: Request) -> Matcher | None:
        if self.key not in request.query:
            return None
        return QueryExists(self.key)


@dataclass(frozen=True, slots=True)
class QueryEq(_Variant):
    """Query key is present and carries exactly ``value``."""

    key: str
    value: str

    def validate(self, request: Request) -> Matcher | None:
        if self.key not in request.query:
            return QueryMiss(self.key)
        match request.query[self.key]:
            case None:
                return QueryExists(self.key)
            case actual if actual == self.value:
                return None
            case actual:
                return QueryEq(self.key, actual)


@dataclass(frozen=True, slots=True)
class FragmentEq(_Variant):
    """Fragment is present and equals ``value``."""

    value: str

    def validate(self, request: Request) -> Matcher | None:
        match request.fragment:
            case None:
                return FragmentMiss()
            case actual if actual == self.value:
                return None
            case actual:
                return FragmentEq(actual)


@dataclass(frozen=True, slots=True)
class FragmentMiss(_Variant):
    """Request has no fragment."""

    def validate(self, request: Request) -> Matcher | None:
        match request.fragment:
            case None:
                return None
            case actual:
                return FragmentEq(actual)


@dataclass(frozen=True, slots=True)
class HeaderExists(_Variant):
    """Header key is present (exact key match)."""

    key: str

    def validate(self, request: Request) -> Matcher | None:
        if self.key in request.headers:
            return None
        return HeaderMiss(self.key)


@dataclass(frozen=True, slots=True)
class HeaderMiss(_Variant):
    """Header key is absent (exact key match)."""

    key: str

    def validate(self, request: Request) -> Matcher | None:
        if self.key not in request.headers:
            return None
        return HeaderExists(self.key)


@dataclass(frozen=True, slots=True)
class HeaderEq(_Variant):
    """Header key is present and its value equals ``value`` exactly."""

    key: str
    value: str

    def validate(self, request: Request) -> Matcher | None:
        match request.headers.get(self.key):
            case None:
                return HeaderMiss(self.key)
            case actual if actual == self.value:
                return None
            case actual:
                return HeaderEq(self.key, actual)


@dataclass(frozen=True, slots=True)
class BodyMiss(_Variant):
    """Request has no body."""

    def validate(self, request: Request) -> Matcher | None:
        match request.body:
            case None:
                return None
            case actual:
                return BodyEq(actual)


@dataclass(frozen=True, slots=True)
class BodyEq(_Variant):
    """Body is present and equals ``value``."""

    value: str

    def validate(self, request: Request) -> Matcher | None:
        match request.body:
            case None:
                return BodyMiss()
            case actual if actual == self.value:
                return None
            case actual:
                return BodyEq(actual)


# Closed union of rule kinds, also used as the diagnostic type.
type Matcher = (
    Method
    | Path
    | QueryExists
    | QueryMiss
    | QueryEq
    | FragmentEq
    | FragmentMiss
    | HeaderExists
    | HeaderMiss
    | HeaderEq
    | BodyMiss
    | BodyEq
)

# Runtime counterpart of the union, for isinstance checks.
MATCHER_TYPES: tuple[type, ...] = (
    Method,
    Path,
    QueryExists,
    QueryMiss,
    QueryEq,
    FragmentEq,
    FragmentMiss,
    HeaderExists,
    HeaderMiss,
    HeaderEq,
    BodyMiss,
    BodyEq,
)
