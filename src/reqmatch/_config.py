"""Config parsing — dict (JSON/YAML shape) → expectations and requests.

Config-driven construction path:
  dict → parse_matchers_config() → Matchers
  dict → parse_request_config() → Request

Each expectation entry is a dict with a ``type`` discriminant plus the
fields that kind carries:

| type           | fields       | runtime type  |
|----------------|--------------|---------------|
| method         | value        | Method        |
| path           | value        | Path          |
| query_exists   | key          | QueryExists   |
| query_miss     | key          | QueryMiss     |
| query_eq       | key, value   | QueryEq       |
| fragment_eq    | value        | FragmentEq    |
| fragment_miss  | —            | FragmentMiss  |
| header_exists  | key          | HeaderExists  |
| header_miss    | key          | HeaderMiss    |
| header_eq      | key, value   | HeaderEq      |
| body_miss      | —            | BodyMiss      |
| body_eq        | value        | BodyEq        |

dump_expectation() is the inverse of parse_expectation(), so a diagnostic
can be written back out as a corrected expectation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from reqmatch._expectation import (
    BodyEq,
    BodyMiss,
    FragmentEq,
    FragmentMiss,
    HeaderEq,
    HeaderExists,
    HeaderMiss,
    Method,
    Path,
    QueryEq,
    QueryExists,
    QueryMiss,
)
from reqmatch._matchers import MatcherError, Matchers
from reqmatch._request import parse

if TYPE_CHECKING:
    from reqmatch._expectation import Matcher
    from reqmatch._request import Request

logger = logging.getLogger("reqmatch")

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_EXPECTATIONS = 256
MAX_VALUE_LENGTH = 8192

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigParseError(Exception):
    """Error parsing a config dict into expectations or a request."""


class TooManyExpectationsError(MatcherError):
    """Config has too many expectations (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many expectations: {count} exceeds maximum {max_}")


class ValueTooLongError(MatcherError):
    """A key or value exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"value length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Kind table
# ═══════════════════════════════════════════════════════════════════════════════

# type discriminant → (variant class, required fields in constructor order)
_KINDS: dict[str, tuple[type, tuple[str, ...]]] = {
    "method": (Method, ("value",)),
    "path": (Path, ("value",)),
    "query_exists": (QueryExists, ("key",)),
    "query_miss": (QueryMiss, ("key",)),
    "query_eq": (QueryEq, ("key", "value")),
    "fragment_eq": (FragmentEq, ("value",)),
    "fragment_miss": (FragmentMiss, ()),
    "header_exists": (HeaderExists, ("key",)),
    "header_miss": (HeaderMiss, ("key",)),
    "header_eq": (HeaderEq, ("key", "value")),
    "body_miss": (BodyMiss, ()),
    "body_eq": (BodyEq, ("value",)),
}

_TYPE_NAMES: dict[type, str] = {cls: name for name, (cls, _) in _KINDS.items()}

# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → runtime types)
# ═══════════════════════════════════════════════════════════════════════════════


def parse_matchers_config(data: dict[str, Any]) -> Matchers:
    """Parse a dict into Matchers.

    This is the main entry point for config loading. Expects
    ``{"expectations": [ {...}, ... ]}``.

    Raises:
        ConfigParseError: If the dict is malformed.
        TooManyExpectationsError: More than MAX_EXPECTATIONS entries.
        ValueTooLongError: A key or value exceeds MAX_VALUE_LENGTH.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw = data.get("expectations")
    if raw is None:
        msg = "missing required field 'expectations'"
        raise ConfigParseError(msg)
    if not isinstance(raw, list):
        msg = f"'expectations' must be a list, got {type(raw).__name__}"
        raise ConfigParseError(msg)
    if len(raw) > MAX_EXPECTATIONS:
        raise TooManyExpectationsError(len(raw), MAX_EXPECTATIONS)

    matchers = Matchers(matchers=tuple(parse_expectation(entry) for entry in raw))
    logger.debug("loaded %d expectations", len(matchers))
    return matchers


def parse_expectation(data: dict[str, Any]) -> Matcher:
    """Parse a single expectation entry.

    Uses the 'type' discriminant; see the module table for the fields.
    """
    if not isinstance(data, dict):
        msg = f"expectation must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    kind = data.get("type")
    if kind is None:
        msg = "expectation missing required field 'type'"
        raise ConfigParseError(msg)
    if kind not in _KINDS:
        expected = sorted(_KINDS)
        msg = f"unknown expectation type: {kind!r} (expected one of {expected})"
        raise ConfigParseError(msg)

    cls, required = _KINDS[kind]
    args = [_require_str(data, name, kind) for name in required]
    return cls(*args)


def parse_request_config(data: dict[str, Any]) -> Request:
    """Parse a request description dict.

    All fields are optional: ``uri`` (parsed with parse()), ``method``,
    ``headers`` (dict of str → str) and ``body``.
    """
    if not isinstance(data, dict):
        msg = f"request must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    uri = data.get("uri", "/")
    if not isinstance(uri, str):
        msg = f"request 'uri' must be a string, got {type(uri).__name__}"
        raise ConfigParseError(msg)
    request = parse(uri)

    if "method" in data:
        request = request.with_method(_require_str(data, "method", "request"))

    headers = data.get("headers", {})
    if not isinstance(headers, dict):
        msg = f"request 'headers' must be a dict, got {type(headers).__name__}"
        raise ConfigParseError(msg)
    for key, value in headers.items():
        if not isinstance(key, str) or not isinstance(value, str):
            msg = f"request header {key!r} must map a string to a string"
            raise ConfigParseError(msg)
        request = request.with_header(key, value)

    if data.get("body") is not None:
        request = request.with_body(_require_str(data, "body", "request"))

    return request


# ═══════════════════════════════════════════════════════════════════════════════
# Dumping (runtime types → dict)
# ═══════════════════════════════════════════════════════════════════════════════


def dump_expectation(matcher: Matcher) -> dict[str, str]:
    """Convert an expectation variant back into its config dict."""
    kind = _TYPE_NAMES.get(type(matcher))
    if kind is None:
        msg = f"not an expectation variant: {type(matcher).__name__}"
        raise MatcherError(msg)

    _, names = _KINDS[kind]
    out = {"type": kind}
    for name in names:
        out[name] = getattr(matcher, name)
    return out


def dump_matchers(matchers: Matchers) -> dict[str, list[dict[str, str]]]:
    """Convert Matchers into the dict accepted by parse_matchers_config()."""
    return {"expectations": [dump_expectation(m) for m in matchers]}


def _require_str(data: dict[str, Any], name: str, owner: str) -> str:
    if name not in data:
        msg = f"{owner} missing required field {name!r}"
        raise ConfigParseError(msg)
    value = data[name]
    if not isinstance(value, str):
        msg = f"{owner} field {name!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    if len(value) > MAX_VALUE_LENGTH:
        raise ValueTooLongError(len(value), MAX_VALUE_LENGTH)
    return value
