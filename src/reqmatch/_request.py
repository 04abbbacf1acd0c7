"""Request — decoded HTTP-like request used as the matching context.

Holds method, path, query, fragment, headers and body as plain strings.
Headers and query keys are exact-match (no case folding).

Construction paths:
- ``parse("/path?key=value#hash")`` — total parser, never raises
- ``Request().with_method("POST").with_header("k", "v")`` — chained copies
- ``RequestBuilder().set_path("/x").set_body("...").build()`` — in-place setters
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class Request:
    """Immutable request value.

    ``query`` maps each key to its value, or to None when the key was given
    without ``=value``. ``path`` always begins with ``/``. The query and
    header dicts are copied on construction, so later changes to the
    caller's dicts do not leak in. Requests are unhashable.
    """

    method: str = "GET"
    path: str = "/"
    query: dict[str, str | None] = field(default_factory=dict)
    fragment: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            object.__setattr__(self, "path", f"/{self.path}")
        object.__setattr__(self, "query", dict(self.query))
        object.__setattr__(self, "headers", dict(self.headers))

    @classmethod
    def parse(cls, text: str) -> Request:
        """Parse a URI-like string. See :func:`parse`."""
        return parse(text)

    def with_method(self, method: str) -> Request:
        return replace(self, method=method)

    def with_path(self, path: str) -> Request:
        return replace(self, path=path)

    def with_query(self, key: str, value: str | None = None) -> Request:
        """Return a copy with ``key`` set (valueless when ``value`` is None)."""
        return replace(self, query={**self.query, key: value})

    def with_header(self, key: str, value: str) -> Request:
        return replace(self, headers={**self.headers, key: value})

    def with_fragment(self, fragment: str | None) -> Request:
        return replace(self, fragment=fragment)

    def with_body(self, body: str | None) -> Request:
        return replace(self, body=body)

    def __str__(self) -> str:
        """Canonical single-line rendering.

        ``[METHOD PATH[?query][#fragment][ | with headers {...}][ | with body "..."]]``
        """
        out = f"[{_escape(self.method)} {_escape(self.path)}"
        if self.query:
            out += "?" + "&".join(
                _escape(key) if value is None else _escape(f"{key}={value}")
                for key, value in self.query.items()
            )
        if self.fragment is not None:
            out += f"#{_escape(self.fragment)}"
        if self.headers:
            pairs = ", ".join(
                f"{_quote(key)} = {_quote(value)}" for key, value in self.headers.items()
            )
            out += f" | with headers {{{pairs}}}"
        if self.body is not None:
            out += f" | with body {_quote(self.body)}"
        return out + "]"


class RequestBuilder:
    """Mutable builder for Request.

    Each setter changes exactly one field in place and returns the builder,
    so calls can be chained. ``build()`` freezes the current state.
    """

    def __init__(self) -> None:
        self._method = "GET"
        self._path = "/"
        self._query: dict[str, str | None] = {}
        self._fragment: str | None = None
        self._headers: dict[str, str] = {}
        self._body: str | None = None

    @classmethod
    def from_request(cls, request: Request) -> RequestBuilder:
        """Start from an existing request's fields."""
        builder = cls()
        builder._method = request.method
        builder._path = request.path
        builder._query = dict(request.query)
        builder._fragment = request.fragment
        builder._headers = dict(request.headers)
        builder._body = request.body
        return builder

    def set_method(self, method: str) -> RequestBuilder:
        self._method = method
        return self

    def set_path(self, path: str) -> RequestBuilder:
        self._path = path
        return self

    def set_query(self, key: str, value: str | None = None) -> RequestBuilder:
        self._query[key] = value
        return self

    def set_header(self, key: str, value: str) -> RequestBuilder:
        self._headers[key] = value
        return self

    def set_fragment(self, fragment: str | None) -> RequestBuilder:
        self._fragment = fragment
        return self

    def set_body(self, body: str | None) -> RequestBuilder:
        self._body = body
        return self

    def build(self) -> Request:
        """Freeze into a Request. The builder stays usable afterwards."""
        return Request(
            method=self._method,
            path=self._path,
            query=self._query,
            fragment=self._fragment,
            headers=self._headers,
            body=self._body,
        )


def parse(text: str) -> Request:
    """Parse ``['/'] [path] ['?' pair ('&' pair)*] ['#' fragment]`` into a Request.

    Total: every input produces a Request. Missing delimiters fall back to
    defaults, an empty fragment or value becomes None, and a repeated query
    key keeps its last value.

    >>> parse("/path?key=value#hash").query
    {'key': 'value'}
    """
    rest, fragment = _split_once(text.strip().removeprefix("/"), "#")
    path, query_string = _split_once(rest, "?")

    query: dict[str, str | None] = {}
    if query_string is not None:
        for pair in query_string.split("&"):
            key, value = _split_once(pair, "=")
            query[key] = value

    return Request(path=f"/{path}", query=query, fragment=fragment)


def _split_once(text: str, delimiter: str) -> tuple[str, str | None]:
    """Split on the first delimiter; an empty right side maps to None."""
    head, sep, tail = text.partition(delimiter)
    if not sep or not tail:
        return head, None
    return head, tail


_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}
_QUOTED_ESCAPES = {**_ESCAPES, "\\": "\\\\", '"': '\\"'}


def _escape_char(char: str, table: dict[str, str]) -> str:
    if char in table:
        return table[char]
    if char < " " or char == "\x7f":
        return f"\\x{ord(char):02x}"
    return char


def _escape(value: str) -> str:
    """Escape control characters so ``value`` stays on one line."""
    return "".join(_escape_char(char, _ESCAPES) for char in value)


def _quote(value: str) -> str:
    escaped = "".join(_escape_char(char, _QUOTED_ESCAPES) for char in value)
    return f'"{escaped}"'
