"""Tests for the Request model, parser, builders and rendering."""

from __future__ import annotations

import pytest

from reqmatch import Request, RequestBuilder, parse


class TestParse:
    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("", Request()),
            ("/", Request()),
            ("   ", Request()),
            ("/some/path", Request(path="/some/path")),
            ("some/path", Request(path="/some/path")),
            ("/path?key=value", Request(path="/path", query={"key": "value"})),
            (
                "/path?key=value#some-hash",
                Request(path="/path", query={"key": "value"}, fragment="some-hash"),
            ),
            ("?key=value&empty_key", Request(query={"key": "value", "empty_key": None})),
            ("  /trimmed?a=1  ", Request(path="/trimmed", query={"a": "1"})),
        ],
        ids=[
            "empty",
            "root",
            "whitespace",
            "path",
            "path_without_slash",
            "query",
            "query_fragment",
            "query_only",
            "surrounding_whitespace",
        ],
    )
    def test_parse(self, uri: str, expected: Request) -> None:
        assert parse(uri) == expected, f"{uri!r} should parse into {expected!r}"

    def test_path_query_fragment(self) -> None:
        request = parse("/path?key=value#hash")
        assert request.path == "/path"
        assert request.query == {"key": "value"}
        assert request.fragment == "hash"
        assert request.method == "GET"
        assert request.headers == {}
        assert request.body is None

    def test_empty_fragment_is_absent(self) -> None:
        assert parse("/path#").fragment is None

    def test_fragment_keeps_question_mark(self) -> None:
        request = parse("/path#a?b=c")
        assert request.fragment == "a?b=c"
        assert request.query == {}

    def test_empty_query_string(self) -> None:
        request = parse("/path?")
        assert request.path == "/path"
        assert request.query == {}

    def test_empty_value_is_none(self) -> None:
        assert parse("/?key=").query == {"key": None}

    def test_value_splits_on_first_equals(self) -> None:
        assert parse("/?expr=a=b").query == {"expr": "a=b"}

    def test_duplicate_key_last_wins(self) -> None:
        assert parse("/?key=first&key=second").query == {"key": "second"}

    def test_duplicate_flag_overwrites_value(self) -> None:
        assert parse("/?key=value&key").query == {"key": None}

    def test_empty_pairs_map_to_empty_key(self) -> None:
        assert parse("/?&").query == {"": None}

    def test_value_without_key(self) -> None:
        assert parse("/?=v").query == {"": "v"}

    def test_only_one_leading_slash_stripped(self) -> None:
        assert parse("//double").path == "//double"

    def test_classmethod_alias(self) -> None:
        assert Request.parse("/a?b") == parse("/a?b")


class TestRequestDefaults:
    def test_default(self) -> None:
        request = Request()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.query == {}
        assert request.fragment is None
        assert request.headers == {}
        assert request.body is None

    def test_path_normalized_to_leading_slash(self) -> None:
        assert Request(path="api").path == "/api"
        assert Request(path="").path == "/"

    def test_dicts_copied_on_construction(self) -> None:
        query: dict[str, str | None] = {"a": "1"}
        headers = {"k": "v"}
        request = Request(query=query, headers=headers)
        query["b"] = None
        headers["x"] = "y"
        assert request.query == {"a": "1"}
        assert request.headers == {"k": "v"}

    def test_frozen(self) -> None:
        request = Request()
        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]


class TestWithMethods:
    def test_each_with_changes_one_field(self) -> None:
        base = parse("/base?q=1#frag").with_header("h", "v").with_body("b")

        assert base.with_method("POST") == Request(
            method="POST", path="/base", query={"q": "1"}, fragment="frag",
            headers={"h": "v"}, body="b",
        )
        assert base.with_path("/other").path == "/other"
        assert base.with_path("/other").query == {"q": "1"}
        assert base.with_fragment(None).fragment is None
        assert base.with_body(None).body is None
        assert base.with_body(None).headers == {"h": "v"}

    def test_with_does_not_mutate_original(self) -> None:
        base = Request()
        changed = base.with_header("k", "v").with_query("flag")
        assert base.headers == {}
        assert base.query == {}
        assert changed.headers == {"k": "v"}
        assert changed.query == {"flag": None}

    def test_with_header_replaces_existing(self) -> None:
        request = Request().with_header("k", "old").with_header("k", "new")
        assert request.headers == {"k": "new"}

    def test_with_query_value(self) -> None:
        assert Request().with_query("k", "v").query == {"k": "v"}

    def test_with_path_normalizes(self) -> None:
        assert Request().with_path("nested/path").path == "/nested/path"


class TestRequestBuilder:
    def test_build_default(self) -> None:
        assert RequestBuilder().build() == Request()

    def test_setters_mutate_in_place_and_chain(self) -> None:
        builder = RequestBuilder()
        returned = builder.set_method("PATCH")
        assert returned is builder

        request = (
            builder.set_path("/items/1")
            .set_query("expand")
            .set_query("limit", "10")
            .set_header("Accept", "application/json")
            .set_fragment("top")
            .set_body("{}")
            .build()
        )
        assert request == Request(
            method="PATCH",
            path="/items/1",
            query={"expand": None, "limit": "10"},
            fragment="top",
            headers={"Accept": "application/json"},
            body="{}",
        )

    def test_built_request_is_detached(self) -> None:
        builder = RequestBuilder().set_header("a", "1")
        first = builder.build()
        builder.set_header("b", "2")
        assert first.headers == {"a": "1"}
        assert builder.build().headers == {"a": "1", "b": "2"}

    def test_from_request(self) -> None:
        original = parse("/x?y=1#z").with_method("DELETE").with_body("gone")
        rebuilt = RequestBuilder.from_request(original).set_body(None).build()
        assert rebuilt == original.with_body(None)
        assert original.body == "gone"


class TestRendering:
    def test_default(self) -> None:
        assert str(Request()) == "[GET /]"

    def test_query_and_fragment(self) -> None:
        assert str(parse("/path?key=value&flag#hash")) == "[GET /path?key=value&flag#hash]"

    def test_headers_and_body(self) -> None:
        request = (
            parse("/api")
            .with_method("POST")
            .with_header("Content-Type", "application/json")
            .with_header("X-Id", "7")
            .with_body('{"a": 1}')
        )
        assert str(request) == (
            '[POST /api | with headers {"Content-Type" = "application/json", "X-Id" = "7"}'
            ' | with body "{\\"a\\": 1}"]'
        )

    def test_body_only(self) -> None:
        assert str(Request().with_body("hi")) == '[GET / | with body "hi"]'

    def test_empty_body_rendered(self) -> None:
        assert str(Request().with_body("")) == '[GET / | with body ""]'

    def test_method_verbatim(self) -> None:
        assert str(Request(method="post")) == "[post /]"

    def test_newlines_escaped_in_headers_and_body(self) -> None:
        request = Request().with_body('{\n  "a": 1\n}').with_header("X", "a\r\nb")
        rendered = str(request)
        assert "\n" not in rendered
        assert "\r" not in rendered
        assert rendered == r'[GET / | with headers {"X" = "a\r\nb"} | with body "{\n  \"a\": 1\n}"]'

    def test_other_control_characters_escaped(self) -> None:
        assert str(Request().with_body("a\tb\x00\x1b\x7f")) == r'[GET / | with body "a\tb\x00\x1b\x7f"]'

    def test_unquoted_parts_stay_on_one_line(self) -> None:
        request = Request().with_path("/a\nb").with_query("k", "v\r").with_fragment("f\n")
        assert str(request) == r"[GET /a\nb?k=v\r#f\n]"

    def test_non_ascii_kept(self) -> None:
        assert str(Request().with_body("café ✓")) == '[GET / | with body "café ✓"]'
