"""Tests for warbler.http.response — chainable immutable Response."""

import pytest

from warbler.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.status == 200
        assert r.content_type == "text/html; charset=utf-8"
        assert r.headers == ()

    def test_with_status_returns_new(self) -> None:
        r = Response("x")
        r2 = r.with_status(201)
        assert r.status == 200
        assert r2.status == 201

    def test_with_header_appends(self) -> None:
        r = Response().with_header("X-A", "1").with_header("X-B", "2")
        assert r.headers == (("X-A", "1"), ("X-B", "2"))

    def test_header_lookup_case_insensitive(self) -> None:
        r = Response().with_header("Allow", "GET")
        assert r.header("allow") == "GET"
        assert r.header("missing", "-") == "-"

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"

    def test_json(self) -> None:
        assert Response('{"a": 1}').json() == {"a": 1}

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]

