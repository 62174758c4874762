"""Tests for warbler.http.request — frozen Request with async body access."""

import dataclasses

import pytest

from warbler.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/mypage"), _make_receive())
        assert req.method == "POST"
        assert req.path == "/mypage"
        assert req.path_params == {}

    def test_query(self) -> None:
        req = Request.from_asgi(_make_scope(query_string=b"q=a&q=b&page=2"), _make_receive())
        assert req.query["q"] == "a"
        assert req.query.get_list("q") == ["a", "b"]
        assert req.query.get_int("page") == 2

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.method = "POST"  # type: ignore[misc]


class TestWantsJson:
    @pytest.mark.parametrize(
        ("accept", "expected"),
        [
            (b"application/json", True),
            (b"application/json, text/plain", True),
            (b"text/html,application/xhtml+xml,application/json;q=0.9", False),
            (b"*/*", False),
        ],
    )
    def test_accept_header(self, accept: bytes, expected: bool) -> None:
        req = Request.from_asgi(_make_scope(headers=[(b"accept", accept)]), _make_receive())
        assert req.wants_json is expected

    def test_no_accept_header(self) -> None:
        assert Request.from_asgi(_make_scope(), _make_receive()).wants_json is False


class TestBody:
    async def test_body_chunks_joined(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hel", b"lo"))
        assert await req.body() == b"hello"

    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello"))
        assert await req.body() == b"hello"
        assert await req.body() == b"hello"

    async def test_json(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b'{"content": "hi"}'))
        assert await req.json() == {"content": "hi"}

    async def test_empty_json_is_none(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        assert await req.json() is None

    async def test_with_path_params_shares_body(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"payload"))
        assert await req.body() == b"payload"
        routed = req.with_path_params({"action_name": "save"})
        assert routed.path_params == {"action_name": "save"}
        assert await routed.body() == b"payload"
