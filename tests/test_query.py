"""Tests for warbler.http.query — immutable QueryParams."""

from warbler.http.query import QueryParams


class TestQueryParams:
    def test_first_value(self) -> None:
        q = QueryParams(b"page_id=mypage&tag=a&tag=b")
        assert q["page_id"] == "mypage"
        assert q.get_list("tag") == ["a", "b"]

    def test_get_default(self) -> None:
        assert QueryParams().get("missing", "x") == "x"

    def test_blank_values_kept(self) -> None:
        q = QueryParams(b"token=")
        assert "token" in q
        assert q.get("token") == ""

    def test_get_int(self) -> None:
        q = QueryParams(b"page=2&bad=x")
        assert q.get_int("page") == 2
        assert q.get_int("bad", 1) == 1
        assert q.get_int("missing") is None

    def test_to_dict(self) -> None:
        assert QueryParams(b"a=1&a=2&b=3").to_dict() == {"a": "1", "b": "3"}

