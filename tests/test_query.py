"""Tests for apirouter.http.query — QueryParams."""

from apirouter.http.query import QueryParams


class TestQueryParams:
    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.get("x") is None

    def test_single_value(self) -> None:
        q = QueryParams("page=2")
        assert q["page"] == "2"

    def test_bytes_input(self) -> None:
        q = QueryParams(b"page=2")
        assert q["page"] == "2"
        assert q.raw == "page=2"

    def test_multiple_values(self) -> None:
        q = QueryParams("tag=a&tag=b")
        assert q["tag"] == "a"
        assert q.get_list("tag") == ["a", "b"]

    def test_blank_values_kept(self) -> None:
        q = QueryParams("flag=&x=1")
        assert "flag" in q
        assert q["flag"] == ""

    def test_percent_decoding(self) -> None:
        q = QueryParams("q=hello%20world")
        assert q["q"] == "hello world"

    def test_get_default(self) -> None:
        assert QueryParams("a=1").get("b", "fallback") == "fallback"
