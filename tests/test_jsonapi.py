"""Tests for JSON:API query building and parsing."""

import pytest

from whoa.exceptions import InvalidQueryError
from whoa.jsonapi import (
    FieldParameter,
    FilterParameter,
    QueryBuilder,
    QueryParser,
    SortParameter,
    encode_uri,
)


class TestQueryBuilder:
    """Building resource URLs."""

    def test_plain_index(self):
        assert QueryBuilder("articles").index() == "/articles"

    def test_all_parameters(self):
        url = (
            QueryBuilder("articles")
            .only_fields(FieldParameter("articles", ["title", "body"]), FieldParameter("people", "name"))
            .with_filters(
                FilterParameter("title", "like", ["%news%"]),
                FilterParameter("deleted_at", "is-null"),
            )
            .with_sorts(SortParameter("created_at", is_ascending=False), SortParameter("title"))
            .with_includes("author", "comments.author")
            .with_pagination(20, 10)
            .disable_encode_uri()
            .index()
        )

        assert url == (
            "/articles?fields[articles]=title,body&fields[people]=name"
            "&filter[title][like]=%news%&filter[deleted_at][is-null]"
            "&sort=-created_at,title"
            "&include=author,comments.author"
            "&page[offset]=20&page[limit]=10"
        )

    def test_encoded_index(self):
        url = QueryBuilder("articles").only_fields(FieldParameter("articles", "title")).index()

        assert url == "/articles?fields%5Barticles%5D=title"

    def test_read_adds_only_fields(self):
        builder = (
            QueryBuilder("articles")
            .only_fields(FieldParameter("articles", ["title"]))
            .with_includes("author")
            .with_pagination(0, 10)
            .disable_encode_uri()
        )

        assert builder.read(1) == "/articles/1?fields[articles]=title"
        assert builder.read(1, "author") == "/articles/1/author?fields[articles]=title"

    def test_read_without_parameters(self):
        assert QueryBuilder("articles").read("abc") == "/articles/abc"

    def test_pagination_is_floored(self):
        url = QueryBuilder("articles").with_pagination(2.9, 10.2).disable_encode_uri().index()

        assert url == "/articles?page[offset]=2&page[limit]=10"

    @pytest.mark.parametrize("offset,limit", [
        (-1, 10), (0, 0), (5, -3),
        (float("nan"), 10), (0, float("nan")), (float("inf"), 10), (0, float("inf")), (0, float("-inf")),
    ])
    def test_invalid_pagination_is_dropped(self, offset, limit):
        builder = QueryBuilder("articles").with_pagination(10, 10).with_pagination(offset, limit)

        assert builder.offset is None
        assert builder.limit is None
        assert builder.index() == "/articles"

    def test_encoding_toggle(self):
        builder = QueryBuilder("articles")
        assert builder.is_uri_encoding_enabled()

        builder.disable_encode_uri()
        assert not builder.is_uri_encoding_enabled()

        builder.enable_encode_uri()
        assert builder.is_uri_encoding_enabled()

    def test_encode_uri_keeps_reserved_characters(self):
        assert encode_uri("/a b?x=1,2&y=[z]") == "/a%20b?x=1,2&y=%5Bz%5D"


class TestQueryParser:
    """Parsing request query parameters."""

    def test_defaults(self):
        parsed = QueryParser().parse("")

        assert parsed.fields == {}
        assert parsed.filters == []
        assert parsed.sorts == []
        assert parsed.includes == []
        assert parsed.offset == 0
        assert parsed.limit == 20

    def test_all_parameters(self):
        parsed = QueryParser().parse(
            "fields[articles]=title,body&include=author,comments"
            "&sort=-created_at,title&page[offset]=10&page[limit]=5"
            "&filter[id][in]=1,2&filter[title]=abc"
        )

        assert parsed.fields == {"articles": ["title", "body"]}
        assert parsed.includes == ["author", "comments"]
        assert parsed.sorts == [SortParameter("created_at", False), SortParameter("title", True)]
        assert parsed.offset == 10
        assert parsed.limit == 5
        assert parsed.filters == [
            FilterParameter("id", "in", ["1", "2"]),
            FilterParameter("title", "eq", ["abc"]),
        ]

    def test_leading_question_mark(self):
        assert QueryParser().parse("?include=author").includes == ["author"]

    def test_filter_without_value(self):
        parsed = QueryParser().parse("filter[deleted_at][is-null]=")

        assert parsed.filters == [FilterParameter("deleted_at", "is-null", None)]

    def test_mapping_input(self):
        parsed = QueryParser().parse({"include": "author", "page[limit]": "3"})

        assert parsed.includes == ["author"]
        assert parsed.limit == 3

    def test_pairs_input(self):
        parsed = QueryParser().parse([("include", "author"), ("include", "comments")])

        assert parsed.includes == ["author", "comments"]

    def test_unknown_parameters_are_ignored(self):
        parsed = QueryParser().parse("foo=bar&page[size]=3")

        assert parsed.limit == 20

    def test_limit_above_maximum(self):
        with pytest.raises(InvalidQueryError) as exc_info:
            QueryParser(max_page_limit=100).parse("page[limit]=500")

        assert exc_info.value.errors == [("page[limit]", "The value should be between 1 and 100.")]
        assert exc_info.value.status_code == 400

    def test_negative_offset(self):
        with pytest.raises(InvalidQueryError) as exc_info:
            QueryParser().parse("page[offset]=-1")

        assert exc_info.value.errors == [("page[offset]", "The value should be more than -1.")]

    def test_fractional_offset(self):
        with pytest.raises(InvalidQueryError) as exc_info:
            QueryParser().parse("page[offset]=1.5")

        assert exc_info.value.errors == [("page[offset]", "The value should be an integer.")]

    def test_errors_are_collected(self):
        with pytest.raises(InvalidQueryError) as exc_info:
            QueryParser().parse("fields[]=title&page[offset]=abc&page[limit]=0")

        names = [name for name, _ in exc_info.value.errors]
        assert names == ["fields[]", "page[offset]", "page[limit]"]
        assert "fields[]: Resource type is required." in str(exc_info.value)

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            QueryParser(max_page_limit=10, default_page_limit=20)

        with pytest.raises(ValueError):
            QueryParser(default_page_limit=0)
