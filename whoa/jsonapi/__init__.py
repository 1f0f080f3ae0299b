"""JSON:API query building and parsing."""

from .parameters import FieldParameter, FilterParameter, SortParameter, ParsedQuery
from .query_builder import QueryBuilder, encode_uri
from .query_parser import QueryParser

__all__ = [
    "FieldParameter",
    "FilterParameter",
    "SortParameter",
    "ParsedQuery",
    "QueryBuilder",
    "QueryParser",
    "encode_uri",
]
