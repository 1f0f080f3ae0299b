"""Builder of JSON:API request URLs."""

import math
from typing import Optional, Sequence, Union
from urllib.parse import quote

from .parameters import FieldParameter, FilterParameter, SortParameter

# Characters kept as they are by JavaScript ``encodeURI``
_ENCODE_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def encode_uri(uri: str) -> str:
    return quote(uri, safe=_ENCODE_URI_SAFE)


def _separate_by_comma(values: Union[str, Sequence[str]]) -> str:
    if isinstance(values, (list, tuple)):
        return ",".join(str(value) for value in values)
    return str(values)


class QueryBuilder:
    """
    Builds URLs for reading JSON:API resources.

    Usage:
        QueryBuilder("articles").with_includes("author").with_pagination(0, 10).index()
    """

    def __init__(self, resource_type: str):
        self.type = resource_type
        self.fields: Optional[Sequence[FieldParameter]] = None
        self.filters: Optional[Sequence[FilterParameter]] = None
        self.sorts: Optional[Sequence[SortParameter]] = None
        self.includes: Optional[Sequence[str]] = None
        self.offset: Optional[int] = None
        self.limit: Optional[int] = None
        self._is_encode_uri_enabled = True

    def only_fields(self, *fields: FieldParameter) -> "QueryBuilder":
        self.fields = fields
        return self

    def with_filters(self, *filters: FilterParameter) -> "QueryBuilder":
        self.filters = filters
        return self

    def with_sorts(self, *sorts: SortParameter) -> "QueryBuilder":
        self.sorts = sorts
        return self

    def with_includes(self, *relationships: str) -> "QueryBuilder":
        self.includes = relationships
        return self

    def with_pagination(self, offset: float, limit: float) -> "QueryBuilder":
        """Set pagination. Negative offset, non-positive limit or a non-finite value removes it."""
        if not (math.isfinite(offset) and math.isfinite(limit)):
            self.offset, self.limit = None, None
            return self

        offset = max(-1, math.floor(offset))
        limit = max(0, math.floor(limit))

        if offset >= 0 and limit > 0:
            self.offset, self.limit = offset, limit
        else:
            self.offset, self.limit = None, None

        return self

    def enable_encode_uri(self) -> "QueryBuilder":
        self._is_encode_uri_enabled = True
        return self

    def disable_encode_uri(self) -> "QueryBuilder":
        self._is_encode_uri_enabled = False
        return self

    def is_uri_encoding_enabled(self) -> bool:
        return self._is_encode_uri_enabled

    def read(self, index, relationship: str = None) -> str:
        """URL of a single resource or its relationship. Only fields are added."""
        tail = f"/{index}" if relationship is None else f"/{index}/{relationship}"
        result = f"/{self.type}{tail}{self._build_parameters(False)}"

        return encode_uri(result) if self.is_uri_encoding_enabled() else result

    def index(self) -> str:
        """URL of the resource collection with every parameter."""
        result = f"/{self.type}{self._build_parameters(True)}"

        return encode_uri(result) if self.is_uri_encoding_enabled() else result

    def _build_parameters(self, include_non_fields: bool) -> str:
        params = []

        if self.fields:
            params.extend(
                f"fields[{field.type}]={_separate_by_comma(field.fields)}" for field in self.fields
            )

        if include_non_fields:
            for item in self.filters or ():
                prefix = f"filter[{item.field}][{item.operation}]"
                params.append(prefix if item.parameters is None else f"{prefix}={_separate_by_comma(item.parameters)}")

            if self.sorts:
                sorts = ",".join(f"{'' if sort.is_ascending else '-'}{sort.field}" for sort in self.sorts)
                params.append(f"sort={sorts}")

            if self.includes:
                params.append(f"include={_separate_by_comma(list(self.includes))}")

            if self.offset is not None and self.limit is not None:
                params.append(f"page[offset]={self.offset}&page[limit]={self.limit}")

        return f"?{'&'.join(params)}" if params else ""
