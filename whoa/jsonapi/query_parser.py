"""Parser of JSON:API query parameters."""

import logging
import re
from typing import Iterable, List, Mapping, Tuple, Union
from urllib.parse import parse_qsl

from whoa.exceptions import InvalidQueryError
from whoa.validation import NumericBetween, NumericMoreThan, to_number
from .parameters import FilterParameter, ParsedQuery, SortParameter

logger = logging.getLogger(__name__)

PARAM_FIELDS = "fields"
PARAM_FILTER = "filter"
PARAM_SORT = "sort"
PARAM_INCLUDE = "include"
PARAM_PAGE = "page"
PARAM_PAGE_OFFSET = "offset"
PARAM_PAGE_LIMIT = "limit"

DEFAULT_OPERATION = "eq"

_KEY_PATTERN = re.compile(r"^(?P<name>[^\[\]]+)(?:\[(?P<first>[^\[\]]*)\])?(?:\[(?P<second>[^\[\]]*)\])?$")


def _split_by_comma(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class QueryParser:
    """
    Parses ``fields``, ``filter``, ``sort``, ``include`` and ``page`` parameters.

    Invalid parameters are collected and reported together with
    :class:`~whoa.exceptions.InvalidQueryError`.
    """

    def __init__(self, max_page_limit: int = 100, default_page_limit: int = 20):
        if default_page_limit <= 0 or max_page_limit < default_page_limit:
            raise ValueError("Page limits must be positive and default must not exceed maximum.")

        self.max_page_limit = max_page_limit
        self.default_page_limit = default_page_limit
        self._offset_rule = NumericMoreThan(-1)
        self._limit_rule = NumericBetween(1, max_page_limit)

    def parse(self, query: Union[str, Mapping, Iterable[Tuple[str, str]]]) -> ParsedQuery:
        result = ParsedQuery(limit=self.default_page_limit)
        errors = []

        for key, value in self._items(query):
            match = _KEY_PATTERN.match(key)
            if match is None:
                continue
            name, first, second = match.group("name", "first", "second")

            if name == PARAM_FIELDS:
                if not first or second is not None:
                    errors.append((key, "Resource type is required."))
                    continue
                result.fields[first] = _split_by_comma(value)
            elif name == PARAM_FILTER:
                if not first:
                    errors.append((key, "Filter field is required."))
                    continue
                operation = second if second else DEFAULT_OPERATION
                parameters = _split_by_comma(value) if value != "" else None
                result.filters.append(FilterParameter(first, operation, parameters))
            elif name == PARAM_SORT and first is None:
                for item in value.split(","):
                    item = item.strip()
                    field = item[1:] if item[:1] in ("-", "+") else item
                    if not field:
                        errors.append((key, "Sort field is required."))
                        continue
                    result.sorts.append(SortParameter(field, not item.startswith("-")))
            elif name == PARAM_INCLUDE and first is None:
                result.includes.extend(_split_by_comma(value))
            elif name == PARAM_PAGE and first == PARAM_PAGE_OFFSET:
                error = self._offset_rule.validate(to_number(value))
                if error is None and float(value).is_integer():
                    result.offset = int(float(value))
                else:
                    errors.append((key, error.message if error else "The value should be an integer."))
            elif name == PARAM_PAGE and first == PARAM_PAGE_LIMIT:
                error = self._limit_rule.validate(to_number(value))
                if error is None and float(value).is_integer():
                    result.limit = int(float(value))
                else:
                    errors.append((key, error.message if error else "The value should be an integer."))

        if errors:
            logger.debug(f"Invalid query parameters: {errors}")
            raise InvalidQueryError(errors)

        return result

    @staticmethod
    def _items(query) -> List[Tuple[str, str]]:
        if isinstance(query, str):
            return parse_qsl(query.lstrip("?"), keep_blank_values=True)
        if hasattr(query, "multi_items"):
            return list(query.multi_items())
        if isinstance(query, Mapping):
            return list(query.items())
        return list(query)
