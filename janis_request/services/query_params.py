"""Filters and sorting criteria -> Janis query string."""
import math
from typing import Any
from urllib.parse import quote

from janis_request.utils import is_array, is_object

# Same unreserved set as JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return "null"
    return str(value)


def encode(value: Any) -> str:
    return quote(_stringify(value), safe=_SAFE_CHARS)


def _is_blank(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value


def _parse_filters(filters: dict) -> str:
    parts: list[str] = []
    for name, value in filters.items():
        key = f"filters[{encode(name)}]"
        if is_array(value) and len(value):
            parts.extend(f"{key}[{index}]={encode(val)}&" for index, val in enumerate(value))
        elif is_object(value) and len(value):
            parts.extend(f"{key}[{encode(sub)}]={encode(val)}&" for sub, val in value.items())
        elif not is_array(value) and not is_object(value) and not _is_blank(value):
            parts.append(f"{key}={encode(value)}&")
    return "".join(parts)


def _parse_sort(sort: dict) -> str:
    entries: list[str] = []
    for name, value in sort.items():
        if is_array(value) and len(value):
            entries.append(
                "".join(f"{encode(name)}[{index}]={encode(val)}&" for index, val in enumerate(value))
            )
        elif not is_array(value) and not _is_blank(value):
            entries.append(f"{encode(name)}={encode(value)}")
    return "&".join(entries)


def parse_query_params(query_params: Any) -> str:
    """Build the query string for a list/get call.

    ``{"filters": {"status": "active"}, "sort": {"sortBy": "createdAt"}}``
    becomes ``?filters[status]=active&sortBy=createdAt``. Filter entries always
    end in ``&``; sort entries are joined by ``&``. Anything that is not a
    non-empty dict (including a string or list ``sort``) contributes nothing.
    """
    if not is_object(query_params) or not query_params:
        return ""

    filters = query_params.get("filters")
    sort = query_params.get("sort")

    parsed_filters = _parse_filters(filters) if is_object(filters) and filters else ""
    parsed_sort = _parse_sort(sort) if is_object(sort) and sort else ""

    if not parsed_filters and not parsed_sort:
        return ""

    return f"?{parsed_filters}{parsed_sort}"
