"""Shared utility functions."""

import math
from typing import Any


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    """True for ints and floats, excluding bools and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_object(value: Any) -> bool:
    """True only for plain dicts (not lists, strings or other mappings)."""
    return type(value) is dict


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))
