# -*- coding: utf-8 -*-
"""Location: ./fragjson/resolver.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Index resolution.

Converts a signed index found in the encoded data into a concrete fragment
table slot. Non-negative indices are absolute; negative indices count back
from the end of the table, like Python slicing.

Examples:
    >>> resolve_index(0, 3)
    0
    >>> resolve_index(-1, 3)
    2
    >>> resolve_index(2.0, 3)
    2
"""

# Standard
import math
from typing import Any

# First-Party
from fragjson.exceptions import IndexOutOfRangeError, NonIntegerIndexError


def as_index(raw_number: Any) -> int:
    """Coerce a JSON number to an integer index.

    Args:
        raw_number: Value taken from the encoded data.

    Returns:
        int: The whole-number value.

    Raises:
        NonIntegerIndexError: If the value is not a finite whole number.

    Examples:
        >>> as_index(7)
        7
        >>> as_index(-3.0)
        -3
        >>> as_index(1.5)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.NonIntegerIndexError: Index 1.5 is not a whole number
        >>> as_index(True)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.NonIntegerIndexError: Index True is not a number
    """
    if isinstance(raw_number, bool) or not isinstance(raw_number, (int, float)):
        raise NonIntegerIndexError(f"Index {raw_number!r} is not a number")
    if isinstance(raw_number, float):
        if not math.isfinite(raw_number) or not raw_number.is_integer():
            raise NonIntegerIndexError(f"Index {raw_number!r} is not a whole number")
        return int(raw_number)
    return raw_number


def resolve_index(raw_number: Any, table_len: int) -> int:
    """Resolve a signed index against a table of ``table_len`` slots.

    Args:
        raw_number: Index as it appears in the encoded data.
        table_len: Current fragment table length.

    Returns:
        int: Concrete slot index in ``[0, table_len)``.

    Raises:
        IndexOutOfRangeError: If the index lands outside the table.
        NonIntegerIndexError: If the index is not a whole number.

    Examples:
        >>> resolve_index(-3, 3)
        0
        >>> resolve_index(3, 3)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.IndexOutOfRangeError: Index 3 out of range for table of length 3 (index=3)
        >>> resolve_index(-4, 3)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.IndexOutOfRangeError: Index -4 out of range for table of length 3 (index=-4)
    """
    index = as_index(raw_number)
    concrete = index if index >= 0 else table_len + index
    if not 0 <= concrete < table_len:
        raise IndexOutOfRangeError(f"Index {index} out of range for table of length {table_len}", index=index)
    return concrete
