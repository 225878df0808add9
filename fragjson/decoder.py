# -*- coding: utf-8 -*-
"""Location: ./fragjson/decoder.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Fragment value decoder.

Expands a raw fragment into a literal JSON value against a fragment table.
In this encoding:

1. Numbers are indices into the table (one level of indirection each)
2. ``["P", idx]`` is a pointer array: it is replaced by the decoded slot
3. Object keys of the form ``_<digits>`` name a table slot holding the key
4. Null, booleans and strings are already literal

Error locations are reported as paths rooted at ``$``: ``[i]`` steps into
an array element, ``.key`` (or ``["key"]``) into an object member, and
``@n`` follows a hop to table slot ``n``.

Examples:
    >>> from fragjson.table import FragmentTable
    >>> table = FragmentTable.build([{"_1": 2}, "name", "alice"])
    >>> FragmentDecoder(table).decode(table.get(0))
    {'name': 'alice'}
    >>> FragmentDecoder(table).decode(["P", -1])
    'alice'
    >>> FragmentDecoder(table).decode([1, None, True])
    ['name', None, True]
"""

# Standard
import re
from typing import Any, Dict, List, Tuple

# First-Party
from fragjson.exceptions import AbsentSlotError, CyclicOrTooDeepReferenceError, FragmentDecodeError, IndexOutOfRangeError, KeyResolutionError
from fragjson.resolver import resolve_index
from fragjson.table import ABSENT, FragmentTable

# Object keys referring to a table slot: underscore followed by ASCII digits
INDIRECT_KEY_RE = re.compile(r"_([0-9]+)")

# First element of a pointer array
POINTER_MARKER = "P"

# Keys that can be shown as ``.key`` in error paths
_PLAIN_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

DEFAULT_MAX_DEPTH = 200


def _is_number(value: Any) -> bool:
    """Check for a JSON number (``bool`` excluded).

    Args:
        value: Candidate value.

    Returns:
        bool: True for ``int`` and ``float`` values.

    Examples:
        >>> _is_number(1), _is_number(1.5), _is_number(True), _is_number("1")
        (True, True, False, False)
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_pointer_array(fragment: Any) -> bool:
    """Check whether ``fragment`` is a ``["P", idx]`` pointer array.

    Args:
        fragment: Raw fragment.

    Returns:
        bool: True for a 2-element list starting with ``"P"`` followed by a number.

    Examples:
        >>> is_pointer_array(["P", 3])
        True
        >>> is_pointer_array(["P", "3"])
        False
        >>> is_pointer_array(["P", 3, 4])
        False
        >>> is_pointer_array(["P", False])
        False
    """
    return isinstance(fragment, list) and len(fragment) == 2 and fragment[0] == POINTER_MARKER and _is_number(fragment[1])


def _member_path(path: str, key: str) -> str:
    """Extend ``path`` with an object member.

    Examples:
        >>> _member_path("$", "name")
        '$.name'
        >>> _member_path("$", "a b")
        '$["a b"]'
    """
    if _PLAIN_KEY_RE.fullmatch(key):
        return f"{path}.{key}"
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'{path}["{escaped}"]'


class FragmentDecoder:
    """Recursive decoder bound to one fragment table.

    The decoder keeps no per-call state, so one instance can decode any
    number of fragments, from any number of threads.

    Attributes:
        table: Fragment table indices are resolved against.
        max_depth: Maximum recursion depth (nesting plus index hops).
        numbers_as_indices: Treat numbers as table indices. When False,
            numbers are returned as literals; pointer arrays and indirect
            keys still resolve.

    Examples:
        >>> from fragjson.table import FragmentTable
        >>> table = FragmentTable.build([1, 0])
        >>> FragmentDecoder(table, max_depth=10).decode(0)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.CyclicOrTooDeepReferenceError: Reference chain exceeds maximum depth 10 (path='$@0@1@0@1@0@1@0@1@0@1@0')
        >>> FragmentDecoder(table, numbers_as_indices=False).decode([7, ["P", 1]])
        [7, 0]
    """

    def __init__(self, table: FragmentTable, max_depth: int = DEFAULT_MAX_DEPTH, numbers_as_indices: bool = True) -> None:
        """Bind the decoder to a table.

        Args:
            table: Completed fragment table.
            max_depth: Maximum recursion depth before failing.
            numbers_as_indices: Whether numbers are indices or literals.

        Raises:
            ValueError: If ``max_depth`` is less than 1.
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.table = table
        self.max_depth = max_depth
        self.numbers_as_indices = numbers_as_indices

    def decode(self, fragment: Any, path: str = "$") -> Any:
        """Fully expand ``fragment``.

        Args:
            fragment: Raw fragment (a table slot or a value nested in one).
            path: Location of ``fragment`` used in error reports.

        Returns:
            Any: Decoded JSON value; containers are always new objects.

        Raises:
            FragmentDecodeError: On any index, key or depth failure.
        """
        return self._decode(fragment, 0, path)

    def resolve_slot(self, raw_index: Any, path: str = "$") -> Any:
        """Resolve ``raw_index`` and return the populated slot it names.

        Args:
            raw_index: Signed index from the encoded data.
            path: Location of the reference, for error reports.

        Returns:
            Any: Raw fragment stored in the slot.

        Raises:
            IndexOutOfRangeError: If the index lands outside the table.
            NonIntegerIndexError: If the index is not a whole number.
            AbsentSlotError: If the slot was never populated.
        """
        return self._fetch(raw_index, path)[1]

    def _fetch(self, raw_index: Any, path: str) -> Tuple[int, Any]:
        try:
            index = resolve_index(raw_index, len(self.table))
        except FragmentDecodeError as exc:
            exc.with_path(path)
            raise
        slot = self.table.get(index)
        if slot is ABSENT:
            raise AbsentSlotError(f"Index {index} refers to an unpopulated slot", index=index, path=path)
        return index, slot

    def _decode(self, fragment: Any, depth: int, path: str) -> Any:
        if depth > self.max_depth:
            raise CyclicOrTooDeepReferenceError(f"Reference chain exceeds maximum depth {self.max_depth}", path=path)

        if fragment is None or isinstance(fragment, (bool, str)):
            return fragment
        if _is_number(fragment):
            if not self.numbers_as_indices:
                return fragment
            index, slot = self._fetch(fragment, path)
            return self._decode(slot, depth + 1, f"{path}@{index}")
        if isinstance(fragment, list):
            if is_pointer_array(fragment):
                index, slot = self._fetch(fragment[1], f"{path}[1]")
                return self._decode(slot, depth + 1, f"{path}@{index}")
            return self._decode_array(fragment, depth, path)
        if isinstance(fragment, dict):
            return self._decode_object(fragment, depth, path)
        raise TypeError(f"Unsupported fragment type {type(fragment).__name__} at {path}")

    def _decode_array(self, fragment: List[Any], depth: int, path: str) -> List[Any]:
        result = []
        for position, element in enumerate(fragment):
            result.append(self._decode(element, depth + 1, f"{path}[{position}]"))
        return result

    def _decode_object(self, fragment: Dict[str, Any], depth: int, path: str) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for raw_key, value in fragment.items():
            key = self.decode_key(raw_key, _member_path(path, raw_key))
            result[key] = self._decode(value, depth + 1, _member_path(path, key))
        return result

    def decode_key(self, raw_key: str, path: str = "$") -> str:
        """Decode an object key, following ``_<digits>`` indirection.

        Args:
            raw_key: Key as it appears in the encoded object.
            path: Location of the key, for error reports.

        Returns:
            str: Literal key text.

        Raises:
            KeyResolutionError: If the referenced slot does not hold a string.
            IndexOutOfRangeError: If the key index lies outside the table.

        Examples:
            >>> from fragjson.table import FragmentTable
            >>> decoder = FragmentDecoder(FragmentTable.build(["id", 5]))
            >>> decoder.decode_key("_0")
            'id'
            >>> decoder.decode_key("plain")
            'plain'
            >>> decoder.decode_key("_1")
            Traceback (most recent call last):
            ...
            fragjson.exceptions.KeyResolutionError: Indirect key '_1' resolved to int, expected a string (index=1, path='$')
        """
        match = INDIRECT_KEY_RE.fullmatch(raw_key)
        if match is None:
            return raw_key
        digits = match.group(1).lstrip("0")
        if len(digits) > len(str(len(self.table))):
            raise IndexOutOfRangeError(f"Indirect key index with {len(digits)} digits is out of range for table of length {len(self.table)}", path=path)
        index = int(digits or "0")
        slot = self.resolve_slot(index, path)
        if not isinstance(slot, str):
            raise KeyResolutionError(f"Indirect key {raw_key!r} resolved to {type(slot).__name__}, expected a string", index=index, path=path)
        return slot
