# -*- coding: utf-8 -*-
"""Location: ./fragjson/document.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Encoded document driver.

An encoded document is line oriented:

- Line 1: a JSON array, the base fragments (slots 0..n-1)
- Lines 2..N: blank, or ``P<digits>:<json>`` storing a fragment at a slot

The driver parses the lines, builds the fragment table, and decodes slot 0,
which is the document root.

Examples:
    >>> decode_document('[{"_1": 2}, "name", ["P", 3]]', ['P3:"alice"'])
    {'name': 'alice'}
    >>> decode_text('["A", ["B", 2], 3]')
    'A'
    >>> decode_text('[1, 2, 3]\\nP5:"extra"')
    Traceback (most recent call last):
    ...
    fragjson.exceptions.AbsentSlotError: Index 3 refers to an unpopulated slot (index=3, path='$@1@2')
"""

# Standard
import logging
import re
from typing import Any, Iterable, List, Optional

# Third-Party
import orjson
from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt

# First-Party
from fragjson.config import get_settings, Settings
from fragjson.decoder import FragmentDecoder
from fragjson.exceptions import MalformedBaseArrayError, MalformedPointerLineError, MissingRootFragmentError
from fragjson.table import ABSENT, FragmentTable

logger = logging.getLogger(__name__)

# Override line: P<digits>:<json>, no whitespace before the colon
POINTER_LINE_RE = re.compile(r"P([0-9]+):(.*)", re.DOTALL)

# Line number of the first override line (line 1 is the base array)
FIRST_POINTER_LINE = 2


class PointerOverride(BaseModel):
    """A parsed ``P<index>:<fragment>`` line.

    Attributes:
        index: Table slot the fragment is stored at.
        fragment: Parsed raw fragment.
        line_number: 1-based input line the override came from.

    Examples:
        >>> PointerOverride(index=5, fragment="extra", line_number=2)
        PointerOverride(index=5, fragment='extra', line_number=2)
    """

    model_config = ConfigDict(frozen=True)

    index: NonNegativeInt
    fragment: Any
    line_number: PositiveInt


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def parse_base_array(first_line: str) -> List[Any]:
    """Parse the first line into the base fragment list.

    Args:
        first_line: Text of input line 1.

    Returns:
        List[Any]: Base fragments.

    Raises:
        MalformedBaseArrayError: If the line is not a JSON array.

    Examples:
        >>> parse_base_array('[1, "a", null]')
        [1, 'a', None]
        >>> parse_base_array('{"a": 1}')
        Traceback (most recent call last):
        ...
        fragjson.exceptions.MalformedBaseArrayError: Base fragment line must be a JSON array, got object (line_number=1, line='{"a": 1}')
    """
    try:
        base = orjson.loads(first_line)
    except orjson.JSONDecodeError as exc:
        raise MalformedBaseArrayError(f"Base fragment line is not valid JSON: {exc}", line_number=1, line=_strip_eol(first_line)) from exc
    if not isinstance(base, list):
        kind = "object" if isinstance(base, dict) else type(base).__name__
        raise MalformedBaseArrayError(f"Base fragment line must be a JSON array, got {kind}", line_number=1, line=_strip_eol(first_line))
    return base


def parse_pointer_line(line: str, line_number: int, max_table_size: Optional[int] = None) -> Optional[PointerOverride]:
    """Parse one override line.

    Args:
        line: Raw line text (a trailing line terminator is ignored).
        line_number: 1-based input line number, for error reports.
        max_table_size: Reject override indices at or beyond this size.

    Returns:
        Optional[PointerOverride]: The override, or None for a blank line.

    Raises:
        MalformedPointerLineError: If the line is not ``P<digits>:<json>``.

    Examples:
        >>> parse_pointer_line('P12:{"a": 1}', 2).index
        12
        >>> parse_pointer_line('   ', 3) is None
        True
        >>> parse_pointer_line('P 1:2', 4)
        Traceback (most recent call last):
        ...
        fragjson.exceptions.MalformedPointerLineError: Pointer line must have the form P<index>:<json> (line_number=4, line='P 1:2')
    """
    text = _strip_eol(line)
    if not text.strip():
        return None

    match = POINTER_LINE_RE.fullmatch(text)
    if match is None:
        raise MalformedPointerLineError("Pointer line must have the form P<index>:<json>", line_number=line_number, line=text)

    digits = match.group(1).lstrip("0") or "0"
    if max_table_size is not None and len(digits) > len(str(max_table_size)):
        raise MalformedPointerLineError(f"Pointer index exceeds maximum table size {max_table_size}", line_number=line_number, line=text)

    try:
        index = int(digits)
    except ValueError as exc:
        raise MalformedPointerLineError("Pointer index is too large", line_number=line_number, line=text) from exc
    if max_table_size is not None and index >= max_table_size:
        raise MalformedPointerLineError(f"Pointer index {index} exceeds maximum table size {max_table_size}", index=index, line_number=line_number, line=text)

    try:
        fragment = orjson.loads(match.group(2))
    except orjson.JSONDecodeError as exc:
        raise MalformedPointerLineError(f"Pointer fragment is not valid JSON: {exc}", index=index, line_number=line_number, line=text) from exc

    return PointerOverride(index=index, fragment=fragment, line_number=line_number)


def build_table(first_line: str, pointer_lines: Iterable[str], settings: Optional[Settings] = None) -> FragmentTable:
    """Parse all input lines and assemble the fragment table.

    Args:
        first_line: Base array line.
        pointer_lines: Lines following the base array, in input order.
        settings: Decoder settings; the cached settings are used when omitted.

    Returns:
        FragmentTable: Completed table.

    Examples:
        >>> build_table('[0]', ['', 'P2:true'])
        FragmentTable(size=3, absent=1)
    """
    cfg = settings or get_settings()
    base = parse_base_array(first_line)
    overrides = []
    for line_number, line in enumerate(pointer_lines, start=FIRST_POINTER_LINE):
        override = parse_pointer_line(line, line_number, cfg.max_table_size)
        if override is not None:
            overrides.append(override)
    return FragmentTable.build(base, [(override.index, override.fragment) for override in overrides], max_size=cfg.max_table_size)


def decode_table(table: FragmentTable, settings: Optional[Settings] = None) -> Any:
    """Decode the root fragment (slot 0) of an assembled table.

    Args:
        table: Completed fragment table.
        settings: Decoder settings; the cached settings are used when omitted.

    Returns:
        Any: Fully expanded JSON value.

    Raises:
        MissingRootFragmentError: If slot 0 does not exist or was never populated.

    Examples:
        >>> decode_table(FragmentTable.build([]))
        Traceback (most recent call last):
        ...
        fragjson.exceptions.MissingRootFragmentError: Fragment table has no root fragment at index 0 (index=0)
    """
    cfg = settings or get_settings()
    if len(table) == 0 or table.get(0) is ABSENT:
        raise MissingRootFragmentError("Fragment table has no root fragment at index 0", index=0)
    decoder = FragmentDecoder(table, max_depth=cfg.max_depth, numbers_as_indices=cfg.numbers_as_indices)
    return decoder.decode(table.get(0))


def decode_document(first_line: str, pointer_lines: Iterable[str] = (), settings: Optional[Settings] = None) -> Any:
    """Decode an encoded document given as its base line and override lines.

    Args:
        first_line: Base array line.
        pointer_lines: Lines following the base array, in input order.
        settings: Decoder settings; the cached settings are used when omitted.

    Returns:
        Any: Fully expanded JSON value.

    Raises:
        FragmentDecodeError: Any parsing, resolution or depth failure.

    Examples:
        >>> decode_document('[2, null, "two"]')
        'two'
        >>> decode_document('[{"k": [1, -1]}, true, false]')
        {'k': [True, False]}
    """
    table = build_table(first_line, pointer_lines, settings)
    logger.debug(f"Decoding document root with {table!r}")
    result = decode_table(table, settings)
    logger.debug("Document decoded")
    return result


def decode_stream(lines: Iterable[str], settings: Optional[Settings] = None) -> Any:
    """Decode an encoded document from an iterable of lines (e.g. an open file).

    Args:
        lines: Input lines; the first is the base array.
        settings: Decoder settings; the cached settings are used when omitted.

    Returns:
        Any: Fully expanded JSON value.

    Raises:
        MalformedBaseArrayError: If there is no first line.

    Examples:
        >>> decode_stream(iter(['["x"]\\n']))
        'x'
    """
    iterator = iter(lines)
    first_line = next(iterator, None)
    if first_line is None:
        raise MalformedBaseArrayError("Input is empty; expected a base fragment array on line 1", line_number=1)
    return decode_document(first_line, iterator, settings)


def decode_text(text: str, settings: Optional[Settings] = None) -> Any:
    """Decode an encoded document held in a single string.

    Args:
        text: Whole encoded document.
        settings: Decoder settings; the cached settings are used when omitted.

    Returns:
        Any: Fully expanded JSON value.

    Examples:
        >>> decode_text('[["P", 1], {"_2": 3}, "key", "value"]')
        {'key': 'value'}
    """
    return decode_stream(text.split("\n"), settings)
