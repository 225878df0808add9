# -*- coding: utf-8 -*-
"""Location: ./fragjson/exceptions.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Fragment decoding errors.

Every failure raised by the decoding engine derives from
:class:`FragmentDecodeError`. All of them are terminal: decoding is a pure
function of its input, so nothing is retried. Each error carries whatever
context is known where it was raised (offending index, input line number,
the raw line, or the JSONPath-like location inside the fragment tree).

Examples:
    >>> from fragjson.exceptions import IndexOutOfRangeError
    >>> err = IndexOutOfRangeError("Index 9 out of range for table of length 3", index=9)
    >>> err.kind
    'IndexOutOfRange'
    >>> str(err)
    'Index 9 out of range for table of length 3 (index=9)'
    >>> err.with_path("$[1]").path
    '$[1]'
"""

# Standard
from typing import Any, Dict, Optional


class FragmentDecodeError(Exception):
    """Base class for fragment decoding errors.

    Examples:
        >>> err = FragmentDecodeError("Something went wrong")
        >>> str(err)
        'Something went wrong'
        >>> err.kind
        'FragmentDecodeError'
        >>> err.context()
        {}
    """

    kind = "FragmentDecodeError"

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        """Initialize the error with optional diagnostic context.

        Args:
            message: Human readable description of the failure.
            index: Offending fragment-table index, if any.
            line_number: 1-based input line number, if any.
            line: Raw content of the offending input line, if any.
            path: Location inside the fragment tree (``$``-rooted), if any.
        """
        super().__init__(message)
        self.message = message
        self.index = index
        self.line_number = line_number
        self.line = line
        self.path = path

    def with_path(self, path: str) -> "FragmentDecodeError":
        """Attach a tree location unless an inner frame already did.

        Args:
            path: Location inside the fragment tree.

        Returns:
            FragmentDecodeError: This same error, for re-raising.
        """
        if self.path is None:
            self.path = path
        return self

    def context(self) -> Dict[str, Any]:
        """Return the diagnostic attributes that are set.

        Returns:
            Dict[str, Any]: Mapping of context name to value, in a fixed order.

        Examples:
            >>> MalformedPointerLineError("bad", line_number=3, line="X").context()
            {'line_number': 3, 'line': 'X'}
        """
        fields = (("index", self.index), ("line_number", self.line_number), ("line", self.line), ("path", self.path))
        return {name: value for name, value in fields if value is not None}

    def __str__(self) -> str:
        """Render the message with its context.

        Returns:
            str: Message followed by ``(name=value, ...)`` when context exists.
        """
        ctx = self.context()
        if not ctx:
            return self.message
        rendered = ", ".join(f"{name}={value!r}" if isinstance(value, str) else f"{name}={value}" for name, value in ctx.items())
        return f"{self.message} ({rendered})"


class MalformedBaseArrayError(FragmentDecodeError):
    """Raised when the first input line is not a JSON array."""

    kind = "MalformedBaseArray"


class MalformedPointerLineError(FragmentDecodeError):
    """Raised when an override line does not match ``P<digits>:<json>``.

    Examples:
        >>> err = MalformedPointerLineError("Invalid pointer line", line_number=2, line="Q1:2")
        >>> str(err)
        "Invalid pointer line (line_number=2, line='Q1:2')"
    """

    kind = "MalformedPointerLine"


class IndexOutOfRangeError(FragmentDecodeError):
    """Raised when a resolved index falls outside ``[0, table_len)``."""

    kind = "IndexOutOfRange"


class NonIntegerIndexError(FragmentDecodeError):
    """Raised when a value used as an index is not a whole number."""

    kind = "NonIntegerIndex"


class AbsentSlotError(FragmentDecodeError):
    """Raised when an index points at a slot no line ever populated."""

    kind = "AbsentSlot"


class KeyResolutionError(FragmentDecodeError):
    """Raised when an indirect object key resolves to a non-string slot."""

    kind = "KeyResolutionError"


class MissingRootFragmentError(FragmentDecodeError):
    """Raised when fragment table slot 0 does not exist."""

    kind = "MissingRootFragment"


class CyclicOrTooDeepReferenceError(FragmentDecodeError):
    """Raised when decoding recurses past the configured depth limit."""

    kind = "CyclicOrTooDeepReference"
