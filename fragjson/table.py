# -*- coding: utf-8 -*-
"""Location: ./fragjson/table.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Fragment table.

The table is the shared store every index in an encoded document refers to.
It is assembled once from the base array (line 1 of the input) and the
``P<index>:<fragment>`` override lines, then only read while decoding.

Examples:
    >>> table = FragmentTable.build([1, 2, 3], [(5, "extra")])
    >>> len(table)
    6
    >>> table.get(5)
    'extra'
    >>> table.get(3)
    ABSENT
    >>> table.is_present(4)
    False
"""

# Standard
import logging
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

# First-Party
from fragjson.exceptions import IndexOutOfRangeError

logger = logging.getLogger(__name__)


class _AbsentSlot:
    """Marker for table positions skipped over by an override.

    Examples:
        >>> ABSENT
        ABSENT
        >>> bool(ABSENT)
        False
        >>> ABSENT == None
        False
        >>> _AbsentSlot() is ABSENT
        True
    """

    _instance: Optional["_AbsentSlot"] = None

    def __new__(cls) -> "_AbsentSlot":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _AbsentSlot()


class FragmentTable:
    """Indexable, read-only collection of raw JSON fragments.

    Use :meth:`build` to create one; the constructor takes the final slot
    list as-is.

    Examples:
        >>> table = FragmentTable(["a", ABSENT])
        >>> table.get(0), table.get(1)
        ('a', ABSENT)
        >>> list(table)
        [(0, 'a'), (1, ABSENT)]
        >>> table
        FragmentTable(size=2, absent=1)
    """

    __slots__ = ("_slots",)

    def __init__(self, slots: Sequence[Any]) -> None:
        """Wrap an already assembled list of slots.

        Args:
            slots: Slot contents, ``ABSENT`` marking unpopulated positions.
        """
        self._slots: Tuple[Any, ...] = tuple(slots)

    @classmethod
    def build(cls, base_fragments: Iterable[Any], overrides: Iterable[Tuple[int, Any]] = (), max_size: Optional[int] = None) -> "FragmentTable":
        """Assemble a table from the base array and override pairs.

        Base fragments occupy indices from 0 in order. Overrides are applied
        afterwards in the order given; an index past the current end grows
        the table and fills the gap with ``ABSENT``. Repeated indices are
        last-write-wins.

        Args:
            base_fragments: Fragments parsed from the base array.
            overrides: ``(index, fragment)`` pairs from the override lines.
            max_size: Optional upper bound on the resulting table length.

        Returns:
            FragmentTable: The completed table.

        Raises:
            IndexOutOfRangeError: If an override index is negative or would
                grow the table past ``max_size``.

        Examples:
            >>> FragmentTable.build(["a", "b"], [(0, "z"), (0, "y")]).get(0)
            'y'
            >>> FragmentTable.build([], [(2, True)])
            FragmentTable(size=3, absent=2)
            >>> FragmentTable.build([0], [(10, 1)], max_size=5)
            Traceback (most recent call last):
            ...
            fragjson.exceptions.IndexOutOfRangeError: Override index 10 exceeds maximum table size 5 (index=10)
        """
        slots: List[Any] = list(base_fragments)
        base_len = len(slots)
        applied = 0

        for index, fragment in overrides:
            if index < 0:
                raise IndexOutOfRangeError(f"Override index {index} is negative", index=index)
            if max_size is not None and index >= max_size:
                raise IndexOutOfRangeError(f"Override index {index} exceeds maximum table size {max_size}", index=index)
            if index >= len(slots):
                slots.extend([ABSENT] * (index + 1 - len(slots)))
            elif slots[index] is not ABSENT:
                logger.debug(f"Override replaces existing fragment at index {index}")
            slots[index] = fragment
            applied += 1

        logger.debug(f"Built fragment table: base={base_len}, overrides={applied}, size={len(slots)}")
        return cls(slots)

    def get(self, index: int) -> Any:
        """Return the raw fragment at ``index`` (may be ``ABSENT``).

        Args:
            index: Concrete, already resolved slot index.

        Returns:
            Any: The stored fragment or ``ABSENT``.

        Raises:
            IndexOutOfRangeError: If ``index`` is not a valid slot.
        """
        if not 0 <= index < len(self._slots):
            raise IndexOutOfRangeError(f"Index {index} out of range for table of length {len(self._slots)}", index=index)
        return self._slots[index]

    def is_present(self, index: int) -> bool:
        """Check whether ``index`` is within the table and populated.

        Args:
            index: Slot index.

        Returns:
            bool: True if the slot exists and is not ``ABSENT``.
        """
        return 0 <= index < len(self._slots) and self._slots[index] is not ABSENT

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Tuple[int, Any]]:
        return iter(enumerate(self._slots))

    def __repr__(self) -> str:
        absent = sum(1 for slot in self._slots if slot is ABSENT)
        return f"FragmentTable(size={len(self._slots)}, absent={absent})"
