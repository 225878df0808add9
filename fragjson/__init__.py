# -*- coding: utf-8 -*-
"""Location: ./fragjson/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

fragjson - decoder for index-compressed JSON.

Examples:
    >>> import fragjson
    >>> fragjson.decode_text('[{"_1": 2}, "greeting", "hello"]')
    {'greeting': 'hello'}
"""

__version__ = "0.1.0"

# First-Party
from fragjson.decoder import FragmentDecoder
from fragjson.document import decode_document, decode_stream, decode_text
from fragjson.exceptions import (
    AbsentSlotError,
    CyclicOrTooDeepReferenceError,
    FragmentDecodeError,
    IndexOutOfRangeError,
    KeyResolutionError,
    MalformedBaseArrayError,
    MalformedPointerLineError,
    MissingRootFragmentError,
    NonIntegerIndexError,
)
from fragjson.resolver import resolve_index
from fragjson.table import ABSENT, FragmentTable

__all__ = [
    "ABSENT",
    "AbsentSlotError",
    "CyclicOrTooDeepReferenceError",
    "FragmentDecodeError",
    "FragmentDecoder",
    "FragmentTable",
    "IndexOutOfRangeError",
    "KeyResolutionError",
    "MalformedBaseArrayError",
    "MalformedPointerLineError",
    "MissingRootFragmentError",
    "NonIntegerIndexError",
    "decode_document",
    "decode_stream",
    "decode_text",
    "resolve_index",
]
