# -*- coding: utf-8 -*-
"""Location: ./tests/unit/fragjson/test_document.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Unit tests for the encoded document driver.
"""

# Standard
import io

# Third-Party
import orjson
import pytest

# First-Party
from fragjson.config import Settings
from fragjson.document import build_table, decode_document, decode_stream, decode_text, parse_base_array, parse_pointer_line, PointerOverride
from fragjson.exceptions import (
    AbsentSlotError,
    CyclicOrTooDeepReferenceError,
    IndexOutOfRangeError,
    MalformedBaseArrayError,
    MalformedPointerLineError,
    MissingRootFragmentError,
)
from fragjson.table import ABSENT

SAMPLE = "\n".join(
    [
        '[{"_1": 2, "_3": 4, "_5": ["P", 6]}, "name", "fragjson", "tags", [7, 8], "meta", ["P", 9], "json", "decoder", {"_10": true, "_11": null}]',
        'P10:"stable"',
        'P11:"license"',
    ]
)


class TestBaseArray:
    """Test parsing of line 1."""

    def test_valid_array(self):
        """Line 1 parses to the base list."""
        assert parse_base_array('[1, "two", {"a": null}]') == [1, "two", {"a": None}]

    @pytest.mark.parametrize("line", ['{"a": 1}', '"text"', "5", "null", "true"])
    def test_non_array_rejected(self, line):
        """Non-array JSON fails with MalformedBaseArrayError."""
        with pytest.raises(MalformedBaseArrayError) as exc_info:
            parse_base_array(line)
        assert exc_info.value.line_number == 1
        assert exc_info.value.line == line

    @pytest.mark.parametrize("line", ["", "[1, 2", "not json", "[1,]"])
    def test_invalid_json_rejected(self, line):
        """Invalid JSON fails with MalformedBaseArrayError."""
        with pytest.raises(MalformedBaseArrayError):
            parse_base_array(line)

    def test_trailing_newline_accepted(self):
        """A trailing line terminator is harmless."""
        assert parse_base_array('["a"]\r\n') == ["a"]


class TestPointerLine:
    """Test parsing of P<index>:<json> lines."""

    def test_valid_line(self):
        """A well-formed line yields a PointerOverride."""
        override = parse_pointer_line('P7:{"k": [1, 2]}', 3)
        assert override == PointerOverride(index=7, fragment={"k": [1, 2]}, line_number=3)

    def test_fragment_may_contain_colons(self):
        """Only the first colon separates index and fragment."""
        assert parse_pointer_line('P1:"a:b:c"', 2).fragment == "a:b:c"

    def test_line_terminator_stripped(self):
        """CRLF and LF terminators are ignored."""
        assert parse_pointer_line("P0:true\r\n", 2).fragment is True

    @pytest.mark.parametrize("line", ["", "   ", "\n", "\t\r\n"])
    def test_blank_lines_ignored(self, line):
        """Blank lines parse to None."""
        assert parse_pointer_line(line, 5) is None

    @pytest.mark.parametrize(
        "line",
        [
            "P:1",
            "P1 :2",
            " P1:2",
            "p1:2",
            "Q1:2",
            "P-1:2",
            "P1",
            "P1.5:2",
            "1:2",
        ],
    )
    def test_malformed_shape(self, line):
        """Lines not matching P<digits>:<json> fail with the line number and content."""
        with pytest.raises(MalformedPointerLineError) as exc_info:
            parse_pointer_line(line, 9)
        assert exc_info.value.line_number == 9
        assert exc_info.value.line == line

    @pytest.mark.parametrize("line", ["P1:", "P1:{", "P1:nope", "P1:[1,]"])
    def test_malformed_fragment(self, line):
        """An invalid JSON fragment fails with MalformedPointerLineError."""
        with pytest.raises(MalformedPointerLineError) as exc_info:
            parse_pointer_line(line, 4)
        assert exc_info.value.index == 1
        assert exc_info.value.line_number == 4

    def test_index_beyond_max_table_size(self):
        """An index at or past max_table_size is rejected before allocation."""
        with pytest.raises(MalformedPointerLineError) as exc_info:
            parse_pointer_line("P1000:0", 2, max_table_size=1000)
        assert exc_info.value.index == 1000
        assert parse_pointer_line("P999:0", 2, max_table_size=1000).index == 999

    def test_leading_zero_digits(self):
        """Digits are read as a decimal integer."""
        assert parse_pointer_line("P007:0", 2).index == 7


class TestBuildTable:
    """Test table assembly from input lines."""

    def test_override_gap_table(self):
        """[1,2,3] with P5:"extra" gives six slots with two absent."""
        table = build_table("[1,2,3]", ['P5:"extra"'])
        assert len(table) == 6
        assert [slot for _, slot in table] == [1, 2, 3, ABSENT, ABSENT, "extra"]

    def test_line_numbers_start_at_two(self):
        """Override line numbers count from line 2."""
        with pytest.raises(MalformedPointerLineError) as exc_info:
            build_table("[0]", ["P1:1", "", "bad"])
        assert exc_info.value.line_number == 4

    def test_settings_max_table_size(self):
        """build_table honours max_table_size from settings."""
        with pytest.raises(MalformedPointerLineError):
            build_table("[0]", ["P10:1"], Settings(max_table_size=10))


class TestDecodeDocument:
    """Test the full decode of encoded documents."""

    def test_string_root(self):
        """A string root is already terminal."""
        assert decode_document('["A", ["B", 2], 3]', []) == "A"

    def test_number_root(self):
        """A numeric root is followed to its slot."""
        assert decode_document('[2, "unused", "target"]', []) == "target"

    def test_absent_slot_example(self):
        """Following 1 -> 2 -> 3 reaches an absent slot."""
        with pytest.raises(AbsentSlotError) as exc_info:
            decode_document("[1,2,3]", ['P5:"extra"'])
        assert exc_info.value.index == 3

    def test_cycle_example(self):
        """table[0]=1, table[1]=0 fails instead of hanging."""
        with pytest.raises(CyclicOrTooDeepReferenceError):
            decode_document("[1, 0]", [])

    def test_empty_base_array(self):
        """An empty table has no root."""
        with pytest.raises(MissingRootFragmentError):
            decode_document("[]", [])

    def test_root_absent(self):
        """A table whose slot 0 was never populated has no root."""
        with pytest.raises(MissingRootFragmentError):
            decode_document("[]", ['P2:"x"'])

    def test_override_supplies_root(self):
        """An override can populate slot 0 of an empty base array."""
        assert decode_document("[]", ['P0:"root"']) == "root"

    def test_override_replaces_root(self):
        """Overrides are applied before decoding starts."""
        assert decode_document('["old", "new"]', ["P0:1"]) == "new"

    def test_full_sample(self):
        """A document using all indirection forms decodes completely."""
        assert decode_text(SAMPLE) == {
            "name": "fragjson",
            "tags": ["json", "decoder"],
            "meta": {"stable": True, "license": None},
        }

    def test_output_is_serializable(self):
        """Decoded output can be serialized as plain JSON."""
        decoded = decode_text(SAMPLE)
        assert orjson.loads(orjson.dumps(decoded)) == decoded

    def test_deterministic(self):
        """Decoding the same input twice gives byte-identical output."""
        first = orjson.dumps(decode_text(SAMPLE))
        second = orjson.dumps(decode_text(SAMPLE))
        assert first == second

    def test_literal_numbers_setting(self):
        """numbers_as_indices=False keeps numeric literals."""
        settings = Settings(numbers_as_indices=False)
        assert decode_document('[{"_1": 42, "_2": ["P", 3]}, "answer", "pi", 3.14]', [], settings) == {"answer": 42, "pi": 3.14}

    def test_max_depth_setting(self):
        """max_depth from settings bounds index chains."""
        line = "[1, 2, 3, 4, 5, \"end\"]"
        assert decode_document(line, [], Settings(max_depth=5)) == "end"
        with pytest.raises(CyclicOrTooDeepReferenceError):
            decode_document(line, [], Settings(max_depth=4))

    def test_max_depth_from_environment(self, monkeypatch):
        """FRAGJSON_MAX_DEPTH configures the cached settings."""
        monkeypatch.setenv("FRAGJSON_MAX_DEPTH", "2")
        with pytest.raises(CyclicOrTooDeepReferenceError):
            decode_document("[1, 2, 3, \"end\"]", [])


class TestStreams:
    """Test decoding from line iterables and text."""

    def test_decode_stream_from_file_object(self):
        """Open text files can be decoded directly."""
        assert decode_stream(io.StringIO(SAMPLE + "\n")) == decode_text(SAMPLE)

    def test_decode_stream_empty(self):
        """Empty input fails with MalformedBaseArrayError."""
        with pytest.raises(MalformedBaseArrayError):
            decode_stream(io.StringIO(""))

    def test_decode_text_empty(self):
        """Empty text fails with MalformedBaseArrayError."""
        with pytest.raises(MalformedBaseArrayError):
            decode_text("")

    def test_blank_lines_between_overrides(self):
        """Blank lines among override lines are skipped."""
        assert decode_text('[1]\n\nP1:"x"\n\n') == "x"

    def test_crlf_input(self):
        """Windows line endings are accepted."""
        assert decode_text('[1]\r\nP1:"x"\r\n') == "x"

    @pytest.mark.parametrize("char", ["\u2028", "\u2029", "\x85"])
    def test_unicode_separators_inside_strings(self, char):
        """Only newline ends a line; other Unicode separators stay inside strings."""
        assert decode_text(f'["a{char}b"]') == f"a{char}b"
        assert decode_text(f'[1, 0]\nP1:"x{char}y"') == f"x{char}y"


class TestOversizedIndices:
    """Digit runs longer than Python's int conversion limit."""

    def test_pointer_index_over_table_limit(self):
        """A huge override index is a MalformedPointerLineError, not a ValueError."""
        with pytest.raises(MalformedPointerLineError) as exc_info:
            decode_document('["a"]', ["P" + "9" * 5000 + ':"x"'])
        assert exc_info.value.line_number == 2

    def test_pointer_index_without_table_limit(self):
        """Without max_table_size a huge index still fails as MalformedPointerLineError."""
        with pytest.raises(MalformedPointerLineError):
            parse_pointer_line("P" + "9" * 5000 + ":0", 2)

    def test_pointer_index_leading_zeros(self):
        """Leading zeros do not count toward the size check."""
        assert parse_pointer_line("P" + "0" * 5000 + "3:0", 2, max_table_size=10).index == 3

    def test_indirect_key_index_too_long(self):
        """A huge indirect key index is an IndexOutOfRangeError."""
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            decode_document('[{"_' + "9" * 5000 + '": 0}]')
        assert exc_info.value.path is not None
