# -*- coding: utf-8 -*-
"""Location: ./tests/unit/modtranscoder/test_indented_codec.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the indented-block command notation.
"""

# Third-Party
import pytest

# First-Party
from modtranscoder.codecs.indented import IndentedBlockCodec
from modtranscoder.models import Command, Notation


@pytest.fixture
def codec():
    return IndentedBlockCodec()


class TestIndentedSerialize:
    """Serialization."""

    def test_reference_example(self, codec):
        """Name line, tab-prefixed parameters, blank line between commands."""
        commands = [Command.of("SetTex", "diffuse", "body01"), Command.of("SetColor")]
        assert codec.serialize(commands) == "SetTex\n\tdiffuse\n\tbody01\n\nSetColor"

    def test_no_trailing_whitespace(self, codec):
        """The final separator is trimmed."""
        assert codec.serialize([Command.of("a", "1")]) == "a\n\t1"

    def test_empty_commands_skipped(self, codec):
        """Commands without args produce no block."""
        assert codec.serialize([Command(args=[]), Command.of("a")]) == "a"

    def test_metadata(self, codec):
        """Notation and language id."""
        assert codec.notation is Notation.INDENTED
        assert codec.language == "menuFormat1"


class TestIndentedParse:
    """Parsing."""

    def test_reference_example(self, codec):
        """The reference text parses into two commands."""
        commands = codec.parse("SetTex\n\tdiffuse\n\tbody01\n\nSetColor")
        assert commands == [Command.of("SetTex", "diffuse", "body01"), Command.of("SetColor")]

    def test_name_line_commits_without_blank(self, codec):
        """A new name line starts a new command even without a blank line."""
        assert [c.args for c in codec.parse("a\n\t1\nb\n\t2")] == [["a", "1"], ["b", "2"]]

    def test_multiple_tabs_stripped(self, codec):
        """Any number of leading tabs marks a parameter."""
        assert codec.parse("a\n\t\t\tdeep")[0].args == ["a", "deep"]

    def test_crlf_and_trailing_spaces(self, codec):
        """Windows line endings and trailing spaces are tolerated."""
        assert [c.args for c in codec.parse("a  \r\n\t1 \r\n\r\nb\r\n")] == [["a", "1"], ["b"]]

    def test_blank_runs(self, codec):
        """Consecutive blank and whitespace-only lines emit nothing."""
        assert [c.args for c in codec.parse("\n\n   \na\n\n\n\t\nb\n\n")] == [["a"], ["b"]]

    def test_leading_parameter_starts_command(self, codec):
        """A parameter with no preceding name becomes the first argument."""
        assert [c.args for c in codec.parse("\torphan\n\tnext")] == [["orphan", "next"]]

    def test_empty_text(self, codec):
        """Empty text is an empty list."""
        assert codec.parse("") == []

    def test_arg_count_matches(self, codec):
        """Parsed commands carry ArgCount == len(Args)."""
        assert all(c.arg_count == len(c.args) for c in codec.parse("a\n\t1\n\t2\n\nb"))


class TestIndentedRoundTrip:
    """parse(serialize(x)) == x for newline-free arguments."""

    @pytest.mark.parametrize(
        "commands",
        [
            [],
            [Command.of("SetTex", "diffuse", "body01"), Command.of("SetColor")],
            [Command.of("name", "with spaces", "comma, colon: ok", "  leading")],
            [Command.of("a"), Command.of("b"), Command.of("c", "1")],
        ],
    )
    def test_round_trip(self, codec, commands):
        """Commands survive a round-trip."""
        assert codec.parse(codec.serialize(commands)) == commands

    def test_newline_argument_not_representable(self, codec):
        """An argument containing a newline is a documented limitation."""
        commands = [Command.of("a", "line1\nline2")]
        assert codec.parse(codec.serialize(commands)) != commands

    def test_tab_leading_argument_loses_tabs(self, codec):
        """Leading tabs of an argument are indistinguishable from indentation."""
        assert codec.parse(codec.serialize([Command.of("a", "\tx")])) == [Command.of("a", "x")]

    def test_tab_leading_name_loses_tabs(self, codec):
        """A name starting with a tab still opens its own command, without the tab."""
        commands = [Command.of("a", "1"), Command.of("\tb", "2")]
        assert codec.parse(codec.serialize(commands)) == [Command.of("a", "1"), Command.of("b", "2")]
