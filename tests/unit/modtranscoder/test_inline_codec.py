# -*- coding: utf-8 -*-
"""Location: ./tests/unit/modtranscoder/test_inline_codec.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the inline colon/comma command notation.
"""

# Third-Party
import pytest

# First-Party
from modtranscoder.codecs.inline import InlineCodec
from modtranscoder.models import Command, Notation


@pytest.fixture
def codec():
    return InlineCodec()


class TestInlineSerialize:
    """Serialization."""

    def test_name_and_params(self, codec):
        """Name, colon, comma-separated parameters."""
        assert codec.serialize([Command.of("Foo", "a", "b")]) == "Foo: a, b"

    def test_bare_name(self, codec):
        """A name-only command keeps the trailing space."""
        assert codec.serialize([Command.of("SetColor")]) == "SetColor: "

    def test_one_line_per_command(self, codec):
        """Commands are newline separated; empty ones skipped."""
        assert codec.serialize([Command.of("a", "1"), Command(args=[]), Command.of("b")]) == "a: 1\nb: "

    def test_metadata(self, codec):
        """Notation and language id."""
        assert codec.notation is Notation.INLINE
        assert codec.language == "menuFormat2"


class TestInlineParse:
    """Parsing."""

    def test_reference_example(self, codec):
        """Foo: a, b parses back."""
        assert codec.parse("Foo: a, b") == [Command.of("Foo", "a", "b")]

    def test_no_colon(self, codec):
        """A line without a colon is a single-argument command."""
        assert codec.parse("JustAName") == [Command.of("JustAName")]

    def test_empty_remainder(self, codec):
        """Nothing after the colon means no further arguments."""
        assert codec.parse("SetColor:   ") == [Command.of("SetColor")]

    def test_split_on_first_colon(self, codec):
        """Later colons belong to the parameters."""
        assert codec.parse("url: http://x, y")[0].args == ["url", "http://x", "y"]

    def test_pieces_trimmed(self, codec):
        """Names and parameters are trimmed; empty pieces survive."""
        assert codec.parse("  A :  1 ,, 2 ")[0].args == ["A", "1", "", "2"]

    def test_blank_lines_and_crlf(self, codec):
        """Blank lines are skipped and CRLF accepted."""
        assert [c.args for c in codec.parse("\r\na: 1\r\n\r\n  \r\nb\r\n")] == [["a", "1"], ["b"]]

    def test_empty_text(self, codec):
        """Empty text is an empty list."""
        assert codec.parse("") == []


class TestInlineRoundTrip:
    """parse(serialize(x)) == x for arguments without commas, colons or padding."""

    @pytest.mark.parametrize(
        "commands",
        [
            [],
            [Command.of("Foo", "a", "b")],
            [Command.of("SetTex", "diffuse", "body01"), Command.of("SetColor")],
            [Command.of("name", "with spaces", "x.y/z")],
        ],
    )
    def test_round_trip(self, codec, commands):
        """Commands survive a round-trip."""
        assert codec.parse(codec.serialize(commands)) == commands

    @pytest.mark.parametrize("arg", ["a, b", " padded", ""])
    def test_limitations(self, codec, arg):
        """Commas, surrounding whitespace and a lone empty parameter do not round-trip."""
        commands = [Command.of("Foo", arg)]
        assert codec.parse(codec.serialize(commands)) != commands
