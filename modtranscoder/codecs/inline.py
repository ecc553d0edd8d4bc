# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/codecs/inline.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Inline colon/comma notation.

One command per line, name and parameters separated by the first colon,
parameters separated by commas::

    SetTex: diffuse, body01
    SetColor:

A line without a colon is a command consisting of just its name.

Limitations: a name containing a colon, an argument containing a comma, an
argument with leading or trailing whitespace, and a command whose only
parameter is the empty string cannot round-trip.

Examples:
    >>> codec = InlineCodec()
    >>> codec.serialize([Command.of("Foo", "a", "b")])
    'Foo: a, b'
    >>> [c.args for c in codec.parse("Foo: a, b")]
    [['Foo', 'a', 'b']]
    >>> [c.args for c in codec.parse("JustAName")]
    [['JustAName']]
"""

# Standard
import logging
import re
from typing import Iterable, List

# First-Party
from modtranscoder.codecs.base import CommandNotationCodec
from modtranscoder.models import Command, Notation

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")


class InlineCodec(CommandNotationCodec):
    """``Name: p1, p2`` lines."""

    @property
    def notation(self) -> Notation:
        return Notation.INLINE

    @property
    def language(self) -> str:
        return "menuFormat2"

    def serialize(self, commands: Iterable[Command]) -> str:
        """Render one line per command.

        Args:
            commands: Ordered command list; commands without args are skipped.

        Returns:
            str: Newline-joined lines; a bare name renders as ``"name: "``.

        Examples:
            >>> InlineCodec().serialize([Command.of("SetColor"), Command.of("x", "1")])
            'SetColor: \\nx: 1'
        """
        lines = [f"{command.args[0]}: {', '.join(command.args[1:])}" for command in commands if command.args]
        return "\n".join(lines)

    def parse(self, text: str) -> List[Command]:
        """Parse one command per non-blank line.

        Args:
            text: Editor content.

        Returns:
            List[Command]: Commands in line order.

        Examples:
            >>> codec = InlineCodec()
            >>> [c.args for c in codec.parse("  A :  1 ,2,  \\n\\nB:\\n")]
            [['A', '1', '2', ''], ['B']]
        """
        commands: List[Command] = []
        for raw_line in _LINE_SPLIT_RE.split(text):
            line = raw_line.strip()
            if not line:
                continue
            name, colon, rest = line.partition(":")
            if not colon:
                commands.append(Command(args=[line]))
                continue
            args = [name.strip()]
            rest = rest.strip()
            if rest:
                args.extend(piece.strip() for piece in rest.split(","))
            commands.append(Command(args=args))

        logger.debug("Parsed %d commands from inline text", len(commands))
        return commands
