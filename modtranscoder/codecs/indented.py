# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/codecs/indented.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Indented-block notation.

Each command starts with its name on a line of its own; every further
argument follows on its own line prefixed with a tab. Commands are separated
by a blank line::

    SetTex
    \tdiffuse
    \tbody01

    SetColor

Parsing is lenient about indentation: any number of leading tabs marks a
parameter line and all of them are removed. Serializing always emits exactly
one tab.

Limitations: an argument containing a newline, or ending in whitespace,
cannot round-trip; an argument that is empty or only whitespace reads back as
a command separator. Leading tabs are stripped on the way back, from parameters
and command names alike.

Examples:
    >>> codec = IndentedBlockCodec()
    >>> text = codec.serialize([Command.of("SetTex", "diffuse", "body01"), Command.of("SetColor")])
    >>> text
    'SetTex\\n\\tdiffuse\\n\\tbody01\\n\\nSetColor'
    >>> [c.args for c in codec.parse(text)]
    [['SetTex', 'diffuse', 'body01'], ['SetColor']]
"""

# Standard
import logging
import re
from typing import Iterable, List

# First-Party
from modtranscoder.codecs.base import CommandNotationCodec
from modtranscoder.models import Command, Notation

logger = logging.getLogger(__name__)

# Line breaks as produced by any editor platform
_LINE_SPLIT_RE = re.compile(r"\r?\n")

_PARAM_PREFIX = "\t"


class IndentedBlockCodec(CommandNotationCodec):
    """Name line followed by tab-indented parameter lines."""

    @property
    def notation(self) -> Notation:
        return Notation.INDENTED

    @property
    def language(self) -> str:
        return "menuFormat1"

    def serialize(self, commands: Iterable[Command]) -> str:
        """Render commands as indented blocks.

        Args:
            commands: Ordered command list; commands without args are skipped.

        Returns:
            str: Blocks separated by a blank line, trailing whitespace removed.

        Examples:
            >>> IndentedBlockCodec().serialize([])
            ''
            >>> IndentedBlockCodec().serialize([Command.of("a", "1"), Command(args=[]), Command.of("b")])
            'a\\n\\t1\\n\\nb'
        """
        lines: List[str] = []
        for command in commands:
            if not command.args:
                continue
            lines.append(command.args[0])
            lines.extend(_PARAM_PREFIX + arg for arg in command.args[1:])
            lines.append("")
        return "\n".join(lines).rstrip()

    def parse(self, text: str) -> List[Command]:
        """Parse indented blocks.

        Args:
            text: Editor content.

        Returns:
            List[Command]: One command per block; empty blocks are never emitted.

        Examples:
            >>> codec = IndentedBlockCodec()
            >>> [c.args for c in codec.parse("a\\n\\t\\t1\\nb\\n\\t2\\n\\n\\n")]
            [['a', '1'], ['b', '2']]
            >>> codec.parse("")
            []
        """
        commands: List[Command] = []
        current: List[str] = []

        def commit() -> None:
            if current:
                commands.append(Command(args=list(current)))
                current.clear()

        for raw_line in _LINE_SPLIT_RE.split(text):
            line = raw_line.rstrip()
            if not line.strip():
                commit()
                continue
            if line.startswith(_PARAM_PREFIX):
                current.append(line.lstrip(_PARAM_PREFIX))
            else:
                commit()
                current.append(line)
        commit()

        logger.debug("Parsed %d commands from indented text", len(commands))
        return commands
