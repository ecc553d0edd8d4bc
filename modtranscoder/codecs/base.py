# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/codecs/base.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Abstract base class that every command notation codec implements.

Design notes
------------
* A codec is a stateless strategy: ``serialize`` and ``parse`` are pure and
  never touch the session that called them.
* ``parse`` either returns a complete command list or raises
  ``NotationParseError``; it never returns a partial list.
* Each codec documents the argument values it cannot represent. Those are
  properties of the notation, not bugs: ``parse(serialize(cmds)) == cmds``
  holds for every list that avoids them.
"""

# Standard
from abc import ABC, abstractmethod
from typing import Iterable, List

# First-Party
from modtranscoder.models import Command, Notation


class CommandNotationCodec(ABC):
    """Strategy interface for one textual notation of a command list.

    Concrete subclasses
    -------------------
    * ``IndentedBlockCodec`` – name line followed by tab-indented parameters
    * ``InlineCodec``        – ``Name: p1, p2`` one command per line
    * ``StructuredCodec``    – JSON list of ``{ArgCount, Args}``
    """

    @property
    @abstractmethod
    def notation(self) -> Notation:
        """Which notation this codec handles."""

    @property
    @abstractmethod
    def language(self) -> str:
        """Syntax-highlighting language id used by editor front-ends."""

    @abstractmethod
    def serialize(self, commands: Iterable[Command]) -> str:
        """Render commands as text.

        Args:
            commands: Ordered command list.

        Returns:
            str: Editable text.
        """

    @abstractmethod
    def parse(self, text: str) -> List[Command]:
        """Parse edited text back into commands.

        Args:
            text: Editor content.

        Returns:
            List[Command]: Commands in text order.

        Raises:
            NotationParseError: If the text cannot be parsed as a whole.
        """
