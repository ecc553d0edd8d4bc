# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/codecs/structured.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Structured (JSON) notation.

The command list is rendered as a JSON array with two-space indentation; each
element carries an explicit ``ArgCount`` and the ordered ``Args``::

    [
      {
        "ArgCount": 2,
        "Args": [
          "Foo",
          "Bar"
        ]
      }
    ]

Unlike the line-based notations there is no partial recovery: malformed JSON,
a root that is not an array, or an element that is not a valid command fails
the whole parse with ``NotationParseError``.

Examples:
    >>> codec = StructuredCodec()
    >>> [c.args for c in codec.parse('[{"Args": ["Foo", "Bar"]}]')]
    [['Foo', 'Bar']]
    >>> codec.parse('[{"ArgCount": 5, "Args": ["Foo"]}]')[0].arg_count
    5
    >>> try:
    ...     codec.parse("{not a list}")
    ... except NotationParseError as e:
    ...     print(e.notation, e.cause is not None)
    structured True
"""

# Standard
import logging
from typing import Any, Iterable, List

# Third-Party
import orjson
from pydantic import ValidationError

# First-Party
from modtranscoder.codecs.base import CommandNotationCodec
from modtranscoder.errors import NotationParseError
from modtranscoder.models import Command, COMMAND_LIST_ADAPTER, Notation
from modtranscoder.utils.error_formatter import ErrorFormatter

logger = logging.getLogger(__name__)


def dumps_indented(data: Any) -> str:
    """Serialize plain data as two-space indented JSON text.

    Args:
        data: JSON-compatible Python data.

    Returns:
        str: Indented JSON.

    Examples:
        >>> dumps_indented([])
        '[]'
        >>> print(dumps_indented({"a": [1]}))
        {
          "a": [
            1
          ]
        }
    """
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode()


class StructuredCodec(CommandNotationCodec):
    """JSON array of ``{ArgCount, Args}`` objects."""

    @property
    def notation(self) -> Notation:
        return Notation.STRUCTURED

    @property
    def language(self) -> str:
        return "json"

    def serialize(self, commands: Iterable[Command]) -> str:
        """Render commands as an indented JSON array.

        Args:
            commands: Ordered command list.

        Returns:
            str: JSON text.

        Examples:
            >>> print(StructuredCodec().serialize([Command.of("Foo")]))
            [
              {
                "ArgCount": 1,
                "Args": [
                  "Foo"
                ]
              }
            ]
        """
        return dumps_indented(COMMAND_LIST_ADAPTER.dump_python(list(commands), mode="json", by_alias=True))

    def parse(self, text: str) -> List[Command]:
        """Decode a JSON array of commands.

        Args:
            text: Editor content; blank text is an empty list.

        Returns:
            List[Command]: Decoded commands; a missing ``Args`` is ``[]`` and a
            missing ``ArgCount`` is ``len(Args)``.

        Raises:
            NotationParseError: On malformed JSON, a non-array root, or an
                element that does not validate as a command.

        Examples:
            >>> StructuredCodec().parse("   ")
            []
            >>> StructuredCodec().parse('[{}]')[0].args
            []
            >>> try:
            ...     StructuredCodec().parse('{"Args": []}')
            ... except NotationParseError as e:
            ...     print(e)
            [structured] root element must be a JSON array
        """
        stripped = text.strip()
        if not stripped:
            return []

        try:
            data = orjson.loads(stripped)
        except orjson.JSONDecodeError as exc:
            logger.debug("Structured command text is not valid JSON: %s", exc)
            raise NotationParseError(self.notation.value, f"malformed JSON: {exc}", cause=exc) from exc

        if not isinstance(data, list):
            raise NotationParseError(self.notation.value, "root element must be a JSON array")

        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise NotationParseError(self.notation.value, f"element #{index} must be a JSON object")

        try:
            commands = COMMAND_LIST_ADAPTER.validate_python(data)
        except ValidationError as exc:
            formatted = ErrorFormatter.format_validation_error(exc)
            raise NotationParseError(self.notation.value, formatted["message"], details=formatted["details"], cause=exc) from exc

        logger.debug("Parsed %d commands from structured text", len(commands))
        return commands
