# -*- coding: utf-8 -*-
"""Command notation codecs – one module per notation.

Typical usage::

    from modtranscoder.codecs import get_codec
    from modtranscoder.models import Notation

    codec = get_codec(Notation.INLINE)
    text = codec.serialize(commands)
    commands = codec.parse(text)
"""

# Standard
from typing import Dict, Union

# First-Party
from modtranscoder.codecs.base import CommandNotationCodec
from modtranscoder.codecs.indented import IndentedBlockCodec
from modtranscoder.codecs.inline import InlineCodec
from modtranscoder.codecs.structured import StructuredCodec
from modtranscoder.errors import UnsupportedNotationError
from modtranscoder.models import Notation

# Factory map – ties Notation enum values to their codec instances
_CODECS: Dict[Notation, CommandNotationCodec] = {
    Notation.INDENTED: IndentedBlockCodec(),
    Notation.INLINE: InlineCodec(),
    Notation.STRUCTURED: StructuredCodec(),
}


def get_codec(notation: Union[Notation, str]) -> CommandNotationCodec:
    """Resolve the codec for a notation.

    Args:
        notation: ``Notation`` member or its name (``"inline"``, ``"format2"`` ...).

    Returns:
        CommandNotationCodec: Shared stateless codec instance.

    Raises:
        UnsupportedNotationError: If the name matches no notation.

    Examples:
        >>> get_codec("format1").language
        'menuFormat1'
        >>> get_codec(Notation.STRUCTURED).notation
        <Notation.STRUCTURED: 'structured'>
        >>> try:
        ...     get_codec("yaml")
        ... except UnsupportedNotationError as e:
        ...     print(e)
        unsupported notation: 'yaml'
    """
    try:
        key = Notation(notation)
    except ValueError as exc:
        raise UnsupportedNotationError(f"unsupported notation: {notation!r}") from exc
    return _CODECS[key]


__all__ = [
    "CommandNotationCodec",
    "IndentedBlockCodec",
    "InlineCodec",
    "StructuredCodec",
    "get_codec",
]
