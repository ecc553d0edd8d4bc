# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Transcoder exception hierarchy.

Every error raised by the codecs or the session facades derives from
``TranscoderError`` so callers (the CLI, an editor front-end) can catch one
type. Coercion problems never raise; only batch-fatal parse failures and
persistence-time invariant violations do.

Examples:
    >>> err = NotationParseError("structured", "root is not a list")
    >>> str(err)
    '[structured] root is not a list'
    >>> isinstance(err, TranscoderError)
    True
"""

# Standard
from typing import Any, Dict, List, Optional


class TranscoderError(Exception):
    """Base class for all transcoder errors."""


class UnsupportedNotationError(TranscoderError):
    """Raised when a notation or view name has no registered codec."""


class NotationParseError(TranscoderError):
    """Raised when edited text cannot be parsed into a canonical model.

    This is batch-fatal: no partial result is produced and the caller keeps
    its previous canonical model.

    Args:
        notation: Name of the notation that failed to parse.
        message: Human-readable reason.
        details: Optional per-field problems (see ``ErrorFormatter``).
        cause: Underlying exception, if any.

    Examples:
        >>> err = NotationParseError("structured", "bad", details=[{"field": "Args", "message": "x"}])
        >>> err.notation, len(err.details)
        ('structured', 1)
    """

    def __init__(self, notation: str, message: str, details: Optional[List[Dict[str, Any]]] = None, cause: Optional[Exception] = None):
        self.notation = notation
        self.details = details or []
        self.cause = cause
        super().__init__(f"[{notation}] {message}")


class DocumentValidationError(TranscoderError):
    """Raised when a canonical document fails model validation.

    Args:
        message: Human-readable reason.
        details: Per-field problems.
    """

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        self.details = details or []
        super().__init__(message)


class EmptyCommandError(TranscoderError):
    """Raised when a command without arguments is about to be persisted.

    Args:
        index: Position of the offending command in the list.

    Examples:
        >>> str(EmptyCommandError(3))
        'command #3 has no arguments and cannot be saved'
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"command #{index} has no arguments and cannot be saved")
