# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/coercion.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Best-effort numeric coercion.

Editing widgets hand back whatever the user typed, including half-finished
input such as ``"1."`` or ``""``. Every numeric property field goes through
``coerce`` so that such input degrades to a known fallback instead of
producing NaN or raising.

Examples:
    >>> coerce("3.14", 5)
    3.14
    >>> coerce("abc", 5)
    5
    >>> coerce(None, 0)
    0
"""

# Standard
import math
from typing import Any, Union

Number = Union[int, float]


def coerce(raw: Any, fallback: Number) -> Number:
    """Parse ``raw`` as a float, returning ``fallback`` when that is not possible.

    Args:
        raw: String, number or ``None`` supplied by an editing widget.
        fallback: Value returned verbatim when ``raw`` is not a finite number.

    Returns:
        The parsed float, or ``fallback`` exactly.

    Examples:
        >>> coerce(" 2.5 ", 0)
        2.5
        >>> coerce("1.", 0)
        1.0
        >>> coerce(7, 0)
        7.0
        >>> coerce("", 1)
        1
        >>> coerce("nan", 0)
        0
        >>> coerce("inf", 0)
        0
        >>> coerce(True, 0)
        0
        >>> coerce([1], 4)
        4
        >>> coerce(10**400, 0)
        0
    """
    # bool is an int subclass; a checkbox value is never a number
    if raw is None or isinstance(raw, bool):
        return fallback

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return fallback
    elif not isinstance(raw, (int, float)):
        return fallback

    try:
        value = float(raw)
    except (OverflowError, ValueError):
        return fallback

    if math.isnan(value) or math.isinf(value):
        return fallback
    return value
