"""Best-effort scalar typing for attribute values.

This module converts textual attribute values into the most specific
scalar type and renders values back to the text form used for
numeric classification.
"""

from __future__ import annotations

import math
import re
from typing import Any

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_BOOLEAN_VALUES = {"true": True, "false": False}


def autotype(value: Any) -> Any:
    """Convert a value to its best-guessed scalar type.

    Args:
        value: Raw attribute value.

    Returns:
        ``bool`` for true/false text, ``int`` for integer text, ``float``
        for finite decimal text, ``None`` for empty text, otherwise the
        value unchanged. Numbers too large to convert stay text.
        Non-string values are returned as-is.
    """
    if not isinstance(value, str):
        return value
    if value == "":
        return None
    boolean_value = _BOOLEAN_VALUES.get(value.lower())
    if boolean_value is not None:
        return boolean_value
    if _INTEGER_PATTERN.match(value):
        try:
            return int(value)
        except ValueError:
            # Past the interpreter's int digit limit; keep the text.
            return value
    if _DECIMAL_PATTERN.match(value):
        number = float(value)
        return number if math.isfinite(number) else value
    return value


def is_numeric(text: str) -> bool:
    """Return whether text is a plain decimal number.

    Signs, fractions, and exponents are accepted; ``nan`` and ``inf``
    are not.
    """
    return bool(_DECIMAL_PATTERN.match(text))


def value_to_text(value: Any) -> str:
    """Render a value in the textual form used for classification.

    Args:
        value: Raw attribute value.

    Returns:
        ``true``/``false`` for booleans, integral floats without a
        fractional part, empty text for None, ``str`` otherwise.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
