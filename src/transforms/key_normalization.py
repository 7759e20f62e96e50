"""Attribute key casing transforms.

This module rewrites attribute keys into one of the supported casing
styles. Every mode is idempotent: normalizing an already-normalized
key returns it unchanged.
"""

from __future__ import annotations

import re
from typing import Callable

from core.constants import DEFAULT_NORMALIZE_MODE
from core.errors import GeoConfigError

_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def normalize_key(key: str, mode: str = DEFAULT_NORMALIZE_MODE) -> str:
    """Rewrite a key in the requested casing style.

    Args:
        key: Raw attribute key.
        mode: One of ``hyphenate``, ``camelize``, ``underscore``,
            ``upper``, or ``lower``. Empty means ``underscore``.

    Returns:
        Normalized key.

    Raises:
        GeoConfigError: If the mode is unknown.
    """
    normalizer = _NORMALIZERS.get(mode or DEFAULT_NORMALIZE_MODE)
    if normalizer is None:
        raise GeoConfigError(
            f"Unsupported key normalization mode '{mode}'. "
            f"Use one of: {', '.join(_NORMALIZERS)}."
        )
    return normalizer(key)


def split_words(key: str) -> list[str]:
    """Split a key into words on separators and case boundaries.

    Args:
        key: Raw key such as ``Park Name``, ``parkName`` or ``HTTPServer``.

    Returns:
        Words in original case, e.g. ``["HTTP", "Server"]``.
    """
    words: list[str] = []
    for chunk in _SEPARATOR_PATTERN.split(key):
        if chunk:
            words.extend(_split_case_boundaries(chunk))
    return words


def underscore(key: str) -> str:
    """Return ``snake_case`` form of a key."""
    return "_".join(word.lower() for word in split_words(key))


def hyphenate(key: str) -> str:
    """Return ``kebab-case`` form of a key."""
    return "-".join(word.lower() for word in split_words(key))


def camelize(key: str) -> str:
    """Return ``UpperCamelCase`` form of a key."""
    return "".join(word[:1].upper() + word[1:] for word in split_words(key))


def _split_case_boundaries(chunk: str) -> list[str]:
    # A word starts at an uppercase letter that follows a non-uppercase
    # character, or that ends an acronym ("HTTPServer" -> "HTTP", "Server").
    words: list[str] = []
    start = 0
    for index in range(1, len(chunk)):
        previous, current = chunk[index - 1], chunk[index]
        following = chunk[index + 1] if index + 1 < len(chunk) else ""
        if current.isupper() and (not previous.isupper() or following.islower()):
            words.append(chunk[start:index])
            start = index
    words.append(chunk[start:])
    return words


_NORMALIZERS: dict[str, Callable[[str], str]] = {
    "hyphenate": hyphenate,
    "camelize": camelize,
    "underscore": underscore,
    "upper": str.upper,
    "lower": str.lower,
}
