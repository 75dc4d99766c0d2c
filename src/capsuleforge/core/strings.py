"""
String utility functions for CapsuleForge.

Pure transforms shared by every platform compiler:
- identifier sanitization and case conversions
- escaping text for quoted source literals
- hex color parsing
"""

from __future__ import annotations

import re
from typing import NamedTuple

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_LEADING_DIGIT = re.compile(r"^[0-9]")

# Word separators for case conversions (in addition to whitespace)
_SEPARATORS = re.compile(r"[\s_\-.]+")

# Splits camel humps: "QRCode" -> QR, Code; "dataTable2" -> data, Table, 2
_WORDS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class RGB(NamedTuple):
    """Integer color channels, each 0..255."""

    r: int
    g: int
    b: int


def to_identifier(name: str) -> str:
    """
    Convert arbitrary text to a valid identifier.

    Strips every character that is not alphanumeric or whitespace, removes
    whitespace, and prefixes a leading digit with an underscore.

    Examples:
        >>> to_identifier("Hello World!")
        'HelloWorld'
        >>> to_identifier("2Fast")
        '_2Fast'
    """
    cleaned = _NON_ALNUM.sub("", name)
    cleaned = _WHITESPACE.sub("", cleaned)
    return _LEADING_DIGIT.sub(r"_\g<0>", cleaned)


def capitalize(word: str) -> str:
    """Uppercase the first character, leave the rest alone."""
    return word[:1].upper() + word[1:]


def split_words(text: str) -> list[str]:
    """
    Split text into words on whitespace, ``-``, ``_``, ``.`` and camel humps.

    Other punctuation is dropped.

    Examples:
        >>> split_words("Data Table")
        ['Data', 'Table']
        >>> split_words("text.primary")
        ['text', 'primary']
        >>> split_words("QRCode")
        ['QR', 'Code']
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(text):
        chunk = _NON_ALNUM.sub("", chunk)
        words.extend(_WORDS.findall(chunk))
    return words


def to_camel_case(text: str) -> str:
    """
    Examples:
        >>> to_camel_case("Main Button")
        'mainButton'
    """
    words = [w.lower() for w in split_words(text)]
    if not words:
        return ""
    return words[0] + "".join(capitalize(w) for w in words[1:])


def to_pascal_case(text: str) -> str:
    """
    Examples:
        >>> to_pascal_case("my cool app")
        'MyCoolApp'
    """
    return "".join(capitalize(w.lower()) for w in split_words(text))


def to_snake_case(text: str) -> str:
    """
    Examples:
        >>> to_snake_case("HomePage")
        'home_page'
    """
    return "_".join(w.lower() for w in split_words(text))


def to_kebab_case(text: str) -> str:
    """
    Examples:
        >>> to_kebab_case("My Cool App")
        'my-cool-app'
    """
    return "-".join(w.lower() for w in split_words(text))


def escape_string(text: str) -> str:
    """
    Escape text for embedding inside a double-quoted source literal.

    Only backslash, double quote, newline, carriage return and tab are
    escaped; every other character passes through unchanged.

    Examples:
        >>> escape_string('a"b')
        'a\\\\"b'
    """
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def hex_to_rgb(value: object) -> RGB | None:
    """
    Parse a ``#RRGGBB`` or ``RRGGBB`` color.

    Exactly six hex digits, case-insensitive. Three-digit shorthand, alpha
    channels and anything malformed return None.

    Examples:
        >>> hex_to_rgb("#FF0000")
        RGB(r=255, g=0, b=0)
        >>> hex_to_rgb("not-a-color") is None
        True
    """
    if not isinstance(value, str):
        return None
    match = _HEX_COLOR.fullmatch(value)
    if not match:
        return None
    return RGB(*(int(group, 16) for group in match.groups()))


def rgb_to_hex(rgb: RGB) -> str:
    """Format channels as lowercase ``#rrggbb``."""
    return f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}"
