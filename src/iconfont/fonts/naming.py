"""
Font Naming
===========

Filename sanitization for variable icon fonts and their web assets.

Raw names such as ``MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf`` or
``some-icon-font.woff2`` are normalized into stable camel-case identifiers
(``MaterialSymbolsOutlined.ttf``, ``SomeIconFont.woff2``). The same rules are
used for files copied from the source directory and for assets downloaded from
a stylesheet, so both end up under identical names.

Word boundaries are found by an explicit scanner rather than chained regex
substitutions:

- ``split_words``: any character outside ``[A-Za-z0-9]`` separates words, and a
  lowercase letter followed by an uppercase letter starts a new word.
- ``family_words``: whitespace separates words, a lowercase letter followed by an
  uppercase letter starts a new word, and inside a run of uppercase letters the
  last one starts a new word when a lowercase letter follows it
  (``"ABCDef"`` -> ``["ABC", "Def"]``).
"""

import os
import re

MATERIAL_SYMBOLS_PREFIX = "MaterialSymbols"
MATERIAL_SYMBOLS_RE = re.compile(r"materialsymbols[0-9A-Za-z_-]*", re.IGNORECASE | re.ASCII)
AXIS_TAG_RE = re.compile(r"\[.*\]\Z")


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_alnum(char: str) -> bool:
    return _is_lower(char) or _is_upper(char) or "0" <= char <= "9"


def split_words(text: str) -> list[str]:
    """
    Split text into identifier words.

    Args:
        text: Arbitrary text, typically a file base name

    Returns:
        Non-empty words in order of appearance
    """
    words: list[str] = []
    current: list[str] = []

    for char in text:
        if not _is_alnum(char):
            if current:
                words.append("".join(current))
                current = []
            continue

        if current and _is_lower(current[-1]) and _is_upper(char):
            words.append("".join(current))
            current = []

        current.append(char)

    if current:
        words.append("".join(current))

    return words


def camel_case(words: list[str]) -> str:
    """Uppercase the first letter of each word and join without separators."""
    return "".join(word[:1].upper() + word[1:] for word in words)


def family_words(identifier: str) -> list[str]:
    """
    Split a camel-case identifier into the words of a family name.

    Args:
        identifier: Extension-less sanitized name, e.g. ``MaterialSymbolsOutlined``

    Returns:
        Words such as ``["Material", "Symbols", "Outlined"]``
    """
    words: list[str] = []
    current: list[str] = []

    for index, char in enumerate(identifier):
        if char.isspace():
            if current:
                words.append("".join(current))
                current = []
            continue

        if current:
            previous = identifier[index - 1]
            following = identifier[index + 1] if index + 1 < len(identifier) else ""
            lower_to_upper = _is_lower(previous) and _is_upper(char)
            acronym_end = _is_upper(previous) and _is_upper(char) and _is_lower(following)
            if lower_to_upper or acronym_end:
                words.append("".join(current))
                current = []

        current.append(char)

    if current:
        words.append("".join(current))

    return words


def strip_axis_tag(base: str) -> str:
    """Remove a trailing bracketed variable-font axis tag such as ``[wght]``."""
    return AXIS_TAG_RE.sub("", base, count=1)


def sanitize_name(filename: str) -> str:
    """
    Sanitize a font or asset filename into a camel-case identifier.

    Names containing ``materialsymbols`` (any case) collapse to
    ``MaterialSymbols`` plus the camel-cased remainder of that run, dropping
    anything before it. Other names are camel-cased word by word. The
    extension is preserved verbatim. Names without any letters or digits are
    returned unchanged.

    Args:
        filename: Raw filename with extension

    Returns:
        Sanitized filename
    """
    base, ext = os.path.splitext(filename)
    stripped = strip_axis_tag(base)

    match = MATERIAL_SYMBOLS_RE.search(stripped)
    if match:
        tail = match.group(0)[len(MATERIAL_SYMBOLS_PREFIX) :]
        return f"{MATERIAL_SYMBOLS_PREFIX}{camel_case(split_words(tail))}{ext}"

    words = split_words(stripped)
    if words:
        return f"{camel_case(words)}{ext}"
    return f"{base}{ext}"
