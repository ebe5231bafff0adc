"""
Family Detection
================

Infers font family query strings (``Material+Symbols+Outlined``) from the
variable font files in a source directory.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from iconfont.core.exceptions import SourceDirectoryNotFoundError

from .naming import family_words, sanitize_name

logger = logging.getLogger(__name__)

VARIABLE_FONT_EXTENSION = ".ttf"


def family_query(sanitized_name: str) -> str:
    """
    Build a ``+``-joined family query from a sanitized filename.

    Args:
        sanitized_name: Output of ``sanitize_name``, with or without extension

    Returns:
        Family query string, empty when the name has no words
    """
    base, _ext = os.path.splitext(sanitized_name)
    return "+".join(family_words(base))


def detect_families(
    filenames: Iterable[str], allow_list: Iterable[str] | None = None
) -> list[str]:
    """
    Detect font family queries from a list of filenames.

    Only variable TrueType files are considered. Families are returned once,
    in the order their first source file appears.

    Args:
        filenames: Raw filenames from the source directory
        allow_list: Optional set of accepted family queries

    Returns:
        Ordered, de-duplicated family queries
    """
    allowed = set(allow_list) if allow_list is not None else None
    families: list[str] = []

    for filename in filenames:
        if not filename.endswith(VARIABLE_FONT_EXTENSION):
            continue

        family = family_query(sanitize_name(filename))
        if not family:
            continue

        if allowed is not None and family not in allowed:
            logger.debug(f"Ignoring family {family} from {filename}: not in allow list")
            continue

        if family not in families:
            families.append(family)

    return families


def detect_families_in_directory(
    directory: Path, allow_list: Iterable[str] | None = None
) -> list[str]:
    """
    Detect font family queries from the files in a directory.

    Args:
        directory: Variable font source directory
        allow_list: Optional set of accepted family queries

    Returns:
        Ordered, de-duplicated family queries

    Raises:
        SourceDirectoryNotFoundError: If the directory does not exist
    """
    if not directory.is_dir():
        raise SourceDirectoryNotFoundError(str(directory))

    filenames = sorted(entry.name for entry in directory.iterdir())
    families = detect_families(filenames, allow_list)
    logger.info(f"Detected {len(families)} font families in {directory}")
    return families
