"""Font Handling Module
====================

Filename sanitization, family detection and stylesheet localization for
variable icon fonts.
"""

from .cache import AssetCache, ChecksumAssetCache, DirectoryAssetCache
from .client import FontServiceClient
from .families import detect_families, detect_families_in_directory, family_query
from .naming import camel_case, family_words, sanitize_name, split_words
from .stylesheet import (
    StylesheetLocalizer,
    build_stylesheet_url,
    extract_asset_urls,
    local_asset_name,
    stylesheet_filename,
)

__all__ = [
    "AssetCache",
    "ChecksumAssetCache",
    "DirectoryAssetCache",
    "FontServiceClient",
    "StylesheetLocalizer",
    "build_stylesheet_url",
    "camel_case",
    "detect_families",
    "detect_families_in_directory",
    "extract_asset_urls",
    "family_query",
    "family_words",
    "local_asset_name",
    "sanitize_name",
    "split_words",
    "stylesheet_filename",
]
