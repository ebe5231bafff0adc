"""Core components for the icon font build."""

from .config import AppConfig, BuildConfig, FetchConfig, Layout, MissingAssetPolicy
from .exceptions import (
    AssetFetchError,
    ConfigurationError,
    FetchError,
    IconFontError,
    PipelineError,
    SourceDirectoryNotFoundError,
    StylesheetFetchError,
)
from .models import AssetResult, AssetStatus, FamilyResult, PipelineResult

__all__ = [
    "AppConfig",
    "AssetFetchError",
    "AssetResult",
    "AssetStatus",
    "BuildConfig",
    "ConfigurationError",
    "FamilyResult",
    "FetchConfig",
    "FetchError",
    "IconFontError",
    "Layout",
    "MissingAssetPolicy",
    "PipelineError",
    "PipelineResult",
    "SourceDirectoryNotFoundError",
    "StylesheetFetchError",
]
