"""Pydantic models for build results."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class AssetStatus(str, Enum):
    """Outcome of acquiring one stylesheet asset."""

    DOWNLOADED = "downloaded"
    CACHED = "cached"
    FAILED = "failed"


class AssetResult(BaseModel):
    """Result for a single asset URL found in a stylesheet."""

    url: str = Field(..., description="Absolute URL as it appeared in the stylesheet")
    local_name: str = Field(..., description="Sanitized local filename")
    status: AssetStatus = Field(..., description="How the asset was acquired")
    rewritten: bool = Field(True, description="Whether the stylesheet now points at the local file")
    error: str | None = Field(None, description="Error message if the download failed")


class FamilyResult(BaseModel):
    """Result of localizing one font family stylesheet."""

    family: str = Field(..., description="Family query string, e.g. Material+Symbols+Outlined")
    stylesheet_url: str = Field(..., description="Remote stylesheet URL")
    css_path: Path | None = Field(None, description="Written stylesheet, None when skipped")
    skipped: bool = Field(False, description="True when the stylesheet could not be fetched")
    error: str | None = Field(None, description="Stylesheet fetch error if skipped")
    assets: list[AssetResult] = Field(default_factory=list)

    @property
    def downloaded(self) -> list[AssetResult]:
        return [asset for asset in self.assets if asset.status == AssetStatus.DOWNLOADED]

    @property
    def cached(self) -> list[AssetResult]:
        return [asset for asset in self.assets if asset.status == AssetStatus.CACHED]

    @property
    def failed(self) -> list[AssetResult]:
        return [asset for asset in self.assets if asset.status == AssetStatus.FAILED]


class PipelineResult(BaseModel):
    """Result of a full build run."""

    families: list[FamilyResult] = Field(default_factory=list)
    copied_files: list[Path] = Field(default_factory=list, description="Files staged from sources")
    relocated_files: list[Path] = Field(default_factory=list, description="Final font/svg paths")
    removed_paths: list[Path] = Field(default_factory=list, description="Paths deleted by cleanup")
    output_directory: Path = Field(..., description="Root of the produced fonts/ and css/")
    processing_time_ms: float = Field(0.0, ge=0.0, description="Total run time")

    def get_successful_families(self) -> list[FamilyResult]:
        """Get families whose stylesheet was written."""
        return [family for family in self.families if not family.skipped]

    def get_skipped_families(self) -> list[FamilyResult]:
        """Get families whose stylesheet could not be fetched."""
        return [family for family in self.families if family.skipped]
