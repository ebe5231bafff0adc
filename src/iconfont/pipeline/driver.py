"""
Build Pipeline
==============

Sequences a full icon font build:

1. prepare output directories
2. copy source fonts into staging, adding sanitized copies
3. detect font families from the variable fonts
4. fetch and localize one stylesheet per family
5. relocate staged fonts (and svgs) into the output layout
6. clean up sources and intermediate files

Only network failures inside step 4 are recovered from. Filesystem errors
propagate to the caller.
"""

import logging
import re
import shutil
import time
from pathlib import Path

from iconfont.core.config import BuildConfig, Layout
from iconfont.core.exceptions import SourceDirectoryNotFoundError
from iconfont.core.models import FamilyResult, PipelineResult
from iconfont.fonts.cache import AssetCache, ChecksumAssetCache, DirectoryAssetCache
from iconfont.fonts.client import FontServiceClient
from iconfont.fonts.families import detect_families_in_directory
from iconfont.fonts.naming import sanitize_name
from iconfont.fonts.stylesheet import StylesheetLocalizer

logger = logging.getLogger(__name__)

STAGED_FILE_RE = re.compile(r"\.(ttf|woff2?|codepoints)$", re.IGNORECASE)
FLAT_FONT_FILE_RE = re.compile(r"\.(ttf|woff2?|svg)$", re.IGNORECASE)
BUILD_FONT_FILE_RE = re.compile(r"\.(ttf|woff2?|codepoints)$", re.IGNORECASE)
SVG_FILE_RE = re.compile(r"\.svg$", re.IGNORECASE)


class PipelineProgressCallback:
    """Base class for pipeline progress callbacks."""

    def on_step(self, step: str) -> None:
        """Called when a pipeline step starts."""

    def on_family_complete(self, result: FamilyResult) -> None:
        """Called after each family stylesheet has been handled."""

    def on_complete(self, result: PipelineResult) -> None:
        """Called when the pipeline completes."""


class LoggingProgressCallback(PipelineProgressCallback):
    """Progress callback that reports through the module logger."""

    def on_step(self, step: str) -> None:
        logger.info(f"Step: {step}")

    def on_family_complete(self, result: FamilyResult) -> None:
        if result.skipped:
            logger.info(f"✗ {result.family} skipped")
            return
        logger.info(
            f"✓ {result.family}: {len(result.downloaded)} downloaded, "
            f"{len(result.cached)} cached, {len(result.failed)} failed"
        )

    def on_complete(self, result: PipelineResult) -> None:
        logger.info(
            f"Build finished in {result.processing_time_ms / 1000:.1f}s: "
            f"{len(result.get_successful_families())} stylesheets written, "
            f"{len(result.get_skipped_families())} families skipped"
        )


def _move_overwrite(src: Path, dst: Path) -> Path:
    if dst.exists():
        dst.unlink()
    shutil.move(str(src), str(dst))
    return dst


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class BuildPipeline:
    """
    Linear build pipeline for a variable icon font distribution.

    All paths come from the BuildConfig, so independent pipelines can run
    against separate roots.
    """

    def __init__(
        self,
        config: BuildConfig,
        client: FontServiceClient | None = None,
        cache: AssetCache | None = None,
        progress_callback: PipelineProgressCallback | None = None,
    ):
        """
        Initialize build pipeline.

        Args:
            config: Build configuration
            client: Optional pre-configured font service client
            cache: Optional asset cache, defaults to the output fonts directory
            progress_callback: Optional progress callback
        """
        self.config = config
        self._owns_client = client is None
        self.client = client or FontServiceClient(config.fetch)
        self.cache = cache or self._create_cache()
        self.progress_callback = progress_callback or LoggingProgressCallback()

    def _create_cache(self) -> AssetCache:
        if self.config.verify_checksums:
            return ChecksumAssetCache(self.config.fonts_dir)
        return DirectoryAssetCache(self.config.fonts_dir)

    def run(self) -> PipelineResult:
        """
        Run every pipeline step in order.

        Returns:
            PipelineResult summarizing the build
        """
        start_time = time.time()
        callback = self.progress_callback

        try:
            callback.on_step("prepare directories")
            self.prepare_directories()

            callback.on_step("copy and sanitize fonts")
            copied_files = self.copy_and_sanitize_fonts()

            callback.on_step("detect families")
            families = self.detect_families()

            callback.on_step("localize stylesheets")
            family_results = self.localize_stylesheets(families)

            callback.on_step("relocate outputs")
            relocated_files = self.relocate_outputs()

            removed_paths = []
            if self.config.cleanup:
                callback.on_step("cleanup")
                removed_paths = self.cleanup()
        finally:
            if self._owns_client:
                self.client.close()

        result = PipelineResult(
            families=family_results,
            copied_files=copied_files,
            relocated_files=relocated_files,
            removed_paths=removed_paths,
            output_directory=self.config.output_root,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        callback.on_complete(result)
        return result

    def prepare_directories(self) -> None:
        """Create output directories for the configured layout."""
        for directory in (self.config.fonts_dir, self.config.css_dir, self.config.svgs_dir):
            if directory is not None:
                directory.mkdir(parents=True, exist_ok=True)

    def copy_and_sanitize_fonts(self) -> list[Path]:
        """
        Copy font, web font and codepoints files into the staging directory.

        Each file is staged under its raw name and, when sanitizing changes
        the name, a second time under the sanitized name.

        Returns:
            Staged file paths
        """
        source_dir = self.config.source_dir
        staging_dir = self.config.staging_dir

        if not source_dir.is_dir():
            raise SourceDirectoryNotFoundError(str(source_dir))

        staging_dir.mkdir(parents=True, exist_ok=True)
        copied = []

        for src in sorted(source_dir.iterdir()):
            if not src.is_file() or not STAGED_FILE_RE.search(src.name):
                continue

            copied.append(Path(shutil.copy2(src, staging_dir / src.name)))

            sanitized = sanitize_name(src.name)
            if sanitized != src.name:
                copied.append(Path(shutil.copy2(src, staging_dir / sanitized)))
                logger.debug(f"Staged {src.name} as {sanitized}")

        logger.info(f"Staged {len(copied)} files in {staging_dir}")
        return copied

    def detect_families(self) -> list[str]:
        """Detect family queries from the source directory, honouring the allow list."""
        allow_list = self.config.allow_list or None
        return detect_families_in_directory(self.config.source_dir, allow_list)

    def localize_stylesheets(self, families: list[str]) -> list[FamilyResult]:
        """Fetch and rewrite one stylesheet per family."""
        if not families:
            logger.info("No families detected.")
            return []

        localizer = StylesheetLocalizer(self.client, self.cache, self.config.css_dir, self.config)
        results = localizer.localize_all(families)
        for result in results:
            self.progress_callback.on_family_complete(result)
        return results

    def relocate_outputs(self) -> list[Path]:
        """
        Move staged files into the output layout, overwriting existing files.

        Returns:
            Destination paths of moved files
        """
        staging_dir = self.config.staging_dir
        if not staging_dir.exists():
            return []

        relocated = []
        for src in sorted(staging_dir.iterdir()):
            if not src.is_file():
                continue

            destination_dir = self._relocation_target(src.name)
            if destination_dir is None:
                continue

            relocated.append(_move_overwrite(src, destination_dir / src.name))

        logger.info(f"Relocated {len(relocated)} files")
        return relocated

    def _relocation_target(self, filename: str) -> Path | None:
        if self.config.layout == Layout.FLAT:
            return self.config.fonts_dir if FLAT_FONT_FILE_RE.search(filename) else None

        if SVG_FILE_RE.search(filename):
            return self.config.svgs_dir
        if BUILD_FONT_FILE_RE.search(filename):
            return self.config.fonts_dir
        return None

    def cleanup(self) -> list[Path]:
        """
        Remove sources and intermediate files.

        The flat layout keeps only ``fonts/`` and ``css/`` in the root. The
        build layout removes the source and staging directories and leaves
        every other root entry alone.

        Returns:
            Removed paths
        """
        root = self.config.root_dir

        if self.config.layout == Layout.FLAT:
            keep = {self.config.fonts_dir.name, self.config.css_dir.name}
            targets = [item for item in sorted(root.iterdir()) if item.name not in keep]
        else:
            staging_top = root / Path(self.config.staging_dir_name).parts[0]
            targets = [path for path in (self.config.source_dir, staging_top) if path.exists()]

        for path in targets:
            _remove_path(path)
            logger.debug(f"Removed {path}")

        logger.info(f"Cleanup removed {len(targets)} paths")
        return targets
