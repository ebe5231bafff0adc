"""
Command Line Interface
======================

Commands to build an icon font distribution and to inspect how source
filenames are sanitized and grouped into families.
"""

import logging
import sys
from pathlib import Path

import click

from iconfont.core.config import AppConfig, BuildConfig, Layout
from iconfont.core.exceptions import IconFontError
from iconfont.fonts.families import detect_families_in_directory
from iconfont.fonts.naming import sanitize_name
from iconfont.pipeline.driver import BuildPipeline

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, force=True)


def _build_config_with_overrides(base: BuildConfig, **overrides) -> BuildConfig:
    """Apply command line overrides on top of env/YAML settings, re-running validation."""
    data = base.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return BuildConfig.model_validate(data)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, verbose):
    """Icon font distribution builder."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging("DEBUG" if verbose else "INFO")


@cli.command(name="build")
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Build root containing the variable font directory (default: current directory)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration YAML file (optional)",
)
@click.option(
    "--layout",
    type=click.Choice([layout.value for layout in Layout]),
    help="Output layout: flat (fonts/, css/) or build (build/fonts, build/css, build/svgs)",
)
@click.option(
    "--allow",
    "-a",
    "allow",
    multiple=True,
    help="Accept only this family query (repeatable), e.g. Material+Symbols+Outlined",
)
@click.option("--no-cleanup", is_flag=True, help="Keep sources and intermediate files")
@click.option("--verify-checksums", is_flag=True, help="Re-fetch cached assets with bad digests")
@click.option("--progress", is_flag=True, help="Show a progress bar while fetching families")
@click.pass_context
def build(ctx, root, config, layout, allow, no_cleanup, verify_checksums, progress):
    """Fetch stylesheets and assemble the icon font output directories."""
    try:
        app_config = AppConfig.from_env_and_yaml(yaml_path=config)
        if not ctx.obj.get("verbose"):
            logging.getLogger().setLevel(app_config.log_level)

        build_config = _build_config_with_overrides(
            app_config.build,
            root_dir=root,
            layout=layout,
            allow_list=list(allow) or None,
            cleanup=False if no_cleanup else None,
            verify_checksums=True if verify_checksums else None,
            show_progress=True if progress else None,
        )

        logger.info(f"Building icon fonts in {build_config.root_dir.resolve()}")
        result = BuildPipeline(build_config).run()

        skipped = result.get_skipped_families()
        if skipped:
            logger.warning(f"Skipped families: {', '.join(family.family for family in skipped)}")

        if build_config.layout == Layout.FLAT and build_config.cleanup:
            click.echo("Cleanup complete. Only /fonts and /css remain.")
        else:
            click.echo(f"Build complete. Output written to {result.output_directory}.")

    except IconFontError as e:
        logger.exception(f"Build failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


@cli.command(name="families")
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--allow", "-a", "allow", multiple=True, help="Accept only this family query")
def families(directory, allow):
    """List the family queries detected in a variable font directory."""
    try:
        detected = detect_families_in_directory(directory, list(allow) or None)
    except IconFontError as e:
        logger.exception(f"Family detection failed: {e}")
        sys.exit(1)

    if not detected:
        click.echo("No families detected.")
        return

    for family in detected:
        click.echo(family)


@cli.command(name="sanitize")
@click.argument("names", nargs=-1, required=True)
def sanitize(names):
    """Show how filenames are sanitized."""
    for name in names:
        click.echo(f"{name} -> {sanitize_name(name)}")


if __name__ == "__main__":
    cli()
