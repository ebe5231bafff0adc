"""Icon Font Builder
=================

Build step that prepares a variable icon font distribution:

- Sanitizes variable font filenames into stable camel-case identifiers
- Infers font family queries from those files
- Fetches each family's web stylesheet and the font assets it references
- Rewrites stylesheets to point at the locally cached assets
- Arranges fonts, stylesheets and svgs into an output layout
"""

__version__ = "1.0.0"

from .core.config import AppConfig, BuildConfig, FetchConfig
from .core.exceptions import FetchError, IconFontError, PipelineError
from .core.models import FamilyResult, PipelineResult
from .fonts import detect_families, sanitize_name
from .pipeline import BuildPipeline

__all__ = [
    "AppConfig",
    "BuildConfig",
    "BuildPipeline",
    "FamilyResult",
    "FetchConfig",
    "FetchError",
    "IconFontError",
    "PipelineError",
    "PipelineResult",
    "detect_families",
    "sanitize_name",
]
