"""Build pipeline for icon font distributions."""

from .driver import BuildPipeline, LoggingProgressCallback, PipelineProgressCallback

__all__ = [
    "BuildPipeline",
    "LoggingProgressCallback",
    "PipelineProgressCallback",
]
