"""Custom exceptions for the icon font build system."""

from typing import Any


class IconFontError(Exception):
    """Base exception for all icon font build errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(IconFontError):
    """Exception raised for configuration errors."""


class PipelineError(IconFontError):
    """Exception raised when the build pipeline cannot proceed."""


class FetchError(IconFontError):
    """Exception raised when a remote resource cannot be fetched."""

    def __init__(self, url: str, status_code: int | None = None, reason: str | None = None):
        if status_code is not None:
            message = f"HTTP {status_code} for {url}"
        else:
            message = f"Request failed for {url}: {reason or 'unknown error'}"
        super().__init__(message, details={"url": url, "status_code": status_code})
        self.url = url
        self.status_code = status_code
        self.reason = reason


class StylesheetFetchError(IconFontError):
    """Exception raised when a family stylesheet cannot be fetched."""

    def __init__(self, family: str, error: Exception):
        super().__init__(f"Failed to fetch CSS for {family}: {error}", details={"family": family})
        self.family = family


class AssetFetchError(IconFontError):
    """Exception raised when a web font asset referenced by a stylesheet cannot be fetched."""

    def __init__(self, url: str, error: Exception):
        super().__init__(f"Failed to download {url}: {error}", details={"url": url})
        self.url = url


# Specific exception classes for TRY003 compliance
class SourceDirectoryNotFoundError(PipelineError):
    """Exception raised when the variable font source directory is missing."""

    def __init__(self, directory: str):
        super().__init__(f"Source directory not found: {directory}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class UnsafeRootDirectoryError(ValueError):
    """Exception raised when the build root would expose a system directory to cleanup."""

    def __init__(self, path: str):
        super().__init__(f"Refusing to use {path} as build root")


class InvalidUrlTemplateError(ValueError):
    """Exception raised for stylesheet URL templates without a family placeholder."""

    def __init__(self):
        super().__init__("Stylesheet URL template must be an http(s) URL containing '{family}'")
