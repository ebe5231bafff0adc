"""Configuration management for the icon font build system."""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidUrlTemplateError,
    InvalidYamlError,
    UnsafeRootDirectoryError,
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; UpdateScript/1.0)"
DEFAULT_STYLESHEET_URL = "https://fonts.googleapis.com/css2?family={family}&display=swap"


class Layout(str, Enum):
    """Output directory layout."""

    FLAT = "flat"  # fonts/ and css/ at the root, everything else removed
    BUILD = "build"  # build/fonts, build/css, build/svgs; only sources removed


class MissingAssetPolicy(str, Enum):
    """What to do with a stylesheet URL whose asset is not available locally."""

    REWRITE = "rewrite"
    KEEP_REMOTE = "keep_remote"


def validate_root_dir(path: str | Path, field_name: str = "root_dir") -> Path:
    """
    Validate a build root directory.

    The flat layout deletes every root entry except its outputs, so the
    filesystem anchor and the user's home directory are rejected outright.

    Args:
        path: Path to validate
        field_name: Name of the field being validated (for error messages)

    Returns:
        Validated Path object

    Raises:
        UnsafeRootDirectoryError: If path resolves to a protected directory
    """
    for pattern in ("\x00", "\n", "\r"):
        if pattern in str(path):
            raise UnsafeRootDirectoryError(f"{field_name}={path!r}")

    path_obj = Path(path).expanduser()
    resolved = path_obj.resolve()

    if resolved == Path(resolved.anchor) or resolved == Path.home().resolve():
        raise UnsafeRootDirectoryError(str(resolved))

    return path_obj


class FetchConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Remote font service configuration."""

    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with every request")
    timeout_seconds: float = Field(30.0, gt=0.0, description="Per-request timeout")
    stylesheet_url_template: str = Field(
        DEFAULT_STYLESHEET_URL, description="CSS endpoint with a {family} placeholder"
    )

    @field_validator("stylesheet_url_template")
    @classmethod
    def validate_url_template(cls, v):
        if "{family}" not in v or not v.startswith(("https://", "http://")):
            raise InvalidUrlTemplateError()
        return v


class BuildConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Pipeline configuration: directories, layout and family policy."""

    root_dir: Path = Field(Path("."), description="Working root of the build")
    source_dir_name: str = Field("variablefont", description="Variable font source directory")
    staging_dir_name: str = Field("symbols/web", description="Staging directory for copied fonts")
    build_dir_name: str = Field("build", description="Output directory for the build layout")
    layout: Layout = Field(Layout.FLAT, description="Output layout (flat, build)")

    # Family policy
    allow_list: list[str] = Field(
        default_factory=list, description="Accepted family queries (empty accepts all)"
    )

    # Stylesheet rewriting
    missing_asset_policy: MissingAssetPolicy = Field(
        MissingAssetPolicy.REWRITE, description="Rewrite policy for assets that failed to download"
    )
    asset_url_prefix: str = Field("../fonts/", description="Relative prefix for local asset URLs")
    verify_checksums: bool = Field(False, description="Verify cached assets against sidecar digests")

    # Run behaviour
    cleanup: bool = Field(True, description="Remove sources and intermediate files after the run")
    show_progress: bool = Field(False, description="Show a progress bar while fetching families")

    fetch: FetchConfig = Field(default_factory=FetchConfig)

    @field_validator("root_dir")
    @classmethod
    def validate_root(cls, v):
        """Validate root directory for cleanup safety."""
        return validate_root_dir(v, "root_dir")

    @field_validator("allow_list")
    @classmethod
    def strip_allow_list(cls, v):
        return [family.strip() for family in v if family.strip()]

    @property
    def source_dir(self) -> Path:
        return self.root_dir / self.source_dir_name

    @property
    def staging_dir(self) -> Path:
        return self.root_dir / self.staging_dir_name

    @property
    def output_root(self) -> Path:
        """Directory that receives fonts/, css/ (and svgs/ for the build layout)."""
        if self.layout == Layout.BUILD:
            return self.root_dir / self.build_dir_name
        return self.root_dir

    @property
    def fonts_dir(self) -> Path:
        return self.output_root / "fonts"

    @property
    def css_dir(self) -> Path:
        return self.output_root / "css"

    @property
    def svgs_dir(self) -> Path | None:
        if self.layout == Layout.BUILD:
            return self.output_root / "svgs"
        return None


class AppConfig(BaseSettings):
    """Main application configuration that loads from multiple sources."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Application log level")
    build: BuildConfig = Field(default_factory=BuildConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load_from_env(cls, env_file: str | Path | None = ".env") -> "AppConfig":
        """Load configuration from environment variables and .env file."""
        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                return cls(_env_file=env_file)
        return cls()


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open(encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        # YAML values win; don't let a stray .env override them
        class TempConfig(config_class):
            model_config = SettingsConfigDict(
                env_file=None,
                case_sensitive=False,
                extra="ignore",
            )

        return TempConfig(**config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e


def _add_yaml_methods():
    """Add YAML loading methods to configuration classes."""

    @classmethod
    def from_yaml(cls, config_path: str | Path):
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(cls, yaml_path: str | Path | None = None, env_file: str = ".env"):
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)

    for config_class in [FetchConfig, BuildConfig, AppConfig]:
        config_class.from_yaml = from_yaml
        config_class.from_env_and_yaml = from_env_and_yaml


_add_yaml_methods()
