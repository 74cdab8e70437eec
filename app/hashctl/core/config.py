"""hashctl configuration and settings.

This module provides the configuration model and I/O functions for the
scanner and presenter: excluded roots, digest algorithm, listing palette
and default output location.

Configuration is stored in ~/.config/hashctl/config.toml. A missing file
means defaults.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.color import Color, ColorParseError

from hashctl.core.paths import DEFAULT_OUTPUT_PATH, get_config_path
from hashctl.filesystem.digest import (
    DEFAULT_ALGORITHM,
    UnsupportedAlgorithmError,
    resolve_algorithm,
)
from hashctl.filesystem.exclusions import DEFAULT_EXCLUDE_ROOTS

logger = logging.getLogger(__name__)

# Cycling colors for manifest listings
DEFAULT_PALETTE: tuple[str, ...] = ("red", "green", "yellow", "blue", "magenta", "cyan")


class HashctlConfig(BaseModel):
    """Configuration passed explicitly into the scanner and presenter.

    Attributes:
        exclude_roots: Roots whose subtrees a scan never enters.
        algorithm: hashlib algorithm producing 256-bit digests.
        palette: Rich colors cycled per line when listing a manifest.
        default_output: Manifest destination when none is given.
    """

    model_config = ConfigDict(extra="forbid")

    exclude_roots: Annotated[
        list[str],
        Field(description="Excluded root paths (prefix match)"),
    ] = list(DEFAULT_EXCLUDE_ROOTS)
    algorithm: Annotated[
        str,
        Field(description="256-bit hashlib digest algorithm"),
    ] = DEFAULT_ALGORITHM
    palette: Annotated[
        list[str],
        Field(min_length=1, description="Colors cycled per manifest line"),
    ] = list(DEFAULT_PALETTE)
    default_output: Annotated[
        str,
        Field(min_length=1, description="Default manifest destination"),
    ] = DEFAULT_OUTPUT_PATH

    @field_validator("exclude_roots")
    @classmethod
    def validate_exclude_roots(cls, v: list[str]) -> list[str]:
        """Require absolute exclusion roots."""
        for root in v:
            if not root.startswith("/"):
                msg = f"exclude root must be an absolute path: {root!r}"
                raise ValueError(msg)
        return v

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Accept only algorithms producing 256-bit digests."""
        try:
            return resolve_algorithm(v)
        except UnsupportedAlgorithmError as e:
            raise ValueError(str(e)) from None

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v: list[str]) -> list[str]:
        """Check that each palette entry is a color Rich understands."""
        for color in v:
            try:
                Color.parse(color)
            except ColorParseError:
                msg = f"invalid palette color {color!r}"
                raise ValueError(msg) from None
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> HashctlConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated HashctlConfig. Defaults if the file doesn't exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return HashctlConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return HashctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: HashctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    Args:
        config: Configuration to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "wb") as f:
            tomli_w.dump(config.model_dump(), f)
    except OSError as e:
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
