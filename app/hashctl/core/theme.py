"""Color theme for hashctl output.

The bundled ``hashctl/data/theme.toml`` defines every color; a user
``theme.toml`` in the config directory may override any subset of them.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from hashctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for every named style."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Compare output
    added: str = "#c1ff62"
    removed: str = "#f53263"
    changed: str = "#0e8ac8"
    highlight: str = "#ff3b3b"

    # Manifest listing
    digest: str = "#69B9A1"
    sentinel: str = "#f5b332"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info) -> str:
        """Accept only #RGB or #RRGGBB strings."""
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = v.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'") from None
        return color


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped with the package."""
    return Path(str(resources.files("hashctl.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        Color name to value for string entries, or None when the file is
        missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            colors = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user theme over the bundled one.

    An invalid merged theme falls back to the built-in defaults.
    """
    colors = _load_toml_colors(get_bundled_theme_path()) or {}
    colors.update(_load_toml_colors(get_user_theme_path()) or {})

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the consoles.

    Args:
        colors: Colors to use. Loaded from the theme files when None.
    """
    if colors is None:
        colors = load_theme()
    styles = colors.model_dump()
    for bold in ("error", "highlight", "sentinel"):
        styles[bold] = f"bold {styles[bold]}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    styles["path"] = colors.text
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme, loaded once per process."""
    return get_rich_theme()
