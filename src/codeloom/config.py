"""Codeloom configuration system.

Configuration is YAML-based and optional: every default reproduces the
standard rendering rules, so a project only needs a file to change them.
Supports environment variable substitution (${VAR}) in config values.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.codeloom/config.yaml
3. ./codeloom.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from codeloom.exceptions import ConfigError

# Opening brackets that tighten the blank-line cap for the following line
OPENING_BRACKETS = ("{", "(", "[")

# Closing brackets that clamp pending blank lines before a line
CLOSING_BRACKETS = ("}", ")", "]")

COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class RenderConfig:
    """Line-spacing rules shared by both renderers.

    Caps count pending line breaks, so a cap of 2 allows one visible blank
    line between two content lines.

    Attributes:
        max_newlines: Cap on consecutive line breaks before a content line
        max_newlines_after_open: Cap after a line ending with an opening bracket
        max_newlines_before_close: Clamp before a line starting with a closing bracket
        trailing_newline: Keep one final line break when the document ends with one
    """

    max_newlines: int = 2
    max_newlines_after_open: int = 1
    max_newlines_before_close: int = 1
    trailing_newline: bool = True

    def __post_init__(self) -> None:
        """Validate render configuration."""
        for name in ("max_newlines", "max_newlines_after_open", "max_newlines_before_close"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"render.{name} must be a positive integer (got {value!r})")


@dataclass
class DebugConfig:
    """Provenance-coloured rendering settings.

    Attributes:
        legend_title: Label heading the legend section
        color_system: Terminal colour system (standard, 256, truecolor)
        boundary_style: rich style added at substitution boundaries
    """

    legend_title: str = "Provenance"
    color_system: str = "256"
    boundary_style: str = "underline"

    def __post_init__(self) -> None:
        """Validate debug configuration."""
        if self.color_system not in COLOR_SYSTEMS:
            raise ConfigError(
                f"Invalid colour system: {self.color_system}. Valid: {set(COLOR_SYSTEMS)}"
            )
        try:
            Style.parse(self.boundary_style)
        except StyleSyntaxError as e:
            raise ConfigError(f"Invalid boundary style {self.boundary_style!r}: {e}") from e

    @property
    def rich_color_system(self) -> ColorSystem:
        """Return the rich ColorSystem for the configured name."""
        return COLOR_SYSTEMS[self.color_system]

    @property
    def boundary(self) -> Style:
        """Return the parsed boundary style."""
        return Style.parse(self.boundary_style)


@dataclass
class CodeloomConfig:
    """Top-level Codeloom configuration.

    Attributes:
        render: Line-spacing rules
        debug: Provenance-coloured rendering settings
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)

    # Set by load_config
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _env_value(match: re.Match[str]) -> str:
    name = match.group(1)
    if name not in os.environ:
        raise ConfigError(f"Environment variable not set: {name}")
    return os.environ[name]


def substitute_env_vars(value: Any) -> Any:
    """Expand ${VAR} references in every string of a loaded YAML value.

    Mappings and lists are walked recursively; other scalars are returned
    as they are.

    Raises:
        ConfigError: If a referenced variable is not set
    """
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(_env_value, value)
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


# =============================================================================
# Config File Discovery
# =============================================================================

# Candidate locations relative to the search directory, highest priority first
CONFIG_FILE_NAMES = (Path(".codeloom") / "config.yaml", Path("codeloom.yaml"))


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Return the first existing config file in a directory.

    Args:
        start_path: Directory to look in (default: current directory)

    Returns:
        Path of the config file, or None when the directory has none
    """
    directory = (start_path or Path.cwd()).resolve()
    return next(
        (directory / name for name in CONFIG_FILE_NAMES if (directory / name).exists()),
        None,
    )


# =============================================================================
# Config Loading
# =============================================================================


def _int_setting(data: dict[str, Any], key: str, default: int) -> int:
    """Read an integer setting, accepting numeric strings from env substitution."""
    value = data.get(key, default)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


_BOOL_STRINGS = {"true": True, "false": False, "1": True, "0": False}


def _bool_setting(data: dict[str, Any], key: str, default: bool) -> bool:
    """Read a boolean setting, accepting true/false/1/0 strings from env substitution.

    Raises:
        ConfigError: If the value is not a recognised boolean
    """
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ConfigError(f"render.{key} must be true or false (got {value!r})")


def load_config_from_dict(data: dict[str, Any]) -> CodeloomConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        CodeloomConfig instance

    Raises:
        ConfigError: If a section is malformed or a value is invalid
    """
    data = substitute_env_vars(data)

    config = CodeloomConfig()

    if "render" in data:
        render_data = data["render"] or {}
        if not isinstance(render_data, dict):
            raise ConfigError("render section must be a mapping")
        defaults = config.render
        config.render = RenderConfig(
            max_newlines=_int_setting(render_data, "max_newlines", defaults.max_newlines),
            max_newlines_after_open=_int_setting(
                render_data, "max_newlines_after_open", defaults.max_newlines_after_open
            ),
            max_newlines_before_close=_int_setting(
                render_data, "max_newlines_before_close", defaults.max_newlines_before_close
            ),
            trailing_newline=_bool_setting(
                render_data, "trailing_newline", defaults.trailing_newline
            ),
        )

    if "debug" in data:
        debug_data = data["debug"] or {}
        if not isinstance(debug_data, dict):
            raise ConfigError("debug section must be a mapping")
        defaults = config.debug
        config.debug = DebugConfig(
            legend_title=str(debug_data.get("legend_title", defaults.legend_title)),
            color_system=str(debug_data.get("color_system", defaults.color_system)),
            boundary_style=str(debug_data.get("boundary_style", defaults.boundary_style)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> CodeloomConfig:
    """Read the YAML config file into a CodeloomConfig.

    An explicit path must exist. Without one, the working directory is
    searched unless auto_discover is False; finding nothing gives the
    defaults.

    Args:
        config_path: Config file chosen by the user
        auto_discover: Look for a config file in the working directory

    Returns:
        Loaded configuration, remembering the file it came from

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigError: If the file content is invalid
    """
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    source = config_path or (find_config_file() if auto_discover else None)
    if source is None:
        return CodeloomConfig()

    data = yaml.safe_load(source.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {source}")

    config = load_config_from_dict(data)
    config._config_path = source
    return config
