"""
Configuration Management for smashlog

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables
- Command line arguments

Configuration precedence (highest to lowest):
1. Command line arguments
2. Environment variables (SMASHLOG_*)
3. Configuration file
4. Default values

Configuration only affects reading, presentation, export and logging. The
action taxonomy is fixed and cannot be configured.
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, get_args, get_type_hints

import yaml

from smashlog.core.constants import BAR_CHAR, BAR_MAX_WIDTH, RATIO_PRECISION

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value has the wrong type."""


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class ParserConfig:
    """Configuration for reading battle logs."""

    encoding: str = "utf-8"


@dataclass
class DisplayConfig:
    """Configuration for the console report."""

    bar_width: int = BAR_MAX_WIDTH
    bar_char: str = BAR_CHAR
    ratio_precision: int = RATIO_PRECISION
    # Footer note when codes outside the action tables were counted as attacks
    show_unknown_codes: bool = True


@dataclass
class ExportConfig:
    """Configuration for data export."""

    default_format: str = "json"
    json_indent: int = 2
    csv_delimiter: str = ","
    include_metadata: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class SmashlogConfig:
    """Main configuration container."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Version of the config format
    config_version: str = "1.0"


_SECTIONS = ("parser", "display", "export", "logging")


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the paths searched for a configuration file, in priority order."""
    cwd = Path.cwd()
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))

    return [
        cwd / "smashlog.yaml",
        cwd / "smashlog.toml",
        cwd / "smashlog.json",
        xdg_config / "smashlog" / "config.yaml",
        xdg_config / "smashlog" / "config.toml",
    ]


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        "SMASHLOG_ENCODING": ("parser", "encoding"),
        "SMASHLOG_BAR_WIDTH": ("display", "bar_width"),
        "SMASHLOG_BAR_CHAR": ("display", "bar_char"),
        "SMASHLOG_EXPORT_FORMAT": ("export", "default_format"),
        "SMASHLOG_LOG_LEVEL": ("logging", "level"),
        "SMASHLOG_LOG_FILE": ("logging", "file"),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            config.setdefault(section, {})[key] = value

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _coerce_value(name: str, value: Any, expected: Any) -> Any:
    """
    Convert a raw file or environment value to a field's annotated type.

    Environment values always arrive as strings, and file values may be
    quoted, so numeric and boolean strings are converted. Anything else
    of the wrong type raises ConfigError.
    """
    options = get_args(expected)
    if value is None and type(None) in options:
        return None
    target = next((t for t in options if t is not type(None)), expected)

    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS + _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
    elif target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
    elif target is str:
        if isinstance(value, str):
            return value
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)

    raise ConfigError(
        f"invalid value for {name}: {value!r} (expected {target.__name__})"
    )


def dict_to_config(data: dict[str, Any]) -> SmashlogConfig:
    """
    Convert a dictionary to SmashlogConfig.

    Unknown keys are ignored with a warning. Values are converted to the
    type of the field they set.

    Raises:
        ConfigError: If a section is not a mapping or a value has the wrong type
    """
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping of sections")

    config = SmashlogConfig()

    for section_name in _SECTIONS:
        section = getattr(config, section_name)
        values = data.get(section_name) or {}
        if not isinstance(values, dict):
            raise ConfigError(f"config section '{section_name}' must be a mapping")

        hints = get_type_hints(type(section))
        for key, value in values.items():
            if key in hints:
                setattr(section, key, _coerce_value(f"{section_name}.{key}", value, hints[key]))
            else:
                logger.warning(f"Ignoring unknown config key: {section_name}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> SmashlogConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged SmashlogConfig
    """
    config_data: dict[str, Any] = {}

    # Try to find and load a config file
    if config_file:
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    # Merge environment variables
    if include_env:
        env_config = load_env_config()
        config_data = merge_configs(config_data, env_config)

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: SmashlogConfig) -> dict[str, Any]:
    """Convert SmashlogConfig to a dictionary."""
    return asdict(config)


def save_config(config: SmashlogConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (.yaml, .yml or .json)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown config format: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Configuration Templates
# ============================================================================

DEFAULT_CONFIG_YAML = """# smashlog configuration

# Log reading
parser:
  encoding: utf-8

# Console report
display:
  bar_width: 30
  bar_char: "#"
  ratio_precision: 1
  show_unknown_codes: true

# Export settings
export:
  default_format: json
  json_indent: 2
  csv_delimiter: ","
  include_metadata: true

# Logging settings
logging:
  level: WARNING
  # file: /path/to/smashlog.log
"""


def generate_default_config(path: Path) -> None:
    """Generate a default configuration file."""
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        path.write_text(DEFAULT_CONFIG_YAML)
    else:
        save_config(SmashlogConfig(), path)

    logger.info(f"Generated default config at: {path}")
