"""Configuration management for iplocation.

Loads and validates TOML configuration files with dataclass-based structure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib  # Python 3.11+ stdlib

from iplocation.geo.database import DEFAULT_MODE, OPEN_MODES, get_default_db_path


@dataclass
class DatabaseConfig:
    """Configuration for the GeoIP database."""
    path: str = field(default_factory=lambda: str(get_default_db_path()))
    mode: str = DEFAULT_MODE


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "terminal"


@dataclass
class IPLocationConfig:
    """Main configuration container for iplocation."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: Path | str | None = None) -> IPLocationConfig:
    """Load config from TOML file, or return defaults if not found.

    Args:
        path: Path to TOML config file. If None, returns default config.

    Returns:
        IPLocationConfig instance with loaded or default values.

    Raises:
        FileNotFoundError: If path is provided but file doesn't exist.
        ValueError: If TOML parsing fails.
    """
    if path is None:
        return IPLocationConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Failed to parse TOML config: {e}") from e

    return _build_config(data)


def _build_config(data: dict[str, Any]) -> IPLocationConfig:
    """Build IPLocationConfig from parsed TOML data."""
    config = IPLocationConfig()

    if "database" in data:
        db = data["database"]
        config.database = DatabaseConfig(
            path=str(Path(db["path"]).expanduser()) if "path" in db else config.database.path,
            mode=db.get("mode", DEFAULT_MODE),
        )

    if "output" in data:
        config.output = OutputConfig(
            format=data["output"].get("format", "terminal"),
        )

    return config


def validate_config(config: IPLocationConfig) -> list[str]:
    """Validate config and return list of warnings/errors.

    Args:
        config: IPLocationConfig instance to validate.

    Returns:
        List of warning/error messages. Empty list if config is valid.
    """
    warnings = []

    if not config.database.path:
        warnings.append("database.path must not be empty")
    if config.database.mode not in OPEN_MODES:
        warnings.append(
            f"database.mode '{config.database.mode}' is not valid "
            f"(use one of: {', '.join(OPEN_MODES)})"
        )

    if config.output.format not in ("terminal", "json"):
        warnings.append(f"output.format '{config.output.format}' is not valid (use 'terminal' or 'json')")

    return warnings
