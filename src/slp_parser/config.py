"""Configuration loading and management."""

import logging
from dataclasses import dataclass
from pathlib import Path

try:
    import tomli
except ImportError:  # pragma: no cover
    import tomllib as tomli  # Python 3.11+

_LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Searched in order by the server entry point
CONFIG_PATHS = [
    Path("slp-parser.toml"),
    Path.home() / ".config" / "slp-parser" / "config.toml",
]


@dataclass
class Config:
    """Server configuration."""

    # Server settings
    server_name: str = "slp-parser"
    log_level: str = "WARNING"

    # Limits
    max_script_size: int = 10000
    max_batch_size: int = 1000

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")


DEFAULT_CONFIG = Config()


def load_config(path: Path) -> Config:
    """Load configuration from TOML file.

    Args:
        path: Path to config file

    Returns:
        Loaded configuration, merged with defaults
    """
    if not path.exists():
        return Config()

    with open(path, "rb") as f:
        data = tomli.load(f)

    _LOGGER.info("Loaded configuration from %s", path)

    server = data.get("server", {})
    limits = data.get("limits", {})

    return Config(
        server_name=server.get("name", "slp-parser"),
        log_level=server.get("log_level", "WARNING"),
        max_script_size=limits.get("max_script_size", 10000),
        max_batch_size=limits.get("max_batch_size", 1000),
    )


def find_config(paths: list[Path] = CONFIG_PATHS) -> Config:
    """Load the first config file that exists, or defaults if none does."""
    for path in paths:
        if path.exists():
            return load_config(path)
    return Config()
