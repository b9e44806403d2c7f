"""Configuration management for the plant tracker.

Resolution order, highest priority first:
1. Keyword overrides passed to Settings()
2. Environment variables (PLANT_TRACKER_*)
3. TOML config file
4. Built-in defaults

Example config.toml::

    [database]
    path = "/var/lib/plant-tracker/plants.db"

    [network]
    bind_address = "0.0.0.0"
    bind_port = 8080

    [logging]
    level = "debug"

    [api]
    cors_origin = "https://plants.example.org"
"""

import logging
import os
import tomllib
from pathlib import Path

log = logging.getLogger(__name__)

ENV_PREFIX = "PLANT_TRACKER_"
CONFIG_ENV_VAR = ENV_PREFIX + "CONFIG"

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

DEFAULTS = {
    "database_path": "plants.db",
    "bind_address": "127.0.0.1",
    "bind_port": 5000,
    "log_level": "info",
    "cors_origin": "*",
}

# Setting name -> (TOML section, key)
TOML_KEYS = {
    "database_path": ("database", "path"),
    "bind_address": ("network", "bind_address"),
    "bind_port": ("network", "bind_port"),
    "log_level": ("logging", "level"),
    "cors_origin": ("api", "cors_origin"),
}


def load_toml_config(config_path):
    """Load configuration from a TOML file.

    Args:
        config_path: Path to config.toml

    Returns:
        Dictionary with configuration sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid TOML
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e


def get_config_path():
    """Config file path: $PLANT_TRACKER_CONFIG, else ./config.toml."""
    return Path(os.environ.get(CONFIG_ENV_VAR, "config.toml"))


class Settings:
    """Runtime settings for the plant tracker.

    Attributes:
        database_path: SQLite database file
        bind_address: Address the development server listens on
        bind_port: Port the development server listens on
        log_level: Root logging level name (lowercase)
        cors_origin: Value of Access-Control-Allow-Origin on API responses
    """

    def __init__(self, config_path=None, **overrides):
        """Initialize settings.

        Args:
            config_path: Optional explicit path to config.toml
            **overrides: Setting values that take precedence over everything

        Raises:
            TypeError: If an override names an unknown setting
            ValueError: If the resolved log level is unknown
        """
        unknown = set(overrides) - set(DEFAULTS)
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")

        self.config_path = Path(config_path) if config_path else get_config_path()
        self._config = {}
        if self.config_path.exists():
            try:
                self._config = load_toml_config(self.config_path)
            except ValueError as e:
                log.warning("Ignoring config file: %s", e)

        self._apply_config(overrides)

    def _apply_config(self, overrides):
        for name, default in DEFAULTS.items():
            section, key = TOML_KEYS[name]
            value = self._config.get(section, {}).get(key, default)
            value = os.environ.get(ENV_PREFIX + name.upper(), value)
            value = overrides.get(name, value)
            setattr(self, name, value)

        self.database_path = str(self.database_path)
        self.bind_port = int(self.bind_port)
        self.log_level = str(self.log_level).lower()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {self.log_level}. Available: {list(LOG_LEVELS)}")

    def get(self, key, default=None):
        """Get a configuration value."""
        return getattr(self, key, default)

    def as_flask_config(self):
        """Settings as uppercase keys for app.config."""
        return {name.upper(): getattr(self, name) for name in DEFAULTS}
