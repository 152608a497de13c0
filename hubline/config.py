"""
Configuration — Application settings management

These are settings of the program itself (where data lives, how to log,
how to draw). Client settings such as nick or slots are a different
thing: they live in the VariableStore and are changed with /set.

Config hierarchy (highest to lowest priority):
  1. Environment variables (HUBLINE_LOG_LEVEL, HUBLINE_SYMBOLS)
  2. Data directory config (<data dir>/config.yaml)
  3. User config (~/.hubline/config.yaml)
  4. Defaults

The data directory itself comes from --dir, then HUBLINE_DIR, then
~/.hubline.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger("hubline.config")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StorageConfig:
    """Where client settings are kept, relative to the data directory."""
    settings_file: str = "settings.yaml"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.settings_file:
            return "storage.settings_file must not be empty"
        return None


@dataclass
class LoggingConfig:
    """Log file preferences."""
    level: str = "WARNING"
    file: str = "hubline.log"
    max_bytes: int = 2_000_000
    backups: int = 3

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper(), logging.WARNING)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.level.upper() not in LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(LOG_LEVELS)}"
        if self.max_bytes < 0 or self.backups < 0:
            return "logging.max_bytes and logging.backups must not be negative"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> Optional[str]:
        """First validation error across sections, or None."""
        for section in (self.storage, self.logging, self.display):
            error = section.validate()
            if error:
                return error
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        storage_data = data.get("storage") or {}
        logging_data = data.get("logging") or {}
        display_data = data.get("display") or {}

        return cls(
            storage=StorageConfig(
                settings_file=storage_data.get("settings_file", "settings.yaml"),
            ),
            logging=LoggingConfig(
                level=str(logging_data.get("level", "WARNING")),
                file=logging_data.get("file", "hubline.log"),
                max_bytes=int(logging_data.get("max_bytes", 2_000_000)),
                backups=int(logging_data.get("backups", 3)),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
            ),
        )


def default_data_dir() -> Path:
    """HUBLINE_DIR, or ~/.hubline."""
    env = os.environ.get("HUBLINE_DIR")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".hubline"


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment variables
      2. Data directory config (<dir>/config.yaml)
      3. User config (~/.hubline/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".hubline"
    CONFIG_FILE = "config.yaml"

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir else default_data_dir()
        self._config: Optional[Config] = None

    @property
    def config_path(self) -> Path:
        return self.data_dir / self.CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_DIR / self.CONFIG_FILE

    @property
    def settings_path(self) -> Path:
        """Location of the client settings (VariableStore backend)."""
        return self.data_dir / self.load().storage.settings_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.load().logging.file

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Data directory config (higher priority)
        if self.config_path != self.user_config_path:
            config_data = self._merge(config_data, self._read(self.config_path))

        # Layer 3: Environment overrides
        if os.environ.get("HUBLINE_LOG_LEVEL"):
            config_data.setdefault("logging", {})["level"] = os.environ["HUBLINE_LOG_LEVEL"]
        if os.environ.get("HUBLINE_SYMBOLS"):
            config_data.setdefault("display", {})["symbols"] = os.environ["HUBLINE_SYMBOLS"]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring config %s: not a mapping", path)
            return {}
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

