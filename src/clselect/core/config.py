"""
Configuration management for clselect.

Handles loading and access to configuration settings.
"""

import logging
import os
import yaml
from dataclasses import dataclass
from typing import Optional, Dict, Any
from pathlib import Path

logger = logging.getLogger(__name__)


# Default configuration paths
CONFIG_PATHS = [
    "/etc/clselect/config.yaml",
    os.path.expanduser("~/.config/clselect/config.yaml"),
    "config.yaml",
]

DEFAULT_STORAGE_PATH = os.path.expanduser("~/.config/clselect/priorities.yaml")


@dataclass
class DisplayConfig:
    """Terminal display configuration."""
    split_ratio: float = 0.5  # Share of the width given to the prioritized pane
    highlight_symbol: str = ">>"
    show_summary: bool = True  # Print platforms before entering the UI

    def __post_init__(self):
        if not 0.1 <= self.split_ratio <= 0.9:
            logger.warning(f"split_ratio {self.split_ratio} out of range, using 0.5")
            self.split_ratio = 0.5


@dataclass
class StorageConfig:
    """Persistence of the priority list between runs."""
    enabled: bool = True
    path: str = DEFAULT_STORAGE_PATH


@dataclass
class SelectionConfig:
    """How enumerated devices are placed when nothing was saved."""
    initial_placement: str = "remaining"  # 'remaining', 'prioritized'

    def __post_init__(self):
        if self.initial_placement not in ("remaining", "prioritized"):
            logger.warning(
                f"Unknown initial_placement '{self.initial_placement}', using 'remaining'"
            )
            self.initial_placement = "remaining"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    file: str = ""  # Empty logs to stderr


@dataclass
class Config:
    """Main configuration class."""
    version: int = 1
    display: DisplayConfig = None
    storage: StorageConfig = None
    selection: SelectionConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        if self.display is None:
            self.display = DisplayConfig()
        if self.storage is None:
            self.storage = StorageConfig()
        if self.selection is None:
            self.selection = SelectionConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "version" in data:
            config.version = data["version"]

        if "display" in data:
            config.display = DisplayConfig(**data["display"])

        if "storage" in data:
            config.storage = StorageConfig(**data["storage"])

        if "selection" in data:
            config.selection = SelectionConfig(**data["selection"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "version": self.version,
            "display": {
                "split_ratio": self.display.split_ratio,
                "highlight_symbol": self.display.highlight_symbol,
                "show_summary": self.display.show_summary,
            },
            "storage": {
                "enabled": self.storage.enabled,
                "path": self.storage.path,
            },
            "selection": {
                "initial_placement": self.selection.initial_placement,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }

    def save(self, path: Optional[str] = None):
        """Save configuration to file."""
        if path is None:
            path = CONFIG_PATHS[1]

        # Ensure directory exists
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


def load_config(path: Optional[str] = None) -> Config:
    """
    Load configuration from file.

    Args:
        path: Path to config file. If None, searches default locations.

    Returns:
        Config object with loaded or default settings.
    """
    if path is not None:
        paths_to_try = [path]
    else:
        paths_to_try = CONFIG_PATHS

    for config_path in paths_to_try:
        if os.path.exists(config_path):
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f)
                if isinstance(data, dict):
                    logger.debug(f"Loaded config from {config_path}")
                    return Config.from_dict(data)
            except (OSError, yaml.YAMLError, TypeError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")

    # Return default config
    return Config()


def get_config_path() -> Optional[str]:
    """Get the path to the active config file."""
    for path in CONFIG_PATHS:
        if os.path.exists(path):
            return path
    return None
