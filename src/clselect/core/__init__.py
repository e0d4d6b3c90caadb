"""
Core data structures, configuration and errors.
"""

from clselect.core.priority import PriorityList
from clselect.core.config import (
    Config,
    DisplayConfig,
    StorageConfig,
    SelectionConfig,
    LoggingConfig,
    load_config,
    get_config_path,
)
from clselect.core.errors import (
    ClSelectError,
    EnumerationError,
    DisplayError,
    StorageError,
)

__all__ = [
    "PriorityList",
    "Config",
    "DisplayConfig",
    "StorageConfig",
    "SelectionConfig",
    "LoggingConfig",
    "load_config",
    "get_config_path",
    "ClSelectError",
    "EnumerationError",
    "DisplayError",
    "StorageError",
]
