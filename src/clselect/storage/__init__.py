"""
Saving and restoring device priorities.
"""

from clselect.storage.persistence import (
    load_priorities,
    restore_priorities,
    save_priorities,
)

__all__ = [
    "load_priorities",
    "restore_priorities",
    "save_priorities",
]
