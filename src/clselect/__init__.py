"""
clselect - Manage your OpenCL devices and platforms

Enumerates the OpenCL platforms and devices of the current machine and
lets the user rank them in a terminal UI. The ranking is kept in a
PriorityList and can be saved between runs.
"""

__version__ = "0.1.0"
__author__ = "clselect Team"

from clselect.core.priority import PriorityList
from clselect.core.config import Config
from clselect.core.errors import ClSelectError, EnumerationError
from clselect.platform.clinfo import ClState, DeviceInfo, PlatformInfo, get_setup

__all__ = [
    "PriorityList",
    "Config",
    "ClSelectError",
    "EnumerationError",
    "ClState",
    "DeviceInfo",
    "PlatformInfo",
    "get_setup",
    "__version__",
]
