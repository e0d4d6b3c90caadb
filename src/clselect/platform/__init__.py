"""
OpenCL platform and device enumeration.
"""

from clselect.platform.clinfo import (
    ClState,
    DeviceInfo,
    PlatformInfo,
    device_type_text,
    get_setup,
    vendor_id_text,
)

__all__ = [
    "ClState",
    "DeviceInfo",
    "PlatformInfo",
    "device_type_text",
    "get_setup",
    "vendor_id_text",
]
