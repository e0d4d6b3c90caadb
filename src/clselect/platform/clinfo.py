"""
OpenCL platform and device enumeration.

Collects the platforms and devices visible through the OpenCL ICD loader
into plain records that the rest of clselect can rank, display and save.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from clselect.core.errors import EnumerationError

logger = logging.getLogger(__name__)

try:
    import pyopencl as cl
    PYOPENCL_AVAILABLE = True
except ImportError:
    cl = None
    PYOPENCL_AVAILABLE = False


# cl_device_type bits
CL_DEVICE_TYPE_DEFAULT = 1 << 0
CL_DEVICE_TYPE_CPU = 1 << 1
CL_DEVICE_TYPE_GPU = 1 << 2
CL_DEVICE_TYPE_ACCELERATOR = 1 << 3
CL_DEVICE_TYPE_CUSTOM = 1 << 4
CL_DEVICE_TYPE_ALL = 0xFFFFFFFF

CL_DEVICE_NOT_FOUND = -1

_DEVICE_TYPE_NAMES = [
    (CL_DEVICE_TYPE_DEFAULT, "CL_DEVICE_TYPE_DEFAULT"),
    (CL_DEVICE_TYPE_CPU, "CL_DEVICE_TYPE_CPU"),
    (CL_DEVICE_TYPE_GPU, "CL_DEVICE_TYPE_GPU"),
    (CL_DEVICE_TYPE_ACCELERATOR, "CL_DEVICE_TYPE_ACCELERATOR"),
    (CL_DEVICE_TYPE_CUSTOM, "CL_DEVICE_TYPE_CUSTOM"),
]

# PCI vendor ids reported by CL_DEVICE_VENDOR_ID
VENDOR_IDS = {
    0x1002: "AMD",
    0x1014: "IBM",
    0x10DE: "NVIDIA",
    0x10EE: "Xilinx",
    0x1172: "Altera",
    0x13B5: "ARM",
    0x1AE0: "Google",
    0x5143: "Qualcomm",
    0x8086: "Intel",
    0x1027F00: "Apple",
    0x10004: "Codeplay",
    0x10005: "Mesa",
    0x10006: "PoCL",
}


def device_type_text(device_type: int) -> str:
    """Render a cl_device_type bitmask as CL_DEVICE_TYPE_* names."""
    if device_type == CL_DEVICE_TYPE_ALL:
        return "CL_DEVICE_TYPE_ALL"
    names = [name for bit, name in _DEVICE_TYPE_NAMES if device_type & bit]
    if not names:
        return "CL_DEVICE_TYPE_UNKNOWN"
    return " | ".join(names)


def vendor_id_text(vendor_id: int) -> str:
    """Return the vendor name for a PCI vendor id."""
    return VENDOR_IDS.get(vendor_id, "Unknown")


@dataclass
class DeviceInfo:
    """Information about a single OpenCL device."""
    # Vendor
    vendor: str = ""
    vendor_id: int = 0
    vendor_id_text: str = "Unknown"
    # Device
    name: str = ""
    version: str = ""
    # Type
    device_type: int = 0
    type_text: str = ""
    # Other
    profile: str = ""
    extensions: str = ""
    opencl_c_version: str = ""
    svm_mem_capability: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.vendor_id_text})" if self.name else "<unnamed device>"

    @classmethod
    def construct(cls, device) -> "DeviceInfo":
        """
        Create a record from a pyopencl Device.

        Raises:
            pyopencl.Error: If a mandatory query fails.
        """
        dev_type = int(device.type)
        return cls(
            vendor=device.vendor.strip(),
            vendor_id=int(device.vendor_id),
            vendor_id_text=vendor_id_text(int(device.vendor_id)),
            name=device.name.strip(),
            version=device.version.strip(),
            device_type=dev_type,
            type_text=device_type_text(dev_type),
            profile=device.profile.strip(),
            extensions=device.extensions.strip(),
            opencl_c_version=device.opencl_c_version.strip(),
            svm_mem_capability=_svm_capabilities(device),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor": self.vendor,
            "vendor_id": self.vendor_id,
            "vendor_id_text": self.vendor_id_text,
            "name": self.name,
            "version": self.version,
            "device_type": self.device_type,
            "type_text": self.type_text,
            "profile": self.profile,
            "extensions": self.extensions,
            "opencl_c_version": self.opencl_c_version,
            "svm_mem_capability": self.svm_mem_capability,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceInfo":
        return cls(**data)


@dataclass
class PlatformInfo:
    """Information about an OpenCL platform and its devices."""
    name: str = ""
    version: str = ""
    vendor: str = ""
    profile: str = ""
    extensions: str = ""
    devices: List[DeviceInfo] = field(default_factory=list)

    @classmethod
    def construct(cls, platform, devices: List[DeviceInfo]) -> "PlatformInfo":
        """Create a record from a pyopencl Platform and its device records."""
        return cls(
            name=platform.name.strip(),
            version=platform.version.strip(),
            vendor=platform.vendor.strip(),
            profile=platform.profile.strip(),
            extensions=platform.extensions.strip(),
            devices=list(devices),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "vendor": self.vendor,
            "profile": self.profile,
            "extensions": self.extensions,
            "devices": [d.to_dict() for d in self.devices],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlatformInfo":
        data = dict(data)
        devices = [DeviceInfo.from_dict(d) for d in data.pop("devices", [])]
        return cls(devices=devices, **data)


@dataclass
class ClState:
    """The complete OpenCL state of the current machine."""
    platforms: List[PlatformInfo] = field(default_factory=list)

    def get_platforms(self) -> List[PlatformInfo]:
        """Obtain all platforms currently present."""
        return list(self.platforms)

    def get_all_devices(self) -> List[DeviceInfo]:
        """Obtain all devices for any platform."""
        return [device for platform in self.platforms for device in platform.devices]


def _svm_capabilities(device) -> int:
    """Query CL_DEVICE_SVM_CAPABILITIES, 0 on pre-2.0 devices."""
    try:
        return int(device.svm_capabilities)
    except (cl.Error, AttributeError):
        return 0


def _platform_devices(platform) -> list:
    """List a platform's devices; a platform without devices yields []."""
    try:
        return platform.get_devices(device_type=cl.device_type.ALL)
    except cl.Error as e:
        if getattr(e, "code", None) == CL_DEVICE_NOT_FOUND:
            logger.debug(f"Platform {platform.name} has no devices")
            return []
        raise


def get_setup() -> ClState:
    """
    Construct the complete OpenCL state of the current machine.

    Returns:
        ClState with every platform and all of its devices.

    Raises:
        EnumerationError: If pyopencl is missing, an OpenCL query fails, or
            no platform is found.
    """
    if not PYOPENCL_AVAILABLE:
        raise EnumerationError("pyopencl not installed")

    try:
        cl_platforms = cl.get_platforms()
    except cl.Error as e:
        raise EnumerationError(f"unable to get OpenCL platforms: {e}") from e

    if not cl_platforms:
        raise EnumerationError("no OpenCL platforms found")

    platforms = []
    for platform in cl_platforms:
        try:
            devices = [DeviceInfo.construct(device) for device in _platform_devices(platform)]
            info = PlatformInfo.construct(platform, devices)
        except cl.Error as e:
            raise EnumerationError(f"unable to get OpenCL info: {e}") from e

        logger.info(f"Found platform {info.name} with {len(info.devices)} devices")
        platforms.append(info)

    return ClState(platforms=platforms)
