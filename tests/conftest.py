"""
Pytest configuration and shared fixtures for clselect tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clselect.platform.clinfo import ClState, DeviceInfo, PlatformInfo


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary config file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text("""
version: 1
display:
  split_ratio: 0.4
  highlight_symbol: "->"
storage:
  enabled: false
selection:
  initial_placement: prioritized
""")
    return config_path


# ============================================================================
# Device Record Fixtures
# ============================================================================

@pytest.fixture
def gpu_device() -> DeviceInfo:
    """Return a sample discrete GPU record."""
    return DeviceInfo(
        vendor="NVIDIA Corporation",
        vendor_id=0x10DE,
        vendor_id_text="NVIDIA",
        name="NVIDIA GeForce RTX 3080",
        version="OpenCL 3.0 CUDA",
        device_type=4,
        type_text="CL_DEVICE_TYPE_GPU",
        profile="FULL_PROFILE",
        extensions="cl_khr_fp64 cl_khr_global_int32_base_atomics",
        opencl_c_version="OpenCL C 1.2",
        svm_mem_capability=1,
    )


@pytest.fixture
def cpu_device() -> DeviceInfo:
    """Return a sample CPU record."""
    return DeviceInfo(
        vendor="Intel(R) Corporation",
        vendor_id=0x8086,
        vendor_id_text="Intel",
        name="Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz",
        version="OpenCL 3.0 (Build 0)",
        device_type=2,
        type_text="CL_DEVICE_TYPE_CPU",
        profile="FULL_PROFILE",
        extensions="cl_khr_fp64",
        opencl_c_version="OpenCL C 3.0",
        svm_mem_capability=15,
    )


@pytest.fixture
def igpu_device() -> DeviceInfo:
    """Return a sample integrated GPU record."""
    return DeviceInfo(
        vendor="Intel(R) Corporation",
        vendor_id=0x8086,
        vendor_id_text="Intel",
        name="Intel(R) UHD Graphics 630",
        version="OpenCL 3.0 NEO",
        device_type=4,
        type_text="CL_DEVICE_TYPE_GPU",
        profile="FULL_PROFILE",
        extensions="cl_khr_fp16",
        opencl_c_version="OpenCL C 1.2",
        svm_mem_capability=0,
    )


@pytest.fixture
def sample_state(gpu_device, cpu_device, igpu_device) -> ClState:
    """Return a machine with two platforms."""
    return ClState(platforms=[
        PlatformInfo(
            name="NVIDIA CUDA",
            version="OpenCL 3.0 CUDA 12.2.148",
            vendor="NVIDIA Corporation",
            profile="FULL_PROFILE",
            extensions="cl_khr_icd",
            devices=[gpu_device],
        ),
        PlatformInfo(
            name="Intel(R) OpenCL",
            version="OpenCL 3.0",
            vendor="Intel(R) Corporation",
            profile="FULL_PROFILE",
            extensions="cl_khr_icd",
            devices=[cpu_device, igpu_device],
        ),
    ])


# ============================================================================
# Mock pyopencl Fixtures
# ============================================================================

class FakeClError(Exception):
    """Stand-in for pyopencl.Error carrying an OpenCL status code."""

    def __init__(self, message: str = "", code: int = -30):
        super().__init__(message)
        self.code = code


def make_cl_device(**overrides) -> MagicMock:
    """Create a mock pyopencl Device."""
    device = MagicMock()
    device.vendor = "Advanced Micro Devices, Inc."
    device.vendor_id = 0x1002
    device.name = "gfx1030 "
    device.version = "OpenCL 2.0 AMD-APP (3581.0)"
    device.type = 4
    device.profile = "FULL_PROFILE"
    device.extensions = "cl_khr_fp64 cl_khr_fp16 "
    device.opencl_c_version = "OpenCL C 2.0"
    device.svm_capabilities = 3
    for key, value in overrides.items():
        setattr(device, key, value)
    return device


def make_cl_platform(devices=None, **overrides) -> MagicMock:
    """Create a mock pyopencl Platform."""
    platform = MagicMock()
    platform.name = "AMD Accelerated Parallel Processing"
    platform.version = "OpenCL 2.1 AMD-APP (3581.0)"
    platform.vendor = "Advanced Micro Devices, Inc."
    platform.profile = "FULL_PROFILE"
    platform.extensions = "cl_khr_icd cl_amd_event_callback"
    platform.get_devices.return_value = devices if devices is not None else []
    for key, value in overrides.items():
        setattr(platform, key, value)
    return platform


@pytest.fixture
def cl_device_factory():
    """Factory for mock pyopencl devices."""
    return make_cl_device


@pytest.fixture
def cl_platform_factory():
    """Factory for mock pyopencl platforms."""
    return make_cl_platform


@pytest.fixture
def cl_error():
    """The exception class used as pyopencl.Error by mock_pyopencl."""
    return FakeClError


@pytest.fixture
def mock_pyopencl(monkeypatch):
    """Replace pyopencl in the clinfo module with a mock."""
    cl = MagicMock()
    cl.Error = FakeClError
    monkeypatch.setattr("clselect.platform.clinfo.cl", cl)
    monkeypatch.setattr("clselect.platform.clinfo.PYOPENCL_AVAILABLE", True)
    return cl


# ============================================================================
# Clean Environment Fixture
# ============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure clean environment for each test."""
    # Remove any clselect-specific env vars that might interfere
    for key in list(os.environ.keys()):
        if key.startswith("CLSELECT_"):
            monkeypatch.delenv(key, raising=False)
