"""
Persistence of device priorities between runs.

The priority list is stored as YAML with two ordered sequences,
"prioritized" and "remaining", each holding device records.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

import yaml

from clselect.core.errors import StorageError
from clselect.core.priority import PriorityList
from clselect.platform.clinfo import DeviceInfo

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def save_priorities(plist: PriorityList[DeviceInfo], path: Union[str, Path]) -> None:
    """
    Save a device priority list to a YAML file.

    Args:
        plist: The list to save.
        path: Destination file. Parent directories are created.

    Raises:
        StorageError: If the file cannot be written.
    """
    path = Path(path)
    data = {"version": FORMAT_VERSION}
    data.update(plist.to_dict(encode=DeviceInfo.to_dict))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise StorageError(f"failed to save priorities to {path}: {e}") from e

    logger.info(
        f"Saved {plist.prioritized_count} prioritized and "
        f"{plist.remaining_count} remaining devices to {path}"
    )


def load_priorities(path: Union[str, Path]) -> Optional[PriorityList[DeviceInfo]]:
    """
    Load a device priority list saved by save_priorities.

    Returns:
        The saved list, or None if the file does not exist.

    Raises:
        StorageError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No saved priorities at {path}")
        return None

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise StorageError(f"failed to read priorities from {path}: {e}") from e

    if data is None:
        return PriorityList()
    if not isinstance(data, dict):
        raise StorageError(f"malformed priorities file {path}")

    version = data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise StorageError(f"unsupported priorities format version {version} in {path}")

    try:
        return PriorityList.from_dict(data, decode=DeviceInfo.from_dict)
    except (TypeError, ValueError) as e:
        raise StorageError(f"malformed priorities file {path}: {e}") from e


def restore_priorities(
    devices: Iterable[DeviceInfo],
    saved: Optional[PriorityList[DeviceInfo]],
) -> PriorityList[DeviceInfo]:
    """
    Reconcile saved priorities with the devices present now.

    Saved prioritized devices that are still present keep their saved order.
    All other present devices are appended to remaining in enumeration order.
    Saved devices that are gone are dropped.

    Args:
        devices: Currently enumerated devices.
        saved: Previously saved list, or None.
    """
    # Identical devices (e.g. two of the same card) compare equal, so each
    # saved entry claims one present device.
    unclaimed = list(devices)
    ranked = []
    if saved is not None:
        for device in saved.view_prioritized():
            if device in unclaimed:
                unclaimed.remove(device)
                ranked.append(device)
        dropped = saved.prioritized_count - len(ranked)
        if dropped:
            logger.info(f"{dropped} saved devices are no longer present")

    plist: PriorityList[DeviceInfo] = PriorityList(ranked)
    for device in unclaimed:
        plist.append(device)

    return plist
