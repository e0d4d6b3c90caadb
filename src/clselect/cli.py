"""
clselect command line entry point.

Finds all OpenCL platforms and devices on the system and lets the user
rank them in a terminal UI.
"""

import argparse
import functools
import logging
import sys
from typing import List, Optional

from clselect.core.config import Config, load_config
from clselect.core.errors import ClSelectError
from clselect.core.priority import PriorityList
from clselect.platform.clinfo import ClState, DeviceInfo, get_setup
from clselect.storage.persistence import load_priorities, restore_priorities, save_priorities
from clselect.ui.terminal import display_opencl_state, print_summary

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Config, verbose: bool = False, debug: bool = False) -> None:
    """Configure logging from command line flags and config."""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = getattr(logging, config.logging.level.upper(), logging.WARNING)

    kwargs = {"level": log_level, "format": LOG_FORMAT}
    if config.logging.file:
        kwargs["filename"] = config.logging.file
    logging.basicConfig(**kwargs)


def build_priority_list(state: ClState, config: Config) -> PriorityList[DeviceInfo]:
    """
    Create the device priority list for this run.

    Saved priorities are restored when storage is enabled. Otherwise
    devices are placed according to selection.initial_placement.
    """
    devices = state.get_all_devices()

    if config.storage.enabled:
        saved = load_priorities(config.storage.path)
        if saved is not None:
            logger.info(f"Restoring priorities from {config.storage.path}")
            return restore_priorities(devices, saved)

    if config.selection.initial_placement == "prioritized":
        return PriorityList.from_sequence(devices)

    plist: PriorityList[DeviceInfo] = PriorityList()
    for device in devices:
        plist.append(device)
    return plist


def run(argv: Optional[List[str]] = None) -> int:
    """Run clselect and return the exit status."""
    parser = argparse.ArgumentParser(
        prog="clselect",
        description="Browse and rank OpenCL platforms and devices",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None
    )
    parser.add_argument(
        "-v", "--verbose",
        help="Enable verbose logging",
        action="store_true"
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging",
        action="store_true"
    )
    parser.add_argument(
        "--list",
        help="Print platforms and devices, then exit",
        action="store_true"
    )
    parser.add_argument(
        "--no-save",
        help="Do not read or write saved priorities",
        action="store_true"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.no_save:
        config.storage.enabled = False
    setup_logging(config, verbose=args.verbose, debug=args.debug)

    try:
        state = get_setup()
    except ClSelectError as e:
        logger.error(f"Enumeration failed: {e}")
        return 1

    if args.list:
        print_summary(state)
        return 0

    try:
        plist = build_priority_list(state, config)
        on_save = None
        if config.storage.enabled:
            on_save = functools.partial(save_priorities, path=config.storage.path)
        display_opencl_state(state, plist, config, on_save=on_save)
    except ClSelectError as e:
        logger.error(f"{e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    return 0


def main() -> None:
    """Main entry point for clselect."""
    sys.exit(run())


if __name__ == "__main__":
    main()
