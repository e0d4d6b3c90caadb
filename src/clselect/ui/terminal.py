"""
Curses terminal UI for ranking OpenCL devices.

Shows the prioritized devices and the remaining devices side by side and
lets the user promote devices with the keyboard.
"""

import curses
import logging
from typing import Callable, Dict, Optional, Sequence

from clselect.core.config import Config
from clselect.core.errors import ClSelectError, DisplayError
from clselect.core.priority import PriorityList
from clselect.platform.clinfo import ClState, DeviceInfo
from clselect.ui.state import DEFAULT_KEYMAP, KeyAction, Pane, ViewState

logger = logging.getLogger(__name__)

TITLE = "clselect"
HELP_TEXT = "j/k move  Tab switch  Enter promote  t top  g/G first/last  s save  q quit"


class TerminalUI:
    """
    Two-pane curses interface over a device priority list.

    The left pane lists prioritized devices by rank, the right pane the
    remaining devices. Key presses are mapped to KeyAction values and
    applied through the view state.
    """

    def __init__(
        self,
        plist: PriorityList[DeviceInfo],
        config: Optional[Config] = None,
        on_save: Optional[Callable[[PriorityList[DeviceInfo]], None]] = None,
        keymap: Optional[Dict[int, KeyAction]] = None,
    ):
        self.plist = plist
        self.config = config or Config()
        self.on_save = on_save
        self.keymap = keymap or DEFAULT_KEYMAP
        self.state = ViewState(split_ratio=self.config.display.split_ratio)
        self.state.clamp(plist)

    def run(self) -> None:
        """
        Run the UI until the user quits.

        Raises:
            DisplayError: If the terminal cannot be driven.
        """
        try:
            curses.wrapper(self._main_loop)
        except curses.error as e:
            raise DisplayError(f"failed to display: {e}") from e

    def handle_key(self, key: int) -> bool:
        """
        Dispatch one key press.

        Returns:
            True if the screen needs repainting.
        """
        action = self.keymap.get(key)
        if action is None:
            return False

        self.state.status = ""
        if action == KeyAction.SAVE:
            self._save()
            return True
        return self.state.apply(action, self.plist)

    def _save(self) -> None:
        if self.on_save is None:
            self.state.status = "Saving disabled"
            return
        try:
            self.on_save(self.plist)
            self.state.status = "Saved"
        except ClSelectError as e:
            logger.error(f"Save failed: {e}")
            self.state.status = f"Save failed: {e}"

    def _main_loop(self, stdscr) -> None:
        curses.curs_set(0)
        stdscr.keypad(True)

        while not self.state.should_quit:
            self._paint(stdscr)
            key = stdscr.getch()
            if key == curses.KEY_RESIZE:
                continue
            self.handle_key(key)

    def _paint(self, stdscr) -> None:
        """Render the entire screen."""
        stdscr.erase()
        h, w = stdscr.getmaxyx()

        self._addstr(stdscr, 0, 0, f" {TITLE} ".center(w, "-"), curses.A_BOLD)

        divider = max(1, min(w - 2, int(w * self.state.split_ratio)))
        top, bottom = 1, h - 2
        self._paint_pane(
            stdscr, Pane.PRIORITIZED, "Prioritized",
            self.plist.view_prioritized(), top, bottom, 0, divider, ranked=True,
        )
        for y in range(top, bottom + 1):
            self._addstr(stdscr, y, divider, "|", curses.A_DIM)
        self._paint_pane(
            stdscr, Pane.REMAINING, "Remaining",
            self.plist.view_remaining(), top, bottom, divider + 2, w, ranked=False,
        )

        status = self.state.status or HELP_TEXT
        self._addstr(stdscr, h - 1, 0, status, curses.A_DIM)

        stdscr.noutrefresh()
        curses.doupdate()

    def _paint_pane(
        self,
        stdscr,
        pane: Pane,
        title: str,
        devices: Sequence[DeviceInfo],
        top: int,
        bottom: int,
        left: int,
        right: int,
        ranked: bool,
    ) -> None:
        focused = self.state.focus == pane
        header_attr = curses.A_BOLD | (curses.A_UNDERLINE if focused else 0)
        self._addstr(stdscr, top, left, f"{title} ({len(devices)})"[: right - left], header_attr)

        rows = bottom - top
        if rows <= 0:
            return
        cursor = self.state.cursors[pane]
        offset = max(0, cursor - rows + 1)
        symbol = self.config.display.highlight_symbol
        blank = " " * len(symbol)

        for i, device in enumerate(devices[offset:offset + rows]):
            index = offset + i
            selected = index == cursor
            prefix = symbol if selected and focused else blank
            label = f"{index + 1}. {device.display_name}" if ranked else device.display_name
            text = f"{prefix} {label}"[: max(0, right - left - 1)]
            attr = curses.A_REVERSE if selected and focused else curses.A_NORMAL
            self._addstr(stdscr, top + 1 + i, left, text, attr)

    def _addstr(self, stdscr, y: int, x: int, text: str, attr: int) -> None:
        """Safe addstr that handles boundaries."""
        h, w = stdscr.getmaxyx()
        if y < 0 or y >= h or x >= w:
            return
        available = w - x - 1
        if available <= 0:
            return
        try:
            stdscr.addstr(y, x, text[:available], attr)
        except curses.error:
            pass  # Writing the bottom-right cell raises


def print_summary(state: ClState) -> None:
    """Print the platforms and their devices."""
    platforms = state.get_platforms()
    print(f"Found {len(platforms)} platforms")
    for platform in platforms:
        print(f"{platform.name} with {len(platform.devices)} devices")
        for device in platform.devices:
            print(f"      {device.name}")


def display_opencl_state(
    state: ClState,
    plist: PriorityList[DeviceInfo],
    config: Optional[Config] = None,
    on_save: Optional[Callable[[PriorityList[DeviceInfo]], None]] = None,
) -> None:
    """
    Display the found OpenCL state and run the selection UI.

    Raises:
        DisplayError: If the terminal cannot be driven.
    """
    config = config or Config()
    if config.display.show_summary:
        print_summary(state)
    TerminalUI(plist, config, on_save=on_save).run()
