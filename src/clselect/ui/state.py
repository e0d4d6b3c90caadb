"""
Navigation state for the device selection UI.

Keeps focus, per-pane cursors and the pane split in one object owned by
the event loop, and translates key actions into priority list operations.
"""

import curses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from clselect.core.priority import PriorityList

logger = logging.getLogger(__name__)


class Pane(Enum):
    """The two lists shown side by side."""
    PRIORITIZED = "prioritized"
    REMAINING = "remaining"


class KeyAction(Enum):
    """Actions bound to keys."""
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    PROMOTE = "promote"
    PROMOTE_TOP = "promote_top"
    GO_TOP = "go_top"
    GO_BOTTOM = "go_bottom"
    SWITCH_PANE = "switch_pane"
    SAVE = "save"
    QUIT = "quit"


DEFAULT_KEYMAP: Dict[int, KeyAction] = {
    ord("j"): KeyAction.MOVE_DOWN,
    curses.KEY_DOWN: KeyAction.MOVE_DOWN,
    ord("k"): KeyAction.MOVE_UP,
    curses.KEY_UP: KeyAction.MOVE_UP,
    ord("\n"): KeyAction.PROMOTE,
    curses.KEY_ENTER: KeyAction.PROMOTE,
    ord(" "): KeyAction.PROMOTE,
    ord("t"): KeyAction.PROMOTE_TOP,
    ord("g"): KeyAction.GO_TOP,
    curses.KEY_HOME: KeyAction.GO_TOP,
    ord("G"): KeyAction.GO_BOTTOM,
    curses.KEY_END: KeyAction.GO_BOTTOM,
    ord("\t"): KeyAction.SWITCH_PANE,
    ord("s"): KeyAction.SAVE,
    ord("q"): KeyAction.QUIT,
    27: KeyAction.QUIT,  # Esc
}


@dataclass
class ViewState:
    """Presentation state of the selection UI."""
    focus: Pane = Pane.REMAINING
    cursors: Dict[Pane, int] = field(
        default_factory=lambda: {Pane.PRIORITIZED: 0, Pane.REMAINING: 0}
    )
    split_ratio: float = 0.5
    should_quit: bool = False
    status: str = ""

    @property
    def cursor(self) -> int:
        return self.cursors[self.focus]

    def clamp(self, plist: PriorityList) -> None:
        """Keep every cursor inside its pane."""
        sizes = {
            Pane.PRIORITIZED: plist.prioritized_count,
            Pane.REMAINING: plist.remaining_count,
        }
        for pane, size in sizes.items():
            self.cursors[pane] = max(0, min(self.cursors[pane], size - 1))

    def apply(self, action: KeyAction, plist: PriorityList) -> bool:
        """
        Apply a key action.

        Cursor moves only touch this state. Promotions always take the
        element under the remaining cursor, whichever pane has focus.

        Args:
            action: The action to apply.
            plist: The list being edited.

        Returns:
            True if the action changed anything.
        """
        before = (self.focus, dict(self.cursors), self.should_quit)
        changed = False

        if action == KeyAction.MOVE_DOWN:
            self.cursors[self.focus] += 1
        elif action == KeyAction.MOVE_UP:
            self.cursors[self.focus] -= 1
        elif action == KeyAction.GO_TOP:
            self.cursors[self.focus] = 0
        elif action == KeyAction.GO_BOTTOM:
            self.cursors[self.focus] = self._pane_size(plist) - 1
        elif action == KeyAction.SWITCH_PANE:
            self.focus = Pane.PRIORITIZED if self.focus == Pane.REMAINING else Pane.REMAINING
        elif action == KeyAction.PROMOTE:
            changed = plist.promote(self.cursors[Pane.REMAINING])
            if changed:
                self.cursors[Pane.PRIORITIZED] = plist.prioritized_count - 1
        elif action == KeyAction.PROMOTE_TOP:
            changed = plist.promote_to_top(self.cursors[Pane.REMAINING])
            if changed:
                self.cursors[Pane.PRIORITIZED] = 0
        elif action == KeyAction.QUIT:
            self.should_quit = True

        if action in (KeyAction.PROMOTE, KeyAction.PROMOTE_TOP) and not changed:
            self.status = "Nothing to promote"
            logger.debug(f"{action.value} had no effect")

        self.clamp(plist)
        return changed or before != (self.focus, self.cursors, self.should_quit)

    def _pane_size(self, plist: PriorityList) -> int:
        if self.focus == Pane.PRIORITIZED:
            return plist.prioritized_count
        return plist.remaining_count
