"""
Terminal user interface.
"""

from clselect.ui.state import DEFAULT_KEYMAP, KeyAction, Pane, ViewState
from clselect.ui.terminal import TerminalUI, display_opencl_state, print_summary

__all__ = [
    "DEFAULT_KEYMAP",
    "KeyAction",
    "Pane",
    "ViewState",
    "TerminalUI",
    "display_opencl_state",
    "print_summary",
]
