"""
Tests for clselect.ui.terminal module.
"""

import curses
from unittest.mock import MagicMock, patch

import pytest

from clselect.core.config import Config
from clselect.core.errors import DisplayError, StorageError
from clselect.core.priority import PriorityList
from clselect.ui.state import Pane
from clselect.ui.terminal import TerminalUI, display_opencl_state, print_summary


@pytest.fixture
def plist(gpu_device, cpu_device, igpu_device):
    """GPU prioritized, CPU and iGPU remaining."""
    plist = PriorityList([gpu_device])
    plist.append(cpu_device)
    plist.append(igpu_device)
    return plist


@pytest.fixture
def stdscr():
    """Mock curses window of 24x80."""
    screen = MagicMock()
    screen.getmaxyx.return_value = (24, 80)
    return screen


def written_text(screen) -> str:
    """Concatenate everything written with addstr."""
    return "\n".join(call.args[2] for call in screen.addstr.call_args_list)


class TestHandleKey:
    """Tests for TerminalUI.handle_key."""

    def test_unmapped_key(self, plist):
        """Test unknown keys are ignored."""
        ui = TerminalUI(plist)
        assert ui.handle_key(ord("z")) is False

    def test_promote_key(self, plist, cpu_device):
        """Test Enter promotes the selected remaining device."""
        ui = TerminalUI(plist)
        assert ui.handle_key(ord("\n")) is True
        assert plist.view_prioritized()[-1] == cpu_device

    def test_quit_key(self, plist):
        """Test q stops the UI."""
        ui = TerminalUI(plist)
        ui.handle_key(ord("q"))
        assert ui.state.should_quit is True

    def test_save_calls_callback(self, plist):
        """Test s hands the list to the save callback."""
        on_save = MagicMock()
        ui = TerminalUI(plist, on_save=on_save)
        assert ui.handle_key(ord("s")) is True
        on_save.assert_called_once_with(plist)
        assert ui.state.status == "Saved"

    def test_save_disabled(self, plist):
        """Test s without a callback reports saving is disabled."""
        ui = TerminalUI(plist)
        ui.handle_key(ord("s"))
        assert ui.state.status == "Saving disabled"

    def test_save_failure_is_reported(self, plist):
        """Test a failed save is shown, not raised."""
        on_save = MagicMock(side_effect=StorageError("disk full"))
        ui = TerminalUI(plist, on_save=on_save)
        ui.handle_key(ord("s"))
        assert ui.state.status == "Save failed: disk full"

    def test_split_ratio_from_config(self, plist):
        """Test the split ratio comes from config."""
        config = Config()
        config.display.split_ratio = 0.3
        ui = TerminalUI(plist, config)
        assert ui.state.split_ratio == 0.3


class TestPaint:
    """Tests for TerminalUI rendering."""

    def test_paints_both_panes(self, plist, stdscr, gpu_device, cpu_device):
        """Test both lists and their counts are drawn."""
        ui = TerminalUI(plist)
        with patch("clselect.ui.terminal.curses.doupdate"):
            ui._paint(stdscr)

        text = written_text(stdscr)
        assert "Prioritized (1)" in text
        assert "Remaining (2)" in text
        assert f"1. {gpu_device.display_name}"[:30] in text
        assert ">> " + cpu_device.display_name[:20] in text

    def test_highlight_follows_focus(self, plist, stdscr):
        """Test the highlight symbol is drawn in the focused pane only."""
        ui = TerminalUI(plist)
        ui.state.focus = Pane.PRIORITIZED
        with patch("clselect.ui.terminal.curses.doupdate"):
            ui._paint(stdscr)

        highlighted = [
            call.args[2] for call in stdscr.addstr.call_args_list
            if call.args[3] == curses.A_REVERSE
        ]
        assert len(highlighted) == 1
        assert highlighted[0].startswith(">> 1. ")

    def test_tiny_window(self, plist):
        """Test painting into a very small window does not fail."""
        screen = MagicMock()
        screen.getmaxyx.return_value = (2, 4)
        ui = TerminalUI(plist)
        with patch("clselect.ui.terminal.curses.doupdate"):
            ui._paint(screen)

    def test_curses_edge_errors_ignored(self, plist, stdscr):
        """Test addstr errors at screen edges are swallowed."""
        stdscr.addstr.side_effect = curses.error("edge")
        ui = TerminalUI(plist)
        with patch("clselect.ui.terminal.curses.doupdate"):
            ui._paint(stdscr)


class TestRun:
    """Tests for TerminalUI.run and display_opencl_state."""

    def test_run_wraps_curses_errors(self, plist):
        """Test terminal failures become DisplayError."""
        ui = TerminalUI(plist)
        with patch("clselect.ui.terminal.curses.wrapper", side_effect=curses.error("no tty")):
            with pytest.raises(DisplayError):
                ui.run()

    def test_main_loop_until_quit(self, plist, stdscr):
        """Test the loop processes keys until q."""
        stdscr.getch.side_effect = [ord("j"), ord("t"), ord("q")]
        ui = TerminalUI(plist)
        with patch("clselect.ui.terminal.curses.doupdate"), \
                patch("clselect.ui.terminal.curses.curs_set"):
            ui._main_loop(stdscr)

        assert ui.state.should_quit is True
        assert plist.priority_at_rank(0).name.startswith("Intel(R) UHD")

    def test_print_summary(self, sample_state, capsys):
        """Test the platform summary lists every device."""
        print_summary(sample_state)
        out = capsys.readouterr().out
        assert "Found 2 platforms" in out
        assert "Intel(R) OpenCL with 2 devices" in out
        assert "NVIDIA GeForce RTX 3080" in out

    def test_display_opencl_state(self, sample_state, plist, capsys):
        """Test the summary is printed before the UI runs."""
        with patch("clselect.ui.terminal.TerminalUI") as ui_cls:
            display_opencl_state(sample_state, plist)
        ui_cls.return_value.run.assert_called_once()
        assert "Found 2 platforms" in capsys.readouterr().out

    def test_display_without_summary(self, sample_state, plist, capsys):
        """Test show_summary=False skips the summary."""
        config = Config()
        config.display.show_summary = False
        with patch("clselect.ui.terminal.TerminalUI"):
            display_opencl_state(sample_state, plist, config)
        assert capsys.readouterr().out == ""
