"""Tests for ccs.tui.prompts: text, rename and confirmation prompts."""

from __future__ import annotations

import pytest

from ccs.tui import prompts
from ccs.tui.errors import CANCELLED_MESSAGE, SelectionCancelled, SelectorIOError
from ccs.tui.prompts import (
    confirm,
    confirm_deletion,
    confirm_overwrite,
    prompt_rename,
    prompt_text,
)
from ccs.tui.utils import strip_ansi

from .virtual_terminal import VirtualTerminal

KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_HOME = "\x1b[H"
KEY_END = "\x1b[F"
KEY_DOWN = "\x1b[B"
KEY_DELETE = "\x1b[3~"
KEY_BACKSPACE = "\x7f"
KEY_ENTER = "\r"
KEY_ESCAPE = "\x1b"
KEY_CTRL_C = "\x03"


class TestPromptText:
    def test_returns_trimmed_text(self) -> None:
        terminal = VirtualTerminal(["h", "i", " ", KEY_ENTER])
        assert prompt_text("Name:", terminal=terminal) == "hi"

    def test_editing_keys(self) -> None:
        terminal = VirtualTerminal(
            ["a", "c", KEY_LEFT, "b", KEY_HOME, "x", KEY_DELETE, KEY_END, "d", KEY_BACKSPACE, "!", KEY_ENTER]
        )
        # "ac" -> "abc" -> "xabc" -> "xbc" -> "xbcd" -> "xbc" -> "xbc!"
        assert prompt_text("Name:", terminal=terminal) == "xbc!"

    def test_empty_input_is_refused(self) -> None:
        terminal = VirtualTerminal([KEY_ENTER, "v", KEY_ENTER])
        assert prompt_text("Name:", terminal=terminal) == "v"
        assert "❌ Value cannot be empty" in strip_ansi(terminal.output)

    def test_whitespace_only_is_refused(self) -> None:
        terminal = VirtualTerminal([" ", " ", KEY_ENTER, KEY_ESCAPE])
        with pytest.raises(SelectionCancelled):
            prompt_text("Name:", terminal=terminal)
        assert "Value cannot be empty" in terminal.output

    def test_escape_cancels(self) -> None:
        terminal = VirtualTerminal(["a", KEY_ESCAPE])
        with pytest.raises(SelectionCancelled) as exc_info:
            prompt_text("Name:", terminal=terminal)
        assert exc_info.value.hard is False
        assert exc_info.value.is_cancellation
        assert not terminal.is_raw

    def test_ctrl_c_is_hard_cancel(self) -> None:
        terminal = VirtualTerminal([KEY_CTRL_C])
        with pytest.raises(SelectionCancelled) as exc_info:
            prompt_text("Name:", terminal=terminal)
        assert exc_info.value.hard is True

    def test_read_failure_restores_terminal(self) -> None:
        terminal = VirtualTerminal(["a"])
        with pytest.raises(SelectorIOError):
            prompt_text("Name:", terminal=terminal)
        assert terminal.stop_count == 1
        assert terminal.cursor_visible

    def test_placeholder_and_cursor_position(self) -> None:
        terminal = VirtualTerminal([KEY_ESCAPE])
        with pytest.raises(SelectionCancelled):
            prompt_text("Name:", placeholder="my-profile", terminal=terminal)
        assert "  > my-profile" in strip_ansi(terminal.output)
        # Cursor parked after the label on the input row during editing
        assert "\x1b[2;5H" in terminal.output

    def test_grapheme_editing(self) -> None:
        terminal = VirtualTerminal(["cafe", "\u0301", KEY_LEFT, KEY_BACKSPACE, KEY_ENTER])
        assert prompt_text("Name:", terminal=terminal) == "cae\u0301"


class TestPromptRename:
    def test_seeded_with_current_name(self) -> None:
        terminal = VirtualTerminal([KEY_ENTER])
        assert prompt_rename("work", "profile", terminal=terminal) == "work"
        output = strip_ansi(terminal.output)
        assert "✏️  Rename profile:" in output
        assert "Current: work" in output
        assert "New name: work" in output

    def test_replace_name(self) -> None:
        terminal = VirtualTerminal([KEY_BACKSPACE] * 4 + ["home", KEY_ENTER])
        assert prompt_rename("work", "profile", terminal=terminal) == "home"

    def test_empty_name_message(self) -> None:
        terminal = VirtualTerminal([KEY_BACKSPACE] * 4 + [KEY_ENTER, "x", KEY_ENTER])
        assert prompt_rename("work", "profile", terminal=terminal) == "x"
        assert "❌ Name cannot be empty" in strip_ansi(terminal.output)

    def test_escape_cancels(self) -> None:
        with pytest.raises(SelectionCancelled):
            prompt_rename("work", "profile", terminal=VirtualTerminal([KEY_ESCAPE]))


class TestConfirm:
    def test_yes_shortcut(self) -> None:
        assert confirm("Continue?", terminal=VirtualTerminal(["y"])) is True

    def test_shortcuts_ignore_case(self) -> None:
        assert confirm("Continue?", terminal=VirtualTerminal(["Y"])) is True
        assert confirm("Continue?", default=True, terminal=VirtualTerminal(["N"])) is False

    def test_enter_picks_highlighted_default(self) -> None:
        assert confirm("Continue?", terminal=VirtualTerminal([KEY_ENTER])) is False
        assert confirm("Continue?", default=True, terminal=VirtualTerminal([KEY_ENTER])) is True

    def test_navigate_then_enter(self) -> None:
        terminal = VirtualTerminal(["\x1b[A", KEY_ENTER])
        assert confirm("Continue?", terminal=terminal) is True

    def test_escape_returns_default(self) -> None:
        assert confirm("Continue?", terminal=VirtualTerminal([KEY_ESCAPE])) is False
        assert confirm("Continue?", default=True, terminal=VirtualTerminal([KEY_ESCAPE])) is True

    def test_quit_exits(self, capsys) -> None:
        terminal = VirtualTerminal(["q"])
        with pytest.raises(SystemExit) as exc_info:
            confirm("Continue?", terminal=terminal)
        assert exc_info.value.code == 0
        assert CANCELLED_MESSAGE in capsys.readouterr().out
        assert not terminal.is_raw

    def test_ctrl_c_exits(self) -> None:
        with pytest.raises(SystemExit):
            confirm("Continue?", terminal=VirtualTerminal([KEY_DOWN, KEY_CTRL_C]))

    def test_renders_options_and_help(self) -> None:
        terminal = VirtualTerminal([KEY_ESCAPE])
        confirm("Continue?", terminal=terminal)
        output = strip_ansi(terminal.output)
        for text in ("✓ Yes (Y)", "✗ No (N)", "⚠ Quit (Q)", "Press Y for Yes, N for No, or Q to Quit"):
            assert text in output
        assert "🔍" not in output

    def test_non_interactive_returns_default(self, monkeypatch) -> None:
        monkeypatch.setattr(prompts, "stdin_is_interactive", lambda: False)
        assert confirm("Continue?") is False
        assert confirm("Continue?", default=True) is True

    def test_confirm_deletion_message(self) -> None:
        terminal = VirtualTerminal(["y"], columns=200)
        assert confirm_deletion("work", "profile", terminal=terminal) is True
        assert (
            "Are you sure you want to delete 'work' profile? This action cannot be undone"
            in strip_ansi(terminal.output)
        )

    def test_confirm_overwrite_message(self) -> None:
        terminal = VirtualTerminal([KEY_ENTER])
        assert confirm_overwrite("work", "Profile", terminal=terminal) is False
        assert "Profile 'work' already exists. Overwrite?" in strip_ansi(terminal.output)
