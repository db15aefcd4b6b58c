"""Tests for ccs.tui.managed: the management selector loop."""

from __future__ import annotations

import pytest

from ccs.tui.config import SelectorConfig
from ccs.tui.errors import CANCELLED_MESSAGE, OperationNotSupported
from ccs.tui.managed import ManagedSelector, show_item_details
from ccs.tui.options import StringItem
from ccs.tui.results import Back, Delete, Exit, Rename, Selected

from .virtual_terminal import VirtualTerminal

KEY_DOWN = "\x1b[B"
KEY_RIGHT = "\x1b[C"
KEY_ENTER = "\r"
KEY_ESCAPE = "\x1b"
KEY_CTRL_C = "\x03"
KEY_END = "\x1b[F"


class ListPicker(ManagedSelector[StringItem]):
    """Picker over an in-memory list that records hook calls."""

    item_type = "entry"

    def __init__(self, names, keys=(), changed=True, **kwargs):
        super().__init__(terminal=VirtualTerminal(keys), **kwargs)
        self.names = list(names)
        self.changed = changed
        self.calls: list[tuple] = []
        self.load_count = 0

    def load_items(self):
        self.load_count += 1
        return [StringItem(name) for name in self.names]

    def on_create(self):
        self.calls.append(("create",))
        self.names.append(f"new{len(self.names)}")
        return self.changed

    def on_delete(self, item):
        self.calls.append(("delete", item.value))
        self.names.remove(item.value)
        return self.changed

    def on_rename(self, item):
        self.calls.append(("rename", item.value))
        return self.changed

    def on_refresh(self):
        self.calls.append(("refresh",))
        return self.changed

    def on_custom_input(self, text):
        self.calls.append(("custom", text))
        return StringItem(text)


class BarePicker(ManagedSelector[StringItem]):
    def __init__(self, keys=(), **kwargs):
        super().__init__(terminal=VirtualTerminal(keys), **kwargs)

    def load_items(self):
        return [StringItem("only")]


class TestManagedSelectorOutcomes:
    def test_view_details_returns_item(self) -> None:
        picker = ListPicker(["a", "b"], keys=(KEY_DOWN, KEY_ENTER))
        assert picker.run() == StringItem("a")

    def test_selected_returns_item(self) -> None:
        picker = ListPicker(["a", "b"], keys=(KEY_DOWN, KEY_DOWN, KEY_RIGHT))
        assert picker.run() == StringItem("b")

    def test_back_returns_none(self) -> None:
        picker = ListPicker(["a"], keys=(KEY_ESCAPE,))
        assert picker.run() is None
        assert picker.calls == []

    def test_exit_leaves_the_process(self, capsys) -> None:
        picker = ListPicker(["a"], keys=(KEY_CTRL_C,))
        with pytest.raises(SystemExit) as exc_info:
            picker.run()
        assert exc_info.value.code == 0
        assert CANCELLED_MESSAGE in capsys.readouterr().out
        assert not picker.terminal.is_raw

    def test_on_exit_can_be_overridden(self) -> None:
        class QuietPicker(ListPicker):
            def on_exit(self):
                self.calls.append(("exit",))

        picker = QuietPicker(["a"], keys=(KEY_CTRL_C,))
        assert picker.run() is None
        assert picker.calls == [("exit",)]

    def test_custom_input_goes_through_hook(self) -> None:
        picker = ListPicker(
            ["a"], keys=("z", "z", KEY_ENTER), config=SelectorConfig(allow_custom=True)
        )
        assert picker.run() == StringItem("zz")
        assert picker.calls == [("custom", "zz")]

    def test_message_override(self) -> None:
        picker = ListPicker(["a"], keys=(KEY_ESCAPE,), message="Choose an entry")
        picker.run()
        assert "Choose an entry" in picker.terminal.output


class TestManagedSelectorHooks:
    def test_delete_restarts_session_when_list_changed(self) -> None:
        picker = ListPicker(["a", "b", "c"], keys=(KEY_DOWN, KEY_DOWN, "d", KEY_ENTER))
        # The second session starts at the same index, which now holds "c"
        assert picker.run() == StringItem("c")
        assert picker.calls == [("delete", "b")]
        assert picker.terminal.start_count == 2

    def test_cursor_reset_without_preservation(self) -> None:
        picker = ListPicker(
            ["a", "b", "c"],
            keys=(KEY_DOWN, KEY_DOWN, "d", KEY_ENTER),
            config=SelectorConfig(preserve_position_on_refresh=False),
        )
        # Back on the filter row, Enter picks the first item
        assert picker.run() == StringItem("a")

    def test_restarted_cursor_is_clamped(self) -> None:
        picker = ListPicker(["a", "b"], keys=(KEY_END, "d", KEY_ENTER))
        assert picker.run() == StringItem("a")
        assert picker.calls == [("delete", "b")]

    def test_unchanged_list_ends_without_selection(self) -> None:
        picker = ListPicker(["a", "b"], keys=(KEY_DOWN, "n"), changed=False)
        assert picker.run() is None
        assert picker.calls == [("rename", "a")]
        assert picker.terminal.start_count == 1

    def test_create(self) -> None:
        picker = ListPicker(
            ["a"], keys=(KEY_END, KEY_ENTER, KEY_ESCAPE), config=SelectorConfig(allow_create=True)
        )
        assert picker.run() is None
        assert picker.calls == [("create",)]
        assert picker.names == ["a", "new1"]
        assert picker.terminal.start_count == 2

    def test_refresh_restarts_session_with_reloaded_items(self) -> None:
        class GrowingPicker(ListPicker):
            def on_refresh(self):
                self.names.append("c")
                return super().on_refresh()

        picker = GrowingPicker(["a", "b"], keys=(KEY_DOWN, "r", KEY_END, KEY_ENTER))
        assert picker.run() == StringItem("c")
        assert picker.calls == [("refresh",)]
        assert picker.load_count == 2
        assert picker.terminal.start_count == 2

    def test_unchanged_refresh_ends_without_selection(self) -> None:
        picker = ListPicker(["a", "b"], keys=(KEY_DOWN, "r", KEY_DOWN, KEY_ENTER), changed=False)
        assert picker.run() is None
        assert picker.calls == [("refresh",)]
        assert picker.terminal.remaining_keys == 2
        assert picker.terminal.start_count == 1


class TestDefaultHooks:
    def test_load_items_must_be_implemented(self) -> None:
        picker = ManagedSelector(terminal=VirtualTerminal())
        with pytest.raises(NotImplementedError):
            picker.run()

    def test_create_not_supported(self) -> None:
        picker = BarePicker(keys=(KEY_END, KEY_ENTER), config=SelectorConfig(allow_create=True))
        with pytest.raises(OperationNotSupported, match="Create operation not implemented"):
            picker.run()
        assert not picker.terminal.is_raw

    def test_delete_not_supported(self) -> None:
        picker = BarePicker(keys=(KEY_DOWN, "d"))
        with pytest.raises(OperationNotSupported, match="Delete"):
            picker.run()

    def test_rename_not_supported(self) -> None:
        picker = BarePicker(keys=(KEY_DOWN, "n"))
        with pytest.raises(OperationNotSupported, match="Rename"):
            picker.run()

    def test_custom_input_not_supported(self) -> None:
        picker = BarePicker(keys=("x", KEY_ENTER), config=SelectorConfig(allow_custom=True))
        with pytest.raises(OperationNotSupported):
            picker.run()

    def test_not_supported_is_not_a_cancellation(self) -> None:
        assert OperationNotSupported("x").is_cancellation is False

    def test_refresh_not_supported(self) -> None:
        picker = BarePicker(keys=(KEY_DOWN, "r"))
        with pytest.raises(OperationNotSupported, match="Refresh operation not implemented"):
            picker.run()
        assert not picker.terminal.is_raw


class TestShowItemDetails:
    def _show(self, *keys):
        terminal = VirtualTerminal(keys)
        return show_item_details(StringItem("prod"), "Details", terminal=terminal), terminal

    def test_enter_selects(self) -> None:
        result, terminal = self._show(KEY_ENTER)
        assert result == Selected(StringItem("prod"))
        assert "🔍" not in terminal.output

    def test_right_selects(self) -> None:
        result, _ = self._show(KEY_RIGHT)
        assert result == Selected(StringItem("prod"))

    def test_delete_and_rename_pass_through(self) -> None:
        assert self._show("d")[0] == Delete(StringItem("prod"))
        assert self._show("n")[0] == Rename(StringItem("prod"))

    def test_refresh_maps_to_back(self) -> None:
        assert self._show("r")[0] == Back()

    def test_escape_and_ctrl_c(self) -> None:
        assert self._show(KEY_ESCAPE)[0] == Back()
        assert self._show(KEY_CTRL_C)[0] == Exit()
