"""Interactive list selector with live filtering and management shortcuts.

A ``Selector`` owns the terminal for one ``prompt()`` call: it switches to
raw mode, redraws the whole frame after every key and returns exactly one
outcome from :mod:`ccs.tui.results`.  Raw mode and the cursor are restored on
every exit path, including exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, Optional, Sequence, TypeVar

from ccs.tui.config import CursorStyle, SelectorConfig
from ccs.tui.edit_buffer import GraphemeEditBuffer
from ccs.tui.keybindings import SelectorKeybindingsManager, get_selector_keybindings
from ccs.tui.keys import KeyId, is_printable_input, matches_key
from ccs.tui.options import OptionSpace, SelectableItem, Slot, SlotKind
from ccs.tui.results import (
    Back,
    Create,
    CustomInput,
    Delete,
    Exit,
    Refresh,
    Rename,
    Selected,
    SelectionResult,
    ViewDetails,
)
from ccs.tui.terminal import ProcessTerminal, Terminal
from ccs.tui.utils import truncate_to_width, visible_width

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SelectableItem)

# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

_CYAN = "\x1b[36m"
_YELLOW = "\x1b[33m"
_DIM = "\x1b[90m"
_RESET = "\x1b[0m"

POINTER = "❯"
SEARCH_ICON = "🔍"
FILTER_PLACEHOLDER = f"{SEARCH_ICON} Filter/Custom search..."
CREATE_LABEL = "➕ Create New..."
CUSTOM_LABEL = "✏️ Enter Custom Value..."
NO_MATCH_LABEL = "No matching items"

# Lines above the first option row: the prompt and a blank line
HEADER_LINES = 2

_HELP_FILTER = "Type to filter, Enter to search, ↑↓ to navigate, Esc to back"
_HELP_CREATE = "Enter to create new item, ↑↓ to navigate, Esc to back"
_HELP_CUSTOM = "Enter to input custom value, ↑↓ to navigate, Esc to back"
_HELP_EMPTY = "↑↓ to navigate, Enter: Select, Esc: Back"


def visible_window(total: int, cursor: int, page_size: int) -> tuple[int, int]:
    """Return the ``[start, end)`` option range to draw.

    Everything is shown when it fits.  Otherwise the cursor is kept in the
    middle of the window, except near either end of the list where the
    window stays pinned to the first or last page.
    """
    if total <= page_size:
        return 0, total
    half = page_size // 2
    if cursor < half:
        start = 0
    elif cursor >= total - half:
        start = total - page_size
    else:
        start = cursor - half
    return start, min(total, start + page_size)


@dataclass
class Frame:
    """One rendered screen: its lines and where the text cursor goes."""

    lines: list[str]
    cursor: Optional[tuple[int, int]] = None


class Selector(Generic[T]):
    """Keystroke-driven picker over a list of selectable items."""

    def __init__(
        self,
        message: str,
        items: Sequence[T],
        config: SelectorConfig | None = None,
        *,
        terminal: Terminal | None = None,
        keybindings: SelectorKeybindingsManager | None = None,
        starting_cursor: int = 0,
        refresh_items: Callable[[], Sequence[T]] | None = None,
        shortcuts: Mapping[KeyId, T] | None = None,
        help_text: str | None = None,
    ) -> None:
        self._message = message
        self._config = config or SelectorConfig()
        self._terminal = terminal
        self._keybindings = keybindings
        self._refresh_items = refresh_items
        self._shortcuts = dict(shortcuts or {})
        self._help_text = help_text
        self._options: OptionSpace[T] = OptionSpace(items, self._config)
        self._buffer = GraphemeEditBuffer()
        self._cursor = self._options.clamp(starting_cursor)
        self._frame_height = 0

    # -- state --------------------------------------------------------------

    @property
    def config(self) -> SelectorConfig:
        return self._config

    @property
    def cursor_index(self) -> int:
        return self._cursor

    @property
    def options(self) -> OptionSpace[T]:
        return self._options

    @property
    def filter_buffer(self) -> GraphemeEditBuffer:
        return self._buffer

    @property
    def filter_text(self) -> str:
        return self._buffer.text

    @property
    def filtered_items(self) -> list[T]:
        return self._options.filtered_items

    def current_slot(self) -> Slot | None:
        if self._options.total_count() == 0:
            return None
        return self._options.resolve(self._cursor)

    def refresh(self, items: Sequence[T]) -> None:
        """Swap in a new item list without ending the session.

        The current filter text is re-applied; the cursor is clamped to the
        new bounds or reset to the top, depending on the config.
        """
        self._options.set_items(items)
        if self._config.preserve_position_on_refresh:
            self._cursor = self._options.clamp(self._cursor)
        else:
            self._cursor = 0
        logger.debug("refreshed selector items: %d total, %d shown", len(items), len(self.filtered_items))

    # -- session ------------------------------------------------------------

    def prompt(self) -> SelectionResult[T]:
        """Run the selector until the user picks an outcome.

        Raises :class:`~ccs.tui.errors.SelectorIOError` if the terminal
        cannot be read or written.
        """
        terminal = self._terminal
        if terminal is None:
            terminal = self._terminal = ProcessTerminal()

        terminal.start()
        logger.debug("selector session started: %r", self._message)
        try:
            terminal.write(self._config.cursor_style.to_ansi())
            self._render(terminal)
            while True:
                result = self.handle_input(terminal.read_key())
                if result is not None:
                    break
                self._render(terminal)
        finally:
            self._cleanup(terminal)

        logger.debug("selector session ended with %s", type(result).__name__)
        return result

    def _cleanup(self, terminal: Terminal) -> None:
        try:
            terminal.move_to(self._frame_height, 0)
            terminal.write(CursorStyle.DEFAULT.to_ansi())
            terminal.show_cursor()
        finally:
            terminal.stop()

    # -- input --------------------------------------------------------------

    def handle_input(self, data: str) -> SelectionResult[T] | None:
        """Apply one key to the session.

        Returns the outcome when the key ends the session, else ``None``.
        """
        kb = self._keybindings or get_selector_keybindings()
        total = self._options.total_count()
        slot = self.current_slot()
        kind = slot.kind if slot is not None else None

        if kb.matches(data, "exit"):
            return Exit()
        if kb.matches(data, "cancel"):
            return Back()

        # Typing on the filter row always edits the filter
        if kind is SlotKind.FILTER and is_printable_input(data):
            self._insert_filter_text(data)
            return None

        for key_id, item in self._shortcuts.items():
            if matches_key(data, key_id):
                return Selected(item)

        if kb.matches(data, "selectUp"):
            self._cursor = max(0, self._cursor - 1)
        elif kb.matches(data, "selectDown"):
            self._cursor = max(0, min(total - 1, self._cursor + 1))
        elif kb.matches(data, "selectPageUp"):
            self._cursor = max(0, self._cursor - self._config.page_size)
        elif kb.matches(data, "selectPageDown"):
            self._cursor = max(0, min(total - 1, self._cursor + self._config.page_size))
        elif kb.matches(data, "selectFirst"):
            self._cursor = 0
        elif kb.matches(data, "selectLast"):
            self._cursor = max(0, total - 1)
        elif kb.matches(data, "cursorLeft"):
            if kind is SlotKind.FILTER:
                self._buffer.move_left()
            else:
                return Back()
        elif kb.matches(data, "cursorRight"):
            return self._handle_right(slot)
        elif kb.matches(data, "deleteCharBackward"):
            if self._config.show_filter and self._buffer.delete_backward():
                self._update_filter()
        elif kb.matches(data, "deleteCharForward"):
            if self._config.show_filter and self._buffer.delete_forward():
                self._update_filter()
        elif kb.matches(data, "submit"):
            return self._handle_submit(slot)
        elif is_printable_input(data):
            return self._handle_text(data, slot)
        return None

    def _handle_right(self, slot: Slot | None) -> SelectionResult[T] | None:
        if slot is None:
            return None
        if slot.kind is SlotKind.FILTER:
            self._buffer.move_right()
            return None
        if slot.kind is SlotKind.CREATE:
            return Create()
        if slot.kind is SlotKind.CUSTOM:
            return CustomInput(self._buffer.text)
        return Selected(self.filtered_items[slot.item_index])

    def _handle_submit(self, slot: Slot | None) -> SelectionResult[T] | None:
        if slot is None:
            return None
        if slot.kind is SlotKind.FILTER:
            if self.filtered_items:
                return Selected(self.filtered_items[0])
            if self._config.allow_custom and not self._buffer.is_empty():
                return CustomInput(self._buffer.text)
            return None
        if slot.kind is SlotKind.CREATE:
            return Create()
        if slot.kind is SlotKind.CUSTOM:
            return CustomInput(self._buffer.text)

        item = self.filtered_items[slot.item_index]
        if self._config.allow_management:
            return ViewDetails(item)
        return Selected(item)

    def _handle_text(self, data: str, slot: Slot | None) -> SelectionResult[T] | None:
        if slot is not None and slot.kind is SlotKind.ITEM and self._config.allow_management:
            kb = self._keybindings or get_selector_keybindings()
            item = self.filtered_items[slot.item_index]
            if kb.matches(data, "deleteItem"):
                return Delete(item)
            if kb.matches(data, "renameItem"):
                return Rename(item)
            if kb.matches(data, "refreshItems"):
                if self._refresh_items is None:
                    return Refresh()
                self.refresh(self._refresh_items())
                return None

        if self._config.show_filter:
            self._insert_filter_text(data)
        return None

    def _insert_filter_text(self, data: str) -> None:
        self._buffer.insert(data)
        self._update_filter()

    def _update_filter(self) -> None:
        self._options.apply_filter(self._buffer.text)
        if self._cursor >= self._options.total_count():
            self._cursor = 0

    # -- rendering ----------------------------------------------------------

    def _render(self, terminal: Terminal) -> None:
        frame = self.render_frame(terminal.columns)
        self._frame_height = len(frame.lines)

        terminal.clear_screen()
        terminal.write("\r\n".join(frame.lines))
        if frame.cursor is not None:
            terminal.move_to(*frame.cursor)
            terminal.show_cursor()
        else:
            terminal.hide_cursor()

    def render_frame(self, width: int = 80) -> Frame:
        """Build the lines of the current screen without touching the terminal."""
        lines = [self._render_prompt(), ""]
        cursor_pos: Optional[tuple[int, int]] = None

        total = self._options.total_count()
        start, end = visible_window(total, self._cursor, self._config.page_size)
        for index in range(start, end):
            slot = self._options.resolve(index)
            selected = index == self._cursor
            row_lines = self._render_option(slot, selected)
            if selected and slot.kind is SlotKind.FILTER:
                column = visible_width(f"{POINTER} {SEARCH_ICON} ") + self._buffer.pre_cursor_display_width()
                # Long filter text is cut to the frame width
                cursor_pos = (len(lines), min(column, max(0, width - 1)))
            lines.extend(row_lines)

        if not self.filtered_items and self.filter_text:
            lines.append(f"  {_DIM}{NO_MATCH_LABEL}{_RESET}")

        lines.append("")
        lines.append(f"{_DIM}{self.help_message()}{_RESET}")

        lines = [truncate_to_width(line, width) for line in lines]
        return Frame(lines=lines, cursor=cursor_pos)

    def _render_prompt(self) -> str:
        line = f"{_CYAN}?{_RESET} {self._message}"
        if self._config.show_item_count:
            line += f"{_DIM} ({len(self.filtered_items)} items){_RESET}"
        return line

    def _render_option(self, slot: Slot, selected: bool) -> list[str]:
        prefix = f"{_YELLOW}{POINTER}{_RESET} " if selected else "  "

        if slot.kind is SlotKind.FILTER:
            if self._buffer.is_empty():
                text = f"{_DIM}{FILTER_PLACEHOLDER}{_RESET}" if selected else FILTER_PLACEHOLDER
            else:
                text = f"{SEARCH_ICON} {self._buffer.text}"
                if selected:
                    text = f"{_CYAN}{text}{_RESET}"
            return [prefix + text]

        if slot.kind is SlotKind.CREATE:
            body = [CREATE_LABEL]
        elif slot.kind is SlotKind.CUSTOM:
            body = [CUSTOM_LABEL]
        else:
            item = self.filtered_items[slot.item_index]
            body = item.format_for_list().rstrip("\n").split("\n")

        if selected:
            body = [f"{_YELLOW}{part}{_RESET}" for part in body]
        return [prefix + body[0]] + [f"  {part}" for part in body[1:]]

    def help_message(self) -> str:
        """Help text for whichever row the cursor is on."""
        slot = self.current_slot()
        if slot is None:
            return _HELP_EMPTY
        if slot.kind is SlotKind.FILTER:
            return _HELP_FILTER
        if slot.kind is SlotKind.CREATE:
            return _HELP_CREATE
        if slot.kind is SlotKind.CUSTOM:
            return _HELP_CUSTOM
        if self._help_text is not None:
            return self._help_text

        parts = ["↑↓ to navigate", "Enter to select"]
        if self._config.show_filter:
            parts.append("←→ to move cursor")
        if self._config.allow_management:
            parts.extend(["d: Delete", "n: Rename", "r: Refresh"])
        parts.append("Esc: Back")
        return ", ".join(parts)
