"""Small interactive prompts: free text, rename and yes/no/quit confirmation."""

from __future__ import annotations

import logging
from typing import Sequence

from ccs.tui.config import SelectorConfig
from ccs.tui.edit_buffer import GraphemeEditBuffer
from ccs.tui.errors import SelectionCancelled, exit_cancelled
from ccs.tui.keybindings import SelectorKeybindingsManager, get_selector_keybindings
from ccs.tui.keys import Key, is_printable_input, matches_key
from ccs.tui.options import StringItem
from ccs.tui.results import Back, Selected
from ccs.tui.selector import Selector
from ccs.tui.terminal import ProcessTerminal, Terminal, stdin_is_interactive
from ccs.tui.utils import visible_width

logger = logging.getLogger(__name__)

_CYAN = "\x1b[36m"
_RED = "\x1b[31m"
_DIM = "\x1b[90m"
_RESET = "\x1b[0m"

_INDENT = "  "

YES_OPTION = "✓ Yes (Y)"
NO_OPTION = "✗ No (N)"
QUIT_OPTION = "⚠ Quit (Q)"
CONFIRM_HELP = "Press Y for Yes, N for No, or Q to Quit"


def _render_text_prompt(
    terminal: Terminal,
    message: str,
    details: Sequence[str],
    label: str,
    buffer: GraphemeEditBuffer,
    placeholder: str | None,
    error: str | None,
) -> int:
    lines = [f"{_CYAN}{message}{_RESET}"]
    lines.extend(f"{_INDENT}{detail}" for detail in details)

    input_row = len(lines)
    if buffer.is_empty() and placeholder:
        lines.append(f"{_INDENT}{label}{_DIM}{placeholder}{_RESET}")
    else:
        lines.append(f"{_INDENT}{label}{buffer.text}")
    if error:
        lines.append(f"{_RED}{error}{_RESET}")

    terminal.clear_screen()
    terminal.write("\r\n".join(lines))
    terminal.move_to(input_row, visible_width(_INDENT + label) + buffer.pre_cursor_display_width())
    terminal.show_cursor()
    return len(lines)


def prompt_text(
    message: str,
    *,
    initial: str = "",
    placeholder: str | None = None,
    details: Sequence[str] = (),
    label: str = "> ",
    empty_message: str = "❌ Value cannot be empty",
    terminal: Terminal | None = None,
    keybindings: SelectorKeybindingsManager | None = None,
) -> str:
    """Read one line of text in raw mode and return it stripped.

    Empty input is refused with *empty_message* and editing continues.
    Raises :class:`SelectionCancelled` on Esc, and on Ctrl+C with
    ``hard=True``.
    """
    terminal = terminal or ProcessTerminal()
    kb = keybindings or get_selector_keybindings()
    buffer = GraphemeEditBuffer.from_text(initial)
    error: str | None = None
    height = 0

    terminal.start()
    try:
        while True:
            height = _render_text_prompt(terminal, message, details, label, buffer, placeholder, error)
            data = terminal.read_key()

            if kb.matches(data, "exit"):
                raise SelectionCancelled(hard=True)
            if kb.matches(data, "cancel"):
                raise SelectionCancelled()
            if kb.matches(data, "submit"):
                value = buffer.text.strip()
                if value:
                    return value
                error = empty_message
                continue

            error = None
            if kb.matches(data, "cursorLeft"):
                buffer.move_left()
            elif kb.matches(data, "cursorRight"):
                buffer.move_right()
            elif matches_key(data, Key.home):
                buffer.move_home()
            elif matches_key(data, Key.end):
                buffer.move_end()
            elif kb.matches(data, "deleteCharBackward"):
                buffer.delete_backward()
            elif kb.matches(data, "deleteCharForward"):
                buffer.delete_forward()
            elif is_printable_input(data):
                buffer.insert(data)
    finally:
        try:
            terminal.move_to(height, 0)
            terminal.show_cursor()
        finally:
            terminal.stop()


def prompt_rename(
    current_name: str,
    item_type: str,
    *,
    terminal: Terminal | None = None,
    keybindings: SelectorKeybindingsManager | None = None,
) -> str:
    """Ask for a new name, starting from *current_name*.

    Returns the stripped new name, which may equal *current_name*.
    """
    new_name = prompt_text(
        f"✏️  Rename {item_type}:",
        initial=current_name,
        details=[f"Current: {current_name}"],
        label="New name: ",
        empty_message="❌ Name cannot be empty",
        terminal=terminal,
        keybindings=keybindings,
    )
    if new_name == current_name:
        logger.debug("%s name unchanged: %s", item_type, current_name)
    return new_name


def confirm(
    message: str,
    default: bool = False,
    *,
    terminal: Terminal | None = None,
    keybindings: SelectorKeybindingsManager | None = None,
) -> bool:
    """Ask a yes/no question with an extra "quit" choice.

    Returns *default* when stdin is not interactive or the user presses Esc.
    Choosing Quit (or Ctrl+C) prints the cancel message and exits.
    """
    if terminal is None and not stdin_is_interactive():
        logger.debug("stdin is not a tty, using default answer %s", default)
        return default

    yes, no, quit_ = StringItem(YES_OPTION), StringItem(NO_OPTION), StringItem(QUIT_OPTION)
    shortcuts = {}
    for letter, item in (("y", yes), ("n", no), ("q", quit_)):
        shortcuts[letter] = item
        shortcuts[Key.shift(letter)] = item

    config = SelectorConfig(
        show_filter=False,
        allow_management=False,
        show_item_count=False,
    )
    selector = Selector(
        message,
        [yes, no, quit_],
        config,
        terminal=terminal,
        keybindings=keybindings,
        starting_cursor=0 if default else 1,
        shortcuts=shortcuts,
        help_text=CONFIRM_HELP,
    )
    result = selector.prompt()

    if isinstance(result, Selected):
        if result.item == yes:
            return True
        if result.item == no:
            return False
    elif isinstance(result, Back):
        return default

    exit_cancelled()


def confirm_deletion(item_name: str, item_type: str, **kwargs) -> bool:
    return confirm(
        f"Are you sure you want to delete '{item_name}' {item_type}? This action cannot be undone",
        False,
        **kwargs,
    )


def confirm_overwrite(item_name: str, item_type: str, **kwargs) -> bool:
    return confirm(f"{item_type} '{item_name}' already exists. Overwrite?", False, **kwargs)
