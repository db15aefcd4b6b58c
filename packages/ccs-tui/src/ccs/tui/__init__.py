"""ccs-tui: interactive terminal pickers with live filtering."""

# Configuration
from ccs.tui.config import CursorStyle, SelectorConfig

# Text editing
from ccs.tui.edit_buffer import GraphemeEditBuffer

# Errors
from ccs.tui.errors import (
    CANCELLED_MESSAGE,
    InvalidInput,
    OperationNotSupported,
    SelectionCancelled,
    SelectorError,
    SelectorIOError,
    exit_cancelled,
)

# Keybindings
from ccs.tui.keybindings import (
    DEFAULT_SELECTOR_KEYBINDINGS,
    SelectorAction,
    SelectorKeybindingsManager,
    get_selector_keybindings,
    set_selector_keybindings,
)

# Keyboard input handling
from ccs.tui.keys import Key, KeyId, matches_key, parse_key

# Management pickers
from ccs.tui.managed import ManagedSelector, show_item_details

# Items and option layout
from ccs.tui.options import OptionSpace, SelectableItem, Slot, SlotKind, StringItem

# Prompts
from ccs.tui.prompts import confirm, confirm_deletion, confirm_overwrite, prompt_rename, prompt_text

# Selection outcomes
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

# Selector engine
from ccs.tui.selector import Selector

# Input buffering
from ccs.tui.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from ccs.tui.terminal import ProcessTerminal, Terminal

# Utilities
from ccs.tui.utils import truncate_to_width, visible_width

__all__ = [
    # Config
    "CursorStyle",
    "SelectorConfig",
    # Edit buffer
    "GraphemeEditBuffer",
    # Errors
    "CANCELLED_MESSAGE",
    "InvalidInput",
    "OperationNotSupported",
    "SelectionCancelled",
    "SelectorError",
    "SelectorIOError",
    "exit_cancelled",
    # Keybindings
    "DEFAULT_SELECTOR_KEYBINDINGS",
    "SelectorAction",
    "SelectorKeybindingsManager",
    "get_selector_keybindings",
    "set_selector_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Managed
    "ManagedSelector",
    "show_item_details",
    # Options
    "OptionSpace",
    "SelectableItem",
    "Slot",
    "SlotKind",
    "StringItem",
    # Prompts
    "confirm",
    "confirm_deletion",
    "confirm_overwrite",
    "prompt_rename",
    "prompt_text",
    # Results
    "Back",
    "Create",
    "CustomInput",
    "Delete",
    "Exit",
    "Refresh",
    "Rename",
    "Selected",
    "SelectionResult",
    "ViewDetails",
    # Selector
    "Selector",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utils
    "truncate_to_width",
    "visible_width",
]
