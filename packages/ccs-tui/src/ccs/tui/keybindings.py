"""Selector keybindings manager."""

from __future__ import annotations

from typing import Literal

from ccs.tui.keys import KeyId, matches_key

SelectorAction = Literal[
    # Session cursor
    "selectUp",
    "selectDown",
    "selectPageUp",
    "selectPageDown",
    "selectFirst",
    "selectLast",
    # Filter text cursor (also Back / Select outside the filter row)
    "cursorLeft",
    "cursorRight",
    # Filter text deletion
    "deleteCharBackward",
    "deleteCharForward",
    # Outcomes
    "submit",
    "cancel",
    "exit",
    # Management shortcuts
    "deleteItem",
    "renameItem",
    "refreshItems",
]

SelectorKeybindingsConfig = dict[SelectorAction, KeyId | list[KeyId]]

DEFAULT_SELECTOR_KEYBINDINGS: dict[SelectorAction, KeyId | list[KeyId]] = {
    "selectUp": "up",
    "selectDown": "down",
    "selectPageUp": "pageUp",
    "selectPageDown": "pageDown",
    "selectFirst": "home",
    "selectLast": "end",
    "cursorLeft": "left",
    "cursorRight": "right",
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "submit": "enter",
    "cancel": "escape",
    "exit": "ctrl+c",
    "deleteItem": ["d", "shift+d"],
    "renameItem": ["n", "shift+n"],
    "refreshItems": ["r", "shift+r"],
}


class SelectorKeybindingsManager:
    """Maps raw key input to selector actions."""

    def __init__(self, config: SelectorKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[SelectorAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: SelectorKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_SELECTOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # User config replaces the defaults of the actions it names
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: SelectorAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))

    def get_keys(self, action: SelectorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: SelectorKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_selector_keybindings: SelectorKeybindingsManager | None = None


def get_selector_keybindings() -> SelectorKeybindingsManager:
    global _global_selector_keybindings
    if _global_selector_keybindings is None:
        _global_selector_keybindings = SelectorKeybindingsManager()
    return _global_selector_keybindings


def set_selector_keybindings(manager: SelectorKeybindingsManager | None) -> None:
    global _global_selector_keybindings
    _global_selector_keybindings = manager
