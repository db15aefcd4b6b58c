"""Selector loop for pickers whose items can be created, renamed and deleted.

Subclass ``ManagedSelector``, implement ``load_items`` and override the hooks
the picker supports::

    class ProfilePicker(ManagedSelector[Profile]):
        message = "Select a profile"
        item_type = "profile"

        def load_items(self):
            return store.list_profiles()

        def on_delete(self, item):
            if not confirm_deletion(item.name, self.item_type):
                return False
            store.delete(item.name)
            return True

    profile = ProfilePicker().run()

A hook returns ``True`` when it changed the list; the loop then starts a new
selector session over ``load_items()``.  Hooks that return ``False`` end the
loop without a selection.
"""

from __future__ import annotations

import logging
from typing import Generic, Optional, Sequence, TypeVar

from ccs.tui.config import SelectorConfig
from ccs.tui.errors import OperationNotSupported, exit_cancelled
from ccs.tui.keybindings import SelectorKeybindingsManager
from ccs.tui.options import SelectableItem
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
from ccs.tui.selector import Selector
from ccs.tui.terminal import Terminal

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SelectableItem)


class ManagedSelector(Generic[T]):
    """Base class for management pickers."""

    message: str = "Select an item"
    item_type: str = "item"

    def __init__(
        self,
        message: str | None = None,
        config: SelectorConfig | None = None,
        *,
        terminal: Terminal | None = None,
        keybindings: SelectorKeybindingsManager | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        self.config = config or SelectorConfig()
        self.terminal = terminal
        self.keybindings = keybindings

    # -- hooks ----------------------------------------------------------------

    def load_items(self) -> Sequence[T]:
        raise NotImplementedError

    def on_create(self) -> bool:
        raise OperationNotSupported("Create operation not implemented")

    def on_delete(self, item: T) -> bool:
        raise OperationNotSupported("Delete operation not implemented")

    def on_rename(self, item: T) -> bool:
        raise OperationNotSupported("Rename operation not implemented")

    def on_refresh(self) -> bool:
        raise OperationNotSupported("Refresh operation not implemented")

    def on_custom_input(self, text: str) -> Optional[T]:
        raise OperationNotSupported("Custom input not implemented")

    def on_exit(self) -> None:
        exit_cancelled()

    # -- loop -----------------------------------------------------------------

    def create_selector(self, items: Sequence[T], starting_cursor: int = 0) -> Selector[T]:
        return Selector(
            self.message,
            list(items),
            self.config,
            terminal=self.terminal,
            keybindings=self.keybindings,
            starting_cursor=starting_cursor,
        )

    def run(self) -> Optional[T]:
        """Run selector sessions until an item is picked or the user backs out."""
        cursor = 0
        while True:
            selector = self.create_selector(self.load_items(), cursor)
            result = selector.prompt()
            cursor = selector.cursor_index if self.config.preserve_position_on_refresh else 0

            done, value = self._dispatch(result)
            if done:
                return value
            logger.debug("%s list changed, restarting selector at %d", self.item_type, cursor)

    def _dispatch(self, result: SelectionResult[T]) -> tuple[bool, Optional[T]]:
        if isinstance(result, (Selected, ViewDetails)):
            return True, result.item
        if isinstance(result, CustomInput):
            return True, self.on_custom_input(result.text)
        if isinstance(result, Back):
            return True, None
        if isinstance(result, Exit):
            self.on_exit()
            return True, None

        if isinstance(result, Create):
            changed = self.on_create()
        elif isinstance(result, Delete):
            changed = self.on_delete(result.item)
        elif isinstance(result, Rename):
            changed = self.on_rename(result.item)
        elif isinstance(result, Refresh):
            changed = self.on_refresh()
        else:
            raise TypeError(f"unexpected selection result: {result!r}")
        return not changed, None


def show_item_details(
    item: T,
    title: str,
    *,
    terminal: Terminal | None = None,
    keybindings: SelectorKeybindingsManager | None = None,
) -> SelectionResult[T]:
    """Show a single item with its management shortcuts.

    Only ``Selected``, ``Rename``, ``Delete``, ``Back`` and ``Exit`` come
    back; Enter on the item counts as ``Selected``.
    """
    config = SelectorConfig(show_filter=False, allow_create=False, allow_custom=False)
    result = Selector(title, [item], config, terminal=terminal, keybindings=keybindings).prompt()

    if isinstance(result, ViewDetails):
        return Selected(result.item)
    if isinstance(result, (Selected, Rename, Delete, Back, Exit)):
        return result
    return Back()
