"""Selectable items and the flat option list a selector navigates.

The option list is laid out as::

    [filter row] item 0 … item N-1 [create row] [custom row]

where the bracketed rows only exist when the matching ``SelectorConfig``
flag is set.  ``OptionSpace`` maps a cursor index onto that layout and owns
the filtered view of the items.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from ccs.tui.config import SelectorConfig


@runtime_checkable
class SelectableItem(Protocol):
    """Anything a selector can list."""

    def display_name(self) -> str:
        """Short name, matched against the filter text."""
        ...

    def format_for_list(self) -> str:
        """Text drawn for the row; may span several lines."""
        ...

    def id(self) -> Optional[str]:
        ...


@dataclass(frozen=True)
class StringItem:
    """Adapter that lets a plain string be listed."""

    value: str

    def display_name(self) -> str:
        return self.value

    def format_for_list(self) -> str:
        return self.value

    def id(self) -> Optional[str]:
        return self.value

    def __str__(self) -> str:
        return self.value


T = TypeVar("T", bound=SelectableItem)


class SlotKind(enum.Enum):
    FILTER = "filter"
    ITEM = "item"
    CREATE = "create"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Slot:
    """What lives at a cursor index.

    ``item_index`` indexes the filtered items and is only set for
    ``SlotKind.ITEM``.
    """

    kind: SlotKind
    item_index: Optional[int] = None


class OptionSpace(Generic[T]):
    """Cursor-index arithmetic over the currently filtered items."""

    def __init__(self, items: Sequence[T], config: SelectorConfig) -> None:
        self._config = config
        self._items: list[T] = list(items)
        self._filter_text = ""
        self._filtered: list[T] = list(self._items)

    # -- item list ----------------------------------------------------------

    @property
    def items(self) -> list[T]:
        return self._items

    @property
    def filtered_items(self) -> list[T]:
        return self._filtered

    @property
    def filter_text(self) -> str:
        return self._filter_text

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the source items and re-apply the current filter."""
        self._items = list(items)
        self.apply_filter(self._filter_text)

    def apply_filter(self, text: str) -> list[T]:
        """Keep the items whose display name contains *text*, ignoring case.

        Original order is preserved; an empty *text* keeps every item.
        """
        self._filter_text = text
        if not text:
            self._filtered = list(self._items)
        else:
            needle = text.lower()
            self._filtered = [
                item for item in self._items if needle in item.display_name().lower()
            ]
        return self._filtered

    # -- layout -------------------------------------------------------------

    @property
    def _item_offset(self) -> int:
        return 1 if self._config.show_filter else 0

    def total_count(self) -> int:
        count = self._item_offset + len(self._filtered)
        if self._config.allow_create:
            count += 1
        if self._config.allow_custom:
            count += 1
        return count

    def resolve(self, index: int) -> Slot:
        """Return the slot at cursor *index*."""
        if index < 0 or index >= self.total_count():
            raise IndexError(f"option index {index} out of range")

        if self._config.show_filter and index == 0:
            return Slot(SlotKind.FILTER)

        item_index = index - self._item_offset
        if item_index < len(self._filtered):
            return Slot(SlotKind.ITEM, item_index)

        extra = item_index - len(self._filtered)
        if self._config.allow_create and extra == 0:
            return Slot(SlotKind.CREATE)
        return Slot(SlotKind.CUSTOM)

    def item_at(self, index: int) -> Optional[T]:
        """Return the filtered item at cursor *index*, or ``None`` for other rows."""
        if index < 0 or index >= self.total_count():
            return None
        slot = self.resolve(index)
        if slot.kind is not SlotKind.ITEM:
            return None
        return self._filtered[slot.item_index]

    def clamp(self, index: int) -> int:
        """Pull *index* into ``[0, total_count())`` (0 when there are no rows)."""
        last = self.total_count() - 1
        if last < 0:
            return 0
        return max(0, min(index, last))
