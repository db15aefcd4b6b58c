"""Per-session selector configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ccs.tui.errors import InvalidInput


class CursorStyle(enum.Enum):
    """Terminal cursor shape used while a selector owns the screen."""

    DEFAULT = "default"
    BLOCK = "block"
    LINE = "line"

    def to_ansi(self) -> str:
        return _CURSOR_STYLE_SEQUENCES[self]


_CURSOR_STYLE_SEQUENCES: dict[CursorStyle, str] = {
    CursorStyle.DEFAULT: "\x1b[0 q",
    CursorStyle.BLOCK: "\x1b[2 q",
    CursorStyle.LINE: "\x1b[5 q",
}


@dataclass
class SelectorConfig:
    """Options controlling which rows a selector shows and how keys behave.

    ``allow_management`` enables the single-key delete/rename/refresh
    shortcuts and turns Enter on an item into "view details" instead of an
    immediate selection.
    """

    page_size: int = 10
    cursor_style: CursorStyle = field(default=CursorStyle.BLOCK)
    allow_create: bool = False
    allow_custom: bool = False
    allow_management: bool = True
    show_item_count: bool = True
    preserve_position_on_refresh: bool = True
    show_filter: bool = True

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise InvalidInput(f"page_size must be at least 1, got {self.page_size}")
        if isinstance(self.cursor_style, str):
            try:
                self.cursor_style = CursorStyle(self.cursor_style)
            except ValueError:
                raise InvalidInput(f"Unknown cursor style: {self.cursor_style!r}") from None
