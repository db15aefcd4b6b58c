"""Single-line text buffer with a cursor measured in grapheme clusters."""

from __future__ import annotations

from ccs.tui.utils import grapheme_width, split_graphemes


class GraphemeEditBuffer:
    """Text holder whose cursor moves over user-perceived characters.

    The cursor is an index into the list of grapheme clusters, so a combining
    accent or a multi-code-point emoji is inserted, deleted and stepped over
    as one unit.  Every mutation re-segments the whole buffer; that is linear
    in the buffer length, which is fine for a single input line.
    """

    def __init__(self) -> None:
        self._text: str = ""
        self._graphemes: list[str] = []
        self._cursor: int = 0

    @classmethod
    def from_text(cls, text: str) -> GraphemeEditBuffer:
        """Create a buffer holding *text* with the cursor at the end."""
        buf = cls()
        buf._set_text(text)
        buf._cursor = len(buf._graphemes)
        return buf

    # -- accessors ----------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def grapheme_count(self) -> int:
        return len(self._graphemes)

    def is_empty(self) -> bool:
        return not self._text

    # -- editing ------------------------------------------------------------

    def insert(self, chars: str) -> None:
        """Insert *chars* before the cluster under the cursor.

        The cursor advances past the inserted text.  Because clusters are
        recomputed on the joined text, a combining mark typed after a base
        character merges into that character's cluster.
        """
        if not chars:
            return
        before = "".join(self._graphemes[: self._cursor])
        after = "".join(self._graphemes[self._cursor :])
        self._set_text(before + chars + after)
        self._cursor = min(
            len(self._graphemes),
            len(self._graphemes) - len(split_graphemes(after)),
        )

    def delete_backward(self) -> bool:
        """Remove the cluster before the cursor. Returns ``False`` at the start."""
        if self._cursor == 0:
            return False
        del self._graphemes[self._cursor - 1]
        self._cursor -= 1
        self._set_text("".join(self._graphemes))
        return True

    def delete_forward(self) -> bool:
        """Remove the cluster under the cursor. Returns ``False`` at the end."""
        if self._cursor >= len(self._graphemes):
            return False
        del self._graphemes[self._cursor]
        self._set_text("".join(self._graphemes))
        return True

    def clear(self) -> None:
        self._set_text("")
        self._cursor = 0

    # -- cursor movement ----------------------------------------------------

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._graphemes):
            self._cursor += 1

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._graphemes)

    # -- measurement --------------------------------------------------------

    def pre_cursor_display_width(self) -> int:
        """Terminal columns taken by the clusters before the cursor."""
        return sum(grapheme_width(g) for g in self._graphemes[: self._cursor])

    # -- internals ----------------------------------------------------------

    def _set_text(self, text: str) -> None:
        self._text = text
        self._graphemes = split_graphemes(text)
        # Deleting a cluster can make neighbours merge; keep the cursor valid.
        self._cursor = min(self._cursor, len(self._graphemes))

    def __repr__(self) -> str:
        return f"GraphemeEditBuffer(text={self._text!r}, cursor={self._cursor})"
