"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, bracketed paste, cursor visibility and
shape, and screen clearing via ANSI escape sequences.  Key reads are
blocking and synchronous.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import termios
import tty
from typing import Protocol

from ccs.tui.errors import SelectorIOError
from ccs.tui.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"

# How long to wait for the rest of an escape sequence before treating a
# lone ESC as the Escape key
_ESCAPE_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_key(self) -> str: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    @property
    def is_raw(self) -> bool: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def move_to(self, row: int, column: int) -> None: ...

    def clear_screen(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the process's stdin/stdout descriptors.

    ``start`` saves the tty attributes and switches to raw mode; ``stop``
    restores them.  Failures of the underlying tty calls are raised as
    :class:`SelectorIOError`.
    """

    def __init__(self, stdin_fd: int | None = None, stdout_fd: int | None = None) -> None:
        try:
            self._stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
            self._stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        except (ValueError, OSError) as exc:
            raise SelectorIOError(f"No terminal attached: {exc}") from exc
        self._original_termios: list | None = None
        self._stdin_buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._write_log_path: str = os.environ.get("CCS_TUI_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout_fd).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout_fd).lines
        except (ValueError, OSError):
            return 24

    @property
    def is_raw(self) -> bool:
        return self._original_termios is not None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Save the tty state, enable raw mode and bracketed paste.

        If anything fails after raw mode is on, the saved state is restored
        before the error propagates.
        """
        if self._original_termios is not None:
            return
        try:
            self._original_termios = termios.tcgetattr(self._stdin_fd)
            tty.setraw(self._stdin_fd)
        except (termios.error, OSError) as exc:
            self._original_termios = None
            raise SelectorIOError(f"Cannot enter raw mode: {exc}") from exc
        logger.debug("raw mode enabled on fd %d", self._stdin_fd)
        try:
            self.write(_BRACKETED_PASTE_ENABLE)
        except SelectorIOError:
            self._restore_mode()
            raise

    def stop(self) -> None:
        """Restore the saved tty state."""
        if self._original_termios is None:
            return
        self._stdin_buffer.clear()
        try:
            self.write(_BRACKETED_PASTE_DISABLE)
        finally:
            self._restore_mode()

    def _restore_mode(self) -> None:
        saved = self._original_termios
        self._original_termios = None
        try:
            termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, saved)
        except (termios.error, OSError) as exc:
            raise SelectorIOError(f"Cannot leave raw mode: {exc}") from exc
        logger.debug("raw mode disabled on fd %d", self._stdin_fd)

    # -- input --------------------------------------------------------------

    def read_key(self) -> str:
        """Block until one complete key sequence (or paste) is available."""
        while True:
            sequence = self._stdin_buffer.pop()
            if sequence is not None:
                return sequence

            if self._stdin_buffer.has_pending and not self._wait_readable(_ESCAPE_TIMEOUT):
                self._stdin_buffer.flush()
                continue

            try:
                raw = os.read(self._stdin_fd, 4096)
            except OSError as exc:
                raise SelectorIOError(f"Failed to read from terminal: {exc}") from exc
            if not raw:
                raise SelectorIOError("Terminal input closed")
            self._stdin_buffer.feed(self._decoder.decode(raw))

    def _wait_readable(self, timeout: float) -> bool:
        try:
            ready, _, _ = select.select([self._stdin_fd], [], [], timeout)
        except (OSError, ValueError) as exc:
            raise SelectorIOError(f"Failed to poll terminal: {exc}") from exc
        return bool(ready)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        payload = data.encode("utf-8")
        try:
            while payload:
                written = os.write(self._stdout_fd, payload)
                payload = payload[written:]
        except OSError as exc:
            raise SelectorIOError(f"Failed to write to terminal: {exc}") from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                logger.warning("cannot append to write log %s", self._write_log_path)
                self._write_log_path = ""

    # -- cursor / screen manipulation --------------------------------------

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def move_to(self, row: int, column: int) -> None:
        """Move the cursor to a zero-based (row, column)."""
        self.write(_MOVE_TO_FMT.format(row + 1, column + 1))

    def clear_screen(self) -> None:
        self.write(_CLEAR_SCREEN)


def stdin_is_interactive() -> bool:
    """Return ``True`` when stdin is attached to a terminal."""
    try:
        return os.isatty(sys.stdin.fileno())
    except (ValueError, OSError):
        return False
