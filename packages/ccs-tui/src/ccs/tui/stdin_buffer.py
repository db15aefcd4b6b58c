"""StdinBuffer buffers raw input and hands out complete key sequences.

A single ``read`` from a raw-mode terminal can return several keys at once
(fast typing, pastes) or only part of an escape sequence.  The buffer splits
what it is fed into whole sequences and keeps any incomplete tail until more
data arrives or the caller decides the tail is complete after all (a lone
Esc press looks exactly like the start of an escape sequence).
"""

from __future__ import annotations

import re
from collections import deque

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        return _is_complete_csi_sequence(data)

    # OSC / DCS / APC sequences end with ST (or BEL for OSC)
    if after_esc[0] in "]P_":
        if data.endswith(f"{ESC}\\") or (after_esc[0] == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O <letter>
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    final = payload[-1]
    if not 0x40 <= ord(final) <= 0x7E:
        return "incomplete"

    # SGR mouse reports carry their own final byte rules
    if payload.startswith("<"):
        return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated buffer into complete sequences.

    Returns (sequences, remainder).
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "incomplete":
                seq_end += 1
                continue
            sequences.append(candidate)
            pos += seq_end
            break
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Accumulates raw input and queues complete key sequences.

    Bracketed pastes are delivered as one entry holding the pasted text with
    line breaks removed.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._ready: deque[str] = deque()
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

    def feed(self, data: str) -> None:
        """Add freshly read input."""
        self._buffer += data

        while self._buffer:
            if self._paste_mode:
                end_index = self._buffer.find(BRACKETED_PASTE_END)
                if end_index == -1:
                    self._paste_buffer += self._buffer
                    self._buffer = ""
                    return
                self._paste_buffer += self._buffer[:end_index]
                self._buffer = self._buffer[end_index + len(BRACKETED_PASTE_END) :]
                self._paste_mode = False
                pasted = self._paste_buffer.replace("\r\n", "").replace("\r", "").replace("\n", "")
                self._paste_buffer = ""
                if pasted:
                    self._ready.append(pasted)
                continue

            start_index = self._buffer.find(BRACKETED_PASTE_START)
            if start_index == -1:
                sequences, remainder = _extract_complete_sequences(self._buffer)
                self._ready.extend(sequences)
                self._buffer = remainder
                return

            sequences, _ = _extract_complete_sequences(self._buffer[:start_index])
            self._ready.extend(sequences)
            self._buffer = self._buffer[start_index + len(BRACKETED_PASTE_START) :]
            self._paste_mode = True

    def pop(self) -> str | None:
        """Return the next complete sequence, or ``None`` if none is ready."""
        if self._ready:
            return self._ready.popleft()
        return None

    @property
    def has_pending(self) -> bool:
        """Whether an incomplete sequence is waiting for more data."""
        return bool(self._buffer) or self._paste_mode

    def flush(self) -> None:
        """Treat whatever is buffered as complete (e.g. a lone Esc)."""
        if self._paste_mode:
            return
        if self._buffer:
            self._ready.append(self._buffer)
            self._buffer = ""

    def clear(self) -> None:
        self._buffer = ""
        self._ready.clear()
        self._paste_mode = False
        self._paste_buffer = ""
