"""Keyboard input parsing and matching for raw-mode terminals.

Turns the byte sequences a terminal sends in raw mode (arrow keys, xterm
modifier sequences, control characters, plain text) into key identifiers
such as ``"up"``, ``"ctrl+c"`` or ``"shift+d"``, and checks raw input
against those identifiers.
"""

from __future__ import annotations

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Modifier order used in every key id this module produces
_MODIFIER_ORDER = ("ctrl", "shift", "alt")

# Unmodified sequences -> key names (CSI and SS3 variants)
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

# xterm encodes modifiers as CSI 1;<1+bits><letter> or CSI <n>;<1+bits>~
_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_KEYS: dict[int, str] = {
    2: "insert",
    3: "delete",
    5: "pageUp",
    6: "pageDown",
}


def _modifier_prefix(bits: int) -> str:
    return "".join(f"{name}+" for name in _MODIFIER_ORDER if bits & MODIFIERS[name])


def _build_modified_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for bits in range(1, 8):
        param = bits + 1
        prefix = _modifier_prefix(bits)
        for letter, name in _LETTER_KEYS.items():
            table[f"\x1b[1;{param}{letter}"] = prefix + name
        for number, name in _TILDE_KEYS.items():
            table[f"\x1b[{number};{param}~"] = prefix + name
    return table


MODIFIED_KEY_SEQUENCES: dict[str, str] = _build_modified_sequences()


# ---------------------------------------------------------------------------
# Printable input
# ---------------------------------------------------------------------------


def is_printable_input(data: str) -> bool:
    """Return ``True`` if *data* is text to insert rather than a control key."""
    if not data:
        return False
    return not any(
        ord(ch) < 32 or ord(ch) == 0x7F or (0x80 <= ord(ch) <= 0x9F) for ch in data
    )


# ---------------------------------------------------------------------------
# parse_key: determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    The returned string uses the same format ``matches_key`` expects, e.g.
    ``"a"``, ``"shift+a"``, ``"ctrl+c"``, ``"ctrl+left"``.
    """
    if not data:
        return None

    name = LEGACY_KEY_SEQUENCES.get(data) or MODIFIED_KEY_SEQUENCES.get(data)
    if name is not None:
        return name

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key arrives as ESC followed by the key
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is not None and inner != "escape":
            return _canonical(inner, extra_modifiers=MODIFIERS["alt"])
        if data[1] == "\x1b":
            return "alt+escape"

    if len(data) == 1 and data.isprintable():
        return _canonical(data)

    return None


# ---------------------------------------------------------------------------
# matches_key
# ---------------------------------------------------------------------------


def parse_key_id(key_id: str) -> tuple[int, str] | None:
    """Split a key identifier like ``"ctrl+shift+a"`` into (modifier bits, key).

    Returns ``None`` for an empty identifier.
    """
    if not key_id:
        return None
    if key_id == "+":
        return 0, "+"

    bits = 0
    key_parts: list[str] = []
    for part in key_id.split("+"):
        lower = part.lower()
        if lower in MODIFIERS and key_parts == []:
            bits |= MODIFIERS[lower]
        else:
            key_parts.append(part)

    key = "+".join(key_parts)
    if not key:
        return None
    return bits, key


def _canonical(key_id: str, extra_modifiers: int = 0) -> str:
    parsed = parse_key_id(key_id)
    if parsed is None:
        return key_id
    bits, key = parsed
    bits |= extra_modifiers
    # An upper-case letter is the shifted lower-case one
    if len(key) == 1 and key.isalpha() and key.isupper():
        bits |= MODIFIERS["shift"]
        key = key.lower()
    elif len(key) == 1 and key.isalpha():
        key = key.lower()
    return _modifier_prefix(bits) + key


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) is the key named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == _canonical(key_id)
