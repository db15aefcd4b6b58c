"""Terminal text utilities: grapheme segmentation and display-width measurement.

Widths are measured per grapheme cluster so that combining marks, emoji
sequences and East-Asian wide characters occupy the same number of columns
the terminal will actually use for them.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Grapheme segmentation
# ---------------------------------------------------------------------------


def split_graphemes(text: str) -> list[str]:
    """Split *text* into user-perceived characters (grapheme clusters)."""
    if not text:
        return []
    return list(grapheme.graphemes(text))


def grapheme_count(text: str) -> int:
    """Return the number of grapheme clusters in *text*."""
    if not text:
        return 0
    return grapheme.length(text)


# ---------------------------------------------------------------------------
# ANSI escape sequences
# ---------------------------------------------------------------------------

# CSI sequences (SGR colours, cursor movement, erase, cursor shape)
_CSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
# OSC sequences terminated by BEL or ST
_OSC_RE = re.compile(r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

_STRIP_RE = re.compile(_CSI_RE.pattern + "|" + _OSC_RE.pattern)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Control characters, combining marks and format characters -> 0
    2. Emoji (VS16, ZWJ sequences, skin tones, flags) -> 2
    3. Otherwise wcwidth of the base code point (2 for wide CJK).
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # regional indicators
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2

    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    ANSI escape sequences are ignored; printable ASCII takes a fast path and
    other strings are measured cluster by cluster (results are cached).
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int, ellipsis: str = "…") -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    ANSI codes are kept, the cut happens on a grapheme boundary and
    *ellipsis* (which counts towards the width) marks the truncation.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return _take_columns(ellipsis, max_width)
    return _take_columns(text, target) + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* fitting within *max_cols* columns."""
    result: list[str] = []
    cols = 0
    pos = 0

    while pos < len(text):
        match = _STRIP_RE.match(text, pos)
        if match is not None:
            result.append(match.group(0))
            pos = match.end()
            continue

        # Find the next escape (or end of string) and walk clusters up to it
        next_esc = text.find("\x1b", pos + 1)
        end = len(text) if next_esc == -1 else next_esc
        for g in grapheme.graphemes(text[pos:end]):
            w = grapheme_width(g)
            if cols + w > max_cols:
                return "".join(result)
            result.append(g)
            cols += w
        pos = end

    return "".join(result)
