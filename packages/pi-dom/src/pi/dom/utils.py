"""Terminal text utilities: ANSI handling and visual width measurement.

Every width the compositor reasons about goes through :func:`visible_width`,
which skips escape sequences and measures grapheme clusters with
``wcwidth``.  Raw ``len()`` on a styled line is never a width.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterator

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Escape sequence patterns
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"               # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"   # OSC (hyperlinks, titles)
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"    # APC
)

RESET = "\x1b[0m"

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
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation, ZWJ sequences, skin tones and flags are wide.
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2
    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as 3 spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0
    stripped = stripped.replace("\t", "   ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from *text*."""
    return _STRIP_RE.sub("", text)


def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` or ``None`` when *pos* does not start one.
    """
    if pos >= len(text) or text[pos] != "\x1b":
        return None
    match = _STRIP_RE.match(text, pos)
    if match is None:
        return None
    code = match.group(0)
    return (code, len(code))


def _segments(text: str) -> Iterator[tuple[str, bool]]:
    """Split *text* into escape codes and grapheme clusters.

    Yields ``(segment, is_code)`` pairs in order.
    """
    i = 0
    while i < len(text):
        extracted = extract_ansi_code(text, i)
        if extracted is not None:
            code, length = extracted
            yield code, True
            i += length
            continue
        end = text.find("\x1b", i + 1)
        if end == -1:
            end = len(text)
        for g in grapheme.graphemes(text[i:end]):
            yield g, False
        i = end


def _segment_width(g: str) -> int:
    return 3 if g == "\t" else grapheme_width(g)


# ---------------------------------------------------------------------------
# AnsiCodeTracker
# ---------------------------------------------------------------------------

# SGR parameter -> (attribute, value); value None switches the attribute off
_SGR_ATTRIBUTES: dict[int, tuple[str, str | None]] = {
    1: ("bold", "\x1b[1m"),
    2: ("dim", "\x1b[2m"),
    3: ("italic", "\x1b[3m"),
    4: ("underline", "\x1b[4m"),
    7: ("inverse", "\x1b[7m"),
    9: ("strikethrough", "\x1b[9m"),
    23: ("italic", None),
    24: ("underline", None),
    27: ("inverse", None),
    29: ("strikethrough", None),
    39: ("fg", None),
    49: ("bg", None),
}

_TRACKED = ("bold", "dim", "italic", "underline", "inverse", "strikethrough", "fg", "bg")


class AnsiCodeTracker:
    """Track active SGR state so it can be re-applied after a line break."""

    def __init__(self) -> None:
        self._active: dict[str, str] = {}

    def process(self, code: str) -> None:
        """Update tracked state from an SGR sequence like ``\\x1b[1;31m``."""
        if not code.startswith("\x1b[") or not code.endswith("m"):
            return

        params = code[2:-1].split(";")
        i = 0
        while i < len(params):
            val = int(params[i]) if params[i].isdigit() else 0
            if val == 0:
                self._active.clear()
            elif val == 22:
                self._active.pop("bold", None)
                self._active.pop("dim", None)
            elif val in _SGR_ATTRIBUTES:
                name, value = _SGR_ATTRIBUTES[val]
                if value is None:
                    self._active.pop(name, None)
                else:
                    self._active[name] = value
            elif 30 <= val <= 37 or 90 <= val <= 97:
                self._active["fg"] = f"\x1b[{val}m"
            elif 40 <= val <= 47 or 100 <= val <= 107:
                self._active["bg"] = f"\x1b[{val}m"
            elif val in (38, 48) and i + 1 < len(params):
                # 38;5;N / 38;2;R;G;B and the 48 background forms
                extra = 2 if params[i + 1] == "5" else 4 if params[i + 1] == "2" else 0
                if extra and i + extra < len(params):
                    seq = ";".join(params[i : i + extra + 1])
                    self._active["fg" if val == 38 else "bg"] = f"\x1b[{seq}m"
                i += extra
            i += 1

    def clear(self) -> None:
        self._active.clear()

    def get_active_codes(self) -> str:
        """Return a string of ANSI codes that reactivate the current state."""
        return "".join(self._active[name] for name in _TRACKED if name in self._active)

    def has_active_codes(self) -> bool:
        return bool(self._active)


# ---------------------------------------------------------------------------
# wrap_text_with_ansi
# ---------------------------------------------------------------------------

def wrap_text_with_ansi(text: str, width: int) -> list[str]:
    """Word-wrap *text* to *width* columns, preserving ANSI escape codes.

    Embedded newlines start a new physical line.  Active styling is closed
    with a reset at each line end and re-opened on the next line.
    """
    if width <= 0:
        return text.split("\n")

    tracker = AnsiCodeTracker()
    result: list[str] = []
    for physical_line in text.split("\n"):
        result.extend(_wrap_single_line(physical_line, width, tracker))
    return result


def _wrap_single_line(line: str, width: int, tracker: AnsiCodeTracker) -> list[str]:
    if not line:
        return [""]

    lines: list[str] = []
    current = tracker.get_active_codes()
    current_width = 0
    last_space: tuple[int, int] | None = None  # (index in current, width before)

    def flush(text: str) -> None:
        if tracker.has_active_codes():
            text += RESET
        lines.append(text)

    for ch, is_code in _segments(line):
        if is_code:
            tracker.process(ch)
            current += ch
            continue

        ch_width = _segment_width(ch)
        if current_width + ch_width > width and current_width > 0:
            if last_space is not None and last_space[1] > 0 and ch != " ":
                cut, cut_width = last_space
                head, tail = current[:cut], current[cut + 1 :]
                flush(head)
                current = tracker.get_active_codes() + tail
                current_width -= cut_width + 1
            else:
                flush(current)
                current = tracker.get_active_codes()
                current_width = 0
            last_space = None
            if ch == " ":
                continue

        if ch == " ":
            last_space = (len(current), current_width)
        current += "   " if ch == "\t" else ch
        current_width += ch_width

    flush(current)
    return lines


# ---------------------------------------------------------------------------
# Truncation, slicing and padding
# ---------------------------------------------------------------------------

def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width*, it is truncated and *ellipsis* is
    appended (the ellipsis counts towards the width).  If *pad* is ``True``,
    the result is right-padded with spaces to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    text_width = visible_width(text)
    if text_width <= max_width:
        return pad_to_width(text, max_width) if pad else text

    target_width = max_width - visible_width(ellipsis)
    if target_width <= 0:
        result = _take_columns(ellipsis, max_width)
    else:
        result = apply_line_reset(_take_columns(text, target_width)) + ellipsis

    return pad_to_width(result, max_width) if pad else result


def _take_columns(text: str, max_cols: int) -> str:
    """Return the prefix of *text* that fits in *max_cols* columns, codes kept."""
    result: list[str] = []
    cols = 0
    for segment, is_code in _segments(text):
        if is_code:
            result.append(segment)
            continue
        w = _segment_width(segment)
        if cols + w > max_cols:
            break
        result.append(segment)
        cols += w
    return "".join(result)


def slice_with_width(
    line: str,
    start_col: int,
    length: int,
    strict: bool = False,
) -> tuple[str, int]:
    """Extract *length* visible columns starting at *start_col* from *line*.

    Returns ``(text, width)``.  With *strict*, wide characters straddling a
    boundary are replaced by spaces for the part inside the slice.
    Escape codes seen before the slice are carried into it so styling
    survives the cut.
    """
    if length <= 0:
        return ("", 0)

    end_col = start_col + length
    result: list[str] = []
    col = 0
    width = 0
    for ch, is_code in _segments(line):
        if col >= end_col:
            break
        if is_code:
            result.append(ch)
            continue

        w = _segment_width(ch)
        char_end = col + w
        if char_end <= start_col and w > 0:
            col = char_end
            continue

        if (col < start_col or char_end > end_col) and w > 1:
            overlap = min(char_end, end_col) - max(col, start_col)
            if strict:
                result.append(" " * overlap)
                width += overlap
            else:
                result.append(ch)
                width += w
        elif col >= start_col:
            result.append(ch)
            width += w
        col = char_end

    return ("".join(result), width)


def slice_by_column(line: str, start_col: int, length: int, strict: bool = False) -> str:
    """Like :func:`slice_with_width` but returns only the text."""
    return slice_with_width(line, start_col, length, strict)[0]


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces to *width* visible columns."""
    missing = width - visible_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def apply_line_reset(line: str) -> str:
    """Append ``ESC[0m`` to a line that carries SGR codes but lacks one."""
    if "\x1b[" not in line or line.endswith(RESET):
        return line
    return line + RESET
