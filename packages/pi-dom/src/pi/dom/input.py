"""Single-line text editing for input nodes.

The value is edited as a sequence of code points, so multi-byte characters
are always inserted and removed whole.  Out-of-range cursor positions are
clamped, never rejected.
"""

from __future__ import annotations

from pi.dom.events import Key, KeyEvent

# Keys that move focus or the cursor elsewhere and never edit the value.
_NAVIGATION_KEYS = frozenset(
    {Key.enter, Key.tab, Key.escape, Key.up, Key.down, Key.left, Key.right}
)


def delete_back_word(value: str, pos: int) -> tuple[str, int]:
    """Delete the word before *pos*, shell ``ctrl+w`` style.

    Spaces directly before the cursor are skipped, then the word before
    them is removed.  The skipped spaces stay, so a value of only spaces
    is left as is with the cursor at 0.  Returns ``(new_value, new_pos)``.
    """
    pos = max(0, min(pos, len(value)))
    if pos == 0:
        return value, 0

    p = pos
    while p > 0 and value[p - 1] == " ":
        p -= 1
    start = p
    while start > 0 and value[start - 1] != " ":
        start -= 1

    return value[:start] + value[p:], start


def update_input_value(value: str, pos: int, key: KeyEvent) -> tuple[str, int]:
    """Apply *key* to an input's ``value`` with the cursor at ``pos``.

    Returns ``(new_value, new_pos)``; keys that do not edit return the
    inputs unchanged.
    """
    n = len(value)
    pos = max(0, pos)
    kind = key.type

    if kind == Key.backspace:
        if pos == 0 or n == 0:
            return value, pos
        p = min(pos, n)
        return value[: p - 1] + value[p:], p - 1

    if kind == Key.delete:
        if n == 0:
            return value, pos
        if pos < n:
            return value[:pos] + value[pos + 1 :], pos
        return value[:-1], pos

    if kind == Key.ctrl("w"):
        return delete_back_word(value, pos)
    if kind == Key.ctrl("a"):
        return value, 0
    if kind == Key.ctrl("e"):
        return value, n
    if kind == Key.ctrl("k"):
        p = min(pos, n)
        return value[:p], p

    if kind in _NAVIGATION_KEYS:
        return value, pos

    if key.runes and not key.alt:
        text = key.runes
        if key.paste:
            text = text.replace("\r\n", "").replace("\r", "").replace("\n", "")
        p = min(pos, n)
        return value[:p] + text + value[p:], p + len(text)

    # ctrl+c and other chords
    return value, pos
