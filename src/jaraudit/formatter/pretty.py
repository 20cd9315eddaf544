"""Structured multi-line listing output (the default ``list`` format)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from jaraudit.archive import Entry

INDENT: Final[str] = "    "

_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def quote(name: str) -> str:
    """Return *name* as a double-quoted string with backslash escapes."""
    chars: list[str] = []
    for ch in name:
        if ch in _ESCAPES:
            chars.append(_ESCAPES[ch])
        elif not ch.isprintable():
            chars.append(f"\\u{{{ord(ch):x}}}")
        else:
            chars.append(ch)
    return '"' + "".join(chars) + '"'


def format_pretty(entries: Sequence[Entry]) -> str:
    """Render entry names as a bracketed list, one quoted name per line.

    Rules:
      1. Names appear in the given order; duplicates are kept.
      2. Every name line is indented by four spaces and ends with ``,``.
      3. An empty listing renders as ``[]``.

    Args:
        entries: Surviving archive entries.

    Returns:
        str: Rendered listing without a trailing newline.
    """
    if not entries:
        return "[]"
    lines = ["["]
    lines.extend(f"{INDENT}{quote(entry.name)}," for entry in entries)
    lines.append("]")
    return "\n".join(lines)
