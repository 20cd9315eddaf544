"""Entry filtering: ignore-pattern classification over archive paths.

Each pattern is interpreted by its shape:

* ``META-INF/`` (ends with ``/``): suppress any entry whose full name
  contains it.
* ``.class`` (starts with ``.``): suppress files with that extension
  (ASCII case-insensitive).
* ``MANIFEST`` (anything else): suppress files whose base name starts
  with it (case-sensitive).

Directory entries are always suppressed, whatever the patterns.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from jaraudit.archive import Entry, EntryFilter

IGNORE_SEPARATOR: Final[str] = ", "


def parse_ignore_spec(value: str | None) -> list[str]:
    """Split a configured ``IGNORED_FILES`` value into patterns.

    An empty or missing value yields ``[""]``; the empty pattern
    matches nothing.

    Args:
        value: Raw configuration value.

    Returns:
        list[str]: Patterns in configured order.
    """
    return (value or "").split(IGNORE_SEPARATOR)


def base_name(name: str) -> str:
    """Return the final ``/``-separated segment of *name*."""
    return name.rsplit("/", 1)[-1]


def file_extension(name: str) -> str:
    """Return the extension of *name* including the leading dot.

    The extension runs from the last ``.`` of the base name to the end
    and is only recognised when every character after the dot is an
    ASCII letter or digit. Otherwise the result is ``""``.

    >>> file_extension("lib/archive.tar.gz")
    '.gz'
    >>> file_extension("bin/run-me.sh~")
    ''
    """
    stem = base_name(name)
    dot = stem.rfind(".")
    if dot == -1:
        return ""
    suffix = stem[dot:]
    if all(ch.isascii() and ch.isalnum() for ch in suffix[1:]):
        return suffix
    return ""


def _matches(name: str, pattern: str) -> bool:
    if not pattern:
        return False
    if pattern.endswith("/") and pattern in name:
        return True
    if pattern.startswith("."):
        extension = file_extension(name)
        return (
            bool(extension)
            and pattern.isascii()
            and extension.lower() == pattern.lower()
        )
    return base_name(name).startswith(pattern)


def should_suppress(entry: Entry, patterns: Sequence[str]) -> bool:
    """Return whether *entry* is hidden from a listing.

    Patterns are tried in order and the first match wins.

    Args:
        entry: Archive entry to classify.
        patterns: Ignore patterns, see :func:`parse_ignore_spec`.

    Returns:
        bool: ``True`` for every directory, and for files matched by
        any pattern.
    """
    if entry.is_dir:
        return True
    return any(_matches(entry.name, pattern) for pattern in patterns)


class IgnoreFilter:
    """Filter entries by configured ignore patterns.

    Implements the ``IGNORED_FILES`` exclusion behavior.
    """

    def __init__(self, patterns: Sequence[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns) if patterns else []

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return should_suppress(Entry(name=name, is_dir=is_dir), self._patterns)


class CompositeFilter:
    """Exclude an entry when any member filter excludes it."""

    def __init__(self, *filters: EntryFilter) -> None:
        self._filters = filters

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return any(f.should_exclude(name, is_dir) for f in self._filters)
