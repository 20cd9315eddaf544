"""The four archive operations behind the CLI subcommands."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Final

from jaraudit.archive import Entry, EntryFilter, filter_entries, open_archive
from jaraudit.config import AuditConfig
from jaraudit.editor import edit_text
from jaraudit.excludes import ExcludeFileFilter, load_exclude_spec
from jaraudit.filter import CompositeFilter, IgnoreFilter, file_extension

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE: Final[str] = "No Changes were made. Exiting..."

Editor = Callable[[str, str], str]


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of an ``edit`` invocation.

    Attributes:
        changed: Whether the editor returned different text.
        message: Line to show the user.
    """

    changed: bool
    message: str


def show(
    archive_path: str | os.PathLike[str],
    entry_name: str | None,
    config: AuditConfig,
) -> str:
    """Return the text of *entry_name*, or of the configured audit file."""
    logger.debug("Retrieving archive file name")
    name = config.audit_file if entry_name is None else entry_name

    logger.debug("Retrieving file contents of %s", name)
    with open_archive(archive_path) as archive:
        return archive.read_entry(name)


def build_filter(
    config: AuditConfig,
    exclude_from: Path | None = None,
) -> EntryFilter:
    """Combine ``IGNORED_FILES`` with an optional exclude file.

    Args:
        config: Loaded configuration.
        exclude_from: Exclude file given on the command line; takes
            precedence over ``AUDIT.EXCLUDE_FILE``.

    Returns:
        EntryFilter: Filter for :func:`jaraudit.archive.filter_entries`.
    """
    ignore_filter = IgnoreFilter(config.ignore_spec)
    exclude_path = exclude_from or config.exclude_file
    if exclude_path is None:
        return ignore_filter

    spec = load_exclude_spec(exclude_path)
    if spec is None:
        return ignore_filter
    return CompositeFilter(ignore_filter, ExcludeFileFilter(spec))


def list_entries(
    archive_path: str | os.PathLike[str],
    config: AuditConfig,
    exclude_from: Path | None = None,
) -> list[Entry]:
    """Return the entries that survive the configured filters, in archive order."""
    logger.debug("Listing files in archive")
    entry_filter = build_filter(config, exclude_from)
    with open_archive(archive_path) as archive:
        entries = filter_entries(archive, entry_filter)
        logger.debug("archive file count: %d of %d", len(entries), len(archive))
    return entries


def edit(
    archive_path: str | os.PathLike[str],
    entry_name: str | None,
    config: AuditConfig,
    editor: Editor = edit_text,
) -> EditResult:
    """Open an entry in *editor* and write back any change.

    Args:
        archive_path: JAR file to edit.
        entry_name: Entry to edit; defaults to the configured audit file.
        config: Loaded configuration.
        editor: Callable taking ``(text, suffix)`` and returning the edited text.

    Returns:
        EditResult: ``changed=False`` when the text came back identical.

    Raises:
        MutationNotSupportedError: When the text changed; archives
            cannot be rewritten yet.
    """
    name = config.audit_file if entry_name is None else entry_name
    logger.debug("Editing %s", name)

    with open_archive(archive_path) as archive:
        original = archive.read_entry(name)
        edited = editor(original, file_extension(name))

        if edited == original:
            return EditResult(changed=False, message=NO_CHANGES_MESSAGE)

        logger.info("Updating %s", archive.path)
        archive.write_entry(name, edited)
    return EditResult(changed=True, message=f"Updated {name}")


def delete(archive_path: str | os.PathLike[str], entry_name: str) -> str:
    """Remove *entry_name* from the archive.

    Raises:
        MutationNotSupportedError: Always, until archives can be rewritten.
    """
    logger.info("Deleting %s", entry_name)
    with open_archive(archive_path) as archive:
        archive.delete_entry(entry_name)
    return f"Deleted {entry_name}"
