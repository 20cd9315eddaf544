"""Read-only access to JAR/ZIP archives in central-directory order."""

from __future__ import annotations

import logging
import os
import zipfile
import zlib
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from jaraudit import (
    ArchiveCorruptError,
    ArchiveNotFoundError,
    EntryNotFoundError,
    EntryNotTextError,
    MutationNotSupportedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single entry listed in the archive's central directory.

    Attributes:
        name: Archive-internal path, ``/`` separated.
        is_dir: Whether the entry is a directory marker.
        size: Uncompressed size in bytes.
        compressed_size: Stored size in bytes.
    """

    name: str
    is_dir: bool
    size: int = 0
    compressed_size: int = 0


class EntryFilter(Protocol):
    """Protocol for entry filtering.

    Keeps archive traversal decoupled from matching strategy.
    """

    def should_exclude(self, name: str, is_dir: bool) -> bool: ...


class _NullFilter:
    """Default pass-through filter that excludes nothing."""

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return False


class Archive:
    """An open archive handle.

    The underlying file stays open until :meth:`close` is called or the
    ``with`` block exits. Entry names and their order do not change for
    the lifetime of the handle.
    """

    def __init__(self, path: Path, zip_file: zipfile.ZipFile) -> None:
        self._path = path
        self._zip = zip_file

    @property
    def path(self) -> Path:
        return self._path

    def __enter__(self) -> Archive:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._zip.infolist())

    def close(self) -> None:
        self._zip.close()

    def entries(self) -> Iterator[Entry]:
        """Yield entries in central-directory order.

        Each call returns a new generator, so the sequence can be
        walked any number of times. Duplicate names are yielded as
        many times as they are recorded.
        """
        for info in self._zip.infolist():
            yield Entry(
                name=info.filename,
                is_dir=info.is_dir(),
                size=info.file_size,
                compressed_size=info.compress_size,
            )

    def read_entry(self, name: str) -> str:
        """Return the text content of the file entry *name*.

        Args:
            name: Exact archive-internal entry name.

        Returns:
            str: Entry bytes decoded as UTF-8, unmodified otherwise.

        Raises:
            EntryNotFoundError: If no file entry has that name.
            EntryNotTextError: If the bytes are not valid UTF-8.
            ArchiveCorruptError: If the entry data cannot be inflated.
        """
        try:
            info = self._zip.getinfo(name)
        except KeyError:
            raise EntryNotFoundError(
                f"'{name}' not found in archive '{self._path}'"
            ) from None
        if info.is_dir():
            raise EntryNotFoundError(
                f"'{name}' is a directory in archive '{self._path}'"
            )

        try:
            data = self._zip.read(info)
        except (
            zipfile.BadZipFile,
            EOFError,
            zlib.error,
            RuntimeError,
            NotImplementedError,
        ) as exc:
            # RuntimeError: encrypted entry; NotImplementedError: unknown method
            raise ArchiveCorruptError(
                f"cannot read '{name}' from archive '{self._path}': {exc}"
            ) from exc

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EntryNotTextError(
                f"'{name}' in archive '{self._path}' is not UTF-8 text"
            ) from exc

    def write_entry(self, name: str, content: str) -> None:
        """Replace the content of *name*. Not available yet."""
        raise MutationNotSupportedError(
            f"cannot update '{name}': writing to '{self._path}' is not supported"
        )

    def delete_entry(self, name: str) -> None:
        """Remove *name* from the archive. Not available yet."""
        raise MutationNotSupportedError(
            f"cannot delete '{name}': writing to '{self._path}' is not supported"
        )


def open_archive(path: str | os.PathLike[str]) -> Archive:
    """Open *path* as a ZIP container.

    Args:
        path: Filesystem path of the JAR/ZIP file.

    Returns:
        Archive: Open handle; use it as a context manager.

    Raises:
        ArchiveNotFoundError: If *path* does not exist.
        ArchiveCorruptError: If *path* is not a readable ZIP container.
    """
    archive_path = Path(path)
    if not archive_path.exists():
        raise ArchiveNotFoundError(f"Unable to open JAR file: '{path}'")

    try:
        zip_file = zipfile.ZipFile(archive_path)
    except (zipfile.BadZipFile, UnicodeDecodeError, ValueError) as exc:
        raise ArchiveCorruptError(f"'{path}' is not a valid archive: {exc}") from exc
    except OSError as exc:
        raise ArchiveCorruptError(f"cannot read archive '{path}': {exc}") from exc

    logger.debug("Opened %s (%d entries)", archive_path, len(zip_file.infolist()))
    return Archive(archive_path, zip_file)


def filter_entries(
    archive: Archive,
    entry_filter: EntryFilter | None = None,
) -> list[Entry]:
    """Enumerate *archive* and drop entries the filter excludes.

    Args:
        archive: Open archive.
        entry_filter: Optional exclude filter implementation.

    Returns:
        list[Entry]: Surviving entries in central-directory order.
    """
    active_filter = entry_filter or _NullFilter()
    return [
        entry
        for entry in archive.entries()
        if not active_filter.should_exclude(entry.name, entry.is_dir)
    ]
