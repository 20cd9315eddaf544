"""CSV output formatter for archive listings.

Columns are described by ``CsvColumn`` instances, so a different column
set can be passed to ``format_csv`` without touching the writer.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable

from jaraudit.archive import Entry
from jaraudit.filter import base_name, file_extension


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes an entry and returns a string value.
    """

    name: str
    extract: Callable[[Entry], str]


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="name", extract=lambda entry: entry.name),
    CsvColumn(name="base_name", extract=lambda entry: base_name(entry.name)),
    CsvColumn(name="extension", extract=lambda entry: file_extension(entry.name)),
    CsvColumn(name="size", extract=lambda entry: str(entry.size)),
    CsvColumn(name="compressed_size", extract=lambda entry: str(entry.compressed_size)),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
    """

    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))


def format_csv(
    entries: Sequence[Entry],
    options: CsvOptions | None = None,
) -> str:
    """Render entries as CSV text.

    Output always starts with a header row, followed by one row per
    entry in the given order.

    Args:
        entries: Archive entries to render.
        options: Rendering options.  Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow([col.name for col in opts.columns])
    for entry in entries:
        writer.writerow([col.extract(entry) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
