"""Entry exclusion driven by a gitignore-syntax pattern file."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


def load_exclude_spec(path: Path) -> GitIgnoreSpec | None:
    """Compile the exclude patterns stored at *path*.

    An unreadable file disables the exclude layer instead of failing
    the listing.
    """
    try:
        with path.open(encoding="utf-8") as fh:
            spec = GitIgnoreSpec.from_lines(fh.read().splitlines())
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping exclude file %s: %s", path, exc)
        return None
    logger.debug("Loaded %d exclude patterns from %s", len(spec.patterns), path)
    return spec


class ExcludeFileFilter:
    """Exclude archive entries whose full name the spec matches."""

    def __init__(self, spec: GitIgnoreSpec) -> None:
        self._spec = spec

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return self._spec.match_file(name)
