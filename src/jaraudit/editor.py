"""External editor invocation for the ``edit`` command."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Final

from jaraudit import EditorError

logger = logging.getLogger(__name__)

FALLBACK_EDITORS: Final[list[str]] = (
    ["notepad.exe"] if os.name == "nt" else ["nano", "pico", "vim", "vi", "emacs"]
)


def resolve_editor(environ: dict[str, str] | None = None) -> list[str]:
    """Return the editor command as an argument list.

    ``$VISUAL`` wins over ``$EDITOR``; without either, the first
    fallback editor found on ``PATH`` is used.

    Raises:
        EditorError: If no editor can be found.
    """
    env = os.environ if environ is None else environ
    for var in ("VISUAL", "EDITOR"):
        value = env.get(var, "").strip()
        if value:
            return shlex.split(value, posix=os.name != "nt")

    for candidate in FALLBACK_EDITORS:
        if shutil.which(candidate):
            return [candidate]
    raise EditorError("No editor found; set $VISUAL or $EDITOR")


def edit_text(text: str, suffix: str = "") -> str:
    """Open *text* in the user's editor and return what was saved.

    Args:
        text: Initial buffer content.
        suffix: Temporary file suffix, so editors pick a syntax mode.

    Returns:
        str: File content after the editor exits.

    Raises:
        EditorError: If the editor cannot be started or fails.
    """
    command = resolve_editor()
    fd, name = tempfile.mkstemp(suffix=suffix, prefix="jaraudit-")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)

        logger.debug("Running editor: %s %s", " ".join(command), path)
        try:
            result = subprocess.run([*command, str(path)], check=False)
        except OSError as exc:
            raise EditorError(f"Unable to run editor '{command[0]}': {exc}") from exc
        if result.returncode != 0:
            raise EditorError(
                f"Editor '{command[0]}' exited with status {result.returncode}"
            )

        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except UnicodeDecodeError as exc:
            raise EditorError(f"Edited text is not UTF-8: {exc}") from exc
    finally:
        path.unlink(missing_ok=True)
