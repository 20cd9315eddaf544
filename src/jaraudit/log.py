"""Logging initialisation for the CLI process."""

from __future__ import annotations

import logging
import sys
from typing import Final, TextIO

from colorama import Fore, Style, just_fix_windows_console

from jaraudit.config import LoggingConfig

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

LEVEL_COLORS: Final[dict[int, str]] = {
    logging.DEBUG: Fore.BLUE,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class LevelColorFormatter(logging.Formatter):
    """Formatter that colours the level name of each record."""

    def __init__(self, colors: bool) -> None:
        super().__init__(LOG_FORMAT)
        self._colors = colors

    def format(self, record: logging.LogRecord) -> str:
        if not self._colors:
            return super().format(record)
        # Copy so other handlers still see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname:<5}{Style.RESET_ALL}"
        return super().format(colored)


def setup_logging(
    config: LoggingConfig,
    verbose: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a stderr handler to the ``jaraudit`` logger.

    Call once at process start, after configuration is loaded.

    Args:
        config: Level and colour settings from the configuration file.
        verbose: Force ``DEBUG`` regardless of the configured level.
        stream: Output stream, stderr by default.

    Returns:
        logging.Handler: The installed handler.
    """
    out = stream or sys.stderr
    colors = config.colors and out.isatty()
    if colors:
        just_fix_windows_console()

    handler = logging.StreamHandler(out)
    handler.setFormatter(LevelColorFormatter(colors))

    package_logger = logging.getLogger("jaraudit")
    package_logger.setLevel(logging.DEBUG if verbose else config.level)
    package_logger.addHandler(handler)
    return handler
