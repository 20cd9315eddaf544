"""INI configuration loading.

Recognised keys::

    [AUDIT]
    AUDIT_FILE = AUDIT_TRAIL
    IGNORED_FILES = META-INF/, .class, MANIFEST
    EXCLUDE_FILE = jar.excludes

    [LOGGING]
    LOG_LEVEL = info

Every key is optional, but the file itself must exist.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from jaraudit import ConfigLoadError
from jaraudit.filter import parse_ignore_spec

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE: Final[str] = "config.ini"
DEFAULT_AUDIT_FILE: Final[str] = "AUDIT_TRAIL"

LOG_LEVELS: Final[dict[str, int]] = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Process-wide logging settings, built once at startup.

    Attributes:
        level: Threshold for emitted records.
        colors: Whether level names are coloured on a terminal.
    """

    level: int = logging.INFO
    colors: bool = True


@dataclass(frozen=True, slots=True)
class AuditConfig:
    """Settings consumed by the archive commands.

    Attributes:
        audit_file: Entry used when a command is given no file name.
        ignored_files: Raw ``IGNORED_FILES`` value, patterns joined by ``", "``.
        exclude_file: Optional gitignore-style exclude file.
        logging_config: Logging settings from the ``[LOGGING]`` section.
    """

    audit_file: str = DEFAULT_AUDIT_FILE
    ignored_files: str = ""
    exclude_file: Path | None = None
    logging_config: LoggingConfig = LoggingConfig()

    @property
    def ignore_spec(self) -> list[str]:
        return parse_ignore_spec(self.ignored_files)


def parse_log_level(value: str) -> int:
    """Translate a ``LOG_LEVEL`` value to a :mod:`logging` level.

    Raises:
        ConfigLoadError: If the value is not a known level name.
    """
    try:
        return LOG_LEVELS[value.strip().lower()]
    except KeyError:
        known = ", ".join(LOG_LEVELS)
        raise ConfigLoadError(
            f"Unknown LOG_LEVEL '{value}'. Known levels: {known}"
        ) from None


def _find_section(parser: configparser.ConfigParser, name: str) -> str | None:
    for section in parser.sections():
        if section.lower() == name.lower():
            return section
    return None


def _get(parser: configparser.ConfigParser, section: str, key: str) -> str | None:
    found = _find_section(parser, section)
    if found is None:
        return None
    return parser.get(found, key, fallback=None)


def load_config(path: str | os.PathLike[str] = DEFAULT_CONFIG_FILE) -> AuditConfig:
    """Read the INI file at *path*.

    Args:
        path: Configuration file location.

    Returns:
        AuditConfig: Parsed settings with defaults for missing keys.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
    """
    config_path = Path(path)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with config_path.open(encoding="utf-8") as fh:
            parser.read_file(fh)
    except OSError as exc:
        raise ConfigLoadError(
            f"Unable to load configuration '{path}': {exc.strerror or exc}"
        ) from exc
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"Malformed configuration '{path}': {exc}") from exc

    level_name = _get(parser, "LOGGING", "LOG_LEVEL")
    level = parse_log_level(level_name) if level_name else logging.INFO

    audit_file = _get(parser, "AUDIT", "AUDIT_FILE")
    exclude_file = _get(parser, "AUDIT", "EXCLUDE_FILE")

    config = AuditConfig(
        audit_file=DEFAULT_AUDIT_FILE if audit_file is None else audit_file,
        ignored_files=_get(parser, "AUDIT", "IGNORED_FILES") or "",
        exclude_file=Path(exclude_file) if exclude_file else None,
        logging_config=LoggingConfig(level=level),
    )
    logger.debug("Loaded configuration from %s", config_path)
    return config
