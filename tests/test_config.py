"""Tests for jaraudit.config."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from jaraudit import ConfigLoadError
from jaraudit.config import (
    DEFAULT_AUDIT_FILE,
    AuditConfig,
    LoggingConfig,
    load_config,
    parse_log_level,
)


class TestLoadConfig:
    def test_full_file(self, audit_config: Path) -> None:
        config = load_config(audit_config)
        assert config.audit_file == "AUDIT_TRAIL"
        assert config.ignored_files == "META-INF/, .class, .txt"
        assert config.ignore_spec == ["META-INF/", ".class", ".txt"]
        assert config.exclude_file is None
        assert config.logging_config.level == logging.WARNING

    def test_defaults_for_missing_keys(
        self, make_config: Callable[[str], Path]
    ) -> None:
        config = load_config(make_config("[AUDIT]\n"))
        assert config.audit_file == DEFAULT_AUDIT_FILE
        assert config.ignored_files == ""
        assert config.ignore_spec == [""]
        assert config.logging_config == LoggingConfig()

    def test_empty_file(self, make_config: Callable[[str], Path]) -> None:
        assert load_config(make_config("")) == AuditConfig()

    def test_section_and_key_case_insensitive(
        self, make_config: Callable[[str], Path]
    ) -> None:
        path = make_config(
            "[audit]\naudit_file = CHANGES\n[Logging]\nlog_level = DEBUG\n"
        )
        config = load_config(path)
        assert config.audit_file == "CHANGES"
        assert config.logging_config.level == logging.DEBUG

    def test_exclude_file(self, make_config: Callable[[str], Path]) -> None:
        config = load_config(make_config("[AUDIT]\nEXCLUDE_FILE = jar.excludes\n"))
        assert config.exclude_file == Path("jar.excludes")

    def test_empty_audit_file_kept(self, make_config: Callable[[str], Path]) -> None:
        config = load_config(make_config("[AUDIT]\nAUDIT_FILE =\n"))
        assert config.audit_file == ""

    def test_percent_signs_kept(self, make_config: Callable[[str], Path]) -> None:
        config = load_config(make_config("[AUDIT]\nAUDIT_FILE = 100%_AUDIT\n"))
        assert config.audit_file == "100%_AUDIT"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="Unable to load configuration"):
            load_config(tmp_path / "nope.ini")

    @pytest.mark.parametrize(
        "content",
        [
            "AUDIT_FILE = no section header\n",
            "[AUDIT]\nAUDIT_FILE = a\nAUDIT_FILE = b\n",
            "[AUDIT]\n[AUDIT]\n",
        ],
    )
    def test_malformed(
        self, make_config: Callable[[str], Path], content: str
    ) -> None:
        with pytest.raises(ConfigLoadError, match="Malformed configuration"):
            load_config(make_config(content))

    def test_unknown_log_level(self, make_config: Callable[[str], Path]) -> None:
        with pytest.raises(ConfigLoadError, match="Unknown LOG_LEVEL 'loud'"):
            load_config(make_config("[LOGGING]\nLOG_LEVEL = loud\n"))

    def test_config_is_frozen(self, audit_config: Path) -> None:
        config = load_config(audit_config)
        with pytest.raises(AttributeError):
            config.audit_file = "OTHER"  # type: ignore[misc]


class TestParseLogLevel:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("info", logging.INFO),
            ("INFO", logging.INFO),
            (" debug ", logging.DEBUG),
            ("trace", logging.DEBUG),
            ("Warn", logging.WARNING),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_known_levels(self, value: str, expected: int) -> None:
        assert parse_log_level(value) == expected

    def test_off_silences_everything(self) -> None:
        assert parse_log_level("off") > logging.CRITICAL
