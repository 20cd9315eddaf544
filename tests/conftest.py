"""Shared fixtures for jaraudit tests."""

from __future__ import annotations

import os
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

# ``None`` content marks a directory entry.
JarSpec = Sequence[tuple[str, bytes | str | None]]


def write_jar(path: Path, entries: JarSpec) -> Path:
    """Write *entries* to a ZIP file in the given order.

    Args:
        path: Destination file.
        entries: ``(name, content)`` pairs; ``None`` content writes a
            directory marker.

    Returns:
        Path: *path*, for chaining.
    """
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            if content is None:
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return path


@pytest.fixture
def make_jar(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a JAR under ``tmp_path``."""

    def _make(entries: JarSpec, name: str = "app.jar") -> Path:
        return write_jar(tmp_path / name, entries)

    return _make


@pytest.fixture
def sample_jar(make_jar: Callable[..., Path]) -> Path:
    """Small archive mixing directories, classes and dotfiles.

    Central directory order::

        a.txt
        b/
        b/c.class
        .gitignore
    """
    return make_jar(
        [
            ("a.txt", "alpha\n"),
            ("b/", None),
            ("b/c.class", b"\xca\xfe\xba\xbe"),
            (".gitignore", "*.log\n"),
        ]
    )


AUDIT_TRAIL_TEXT = "2024-01-02 alice deployed 1.4.0\n2024-01-03 bob rolled back\n"


@pytest.fixture
def audit_jar(make_jar: Callable[..., Path]) -> Path:
    """Realistic application JAR carrying an audit trail.

    Central directory order::

        META-INF/
        META-INF/MANIFEST.MF
        AUDIT_TRAIL
        com/
        com/acme/
        com/acme/App.class
        com/acme/Util$1.class
        config/app.properties
        README.TXT
        lib/archive.tar.gz
        binary.dat
    """
    return make_jar(
        [
            ("META-INF/", None),
            (
                "META-INF/MANIFEST.MF",
                "Manifest-Version: 1.0\r\nMain-Class: com.acme.App\r\n",
            ),
            ("AUDIT_TRAIL", AUDIT_TRAIL_TEXT),
            ("com/", None),
            ("com/acme/", None),
            ("com/acme/App.class", b"\xca\xfe\xba\xbe\x00\x00\x00\x34"),
            ("com/acme/Util$1.class", b"\xca\xfe\xba\xbe\x00\x00\x00\x34"),
            ("config/app.properties", "name=demo\n"),
            ("README.TXT", "readme\n"),
            ("lib/archive.tar.gz", b"\x1f\x8b\x08\x00"),
            ("binary.dat", b"\xff\xfe\x00\x80bad"),
        ]
    )


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing an INI configuration file under ``tmp_path``."""

    def _make(content: str, name: str = "config.ini") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def audit_config(make_config: Callable[[str], Path]) -> Path:
    """Configuration hiding metadata, classes and text files."""
    return make_config(
        "[AUDIT]\n"
        "AUDIT_FILE = AUDIT_TRAIL\n"
        "IGNORED_FILES = META-INF/, .class, .txt\n"
        "\n"
        "[LOGGING]\n"
        "LOG_LEVEL = warn\n"
    )


GOLDEN_DIR = Path(__file__).parent / "golden"


def _golden_path(name: str) -> Path:
    return GOLDEN_DIR / f"{name}.txt"


def assert_golden(output: str, name: str) -> None:
    """Compare output against a golden file.

    Set ``UPDATE_GOLDEN=true`` in the environment to regenerate golden files.
    """
    golden_file = _golden_path(name)
    update = os.environ.get("UPDATE_GOLDEN", "").lower() in ("1", "true")

    if update or not golden_file.exists():
        golden_file.parent.mkdir(parents=True, exist_ok=True)
        golden_file.write_text(output, encoding="utf-8", newline="")
        if not update:
            pytest.fail(
                f"Golden file '{golden_file.name}' did not exist — created. "
                f"Re-run the test to verify."
            )
        return

    expected = golden_file.read_text(encoding="utf-8")
    assert output == expected, (
        f"Output differs from golden file '{golden_file.name}'.\n"
        f"Run with UPDATE_GOLDEN=true to regenerate."
    )
