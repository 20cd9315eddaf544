"""jaraudit — inspect the audit trail and other entries inside a JAR file."""

__version__ = "0.1.0"


class JarAuditError(Exception):
    """User-facing CLI error.

    Raised for missing archives, unreadable entries, bad configuration
    and other input errors. The message is printed to stderr
    and the process exits with code 1.
    """


class ArchiveNotFoundError(JarAuditError):
    """The archive path does not exist."""


class ArchiveCorruptError(JarAuditError):
    """The archive exists but is not a readable ZIP container."""


class EntryNotFoundError(JarAuditError):
    """No file entry with the requested name exists in the archive."""


class EntryNotTextError(JarAuditError):
    """The entry bytes are not valid UTF-8."""


class ConfigLoadError(JarAuditError):
    """The configuration file is missing or malformed."""


class MutationNotSupportedError(JarAuditError):
    """Writing changes back into an archive is not available."""


class EditorError(JarAuditError):
    """The external editor could not be run."""
