"""
Installer errors — one exception type per terminal failure kind.

Every pipeline stage raises a subclass of ``InstallerError``.  The
orchestrator stamps the failing stage onto the exception; the use case
turns it into an ``InstallResult`` and the CLI prints it.  Nothing is
retried: every one of these aborts the run.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for terminal installer failures."""

    kind: str = "installer_error"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        return self.message


class UnsupportedPlatform(InstallerError):
    """Unrecognized OS, architecture, or OS + architecture pairing."""

    kind = "unsupported_platform"


class ToolingMissing(InstallerError):
    """No usable HTTP client or archive codec on this host."""

    kind = "tooling_missing"


class NetworkError(InstallerError):
    """Release index unreachable, or its response had no parsable tag."""

    kind = "network_error"


class DownloadError(InstallerError):
    """Archive download failed or returned an empty body."""

    kind = "download_error"


class ExtractionError(InstallerError):
    """Archive is corrupt or could not be unpacked."""

    kind = "extraction_error"


class ArtifactNotFound(InstallerError):
    """The expected executable is not in the extracted archive."""

    kind = "artifact_not_found"


class InstallPermissionError(InstallerError):
    """Install directory not writable, even with elevated privileges."""

    kind = "permission_error"
