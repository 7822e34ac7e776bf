"""Error hierarchy shared by the versiondocs pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class VersionDocsError(RuntimeError):
    """Base class for every failure reported by versiondocs."""


class ConfigError(VersionDocsError):
    """Raised when required configuration is missing or invalid."""


class ValidationError(VersionDocsError):
    """Raised when an argument fails validation before any work is done."""


class CommandError(VersionDocsError):
    """Raised when an external command (git, docker) exits with an error."""

    def __init__(self, command: Sequence[str], returncode: int, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        message = f"command `{' '.join(self.command)}` failed with exit code {returncode}"
        if output.strip():
            message += f": {output.strip()}"
        super().__init__(message)


class DownloadError(VersionDocsError):
    """Raised when a remote resource cannot be fetched."""

    def __init__(
        self,
        url: str,
        reason: str,
        *,
        status: int | None = None,
        body: str = "",
    ) -> None:
        self.url = url
        self.status = status
        self.body = body
        message = f"failed to download {url!r}: {reason}"
        if status is not None:
            message = f"failed to download {url!r}, status {status}: {reason}"
        if body.strip():
            message += f" (body: {body.strip()})"
        super().__init__(message)


class MissingFileError(VersionDocsError):
    """Raised when an expected file (manifest, requirements, Dockerfile) is absent."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ManifestError(VersionDocsError):
    """Raised when the MkDocs manifest cannot be read or written."""


class RequirementsError(VersionDocsError):
    """Raised when a requirements file contains an invalid line."""


class VersionError(VersionDocsError):
    """Raised when a branch name or release tag is not a valid version."""


class MenuError(VersionDocsError):
    """Raised when the version menu cannot be rendered."""


class VersionBuildError(VersionDocsError):
    """Wraps any failure that happened while building one documentation version."""

    def __init__(self, version: str, path: Path | str, cause: BaseException) -> None:
        self.version = version
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"failed to build version {version} ({self.path}): {cause}")


__all__ = [
    "CommandError",
    "ConfigError",
    "DownloadError",
    "ManifestError",
    "MenuError",
    "MissingFileError",
    "RequirementsError",
    "ValidationError",
    "VersionBuildError",
    "VersionDocsError",
    "VersionError",
]
