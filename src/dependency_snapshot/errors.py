"""Common errors raised while extracting and publishing snapshots."""

from __future__ import annotations


class DependencySnapshotError(RuntimeError):
    """Base class for dependency snapshot failures."""


class AdapterTypeMismatch(DependencySnapshotError):
    """Raised when operation details and result disagree on their kind."""


class InvalidIdentifier(DependencySnapshotError, ValueError):
    """Raised when coordinates cannot be encoded as a package identifier."""


class ConfigurationError(DependencySnapshotError):
    """Raised when required runtime settings are missing or malformed."""


class EventDecodeError(DependencySnapshotError):
    """Raised when a recorded build event cannot be decoded."""


class SubmissionError(DependencySnapshotError):
    """Raised when the dependency submission API rejects a snapshot."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
