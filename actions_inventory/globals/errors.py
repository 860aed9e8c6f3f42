"""Error taxonomy for an audit run.

Expected "not found" outcomes never surface as exceptions: a missing workflow
directory becomes an empty listing and a missing manifest becomes the
``NOT_FOUND`` sentinel. Everything defined here aborts the run.
"""

from typing import Optional


class AuditError(Exception):
    """Base class for all errors that terminate an audit run."""


class MalformedDocument(AuditError):
    """A workflow, manifest or API payload could not be parsed or has the wrong shape."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class InvalidReference(AuditError):
    """An action reference does not name at least an owner and a repository."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Invalid action reference: {reference!r}")


class TransportFailure(AuditError):
    """Any GitHub API failure other than 404: network, auth, rate limit, 5xx."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RunCancelled(AuditError):
    """The run was cancelled or its deadline passed before the work finished."""
