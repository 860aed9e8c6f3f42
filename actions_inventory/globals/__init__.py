from .cancellation import CancellationToken
from .errors import AuditError, InvalidReference, MalformedDocument, RunCancelled, TransportFailure

__all__ = [
    "AuditError",
    "CancellationToken",
    "InvalidReference",
    "MalformedDocument",
    "RunCancelled",
    "TransportFailure",
]
