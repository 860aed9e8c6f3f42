from .documents import Job, ManifestDocument, Step, WorkflowDocument
from .primitives import (
    DOCKER,
    NOT_FOUND,
    REPORT_HEADER,
    Absent,
    ActionManifest,
    FetchResult,
    Found,
    ReferenceAddress,
    ReportRow,
    Repository,
    WorkflowFile,
    is_container_reference,
    is_local_reference,
)

__all__ = [
    "DOCKER",
    "NOT_FOUND",
    "REPORT_HEADER",
    "Absent",
    "ActionManifest",
    "FetchResult",
    "Found",
    "Job",
    "ManifestDocument",
    "ReferenceAddress",
    "ReportRow",
    "Repository",
    "Step",
    "WorkflowDocument",
    "WorkflowFile",
    "is_container_reference",
    "is_local_reference",
]
