"""Stages of an audit run.

Leaves first: YAML parsing, reference extraction, manifest fetching, the
run-scoped resolution cache, and the workflow and repository auditors that
tie them together.
"""

from .manifest_fetcher import MANIFEST_FILENAMES, ManifestFetcher
from .parser import PyYAMLParser, YAMLParser
from .reference_parser import ReferenceParser
from .repository_auditor import RepositoryAuditor, RepositoryResult
from .resolution_cache import ResolutionCache
from .workflow_auditor import WorkflowAuditor

__all__ = [
    "MANIFEST_FILENAMES",
    "ManifestFetcher",
    "PyYAMLParser",
    "ReferenceParser",
    "RepositoryAuditor",
    "RepositoryResult",
    "ResolutionCache",
    "WorkflowAuditor",
    "YAMLParser",
]
