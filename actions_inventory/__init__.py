"""actions-inventory: list the actions used across a GitHub account's workflows.

For every non-archived, non-fork repository of a user or organization, this
package reads the workflows in ``.github/workflows``, resolves each external
``uses:`` reference to the ``runs.using`` field of its action manifest and
writes one CSV report per repository.

Example:
    CLI usage:
        $ actions-inventory --org my-org
        $ actions-inventory --user octocat --workers 8

    Library usage:
        from actions_inventory import AuditPipeline, CLIConfig

        pipeline = AuditPipeline(CLIConfig(github_token="ghp_...", org="my-org"))
        for result in pipeline.run():
            print(result.repository.full_name, result.report_path)
"""

from .cli import CLI, StandardCLI
from .domain_model import ActionManifest, ReferenceAddress, ReportRow, Repository
from .globals import (
    AuditError,
    CancellationToken,
    InvalidReference,
    MalformedDocument,
    RunCancelled,
    TransportFailure,
)
from .globals.cli_config import CLIConfig
from .pipeline import AuditPipeline
from .pipeline_stages import RepositoryResult, ResolutionCache

__all__ = [
    # Run
    "AuditPipeline",
    "CLIConfig",
    "RepositoryResult",
    "ResolutionCache",
    # Core types
    "ActionManifest",
    "ReferenceAddress",
    "ReportRow",
    "Repository",
    # Errors
    "AuditError",
    "CancellationToken",
    "InvalidReference",
    "MalformedDocument",
    "RunCancelled",
    "TransportFailure",
    # CLI interface
    "CLI",
    "StandardCLI",
]
