import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from actions_inventory.domain_model.primitives import (
    REPORT_HEADER,
    ReportRow,
    Repository,
    WorkflowFile,
)
from actions_inventory.globals.github_client import IGitHubClient
from actions_inventory.globals.process_stage import ProcessStage
from actions_inventory.globals.report_writer import ReportWriter
from actions_inventory.pipeline_stages.workflow_auditor import WorkflowAuditor

logger = logging.getLogger(__name__)

WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_EXTENSIONS: Tuple[str, ...] = (".yml", ".yaml")


@dataclass
class RepositoryResult:
    """Outcome of auditing one repository."""

    repository: Repository
    report_path: Path
    workflow_count: int
    rows: List[ReportRow] = field(default_factory=list)


class RepositoryAuditor(ProcessStage[Repository, RepositoryResult]):
    """
    Audits every workflow of one repository and writes its report.

    The report is written only after all workflows were audited, so a run
    aborted half-way through a repository leaves no report for it.
    """

    def __init__(
        self,
        account: str,
        client: IGitHubClient,
        workflow_auditor: WorkflowAuditor,
        report_writer: ReportWriter,
    ) -> None:
        self.account = account
        self.client = client
        self.workflow_auditor = workflow_auditor
        self.report_writer = report_writer

    def process(self, input: Repository) -> RepositoryResult:
        repository = input
        workflows = self.list_workflows(repository)

        rows: List[ReportRow] = []
        for workflow in workflows:
            rows.extend(self.workflow_auditor.audit(repository, workflow))

        table = [REPORT_HEADER] + [row.as_tuple() for row in rows]
        report_path = self.report_writer.write(self.account, repository.name, table)
        return RepositoryResult(repository, report_path, len(workflows), rows)

    def list_workflows(self, repository: Repository) -> List[WorkflowFile]:
        """List workflow files in ``.github/workflows``, in listing order."""
        logger.info(f"Fetching workflows for {repository.full_name}...")
        entries = self.client.list_directory(repository.owner, repository.name, WORKFLOWS_DIR)
        workflows = [
            WorkflowFile(entry["path"])
            for entry in entries
            if entry.get("type", "file") == "file"
            and str(entry.get("path", "")).endswith(WORKFLOW_EXTENSIONS)
        ]
        logger.info(f"Fetched {len(workflows)} workflows for {repository.full_name}")
        return workflows
