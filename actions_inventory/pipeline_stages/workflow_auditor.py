import logging
from typing import List, Optional, Set

from actions_inventory.domain_model.primitives import (
    DOCKER,
    Absent,
    ActionManifest,
    ReferenceAddress,
    ReportRow,
    Repository,
    WorkflowFile,
    is_container_reference,
)
from actions_inventory.globals.errors import MalformedDocument
from actions_inventory.globals.github_client import IGitHubClient
from actions_inventory.pipeline_stages.reference_parser import ReferenceParser
from actions_inventory.pipeline_stages.resolution_cache import ResolutionCache

logger = logging.getLogger(__name__)


class WorkflowAuditor:
    """
    Produces the report rows of one workflow file.

    One row per distinct reference in the file, in order of first occurrence.
    Resolution goes through the shared ResolutionCache, so a reference seen in
    an earlier file or repository costs no further request.
    """

    def __init__(
        self,
        client: IGitHubClient,
        cache: ResolutionCache,
        reference_parser: Optional[ReferenceParser] = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.reference_parser = reference_parser or ReferenceParser()

    def audit(self, repository: Repository, workflow: WorkflowFile) -> List[ReportRow]:
        """Audit one workflow file of ``repository``.

        Raises:
            MalformedDocument: If the workflow is missing or cannot be parsed.
            InvalidReference: If a step references something that is neither
                local, a container image, nor ``owner/repo[...]``.
        """
        source = f"{repository.full_name}/{workflow.path}"
        result = self.client.fetch_file(repository.owner, repository.name, workflow.path)
        if isinstance(result, Absent):
            raise MalformedDocument("workflow file disappeared while auditing", source)

        rows: List[ReportRow] = []
        seen: Set[str] = set()
        for raw in self.reference_parser.process(result.content, source):
            if raw in seen:
                continue
            seen.add(raw)
            manifest = self._resolve(raw)
            rows.append(ReportRow(workflow.path, raw, manifest.using))

        logger.debug(f"{source}: {len(rows)} distinct actions")
        return rows

    def _resolve(self, raw: str) -> ActionManifest:
        if is_container_reference(raw):
            return ActionManifest(DOCKER)
        return self.cache.resolve(raw, ReferenceAddress.parse(raw))
