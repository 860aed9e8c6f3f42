import concurrent.futures
import logging
from typing import Callable, Dict, List, Optional

from actions_inventory.domain_model.primitives import Repository
from actions_inventory.globals.cancellation import CancellationToken
from actions_inventory.globals.cli_config import CLIConfig
from actions_inventory.globals.errors import RunCancelled
from actions_inventory.globals.github_client import DefaultGitHubClient, IGitHubClient
from actions_inventory.globals.report_writer import CsvReportWriter, ReportWriter
from actions_inventory.pipeline_stages import (
    ManifestFetcher,
    RepositoryAuditor,
    RepositoryResult,
    ResolutionCache,
    WorkflowAuditor,
)

logger = logging.getLogger(__name__)


class AuditPipeline:
    """
    One audit run over every repository of an account.

    Owns the run's ResolutionCache and CancellationToken. Repositories are
    audited on a bounded thread pool and share nothing but the cache. The
    first failure cancels the run: queued repositories never start, running
    ones stop at their next API request, and the error is re-raised.
    """

    def __init__(
        self,
        config: CLIConfig,
        client: Optional[IGitHubClient] = None,
        report_writer: Optional[ReportWriter] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        if not config.account:
            raise ValueError("An organization or user account is required")
        self.config = config
        self.cancellation = cancellation or CancellationToken(config.timeout)
        self.client = client or DefaultGitHubClient(
            token=config.github_token,
            api_url=config.api_url,
            request_timeout=config.request_timeout,
            cancellation=self.cancellation,
        )
        self.cache = ResolutionCache(ManifestFetcher(self.client))
        self.repository_auditor = RepositoryAuditor(
            config.account,
            self.client,
            WorkflowAuditor(self.client, self.cache),
            report_writer or CsvReportWriter(config.output_dir),
        )

    def list_repositories(self) -> List[Repository]:
        logger.info(f"Fetching repositories for {self.config.account}...")
        return self.client.list_repositories(self.config.account, self.config.is_org)

    def run(
        self,
        repositories: Optional[List[Repository]] = None,
        on_result: Optional[Callable[[RepositoryResult], None]] = None,
    ) -> List[RepositoryResult]:
        """Audit ``repositories`` (all of the account's when None).

        Args:
            repositories: Repositories to audit, in report order.
            on_result: Called from the calling thread as each repository
                finishes.

        Returns:
            List[RepositoryResult]: One result per repository, in input order.

        Raises:
            AuditError: The first failure of any repository, or RunCancelled
                when the run deadline passes.
        """
        if repositories is None:
            repositories = self.list_repositories()

        results: Dict[int, RepositoryResult] = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, self.config.workers)) as executor:
            future_to_index = {
                executor.submit(self._audit_repository, repository): index
                for index, repository in enumerate(repositories)
            }
            pending = set(future_to_index)
            try:
                while pending:
                    done, pending = concurrent.futures.wait(
                        pending,
                        timeout=self.cancellation.remaining(),
                        return_when=concurrent.futures.FIRST_EXCEPTION,
                    )
                    if not done:
                        raise RunCancelled(f"Audit run exceeded its {self.config.timeout}s deadline")
                    for future in done:
                        result = future.result()
                        results[future_to_index[future]] = result
                        if on_result:
                            on_result(result)
            except BaseException:
                self.cancellation.cancel()
                for future in pending:
                    future.cancel()
                raise

        logger.info(
            f"Audited {len(results)} repositories, resolved {len(self.cache)} distinct actions "
            f"with {self.cache.fetch_count} manifest lookups"
        )
        return [results[index] for index in sorted(results)]

    def _audit_repository(self, repository: Repository) -> RepositoryResult:
        self.cancellation.raise_if_cancelled()
        logger.info(f"Processing repository: {repository.full_name}")
        return self.repository_auditor.process(repository)
