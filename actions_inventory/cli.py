import logging
from abc import ABC, abstractmethod
from typing import Optional

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from actions_inventory.cli_components.output_formatter import ColoredFormatter, OutputFormatter
from actions_inventory.cli_components.result_aggregator import (
    ResultAggregator,
    StandardResultAggregator,
)
from actions_inventory.globals.cli_config import CLIConfig
from actions_inventory.globals.errors import AuditError
from actions_inventory.pipeline import AuditPipeline
from actions_inventory.pipeline_stages.repository_auditor import RepositoryResult

logger = logging.getLogger(__name__)


class CLI(ABC):
    """Interface for CLI implementations."""

    @abstractmethod
    def run(self) -> int:
        """
        Run the CLI and return exit code.

        Returns:
            int: Exit code (0=success, 1=run aborted)
        """
        pass


class StandardCLI(CLI):
    """
    Standard CLI implementation with separated concerns.

    Coordinates an audit run using pluggable components:
    - OutputFormatter: handles display formatting
    - ResultAggregator: collects and summarizes results
    - AuditPipeline: lists repositories and audits them
    """

    def __init__(
        self,
        config: CLIConfig,
        formatter: Optional[OutputFormatter] = None,
        aggregator: Optional[ResultAggregator] = None,
        pipeline: Optional[AuditPipeline] = None,
    ):
        self.config = config
        self.formatter = formatter or ColoredFormatter()
        self.aggregator = aggregator or StandardResultAggregator()
        self.pipeline = pipeline or AuditPipeline(config)

    def run(self) -> int:
        """Main CLI execution method.

        Lists the account's repositories, audits them and prints one line per
        written report followed by a summary. Any AuditError aborts the run:
        it is reported, the summary covers the repositories finished so far,
        and the exit code is 1.

        Returns:
            int: Exit code indicating the run outcome:
                - 0: Every repository was audited
                - 1: The run was aborted
        """
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
            ) as progress:
                progress.add_task(
                    description=f"Fetching repositories for {self.config.account}...", total=None
                )
                repositories = self.pipeline.list_repositories()

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                transient=True,
            ) as progress:
                task = progress.add_task(description="Auditing repositories", total=len(repositories))

                def on_result(result: RepositoryResult) -> None:
                    self.aggregator.add_result(result)
                    progress.console.print(self.formatter.format_repository(result), highlight=False)
                    progress.advance(task)

                self.pipeline.run(repositories, on_result=on_result)
        except AuditError as e:
            logger.error(f"Audit aborted: {e}")
            self.aggregator.mark_failed()
            print(self.formatter.format_failure(e))

        self._display_summary()
        return self.aggregator.get_exit_code()

    def _display_summary(self) -> None:
        print(
            self.formatter.format_summary(
                self.aggregator.get_repository_count(),
                len(self.aggregator.get_distinct_actions()),
                self.aggregator.get_docker_count(),
                self.aggregator.get_not_found_count(),
                self.aggregator.is_failed(),
            )
        )
