from abc import ABC, abstractmethod

from actions_inventory.pipeline_stages.repository_auditor import RepositoryResult


class OutputFormatter(ABC):
    """Interface for formatting CLI output."""

    @abstractmethod
    def format_repository(self, result: RepositoryResult) -> str:
        """Format the line shown when a repository's report is written."""
        pass

    @abstractmethod
    def format_failure(self, error: Exception) -> str:
        """Format the message shown when the run is aborted."""
        pass

    @abstractmethod
    def format_summary(
        self,
        repositories: int,
        distinct_actions: int,
        docker_actions: int,
        not_found_actions: int,
        failed: bool,
    ) -> str:
        """Format final summary of the run."""
        pass


class ColoredFormatter(OutputFormatter):
    """
    Colored console output formatter.

    Formats CLI output with ANSI color codes. Used as the default formatter
    for interactive terminal sessions.
    """

    STYLE = {
        "ok": {"color_bold": "\033[1;92m", "color": "\033[92m", "sign": "✓"},
        "error": {"color_bold": "\033[1;31m", "color": "\033[31m", "sign": "✗"},
        "warning": {"color_bold": "\033[1;33m", "color": "\033[33m", "sign": "⚠"},
    }

    DEF_STYLE = {
        "format_end": "\033[0m",
        "neutral": "\033[2m",
        "underline": "\033[4m",
    }

    def format_repository(self, result: RepositoryResult) -> str:
        """Format repository name, counts and report path."""
        line = f'{self.DEF_STYLE["underline"]}{result.repository.full_name}{self.DEF_STYLE["format_end"]}'
        line += (
            f": {len(result.rows)} actions in {result.workflow_count} workflows"
            f'  {self.DEF_STYLE["neutral"]}-> {result.report_path}{self.DEF_STYLE["format_end"]}'
        )
        return line

    def format_failure(self, error: Exception) -> str:
        style = self.STYLE["error"]
        return f'{style["color_bold"]}{style["sign"]} Audit aborted: {error}{self.DEF_STYLE["format_end"]}'

    def format_summary(
        self,
        repositories: int,
        distinct_actions: int,
        docker_actions: int,
        not_found_actions: int,
        failed: bool,
    ) -> str:
        """Format colored summary with counts."""
        if failed:
            style = self.STYLE["error"]
        elif docker_actions or not_found_actions:
            style = self.STYLE["warning"]
        else:
            style = self.STYLE["ok"]

        return (
            f'\n{style["color_bold"]}{style["sign"]} {repositories} repositories audited, '
            f"{distinct_actions} distinct actions ({docker_actions} docker, "
            f'{not_found_actions} not found){self.DEF_STYLE["format_end"]}\n'
        )
