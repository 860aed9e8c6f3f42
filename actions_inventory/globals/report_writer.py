import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class ReportWriter(ABC):
    @abstractmethod
    def write(self, account: str, repository: str, rows: Sequence[Sequence[str]]) -> Path:
        """Persist one repository's rows, header first, and return the report path."""
        pass


class CsvReportWriter(ReportWriter):
    """Writes ``{output_dir}/{account}/{repository}.csv``."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def report_path(self, account: str, repository: str) -> Path:
        return self.output_dir / account / f"{repository}.csv"

    def write(self, account: str, repository: str, rows: Sequence[Sequence[str]]) -> Path:
        path = self.report_path(account, repository)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(rows)
        logger.info(f"Saved {path}")
        return path
