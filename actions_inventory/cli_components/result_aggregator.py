from abc import ABC, abstractmethod
from typing import Dict, List

from actions_inventory.domain_model.primitives import DOCKER, NOT_FOUND
from actions_inventory.pipeline_stages.repository_auditor import RepositoryResult


class ResultAggregator(ABC):
    """Interface for aggregating repository results across a run."""

    @abstractmethod
    def add_result(self, result: RepositoryResult) -> None:
        pass

    @abstractmethod
    def mark_failed(self) -> None:
        """Record that the run was aborted."""
        pass

    @abstractmethod
    def get_repository_count(self) -> int:
        pass

    @abstractmethod
    def get_distinct_actions(self) -> Dict[str, str]:
        """Map of every distinct action reference to its execution kind."""
        pass

    @abstractmethod
    def get_docker_count(self) -> int:
        pass

    @abstractmethod
    def get_not_found_count(self) -> int:
        pass

    @abstractmethod
    def is_failed(self) -> bool:
        pass

    @abstractmethod
    def get_exit_code(self) -> int:
        pass

    @abstractmethod
    def get_results(self) -> List[RepositoryResult]:
        pass


class StandardResultAggregator(ResultAggregator):
    """
    Standard implementation of result aggregation.

    Exit codes: 0=run completed, 1=run aborted.
    """

    def __init__(self) -> None:
        self._results: List[RepositoryResult] = []
        self._actions: Dict[str, str] = {}
        self._failed = False

    def add_result(self, result: RepositoryResult) -> None:
        self._results.append(result)
        for row in result.rows:
            self._actions[row.action] = row.using

    def mark_failed(self) -> None:
        self._failed = True

    def is_failed(self) -> bool:
        return self._failed

    def get_repository_count(self) -> int:
        return len(self._results)

    def get_distinct_actions(self) -> Dict[str, str]:
        return dict(self._actions)

    def count_using(self, using: str) -> int:
        return sum(1 for value in self._actions.values() if value == using)

    def get_docker_count(self) -> int:
        return self.count_using(DOCKER)

    def get_not_found_count(self) -> int:
        return self.count_using(NOT_FOUND)

    def get_exit_code(self) -> int:
        return 1 if self._failed else 0

    def get_results(self) -> List[RepositoryResult]:
        return self._results.copy()
