from abc import ABC, abstractmethod
from typing import Generic, TypeVar

I = TypeVar("I")
O = TypeVar("O")


class ProcessStage(ABC, Generic[I, O]):
    """One step of the audit: turns an input into an output or raises AuditError."""

    @abstractmethod
    def process(self, input: I) -> O:
        pass
