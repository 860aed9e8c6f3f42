from abc import ABC, abstractmethod
from typing import Any, Optional

import yaml

from actions_inventory.globals.errors import MalformedDocument


class YAMLParser(ABC):
    """Abstract base class for YAML parser implementations."""

    @abstractmethod
    def parse(self, text: str, source: Optional[str] = None) -> Any:
        """Parse YAML text into nested mappings and sequences.

        Args:
            text: The YAML document.
            source: Where the text came from, used in error messages.

        Raises:
            MalformedDocument: If the text is not valid YAML.
        """
        pass


class PyYAMLParser(YAMLParser):
    """YAML parser implementation using PyYAML's safe loader."""

    def parse(self, text: str, source: Optional[str] = None) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedDocument(f"invalid YAML: {e}", source) from e
