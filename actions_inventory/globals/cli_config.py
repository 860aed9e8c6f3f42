from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from actions_inventory.globals.github_client import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT


@dataclass
class CLIConfig:
    """
    Configuration for one audit run.

    Attributes:
        github_token: GitHub token for API access
        org: Organization to audit; takes precedence over ``user``
        user: User account to audit when no organization is given
        api_url: Base URL of the GitHub REST API
        output_dir: Root directory for the per-repository CSV reports
        workers: Number of repositories audited concurrently
        timeout: Deadline for the whole run in seconds, or None for no deadline
        request_timeout: Timeout for each API request in seconds
    """

    github_token: str
    org: Optional[str] = None
    user: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    output_dir: Path = Path("outputs")
    workers: int = 4
    timeout: Optional[float] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def account(self) -> Optional[str]:
        return self.org or self.user

    @property
    def is_org(self) -> bool:
        return bool(self.org)
