"""GitHub REST client for the three lookups an audit needs.

This module provides the repository lister, the directory lister and the
file content fetcher used by the auditors. It includes:

- Authenticated session setup with the GitHub v3 media type
- Link-header pagination for repository listings
- An explicit ``Found | Absent`` result for file lookups, so a 404 is an
  ordinary outcome rather than an exception
- Per-request timeouts bounded by the run's CancellationToken

There is no retry or backoff: any failure other than 404 raises
TransportFailure and ends the run.

Typical usage:
    client = DefaultGitHubClient(token="ghp_...")
    for repo in client.list_repositories("my-org", is_org=True):
        entries = client.list_directory(repo.owner, repo.name, ".github/workflows")
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from actions_inventory.domain_model.primitives import Absent, FetchResult, Found, Repository
from actions_inventory.globals.cancellation import CancellationToken
from actions_inventory.globals.errors import MalformedDocument, TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REQUEST_TIMEOUT = 30.0
PER_PAGE = 100


class IGitHubClient(ABC):
    """Abstract interface for the GitHub lookups used by an audit run.

    Implementations must report "not found" as an ordinary value: an empty
    listing for a missing directory and ``Absent`` for a missing file. Every
    other failure raises.
    """

    @abstractmethod
    def list_repositories(self, account: str, is_org: bool) -> List[Repository]:
        """List the non-archived, non-fork repositories owned by an account.

        Args:
            account: Organization or user login.
            is_org: Whether ``account`` is an organization.

        Returns:
            Repositories in API order.
        """
        pass

    @abstractmethod
    def list_directory(self, owner: str, repo: str, path: str) -> List[Dict[str, Any]]:
        """List the entries of a directory; empty when the directory does not exist."""
        pass

    @abstractmethod
    def fetch_file(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> FetchResult:
        """Fetch the text content of one file at an optional revision.

        Returns:
            ``Found(content)`` for an existing file, ``Absent()`` on 404.
        """
        pass


class DefaultGitHubClient(IGitHubClient):
    """requests-based implementation of IGitHubClient against the REST v3 API."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        cancellation: Optional[CancellationToken] = None,
        user_agent: str = "actions-inventory",
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token sent as ``Authorization: token ...``.
            api_url: Base URL of the REST API (GitHub Enterprise servers
                use ``https://host/api/v3``).
            session: Optional requests.Session to reuse. A new one is created
                when omitted.
            request_timeout: Timeout in seconds for each request.
            cancellation: Run token checked before every request.
            user_agent: Value of the User-Agent header.
        """
        self.api_url = api_url.rstrip("/")
        self.request_timeout = request_timeout
        self.cancellation = cancellation or CancellationToken()
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": user_agent,
            }
        )
        if token:
            self.session.headers.update({"Authorization": f"token {token}"})

    def list_repositories(self, account: str, is_org: bool) -> List[Repository]:
        base = "orgs" if is_org else "users"
        url: Optional[str] = f"{self.api_url}/{base}/{quote(account)}/repos"
        params: Optional[Dict[str, Any]] = {"per_page": PER_PAGE}
        repositories: List[Repository] = []
        while url:
            response = self._get(url, params=params)
            self._raise_for_status(response, url)
            page = self._json(response, url)
            if not isinstance(page, list):
                raise MalformedDocument("repository listing is not a list", url)
            for data in page:
                repository = Repository.from_dict(data)
                if repository.archived or repository.fork:
                    logger.debug(f"Skipping archived or forked repository {repository.full_name}")
                    continue
                repositories.append(repository)
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None
        logger.info(f"Fetched {len(repositories)} repositories for {account}")
        return repositories

    def list_directory(self, owner: str, repo: str, path: str) -> List[Dict[str, Any]]:
        url = self._contents_url(owner, repo, path)
        response = self._get(url)
        if response.status_code == 404:
            logger.debug(f"No directory {path} in {owner}/{repo}")
            return []
        self._raise_for_status(response, url)
        entries = self._json(response, url)
        if not isinstance(entries, list):
            raise MalformedDocument(f"{path} is not a directory", f"{owner}/{repo}")
        return entries

    def fetch_file(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> FetchResult:
        url = self._contents_url(owner, repo, path)
        params = {"ref": ref} if ref else None
        logger.debug(f"Fetching file content for {owner}/{repo}/{path}@{ref or 'HEAD'}")
        response = self._get(url, params=params)
        if response.status_code == 404:
            return Absent()
        self._raise_for_status(response, url)
        data = self._json(response, url)
        if not isinstance(data, dict) or data.get("type") != "file":
            raise MalformedDocument(f"Not a file: {path}", f"{owner}/{repo}")
        return Found(self._decode_content(data, f"{owner}/{repo}/{path}"))

    def _contents_url(self, owner: str, repo: str, path: str) -> str:
        return f"{self.api_url}/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path.strip('/'))}"

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        timeout = self.cancellation.request_timeout(self.request_timeout)
        try:
            return self.session.get(url, params=params, timeout=timeout)
        except requests.RequestException as e:
            raise TransportFailure(f"Request to {url} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str) -> None:
        if 200 <= response.status_code < 300:
            return
        message = f"GitHub API returned HTTP {response.status_code} for {url}"
        if response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            message += " (rate limit exhausted)"
        raise TransportFailure(message, status_code=response.status_code)

    @staticmethod
    def _json(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedDocument(f"invalid JSON payload: {e}", url) from e

    @staticmethod
    def _decode_content(data: Dict[str, Any], source: str) -> str:
        content = data.get("content") or ""
        if data.get("encoding", "base64") != "base64":
            return content
        try:
            return base64.b64decode(content).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise MalformedDocument(f"cannot decode file content: {e}", source) from e
