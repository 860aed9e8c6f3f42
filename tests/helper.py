import threading
from typing import Any, Dict, List, Optional, Tuple

from actions_inventory.domain_model.primitives import Absent, FetchResult, Found, Repository
from actions_inventory.globals.github_client import IGitHubClient

FileKey = Tuple[str, str, str, Optional[str]]


class FakeGitHubClient(IGitHubClient):
    """In-memory GitHub that records every request instead of making real HTTP calls."""

    def __init__(self, repositories: Optional[List[Repository]] = None) -> None:
        self.repositories: List[Repository] = list(repositories or [])
        self.directories: Dict[Tuple[str, str, str], List[Dict[str, Any]]] = {}
        self.files: Dict[FileKey, str] = {}
        self.failures: Dict[FileKey, Exception] = {}
        self.file_requests: List[FileKey] = []
        self.directory_requests: List[Tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def add_repository(self, owner: str, name: str) -> Repository:
        repository = Repository(owner, name)
        self.repositories.append(repository)
        return repository

    def add_workflow(self, repository: Repository, filename: str, content: str) -> str:
        """Place a workflow in the repository's .github/workflows listing."""
        path = f".github/workflows/{filename}"
        listing = self.directories.setdefault(
            (repository.owner, repository.name, ".github/workflows"), []
        )
        listing.append({"name": filename, "path": path, "type": "file"})
        self.files[(repository.owner, repository.name, path, None)] = content
        return path

    def add_action(
        self,
        slug: str,
        ref: Optional[str],
        using: str,
        filename: str = "action.yml",
    ) -> None:
        """Publish a manifest for ``owner/repo[/sub/path]`` at ``ref``."""
        owner, repo, *sub_path = slug.split("/")
        path = "/".join(sub_path + [filename])
        self.files[(owner, repo, path, ref)] = (
            f"name: {slug}\ndescription: test action\nruns:\n  using: {using}\n"
        )

    def fail_on(self, owner: str, repo: str, path: str, ref: Optional[str], error: Exception) -> None:
        self.failures[(owner, repo, path, ref)] = error

    def requests_for(self, owner: str, repo: str) -> List[FileKey]:
        return [key for key in self.file_requests if key[0] == owner and key[1] == repo]

    def list_repositories(self, account: str, is_org: bool) -> List[Repository]:
        return [r for r in self.repositories if not r.archived and not r.fork]

    def list_directory(self, owner: str, repo: str, path: str) -> List[Dict[str, Any]]:
        with self._lock:
            self.directory_requests.append((owner, repo, path))
        return list(self.directories.get((owner, repo, path), []))

    def fetch_file(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> FetchResult:
        key = (owner, repo, path, ref)
        with self._lock:
            self.file_requests.append(key)
        if key in self.failures:
            raise self.failures[key]
        if key in self.files:
            return Found(self.files[key])
        return Absent()
