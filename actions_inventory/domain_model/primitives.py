from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from actions_inventory.globals.errors import InvalidReference

LOCAL_REFERENCE_PREFIX = "."
CONTAINER_REFERENCE_PREFIX = "docker://"
NOT_FOUND = "NOT_FOUND"
DOCKER = "docker"
REPORT_HEADER: Tuple[str, str, str] = ("workflow", "action", "using")


@dataclass(frozen=True)
class ReferenceAddress:
    """Structural parts of an action reference such as ``owner/repo/sub/dir@v2``."""

    owner: str
    repo: str
    sub_path: str = ""
    revision: Optional[str] = None
    """None means the repository's default branch."""

    @classmethod
    def parse(cls, raw: str) -> "ReferenceAddress":
        """Split a raw reference into owner, repository, sub-path and revision.

        The revision is everything after the last ``@``. The remaining address
        is split on ``/``: owner, repository, then an optional sub-path.

        Raises:
            InvalidReference: If the address does not name both an owner and
                a repository.
        """
        address, sep, revision = raw.rpartition("@")
        if not sep:
            address, revision = raw, ""
        tokens = address.split("/")
        if len(tokens) < 2 or not tokens[0] or not tokens[1]:
            raise InvalidReference(raw)
        return cls(
            owner=tokens[0],
            repo=tokens[1],
            sub_path="/".join(tokens[2:]),
            revision=revision or None,
        )

    def manifest_path(self, filename: str) -> str:
        if self.sub_path:
            return f"{self.sub_path.rstrip('/')}/{filename}"
        return filename

    def __str__(self) -> str:
        slug = f"{self.owner}/{self.repo}"
        if self.sub_path:
            slug += f"/{self.sub_path}"
        if self.revision:
            slug += f"@{self.revision}"
        return slug


def is_local_reference(raw: str) -> bool:
    return raw.startswith(LOCAL_REFERENCE_PREFIX)


def is_container_reference(raw: str) -> bool:
    return raw.startswith(CONTAINER_REFERENCE_PREFIX)


@dataclass(frozen=True)
class ActionManifest:
    """The one manifest field the audit cares about: ``runs.using``."""

    using: str

    @classmethod
    def not_found(cls) -> "ActionManifest":
        return cls(NOT_FOUND)

    @property
    def is_found(self) -> bool:
        return self.using != NOT_FOUND


@dataclass(frozen=True)
class WorkflowFile:
    path: str


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str
    archived: bool = False
    fork: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Repository":
        """Create a Repository from a GitHub REST repository payload."""
        return cls(
            owner=(data.get("owner") or {}).get("login", ""),
            name=data.get("name", ""),
            archived=bool(data.get("archived", False)),
            fork=bool(data.get("fork", False)),
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ReportRow:
    workflow: str
    action: str
    using: str

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.workflow, self.action, self.using)


@dataclass(frozen=True)
class Found:
    content: str


@dataclass(frozen=True)
class Absent:
    pass


FetchResult = Union[Found, Absent]
