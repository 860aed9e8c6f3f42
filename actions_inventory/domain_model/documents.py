"""Validated shapes of the two YAML documents the audit reads.

Parsed YAML is untyped nested data. These classes check the parts of a
workflow and of an action manifest that the audit relies on, so a document
with an unexpected shape fails at the parse boundary with MalformedDocument.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from actions_inventory.globals.errors import MalformedDocument


@dataclass(frozen=True)
class Step:
    uses: Optional[str] = None


@dataclass(frozen=True)
class Job:
    name: str
    steps: List[Step] = field(default_factory=list)


@dataclass(frozen=True)
class WorkflowDocument:
    jobs: List[Job]

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "WorkflowDocument":
        """Validate a parsed workflow.

        Args:
            data: Result of parsing the workflow YAML.
            source: Workflow path, used in error messages.

        Returns:
            WorkflowDocument: Jobs in document order. Jobs without ``steps``
                (for example reusable-workflow calls) have no steps.

        Raises:
            MalformedDocument: If ``jobs``, a job, its ``steps`` or a step's
                ``uses`` has the wrong type.
        """
        if not isinstance(data, dict):
            raise MalformedDocument("workflow must be a mapping", source)
        jobs_in = data.get("jobs")
        if not isinstance(jobs_in, dict):
            raise MalformedDocument("workflow has no 'jobs' mapping", source)

        jobs: List[Job] = []
        for job_name, job_in in jobs_in.items():
            if not isinstance(job_in, dict):
                raise MalformedDocument(f"job '{job_name}' must be a mapping", source)
            steps_in = job_in.get("steps")
            if steps_in is None:
                jobs.append(Job(str(job_name)))
                continue
            if not isinstance(steps_in, list):
                raise MalformedDocument(f"steps of job '{job_name}' must be a list", source)
            steps = [cls._build_step(job_name, step_in, source) for step_in in steps_in]
            jobs.append(Job(str(job_name), steps))
        return cls(jobs)

    @staticmethod
    def _build_step(job_name: Any, step_in: Any, source: Optional[str]) -> Step:
        if not isinstance(step_in, dict):
            raise MalformedDocument(f"step in job '{job_name}' must be a mapping", source)
        uses = step_in.get("uses")
        if uses is not None and not isinstance(uses, str):
            raise MalformedDocument(f"'uses' in job '{job_name}' must be a string", source)
        return Step(uses)


@dataclass(frozen=True)
class ManifestDocument:
    using: str

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "ManifestDocument":
        """Validate a parsed action manifest and extract ``runs.using``."""
        if not isinstance(data, dict):
            raise MalformedDocument("action manifest must be a mapping", source)
        runs = data.get("runs")
        if not isinstance(runs, dict):
            raise MalformedDocument("action manifest has no 'runs' mapping", source)
        using = runs.get("using")
        if not isinstance(using, str) or not using.strip():
            raise MalformedDocument("action manifest has no 'runs.using' string", source)
        return cls(using.strip())
