"""Unit tests for workflow and manifest schema validation."""

import pytest

from actions_inventory.domain_model.documents import Job, ManifestDocument, Step, WorkflowDocument
from actions_inventory.globals.errors import MalformedDocument


class TestWorkflowDocument:
    def test_jobs_and_steps_in_document_order(self):
        document = WorkflowDocument.from_dict(
            {
                "jobs": {
                    "build": {"steps": [{"uses": "a/b@v1"}, {"run": "make"}]},
                    "call": {"uses": "a/b/.github/workflows/x.yml@v1"},
                }
            }
        )

        assert document.jobs == [
            Job("build", [Step("a/b@v1"), Step(None)]),
            Job("call", []),
        ]

    @pytest.mark.parametrize(
        "data",
        [
            None,
            ["jobs"],
            {"name": "no jobs"},
            {"jobs": ["build"]},
            {"jobs": {"build": "ubuntu-latest"}},
            {"jobs": {"build": {"steps": {"uses": "a/b@v1"}}}},
            {"jobs": {"build": {"steps": ["echo hi"]}}},
            {"jobs": {"build": {"steps": [{"uses": ["a/b@v1"]}]}}},
        ],
    )
    def test_wrong_shapes_are_malformed(self, data):
        with pytest.raises(MalformedDocument):
            WorkflowDocument.from_dict(data, ".github/workflows/ci.yml")

    def test_error_names_the_source(self):
        with pytest.raises(MalformedDocument) as exc_info:
            WorkflowDocument.from_dict({"jobs": None}, "my-org/service/.github/workflows/ci.yml")

        assert "my-org/service/.github/workflows/ci.yml" in str(exc_info.value)
        assert exc_info.value.source == "my-org/service/.github/workflows/ci.yml"


class TestManifestDocument:
    def test_extracts_runs_using(self):
        document = ManifestDocument.from_dict(
            {"name": "Checkout", "runs": {"using": "node20", "main": "dist/index.js"}}
        )

        assert document.using == "node20"

    @pytest.mark.parametrize(
        "data",
        [
            None,
            "runs",
            {"name": "no runs"},
            {"runs": "node20"},
            {"runs": {"main": "index.js"}},
            {"runs": {"using": ""}},
            {"runs": {"using": 20}},
        ],
    )
    def test_wrong_shapes_are_malformed(self, data):
        with pytest.raises(MalformedDocument):
            ManifestDocument.from_dict(data)
