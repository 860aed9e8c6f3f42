"""Shared test configuration and fixtures for actions-inventory tests."""

from pathlib import Path

import pytest

from actions_inventory.domain_model.primitives import Repository
from actions_inventory.globals.report_writer import CsvReportWriter
from actions_inventory.pipeline_stages import ManifestFetcher, ResolutionCache, WorkflowAuditor
from tests.helper import FakeGitHubClient


@pytest.fixture
def sample_workflow():
    """Workflow with a duplicate, a local action, a container step and a job without steps."""
    return """
name: CI
on:
  push:
    branches: [main]

jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - name: Checkout
        uses: actions/checkout@v4
      - name: Setup Node
        uses: actions/setup-node@v4
        with:
          node-version: '20'
      - name: Local action
        uses: ./.github/actions/build
      - name: Run tests
        run: npm test
  lint:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - uses: docker://alpine:3.19
  release:
    uses: my-org/shared/.github/workflows/release.yml@main
"""


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Fake GitHub with two published node actions."""
    client = FakeGitHubClient()
    client.add_action("actions/checkout", "v4", "node20")
    client.add_action("actions/setup-node", "v4", "node20")
    return client


@pytest.fixture
def repository(fake_client: FakeGitHubClient) -> Repository:
    return fake_client.add_repository("my-org", "service")


@pytest.fixture
def cache(fake_client: FakeGitHubClient) -> ResolutionCache:
    return ResolutionCache(ManifestFetcher(fake_client))


@pytest.fixture
def workflow_auditor(fake_client: FakeGitHubClient, cache: ResolutionCache) -> WorkflowAuditor:
    return WorkflowAuditor(fake_client, cache)


@pytest.fixture
def report_writer(tmp_path: Path) -> CsvReportWriter:
    return CsvReportWriter(tmp_path / "outputs")
