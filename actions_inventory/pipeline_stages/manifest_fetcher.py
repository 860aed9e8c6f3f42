import logging
from typing import Optional, Tuple

from actions_inventory.domain_model.documents import ManifestDocument
from actions_inventory.domain_model.primitives import (
    Absent,
    ActionManifest,
    FetchResult,
    ReferenceAddress,
)
from actions_inventory.globals.github_client import IGitHubClient
from actions_inventory.pipeline_stages.parser import PyYAMLParser, YAMLParser

logger = logging.getLogger(__name__)

MANIFEST_FILENAMES: Tuple[str, ...] = ("action.yml", "action.yaml")


class ManifestFetcher:
    """
    Resolves an action address to its declared execution kind.

    Tries ``action.yml`` and then ``action.yaml`` in the action's directory at
    the referenced revision. When neither exists the result is the
    ``NOT_FOUND`` sentinel, not an error. Transport failures and malformed
    manifests propagate.
    """

    def __init__(self, client: IGitHubClient, yaml_parser: Optional[YAMLParser] = None) -> None:
        self.client = client
        self.yaml_parser = yaml_parser or PyYAMLParser()

    def fetch(self, address: ReferenceAddress) -> ActionManifest:
        for filename in MANIFEST_FILENAMES:
            path = address.manifest_path(filename)
            result: FetchResult = self.client.fetch_file(
                address.owner, address.repo, path, address.revision
            )
            if isinstance(result, Absent):
                logger.debug(f"No {path} in {address.owner}/{address.repo}@{address.revision}")
                continue
            source = f"{address.owner}/{address.repo}/{path}"
            document = ManifestDocument.from_dict(
                self.yaml_parser.parse(result.content, source), source
            )
            return ActionManifest(document.using)

        logger.warning(f"No action manifest found for {address}")
        return ActionManifest.not_found()
