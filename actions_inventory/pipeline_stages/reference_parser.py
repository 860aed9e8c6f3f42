from typing import List, Optional

from actions_inventory.domain_model.documents import WorkflowDocument
from actions_inventory.domain_model.primitives import is_local_reference
from actions_inventory.globals.process_stage import ProcessStage
from actions_inventory.pipeline_stages.parser import PyYAMLParser, YAMLParser


class ReferenceParser(ProcessStage[str, List[str]]):
    """
    Extracts the ``uses:`` references of a workflow's steps.

    References are returned in document order, duplicates included. Steps
    without ``uses``, jobs without ``steps`` and local references
    (``./path/to/action``) are left out.
    """

    def __init__(self, yaml_parser: Optional[YAMLParser] = None) -> None:
        self.yaml_parser = yaml_parser or PyYAMLParser()

    def process(self, input: str, source: Optional[str] = None) -> List[str]:
        """Parse workflow text and list its external action references.

        Args:
            input: Raw workflow YAML.
            source: Workflow path, used in error messages.

        Returns:
            List[str]: Raw references in document order.

        Raises:
            MalformedDocument: If the workflow is not valid YAML or does not
                have the expected jobs/steps shape.
        """
        document = WorkflowDocument.from_dict(self.yaml_parser.parse(input, source), source)
        return [
            step.uses
            for job in document.jobs
            for step in job.steps
            if step.uses and not is_local_reference(step.uses)
        ]
