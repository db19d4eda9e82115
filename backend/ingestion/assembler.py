"""Record assembly: classification outputs plus provenance."""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from ingestion.classifiers.category import determine_category
from ingestion.classifiers.complexity import determine_complexity
from ingestion.classifiers.tags import extract_tags
from ingestion.classifiers.trigger import extract_trigger_type
from ingestion.documents import NodeTypeSignal, WorkflowDocument
from ingestion.synthesizer import derive_name, generate_description


@dataclass
class TemplateRecord:
    """One storable template row.

    Attributes mirror the `templates` table; json_template is the
    original document, kept verbatim.
    """

    name: str
    platform: str
    category: str
    description: str
    node_count: int
    complexity: str
    trigger_type: str
    source: str
    source_repo: str
    source_filename: str
    tags: list[str] = field(default_factory=list)
    json_template: Optional[dict] = None

    def to_row(self) -> dict[str, Any]:
        # Shallow: json_template is passed through as parsed, not deep-copied
        return {f.name: getattr(self, f.name) for f in fields(self)}


def build_record(
    document: WorkflowDocument,
    relative_path: str,
    *,
    platform: str,
    source: str,
    source_repo: str,
    signal: Optional[NodeTypeSignal] = None,
) -> Optional[TemplateRecord]:
    """Classify a gated document and attach provenance.

    Args:
        document: Document accepted by the gate
        relative_path: Path of the file relative to the corpus root
        platform: Platform the corpus targets
        source: Provenance key for this run
        source_repo: Repository the corpus came from
        signal: Node-type signal, if the gate already derived it

    Returns:
        The record, or None when no name can be derived
    """
    filename = relative_path.rsplit("/", 1)[-1]
    name = derive_name(document.name, filename)
    if not name:
        return None

    if signal is None:
        signal = document.node_type_signal()

    tags = extract_tags(signal)
    node_count = document.node_count

    return TemplateRecord(
        name=name,
        platform=platform,
        category=determine_category(signal),
        description=generate_description(tags, node_count, platform),
        node_count=node_count,
        complexity=determine_complexity(node_count).value,
        trigger_type=extract_trigger_type(document.nodes),
        source=source,
        source_repo=source_repo,
        source_filename=relative_path,
        tags=tags,
        json_template=document.raw,
    )
