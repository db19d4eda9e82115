"""Workflow document model.

Parsed workflow JSON is loosely shaped: every field is optional and may
carry any JSON type. WorkflowDocument wraps the raw value and checks
presence and type at each access so the classifiers never assume a
field exists.
"""

from dataclasses import dataclass
from typing import Any, Optional

# Ordered node `type` strings of one document; sole classifier input
NodeTypeSignal = tuple[str, ...]


def _string_field(obj: Any, key: str) -> Optional[str]:
    if isinstance(obj, dict):
        value = obj.get(key)
        if isinstance(value, str):
            return value
    return None


@dataclass(frozen=True)
class WorkflowNode:
    """One element of a workflow's `nodes` array."""

    type: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "WorkflowNode":
        return cls(type=_string_field(raw, "type"), name=_string_field(raw, "name"))


@dataclass(frozen=True)
class WorkflowDocument:
    """A parsed candidate workflow.

    Attributes:
        raw: The parsed JSON object, kept verbatim for storage
        nodes: Typed view over raw["nodes"]
    """

    raw: dict
    nodes: tuple[WorkflowNode, ...]

    @classmethod
    def from_json(cls, value: Any) -> Optional["WorkflowDocument"]:
        """Wrap parsed JSON, or return None if it is not plausibly a workflow.

        A workflow is an object whose `nodes` property is a non-empty array.
        """
        if not isinstance(value, dict):
            return None
        nodes = value.get("nodes")
        if not isinstance(nodes, list) or not nodes:
            return None
        return cls(raw=value, nodes=tuple(WorkflowNode.from_raw(n) for n in nodes))

    @property
    def name(self) -> Optional[str]:
        """Declared workflow name, if it is a string."""
        return _string_field(self.raw, "name")

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def node_type_signal(self) -> NodeTypeSignal:
        """Non-empty node types in document order."""
        return tuple(node.type for node in self.nodes if node.type)
