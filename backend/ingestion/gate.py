"""Document gate: decide whether a candidate file is worth classifying.

Malformed input is a data condition, not an error: every rejection is
reported as exactly one SkipReason and nothing is raised.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.constants import SkipReason
from ingestion.documents import NodeTypeSignal, WorkflowDocument

DEFAULT_MAX_JSON_BYTES = 400_000

# JSON files that live alongside workflows but are never workflows
SKIP_FILENAMES = frozenset({
    "package.json",
    "package-lock.json",
    "tsconfig.json",
    "composer.json",
    ".eslintrc.json",
    "manifest.json",
})


def _reject_constant(token: str):
    """NaN and Infinity are not JSON; refuse them like any other syntax error."""
    raise ValueError(f"Invalid JSON constant: {token}")


@dataclass(frozen=True)
class GateResult:
    """Outcome of inspecting one file: a document or a skip reason."""

    document: Optional[WorkflowDocument] = None
    signal: NodeTypeSignal = ()
    skip_reason: Optional[SkipReason] = None

    @property
    def accepted(self) -> bool:
        return self.document is not None

    @classmethod
    def skip(cls, reason: SkipReason) -> "GateResult":
        return cls(skip_reason=reason)


def inspect_file(path: Path, max_bytes: int = DEFAULT_MAX_JSON_BYTES) -> GateResult:
    """Run the gate checks in order; the first failing check decides."""
    basename = path.name
    if basename in SKIP_FILENAMES or basename.startswith("."):
        return GateResult.skip(SkipReason.NOT_A_WORKFLOW)

    try:
        data = path.read_bytes()
    except OSError:
        return GateResult.skip(SkipReason.BAD_JSON)

    # Size is checked on raw bytes so oversized inputs are never parsed
    if len(data) > max_bytes:
        return GateResult.skip(SkipReason.TOO_LARGE)

    try:
        parsed = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        return GateResult.skip(SkipReason.BAD_JSON)

    document = WorkflowDocument.from_json(parsed)
    if document is None:
        return GateResult.skip(SkipReason.NOT_A_WORKFLOW)

    return GateResult(document=document, signal=document.node_type_signal())
