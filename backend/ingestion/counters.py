"""Per-run counters and the final run report."""

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Optional

from core.constants import SkipReason

TOP_TAGS_LIMIT = 15


@dataclass
class RunCounters:
    """Monotonic counters for a single ingestion run.

    Every scanned file ends up in exactly one skip counter or in `built`.
    """

    files_scanned: int = 0
    skipped_not_workflow: int = 0
    skipped_too_large: int = 0
    skipped_bad_json: int = 0
    skipped_empty_name: int = 0
    built: int = 0
    cleared: int = 0
    inserted: int = 0
    batch_errors: int = 0

    def record_skip(self, reason: SkipReason) -> None:
        if reason is SkipReason.NOT_A_WORKFLOW:
            self.skipped_not_workflow += 1
        elif reason is SkipReason.TOO_LARGE:
            self.skipped_too_large += 1
        elif reason is SkipReason.BAD_JSON:
            self.skipped_bad_json += 1
        elif reason is SkipReason.EMPTY_NAME:
            self.skipped_empty_name += 1
        else:
            raise ValueError(f"Unknown skip reason: {reason!r}")

    @property
    def skipped(self) -> int:
        return (
            self.skipped_not_workflow
            + self.skipped_too_large
            + self.skipped_bad_json
            + self.skipped_empty_name
        )

    def skipped_by_reason(self) -> dict[str, int]:
        return {
            SkipReason.NOT_A_WORKFLOW.value: self.skipped_not_workflow,
            SkipReason.TOO_LARGE.value: self.skipped_too_large,
            SkipReason.BAD_JSON.value: self.skipped_bad_json,
            SkipReason.EMPTY_NAME.value: self.skipped_empty_name,
        }

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class RunReport:
    """What a run saw, rejected, attempted and persisted."""

    counters: RunCounters
    total_in_store: Optional[int] = None
    elapsed_seconds: float = 0.0
    categories: list[tuple[str, int]] = field(default_factory=list)
    top_tags: list[tuple[str, int]] = field(default_factory=list)

    @classmethod
    def from_records(cls, counters: RunCounters, records: Iterable[Any], **kwargs) -> "RunReport":
        """Build a report with category and tag breakdowns, most frequent first."""
        categories: Counter = Counter()
        tags: Counter = Counter()
        for record in records:
            categories[record.category] += 1
            tags.update(record.tags)
        return cls(
            counters=counters,
            categories=categories.most_common(),
            top_tags=tags.most_common(TOP_TAGS_LIMIT),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.counters.to_dict(),
            "skipped_by_reason": self.counters.skipped_by_reason(),
            "total_in_store": self.total_in_store,
            "elapsed_seconds": round(self.elapsed_seconds, 1),
            "categories": dict(self.categories),
            "top_tags": dict(self.top_tags),
        }
