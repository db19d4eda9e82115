"""Corpus ingestion run: walk, gate, classify, assemble, then load.

Phases run in this order:

1. Build: pull files from the walker until the corpus is exhausted or
   the optional record cap is reached.
2. Clear: delete prior rows for the run's source key and legacy aliases.
3. Write: insert the built records in batches.
4. Report: count the store and summarize the run.

Fatal preconditions (missing corpus, nothing buildable) are raised before
the clear phase, so an aborted run never touches the store.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import structlog

from core.constants import Platform, SkipReason
from core.exceptions import CorpusNotFoundError, NoRecordsFoundError
from ingestion.assembler import TemplateRecord, build_record
from ingestion.counters import RunCounters, RunReport
from ingestion.gate import DEFAULT_MAX_JSON_BYTES, inspect_file
from ingestion.loader import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE, BatchLoader
from ingestion.walker import walk_json_files
from services.template_service import TemplateStore

logger = structlog.get_logger(__name__)

PROGRESS_EVERY_RECORDS = 500


@dataclass(frozen=True)
class IngestionOptions:
    """Run parameters for one corpus ingestion."""

    root: Union[str, Path]
    source: str
    source_repo: str = ""
    platform: str = Platform.N8N.value
    legacy_sources: tuple[str, ...] = field(default_factory=tuple)
    max_records: Optional[int] = None
    batch_size: int = DEFAULT_BATCH_SIZE
    max_json_bytes: int = DEFAULT_MAX_JSON_BYTES
    batch_delay: float = DEFAULT_BATCH_DELAY

    @property
    def sources_to_clear(self) -> tuple[str, ...]:
        return (self.source, *self.legacy_sources)


def build_records(options: IngestionOptions) -> tuple[list[TemplateRecord], RunCounters]:
    """Build phase: turn the corpus into template records.

    Returns:
        Tuple of (records, counters)
    """
    root = Path(options.root)
    counters = RunCounters()
    records: list[TemplateRecord] = []

    for path in walk_json_files(root):
        if options.max_records is not None and len(records) >= options.max_records:
            break

        counters.files_scanned += 1
        result = inspect_file(path, max_bytes=options.max_json_bytes)
        if not result.accepted:
            counters.record_skip(result.skip_reason)
            continue

        record = build_record(
            result.document,
            path.relative_to(root).as_posix(),
            platform=options.platform,
            source=options.source,
            source_repo=options.source_repo,
            signal=result.signal,
        )
        if record is None:
            counters.record_skip(SkipReason.EMPTY_NAME)
            continue

        records.append(record)
        counters.built += 1
        if counters.built % PROGRESS_EVERY_RECORDS == 0:
            logger.info("Parse progress", built=counters.built, scanned=counters.files_scanned)

    logger.info(
        "Parsed workflows",
        built=counters.built,
        scanned=counters.files_scanned,
        **counters.skipped_by_reason(),
    )
    return records, counters


async def run_ingestion(store: TemplateStore, options: IngestionOptions) -> RunReport:
    """Replace the templates of `options.source` with a fresh ingestion of the corpus.

    Raises:
        CorpusNotFoundError: The corpus root is not a directory
        NoRecordsFoundError: The walk produced no buildable records
    """
    started = time.monotonic()
    root = Path(options.root)
    if not root.is_dir():
        raise CorpusNotFoundError(f"Corpus directory not found: {root}")

    logger.info("Ingestion starting", root=str(root), source=options.source)

    records, counters = build_records(options)
    if not records:
        raise NoRecordsFoundError(f"No valid workflow JSONs found under {root}")

    loader = BatchLoader(store, batch_size=options.batch_size, batch_delay=options.batch_delay)
    counters.cleared = await loader.clear(options.sources_to_clear)
    await loader.write(records, counters)
    total = await loader.total_count()

    report = RunReport.from_records(
        counters,
        records,
        total_in_store=total,
        elapsed_seconds=time.monotonic() - started,
    )
    logger.info(
        "Ingestion complete",
        inserted=counters.inserted,
        built=counters.built,
        batch_errors=counters.batch_errors,
        total_in_store=total,
    )
    return report
