"""Batch loader: replace a source's templates in bounded, isolated batches.

Store calls are awaited one at a time so batches land in order and the
store's write path sees at most one request in flight.
"""

import asyncio
import time
from typing import Iterable, Optional, Sequence

import structlog

from core.exceptions import StoreError
from ingestion.assembler import TemplateRecord
from ingestion.counters import RunCounters
from services.template_service import TemplateStore

logger = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_BATCH_DELAY = 0.03
LOG_FIRST_ERRORS = 3
PROGRESS_EVERY_BATCHES = 10


class BatchLoader:
    """Writes template records for one run into a TemplateStore."""

    def __init__(
        self,
        store: TemplateStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        log_first_errors: int = LOG_FIRST_ERRORS,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.store = store
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.log_first_errors = log_first_errors

    async def clear(self, sources: Iterable[str]) -> int:
        """Delete existing rows for each source key.

        A failed delete is logged and skipped; the run goes on with
        whatever stale rows survived.

        Returns:
            Total number of rows deleted
        """
        sources = list(dict.fromkeys(sources))
        total = 0
        for source in sources:
            try:
                deleted = await self.store.delete_by_source(source)
            except StoreError as e:
                logger.warning("Could not clear source", source=source, error=e.message)
                continue
            total += deleted

        logger.info("Cleared old records", cleared=total, sources=sources)
        return total

    def batches(self, records: Sequence[TemplateRecord]) -> list[Sequence[TemplateRecord]]:
        return [records[i:i + self.batch_size] for i in range(0, len(records), self.batch_size)]

    async def write(self, records: Sequence[TemplateRecord], counters: RunCounters) -> RunCounters:
        """Insert records batch by batch.

        A failing batch is counted and skipped; later batches are still
        attempted. Only the first few failures are logged in detail.
        """
        batches = self.batches(records)
        total_batches = len(batches)
        started = time.monotonic()

        logger.info(
            "Inserting records",
            records=len(records),
            batch_size=self.batch_size,
            batches=total_batches,
        )

        for number, batch in enumerate(batches, start=1):
            try:
                inserted = await self.store.insert_batch([record.to_row() for record in batch])
            except StoreError as e:
                counters.batch_errors += 1
                if counters.batch_errors <= self.log_first_errors:
                    logger.error(
                        "Batch insert failed",
                        batch=number,
                        total_batches=total_batches,
                        error=e.message,
                    )
            else:
                counters.inserted += inserted

            if number % PROGRESS_EVERY_BATCHES == 0 or number == total_batches:
                logger.info(
                    "Insert progress",
                    percent=round(number / total_batches * 100),
                    inserted=counters.inserted,
                    batch_errors=counters.batch_errors,
                    elapsed_s=round(time.monotonic() - started, 1),
                )

            if number < total_batches and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

        if counters.batch_errors > self.log_first_errors:
            logger.error(
                "Further batch failures not logged individually",
                batch_errors=counters.batch_errors,
            )
        return counters

    async def total_count(self) -> Optional[int]:
        """Best-effort count of all rows in the store."""
        try:
            return await self.store.count()
        except StoreError as e:
            logger.warning("Could not count templates", error=e.message)
            return None
