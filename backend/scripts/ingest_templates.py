"""Ingest an n8n workflow corpus into the `templates` table.

The corpus must already be present at CORPUS_DIR (e.g. a shallow clone
of the template repository). Existing rows for SOURCE_ID and its legacy
aliases are replaced.

Run: python -m scripts.ingest_templates

Options (env vars):
    MAX_WORKFLOWS=500   Limit records for a test run (default: unlimited)
    BATCH_SIZE=50       Records per insert (default: 50)
    MAX_JSON_BYTES      Skip workflows whose JSON exceeds this size
"""

import asyncio
import sys
import os

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog  # noqa: E402

logger = structlog.get_logger("ingest_templates")


def log_report(report) -> None:
    """Log the final run report, one event per section."""
    counters = report.counters
    logger.info(
        "Ingestion report",
        elapsed_s=round(report.elapsed_seconds, 1),
        scanned=counters.files_scanned,
        built=counters.built,
        inserted=counters.inserted,
        batch_errors=counters.batch_errors,
        cleared=counters.cleared,
        total_in_store=report.total_in_store,
        **{f"skipped_{reason}": count for reason, count in counters.skipped_by_reason().items()},
    )
    logger.info("Category breakdown", categories=dict(report.categories))
    logger.info("Top tags", tags=dict(report.top_tags))


async def ingest() -> int:
    """Run one corpus ingestion; return the process exit status."""
    from app.config import get_settings
    from core.exceptions import IngestionError
    from core.logging_config import setup_logging
    from db.database import store_session
    from ingestion.pipeline import run_ingestion
    from services.template_service import TemplateService

    settings = get_settings()
    setup_logging(settings)

    try:
        settings.validate_store_credentials()
        options = settings.ingestion_options()
        async with store_session(settings) as session:
            report = await run_ingestion(TemplateService(session), options)
    except IngestionError as e:
        logger.error("Ingestion aborted", error=e.message, exit_code=e.exit_code)
        return e.exit_code

    log_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(ingest()))
