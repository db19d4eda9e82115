"""Seed the hand-authored Make.com and Zapier templates.

Run: python -m scripts.seed_templates
"""

import asyncio
import sys
import os

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog  # noqa: E402

logger = structlog.get_logger("seed_templates")


async def seed() -> int:
    """Seed every platform set, then log the library summary."""
    from app.config import get_settings
    from core.constants import Platform
    from core.exceptions import IngestionError, StoreError
    from core.logging_config import setup_logging
    from db.database import store_session
    from ingestion.seeds import SEED_SETS, run_seed
    from services.template_service import TemplateService

    settings = get_settings()
    setup_logging(settings)

    try:
        settings.validate_store_credentials()
        async with store_session(settings) as session:
            store = TemplateService(session)
            for seed_set in SEED_SETS:
                report = await run_seed(store, seed_set, batch_size=settings.BATCH_SIZE)
                logger.info(
                    "Seed set done",
                    platform=seed_set.platform,
                    inserted=report.counters.inserted,
                    built=report.counters.built,
                    categories=dict(report.categories),
                )

            try:
                summary = {p.value: await store.count_by_platform(p.value) for p in Platform}
                summary["total"] = await store.count()
            except StoreError as e:
                logger.warning("Could not summarize template library", error=e.message)
            else:
                logger.info("Template library summary", **summary)
    except IngestionError as e:
        logger.error("Seeding aborted", error=e.message, exit_code=e.exit_code)
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed()))
