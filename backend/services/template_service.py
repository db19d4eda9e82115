"""Template store: the operations the ingestion loader and seeder need."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from db.models.template import Template
from services.base import BaseService

logger = logging.getLogger(__name__)


class TemplateStore(ABC):
    """Interface of a persistent templates store.

    Implementations raise core.exceptions.StoreError when an
    operation fails.
    """

    @abstractmethod
    async def delete_by_source(self, source: str) -> int:
        """Delete every template tagged with a source key; return the count deleted."""
        ...

    @abstractmethod
    async def insert_batch(self, rows: Sequence[dict[str, Any]]) -> int:
        """Insert a batch of template rows atomically; return the count inserted."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Total number of templates in the store."""
        ...

    @abstractmethod
    async def count_by_platform(self, platform: str) -> int:
        """Number of templates for one platform."""
        ...


class TemplateService(BaseService[Template], TemplateStore):
    """SQLAlchemy-backed templates store."""

    def __init__(self, db: AsyncSession):
        super().__init__(Template, db)

    async def delete_by_source(self, source: str) -> int:
        deleted = await self.delete_where({"source": source})
        logger.debug("Deleted %d templates for source=%s", deleted, source)
        return deleted

    async def insert_batch(self, rows: Sequence[dict[str, Any]]) -> int:
        return await self.insert_many(rows)

    async def count(self) -> int:
        return await self.count_where()

    async def count_by_platform(self, platform: str) -> int:
        return await self.count_where({"platform": platform})

    async def list_by_source(self, source: str) -> Sequence[Template]:
        """All templates for a source key, oldest first."""
        return await self.list_where({"source": source})
