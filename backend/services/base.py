"""Base service with bulk write and counting helpers.

Store services inherit from this. Every write runs in its own
transaction: it is committed on success and rolled back on failure,
so one failed batch never poisons the next one.
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import uuid4

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StoreError
from db.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseService(Generic[ModelType]):
    """Generic bulk service for any SQLAlchemy model.

    Usage:
        class TemplateService(BaseService[Template]):
            def __init__(self, db: AsyncSession):
                super().__init__(Template, db)
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    def _apply_filters(self, query, filters: Optional[dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    col = getattr(self.model, field)
                    if isinstance(value, (list, tuple)):
                        query = query.where(col.in_(value))
                    else:
                        query = query.where(col == value)
        return query

    # ─── Read ──────────────────────────────────────────────

    async def count_where(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Count records matching equality filters."""
        query = self._apply_filters(select(func.count()).select_from(self.model), filters)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(str(e), operation="count") from e
        return result.scalar() or 0

    async def list_where(
        self,
        filters: Optional[dict[str, Any]] = None,
        order_by: str = "created_at",
    ) -> Sequence[ModelType]:
        """List records matching equality filters."""
        query = self._apply_filters(select(self.model), filters)
        if hasattr(self.model, order_by):
            query = query.order_by(getattr(self.model, order_by).asc())
        result = await self.db.execute(query)
        return result.scalars().all()

    # ─── Create ────────────────────────────────────────────

    async def insert_many(self, rows: Sequence[dict[str, Any]]) -> int:
        """Insert rows in a single transaction.

        Args:
            rows: Dicts of field values

        Returns:
            Number of rows inserted
        """
        if not rows:
            return 0

        values = [{"id": str(uuid4()), **row} if "id" not in row else dict(row) for row in rows]
        try:
            await self.db.execute(insert(self.model), values)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e), operation="insert") from e
        return len(values)

    # ─── Delete ────────────────────────────────────────────

    async def delete_where(self, filters: dict[str, Any]) -> int:
        """Permanently delete every record matching the filters.

        Returns:
            Number of rows deleted
        """
        if not filters:
            raise ValueError("delete_where requires at least one filter")

        query = self._apply_filters(delete(self.model), filters)
        try:
            result = await self.db.execute(query)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e), operation="delete") from e
        return result.rowcount or 0
