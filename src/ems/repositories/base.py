"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar - SQLModel/SQLAlchemy query
        offset: int,
        limit: int,
        order_by: Any,
    ) -> tuple[list[ModelType], int]:
        """Execute offset-based pagination on a query.

        Args:
            query: The filtered base query
            offset: Number of matching rows to skip
            limit: Maximum number of rows to return
            order_by: Column giving a stable total order (normally the primary key)

        Returns:
            Tuple of (items, total) where total counts every matching row,
            ignoring offset and limit.
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await self.session.execute(count_query)).scalar_one()

        page_query = query.order_by(order_by).offset(offset).limit(limit)
        result = await self.session.execute(page_query)
        return list(result.scalars().all()), total
