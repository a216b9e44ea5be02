"""Base repository: primary-key lookup, staging and keyset pages."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.matchboard.core.exceptions import InvalidInputError
from src.matchboard.schemas.pagination import decode_cursor, encode_cursor


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Data access for one table.

    Repositories stage changes on the session but never commit; the service
    that owns the unit of work does.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        return await self.session.get(self.model, id)

    def add(self, entity: ModelType) -> None:
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def flush(self) -> None:
        await self.session.flush()

    async def count_where(self, *criteria: Any) -> int:
        query = select(func.count()).select_from(self.model).where(*criteria)
        return int((await self.session.execute(query)).scalar_one())

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Run ``query`` newest first, one page at a time.

        Rows are ordered by (created_at, id) descending, so rows sharing a
        timestamp are neither skipped nor repeated across pages.

        Returns:
            Tuple of (items, next_cursor, has_more)

        Raises:
            InvalidInputError: ``cursor`` is not one this method issued
        """
        created_at = self.model.created_at  # type: ignore[attr-defined]
        row_id = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                after_created, after_id = decode_cursor(cursor)
            except ValueError as e:
                raise InvalidInputError("Invalid pagination cursor") from e
            query = query.where(
                or_(
                    created_at < after_created,
                    and_(created_at == after_created, row_id < after_id),
                )
            )

        query = query.order_by(created_at.desc(), row_id.desc()).limit(limit + 1)
        items = list((await self.session.execute(query)).scalars().all())

        has_more = len(items) > limit
        del items[limit:]

        next_cursor = None
        if has_more:
            last = items[-1]
            next_cursor = encode_cursor(last.created_at, last.id)  # type: ignore[attr-defined]
        return items, next_cursor, has_more
