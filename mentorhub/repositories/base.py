"""Generic async repository with pagination."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Row, delete, func, select, update
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from mentorhub.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository keyed on the integer ``id`` column."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        return await self._session.get(self.model, entity_id)

    async def exists(self, entity_id: int) -> bool:
        result = await self._session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none() is not None

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: ColumnElement | None = None,
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination and optional column filters.

        ``order_by`` is a column expression chosen by the caller, never a
        request-supplied name.
        """
        q = select(self.model)

        # Apply simple equality filters
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)

        # Count
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        # Order + paginate
        if order_by is not None:
            q = q.order_by(order_by, self.model.id.desc())
        q = q.offset(offset).limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: int, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        if not kwargs:
            return await self.get_by_id(entity_id)

        await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**kwargs)
            .execution_options(synchronize_session=False)
        )
        await self._session.flush()
        instance = await self.get_by_id(entity_id)
        if instance is not None:
            await self._session.refresh(instance)
        return instance

    async def delete(self, entity_id: int) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0


def flatten_row(row: Row) -> dict[str, Any]:
    """Flatten an ``(Entity, label, label, ...)`` result row into one dict.

    Entity columns come first so labelled values can extend them.
    """
    out: dict[str, Any] = {}
    for key, value in row._mapping.items():
        if isinstance(value, Base):
            mapper = sa_inspect(value).mapper
            out.update({attr.key: getattr(value, attr.key) for attr in mapper.column_attrs})
        else:
            out[key] = value
    return out
