# school_api/services/base_service.py
"""Base service with common CRUD operations."""
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete as sql_delete, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from typing import Type, Any, Dict, Optional, List, Sequence, Tuple, TypeVar, Generic
import logging

from ..core.constants import EntityName
from ..core.exceptions import NotFoundError, ExistsError
from ..core.unit_of_work import UnitOfWork
from ..utils.pagination import PaginationParams, Paginator

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar('T')


def is_unique_violation(error: IntegrityError) -> bool:
    """True for unique-constraint failures (SQLSTATE 23505 on PostgreSQL)"""
    orig = error.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    return "unique constraint" in str(orig).lower()


class BaseService(Generic[T]):
    """Repository wrapper shared by every domain service.

    Reads only ever see live rows (``is_deleted == False``). Writes take an
    optional :class:`UnitOfWork`; without one each write commits on its own.
    Subclasses set ``entity_name`` (used in error codes) and ``soft_delete``
    (whether :meth:`delete` marks the row or removes it).
    """

    entity_name: EntityName
    soft_delete: bool = True

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    def get_repository(self, uow: Optional[UnitOfWork] = None) -> AsyncSession:
        """Session of the ambient unit of work, else the request session"""
        return uow.session if uow is not None else self.db

    # Reads

    def _live(self, stmt):
        return stmt.where(self.model.is_deleted == False)

    def _relation_options(self, relations: Sequence[str]) -> list:
        """selectinload options for relation names, dotted names load nested relations"""
        options = []
        for path in relations:
            names = path.split(".")
            attr = getattr(self.model, names[0])
            loader = selectinload(attr)
            for name in names[1:]:
                attr = getattr(attr.property.mapper.class_, name)
                loader = loader.selectinload(attr)
            options.append(loader)
        return options

    def _filtered(self, stmt, criteria, filters: Dict[str, Any]):
        stmt = self._live(stmt)
        if criteria:
            stmt = stmt.where(*criteria)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    async def get_one(
        self,
        *criteria,
        relations: Sequence[str] = (),
        uow: Optional[UnitOfWork] = None,
        **filters
    ) -> Optional[T]:
        stmt = self._filtered(select(self.model), criteria, filters)
        if relations:
            # Refresh rows already in the session so the relations get loaded
            stmt = stmt.options(*self._relation_options(relations)).execution_options(populate_existing=True)
        result = await self.get_repository(uow).execute(stmt)
        return result.scalars().first()

    async def get_one_or_throw(
        self,
        *criteria,
        relations: Sequence[str] = (),
        uow: Optional[UnitOfWork] = None,
        **filters
    ) -> T:
        obj = await self.get_one(*criteria, relations=relations, uow=uow, **filters)
        if obj is None:
            raise NotFoundError(self.entity_name, filters)
        return obj

    async def get(self, id: Any, uow: Optional[UnitOfWork] = None) -> Optional[T]:
        return await self.get_one(uow=uow, id=id)

    async def count(self, *criteria, uow: Optional[UnitOfWork] = None, **filters) -> int:
        stmt = self._filtered(select(func.count()).select_from(self.model), criteria, filters)
        result = await self.get_repository(uow).execute(stmt)
        return result.scalar_one()

    async def find_and_count(
        self,
        *criteria,
        relations: Sequence[str] = (),
        skip: int = 0,
        take: Optional[int] = None,
        order_by: Sequence[Any] = (),
        uow: Optional[UnitOfWork] = None,
        **filters
    ) -> Tuple[List[T], int]:
        """One page of live rows plus the total number of matches"""
        total = await self.count(*criteria, uow=uow, **filters)

        stmt = self._filtered(select(self.model), criteria, filters)
        if relations:
            stmt = stmt.options(*self._relation_options(relations)).execution_options(populate_existing=True)
        stmt = stmt.order_by(*order_by) if order_by else stmt.order_by(self.model.created_at.desc())
        stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)

        result = await self.get_repository(uow).execute(stmt)
        return list(result.scalars().all()), total

    async def get_paginated(
        self,
        params: PaginationParams,
        *criteria,
        relations: Sequence[str] = (),
        order_by: Sequence[Any] = (),
        **filters
    ) -> Dict[str, Any]:
        """Get paginated results as ``{results, count, page, page_size, total_pages}``"""
        items, total = await self.find_and_count(
            *criteria,
            relations=relations,
            skip=params.skip,
            take=params.page_size,
            order_by=order_by,
            **filters
        )
        return Paginator.create_response(items, total, params)

    # Writes

    async def _persist(self, session: AsyncSession, obj: Optional[T], uow: Optional[UnitOfWork]) -> None:
        """Flush inside a unit of work, else commit on its own.

        Unique violations become ``ExistsError``; any other integrity error
        (NOT NULL, foreign key) propagates unchanged.
        """
        try:
            if uow is not None:
                await session.flush()
                return
            await session.commit()
        except IntegrityError as e:
            if uow is None:
                await session.rollback()
            if not is_unique_violation(e):
                logger.error(f"Integrity error saving {self.entity_name.value}: {e.orig}")
                raise
            logger.warning(f"Duplicate {self.entity_name.value}: {e.orig}")
            raise ExistsError(self.entity_name)
        if obj is not None:
            await session.refresh(obj)

    async def save(self, obj: T, uow: Optional[UnitOfWork] = None) -> T:
        session = self.get_repository(uow)
        session.add(obj)
        await self._persist(session, obj, uow)
        return obj

    async def create(self, obj_in: Dict[str, Any], uow: Optional[UnitOfWork] = None) -> T:
        return await self.save(self.model(**obj_in), uow)

    async def update_fields(self, obj: T, values: Dict[str, Any], uow: Optional[UnitOfWork] = None) -> T:
        for key, value in values.items():
            setattr(obj, key, value)
        return await self.save(obj, uow)

    async def delete(self, obj: T, uow: Optional[UnitOfWork] = None) -> None:
        """Soft or hard delete depending on the service's ``soft_delete`` flag"""
        session = self.get_repository(uow)
        if self.soft_delete:
            obj.is_deleted = True
            obj.deleted_at = datetime.now(timezone.utc)
            await self._persist(session, obj, uow)
            return

        await session.execute(sql_delete(self.model).where(self.model.id == obj.id))
        session.expunge(obj)
        await self._persist(session, None, uow)

    async def update_where(self, *criteria, values: Dict[str, Any], uow: Optional[UnitOfWork] = None) -> int:
        """Bulk update of live rows"""
        session = self.get_repository(uow)
        stmt = (
            sql_update(self.model)
            .where(self.model.is_deleted == False, *criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        await self._persist(session, None, uow)
        return result.rowcount

    async def delete_where(self, *criteria, uow: Optional[UnitOfWork] = None) -> int:
        """Bulk delete of dependent rows, soft or hard as configured"""
        if self.soft_delete:
            return await self.update_where(
                *criteria, values={"is_deleted": True, "deleted_at": datetime.now(timezone.utc)}, uow=uow
            )
        session = self.get_repository(uow)
        result = await session.execute(
            sql_delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        )
        await self._persist(session, None, uow)
        return result.rowcount
