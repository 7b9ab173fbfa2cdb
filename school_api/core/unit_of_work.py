# school_api/core/unit_of_work.py
"""Scoped transaction shared by multi-entity writes."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Groups several writes into one commit.

    Services receive the unit of work as an optional ``uow`` argument. Writes
    made through it are flushed only; the block that opened it commits on a
    clean exit and rolls back if anything raised::

        async with UnitOfWork(db) as uow:
            student = await students.save(Student(...), uow)
            await users.create(dto, uow)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.session.commit()
        else:
            logger.warning(f"Rolling back unit of work: {exc_type.__name__}")
            await self.session.rollback()

    async def flush(self) -> None:
        await self.session.flush()
