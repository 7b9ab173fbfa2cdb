from sqlalchemy.orm import as_declarative, declared_attr
from sqlalchemy.orm import mapped_column
from sqlalchemy import DateTime, Boolean, Index, Uuid, func, text
import uuid


@as_declarative()
class Base:
    __abstract__ = True  # Prevents creating a table for the base class

    # Server-generated timestamps are fetched back with the INSERT/UPDATE
    __mapper_args__ = {"eager_defaults": True}

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    id = mapped_column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Soft delete: live rows have is_deleted = False
    is_deleted = mapped_column(Boolean, default=False, nullable=False, index=True)
    deleted_at = mapped_column(DateTime(timezone=True), nullable=True)


def live_unique_index(name: str, *columns: str) -> Index:
    """Unique index over live (not soft-deleted) rows only"""
    return Index(
        name,
        *columns,
        unique=True,
        postgresql_where=text("is_deleted = false"),
        sqlite_where=text("is_deleted = 0"),
    )
