# school_api/services/validators.py
"""Uniqueness checks shared by every service."""
from typing import Any, Optional
from uuid import UUID
import logging

from ..core.exceptions import ExistsError
from ..core.unit_of_work import UnitOfWork
from .base_service import BaseService

logger = logging.getLogger(__name__)


async def ensure_unique(
    service: BaseService,
    field: str,
    value: Any,
    exclude_id: Optional[UUID] = None,
    uow: Optional[UnitOfWork] = None,
) -> bool:
    """Raise ``ExistsError`` if a live row other than ``exclude_id`` holds ``value``.

    The lookup and the later insert are separate statements, so two concurrent
    requests can both pass; the unique index on the column rejects the second
    insert and ``BaseService.save`` reports it as ``ExistsError`` too.
    """
    if value is None:
        return True

    criteria = [getattr(service.model, field) == value]
    if exclude_id is not None:
        criteria.append(service.model.id != exclude_id)

    existing = await service.get_one(*criteria, uow=uow)
    if existing is not None:
        logger.info(f"{service.entity_name.value}.{field} already taken: {value!r}")
        raise ExistsError(service.entity_name)
    return True
