# school_api/services/room_service.py
from datetime import time
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .validators import ensure_unique
from ..core.constants import DayOfWeek, EntityName, RecordStatus
from ..core.exceptions import BadRequestError
from ..core.unit_of_work import UnitOfWork
from ..models.class_model import ClassRoom
from ..models.room import Room
from ..schemas.room_schemas import RoomCreate, RoomQuery, RoomUpdate

logger = logging.getLogger(__name__)


class RoomService(BaseService[Room]):
    entity_name = EntityName.ROOM
    soft_delete = False

    def __init__(self, db: AsyncSession):
        super().__init__(Room, db)

    async def is_room_number_available(self, room_number: str, id: Optional[UUID] = None,
                                       uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "room_number", room_number, id, uow)

    async def create(self, dto: RoomCreate, uow: Optional[UnitOfWork] = None) -> Room:
        await self.is_room_number_available(dto.room_number, uow=uow)
        room = await self.save(Room(**dto.model_dump()), uow)
        logger.info(f"Created room {room.room_number}")
        return room

    async def update(self, id: UUID, dto: RoomUpdate) -> Room:
        room = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)
        if values.get("room_number") and values["room_number"] != room.room_number:
            await self.is_room_number_available(values["room_number"], id)
        return await self.update_fields(room, values)

    async def _class_count(self, id: UUID) -> int:
        stmt = select(func.count()).select_from(ClassRoom).where(
            ClassRoom.room_id == id, ClassRoom.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalar_one()

    async def delete(self, id: UUID) -> None:
        room = await self.get_one_or_throw(id=id)
        classes = await self._class_count(id)
        if classes > 0:
            logger.warning(f"Refusing to delete room {room.room_number}: {classes} class(es) assigned")
            raise BadRequestError(
                f"Cannot delete room with {classes} class(es) assigned. Please reassign classes first."
            )
        await super().delete(room)
        logger.info(f"Deleted room {room.room_number}")

    async def get_rooms(self, query: RoomQuery) -> Dict[str, Any]:
        criteria = []
        if query.building:
            criteria.append(func.lower(Room.building).like(f"%{query.building.lower()}%"))
        if query.room_type:
            criteria.append(Room.room_type == query.room_type.value)
        if query.status:
            criteria.append(Room.status == query.status.value)
        if query.min_capacity is not None:
            criteria.append(Room.capacity >= query.min_capacity)
        if query.has_projector is not None:
            criteria.append(Room.has_projector == query.has_projector)
        return await self.get_paginated(query, *criteria, order_by=[Room.room_number.asc()])

    async def get_schedule(self, id: UUID) -> List[ClassRoom]:
        """Classes held in the room, by day and start time"""
        await self.get_one_or_throw(id=id)
        stmt = (
            select(ClassRoom)
            .where(ClassRoom.room_id == id, ClassRoom.is_deleted == False)
            .order_by(ClassRoom.day_of_week, ClassRoom.start_time)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def is_room_available(
        self,
        room_id: UUID,
        day_of_week: DayOfWeek,
        start_time: time,
        end_time: time,
        exclude_class_id: Optional[UUID] = None,
    ) -> bool:
        """True if no other class uses the room in an overlapping slot that day"""
        await self.get_one_or_throw(id=room_id, status=RecordStatus.ACTIVE.value)
        stmt = select(func.count()).select_from(ClassRoom).where(
            ClassRoom.room_id == room_id,
            ClassRoom.is_deleted == False,
            ClassRoom.day_of_week == day_of_week.value,
            ClassRoom.start_time < end_time,
            ClassRoom.end_time > start_time,
        )
        if exclude_class_id is not None:
            stmt = stmt.where(ClassRoom.id != exclude_class_id)
        return (await self.db.execute(stmt)).scalar_one() == 0
