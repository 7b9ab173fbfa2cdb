# school_api/services/attendance_service.py
from typing import Any, Dict
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .enrollment_service import EnrollmentService
from ..core.constants import EntityName
from ..models.attendance import Attendance
from ..schemas.attendance_schemas import AttendanceCreate, AttendanceQuery, AttendanceUpdate

logger = logging.getLogger(__name__)


class AttendanceService(BaseService[Attendance]):
    entity_name = EntityName.ATTENDANCE

    def __init__(self, db: AsyncSession):
        super().__init__(Attendance, db)
        self.enrollments = EnrollmentService(db)

    async def create(self, dto: AttendanceCreate) -> Attendance:
        """Record attendance for an existing enrollment"""
        await self.enrollments.get_one_or_throw(id=dto.enrollment_id)
        attendance = await self.save(Attendance(**dto.model_dump()))
        logger.info(f"Attendance {attendance.status} on {attendance.attendance_date} for enrollment {dto.enrollment_id}")
        return attendance

    async def get_attendances(self, query: AttendanceQuery) -> Dict[str, Any]:
        criteria = []
        if query.enrollment_id:
            criteria.append(Attendance.enrollment_id == query.enrollment_id)
        if query.status:
            criteria.append(Attendance.status == query.status.value)
        if query.start_date:
            criteria.append(Attendance.attendance_date >= query.start_date)
        if query.end_date:
            criteria.append(Attendance.attendance_date <= query.end_date)
        return await self.get_paginated(query, *criteria, order_by=[Attendance.attendance_date.desc()])

    async def update(self, id: UUID, dto: AttendanceUpdate) -> Attendance:
        attendance = await self.get_one_or_throw(id=id)
        return await self.update_fields(attendance, dto.model_dump(exclude_unset=True))

    async def remove(self, id: UUID) -> None:
        attendance = await self.get_one_or_throw(id=id)
        await self.delete(attendance)
