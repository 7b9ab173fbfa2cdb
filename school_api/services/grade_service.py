# school_api/services/grade_service.py
from typing import Any, Dict
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .enrollment_service import EnrollmentService
from ..core.constants import EntityName
from ..models.grade import Grade
from ..schemas.grade_schemas import GradeCreate, GradeUpdate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class GradeService(BaseService[Grade]):
    entity_name = EntityName.GRADE

    def __init__(self, db: AsyncSession):
        super().__init__(Grade, db)
        self.enrollments = EnrollmentService(db)

    async def create(self, dto: GradeCreate) -> Grade:
        await self.enrollments.get_one_or_throw(id=dto.enrollment_id)
        grade = await self.save(Grade(**dto.model_dump()))
        logger.info(f"Recorded grade {grade.assignment_name} for enrollment {dto.enrollment_id}")
        return grade

    async def get_enrollment_grades(self, enrollment_id: UUID, params: PaginationParams) -> Dict[str, Any]:
        await self.enrollments.get_one_or_throw(id=enrollment_id)
        return await self.get_paginated(params, enrollment_id=enrollment_id, order_by=[Grade.grade_date.desc()])

    async def update(self, id: UUID, dto: GradeUpdate) -> Grade:
        grade = await self.get_one_or_throw(id=id)
        return await self.update_fields(grade, dto.model_dump(exclude_unset=True))

    async def remove(self, id: UUID) -> None:
        grade = await self.get_one_or_throw(id=id)
        await self.delete(grade)
