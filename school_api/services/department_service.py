# school_api/services/department_service.py
from typing import Any, Dict, Optional
from uuid import UUID
from sqlalchemy import func, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .teacher_service import TeacherService
from .validators import ensure_unique
from ..core.constants import EntityName
from ..core.exceptions import BadRequestError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.department import Department
from ..models.teacher import teacher_departments
from ..schemas.department_schemas import DepartmentCreate, DepartmentUpdate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class DepartmentService(BaseService[Department]):
    entity_name = EntityName.DEPARTMENT

    def __init__(self, db: AsyncSession):
        super().__init__(Department, db)
        self.teachers = TeacherService(db)

    async def is_name_available(self, name: str, id: Optional[UUID] = None,
                                uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "name", name, id, uow)

    async def is_code_available(self, code: str, id: Optional[UUID] = None,
                                uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "code", code, id, uow)

    async def verify_department_exists(self, id: UUID) -> Department:
        return await self.get_one_or_throw(id=id)

    async def _verify_head(self, head_id: Optional[UUID]) -> None:
        if head_id is not None:
            await self.teachers.get_one_or_throw(id=head_id)

    async def create(self, dto: DepartmentCreate, uow: Optional[UnitOfWork] = None) -> Department:
        await self.is_name_available(dto.name, uow=uow)
        await self.is_code_available(dto.code, uow=uow)
        await self._verify_head(dto.head_id)

        department = await self.save(Department(**dto.model_dump()), uow)
        logger.info(f"Created department {department.name} ({department.code})")
        return department

    async def update(self, id: UUID, dto: DepartmentUpdate) -> Department:
        department = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)

        if values.get("name") and values["name"] != department.name:
            await self.is_name_available(values["name"], id)
        if values.get("code") and values["code"] != department.code:
            await self.is_code_available(values["code"], id)
        if "head_id" in values:
            await self._verify_head(values["head_id"])

        return await self.update_fields(department, values)

    async def remove(self, id: UUID) -> None:
        """Soft-delete a department that has no teachers and no courses left"""
        department = await self.get_one_or_throw(id=id, relations=["teachers", "courses"])

        teachers = [t for t in department.teachers if not t.is_deleted]
        courses = [c for c in department.courses if not c.is_deleted]
        if teachers or courses:
            logger.warning(
                f"Refusing to delete department {department.name}: "
                f"{len(teachers)} teacher(s), {len(courses)} course(s)"
            )
            raise BadRequestError("Cannot delete department with associated teachers or courses")

        await self.delete(department)
        logger.info(f"Deleted department {department.name}")

    async def get_departments(self, params: PaginationParams, q: Optional[str] = None) -> Dict[str, Any]:
        criteria = []
        if q:
            pattern = f"%{q.lower()}%"
            criteria.append(func.lower(Department.name).like(pattern) | func.lower(Department.code).like(pattern))
        return await self.get_paginated(params, *criteria, order_by=[Department.name.asc()])

    async def get_department(self, id: UUID, include_teachers: bool = False,
                             include_courses: bool = False) -> Department:
        relations = []
        if include_teachers:
            relations.append("teachers")
        if include_courses:
            relations.append("courses")
        return await self.get_one_or_throw(id=id, relations=relations)

    async def add_teacher(self, id: UUID, teacher_id: UUID) -> None:
        await self.get_one_or_throw(id=id)
        await self.teachers.get_one_or_throw(id=teacher_id)

        stmt = select(func.count()).select_from(teacher_departments).where(
            teacher_departments.c.department_id == id,
            teacher_departments.c.teacher_id == teacher_id,
        )
        if (await self.db.execute(stmt)).scalar_one():
            raise BadRequestError(EntityName.DEPARTMENT, "Teacher already belongs to this department")

        await self.db.execute(insert(teacher_departments).values(department_id=id, teacher_id=teacher_id))
        await self.db.commit()
        logger.info(f"Added teacher {teacher_id} to department {id}")

    async def remove_teacher(self, id: UUID, teacher_id: UUID) -> None:
        department = await self.get_one_or_throw(id=id)
        result = await self.db.execute(
            delete(teacher_departments).where(
                teacher_departments.c.department_id == id,
                teacher_departments.c.teacher_id == teacher_id,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(EntityName.TEACHER, {"department_id": id, "teacher_id": teacher_id})

        # A teacher leaving the department can no longer head it
        if department.head_id == teacher_id:
            department.head_id = None
        await self.db.commit()
        logger.info(f"Removed teacher {teacher_id} from department {id}")
