# school_api/services/course_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, func, delete
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .department_service import DepartmentService
from .validators import ensure_unique
from ..core.constants import EntityName, EnrollmentStatus, GRADE_POINTS, LetterGrade
from ..core.exceptions import BadRequestError, ExistsError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.class_model import ClassRoom
from ..models.course import Course, CoursePrerequisite
from ..models.enrollment import Enrollment
from ..schemas.course_schemas import CourseCreate, CourseQuery, CourseUpdate, PrerequisiteCreate

logger = logging.getLogger(__name__)


class CourseService(BaseService[Course]):
    entity_name = EntityName.COURSE
    soft_delete = False

    def __init__(self, db: AsyncSession):
        super().__init__(Course, db)
        self.departments = DepartmentService(db)

    async def is_name_available(self, name: str, id: Optional[UUID] = None,
                                uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "name", name, id, uow)

    async def is_code_available(self, code: str, id: Optional[UUID] = None,
                                uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "code", code, id, uow)

    async def create(self, dto: CourseCreate, uow: Optional[UnitOfWork] = None) -> Course:
        await self.is_name_available(dto.name, uow=uow)
        await self.is_code_available(dto.code, uow=uow)
        await self.departments.verify_department_exists(dto.department_id)

        course = await self.save(Course(**dto.model_dump()), uow)
        logger.info(f"Created course {course.code}")
        return course

    async def update(self, id: UUID, dto: CourseUpdate) -> Course:
        course = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)

        if values.get("name") and values["name"] != course.name:
            await self.is_name_available(values["name"], id)
        if values.get("code") and values["code"] != course.code:
            await self.is_code_available(values["code"], id)
        if values.get("department_id"):
            await self.departments.verify_department_exists(values["department_id"])

        return await self.update_fields(course, values)

    async def delete(self, id: UUID) -> None:
        """Hard-delete a course no class is built on"""
        course = await self.get_one_or_throw(id=id)
        stmt = select(func.count()).select_from(ClassRoom).where(
            ClassRoom.course_id == id, ClassRoom.is_deleted == False
        )
        classes = (await self.db.execute(stmt)).scalar_one()
        if classes > 0:
            logger.warning(f"Refusing to delete course {course.code}: {classes} class(es)")
            raise BadRequestError(
                f"Cannot delete the course as it is associated with {classes} class(es). "
                "Please remove or reassign the classes first."
            )

        async with UnitOfWork(self.db) as uow:
            await uow.session.execute(
                delete(CoursePrerequisite).where(
                    (CoursePrerequisite.course_id == id) | (CoursePrerequisite.prerequisite_id == id)
                )
            )
            await super().delete(course, uow)
        logger.info(f"Deleted course {course.code}")

    def _criteria(self, query: CourseQuery) -> list:
        criteria = []
        if query.name:
            criteria.append(func.lower(Course.name).like(f"%{query.name.lower()}%"))
        if query.code:
            criteria.append(func.lower(Course.code).like(f"%{query.code.lower()}%"))
        if query.department_id:
            criteria.append(Course.department_id == query.department_id)
        if query.status:
            criteria.append(Course.status == query.status.value)
        return criteria

    async def get_courses(self, query: CourseQuery) -> Dict[str, Any]:
        column = getattr(Course, query.sort_by)
        order = column.desc() if query.sort_order == "desc" else column.asc()
        return await self.get_paginated(query, *self._criteria(query), order_by=[order])

    async def get_department_courses(self, department_id: UUID, query: CourseQuery) -> Dict[str, Any]:
        await self.departments.verify_department_exists(department_id)
        query = query.model_copy(update={"department_id": department_id})
        return await self.get_courses(query)

    # Prerequisites

    async def add_prerequisite(self, course_id: UUID, dto: PrerequisiteCreate) -> CoursePrerequisite:
        if course_id == dto.prerequisite_id:
            raise BadRequestError(EntityName.PREREQUISITE, "A course cannot be a prerequisite of itself")
        await self.get_one_or_throw(id=course_id)
        await self.get_one_or_throw(id=dto.prerequisite_id)

        existing = await self.db.execute(
            select(CoursePrerequisite).where(
                CoursePrerequisite.course_id == course_id,
                CoursePrerequisite.prerequisite_id == dto.prerequisite_id,
            )
        )
        if existing.scalars().first():
            raise ExistsError(EntityName.PREREQUISITE)

        link = CoursePrerequisite(course_id=course_id, **dto.model_dump())
        self.db.add(link)
        await self.db.commit()
        logger.info(f"Course {course_id} now requires {dto.prerequisite_id}")
        return await self._get_prerequisite(link.id)

    async def remove_prerequisite(self, course_id: UUID, prerequisite_id: UUID) -> None:
        result = await self.db.execute(
            delete(CoursePrerequisite).where(
                CoursePrerequisite.course_id == course_id,
                CoursePrerequisite.prerequisite_id == prerequisite_id,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(EntityName.PREREQUISITE, {"course_id": course_id, "prerequisite_id": prerequisite_id})
        await self.db.commit()

    async def _get_prerequisite(self, id: UUID) -> CoursePrerequisite:
        result = await self.db.execute(
            select(CoursePrerequisite)
            .where(CoursePrerequisite.id == id)
            .options(selectinload(CoursePrerequisite.prerequisite))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def get_prerequisites(self, course_id: UUID) -> List[CoursePrerequisite]:
        await self.get_one_or_throw(id=course_id)
        result = await self.db.execute(
            select(CoursePrerequisite)
            .where(CoursePrerequisite.course_id == course_id, CoursePrerequisite.is_deleted == False)
            .options(selectinload(CoursePrerequisite.prerequisite))
            .order_by(CoursePrerequisite.created_at)
        )
        return list(result.scalars().all())

    async def check_prerequisites(self, course_id: UUID, student_id: UUID) -> Dict[str, Any]:
        """Required prerequisites the student has not completed with the minimum grade"""
        unmet = []
        for prereq in await self.get_prerequisites(course_id):
            if not prereq.is_required:
                continue

            result = await self.db.execute(
                select(Enrollment)
                .join(ClassRoom, Enrollment.class_id == ClassRoom.id)
                .where(
                    Enrollment.student_id == student_id,
                    ClassRoom.course_id == prereq.prerequisite_id,
                    Enrollment.status == EnrollmentStatus.COMPLETED.value,
                )
            )
            completed = result.scalars().all()
            if not completed:
                unmet.append({"prerequisite": prereq.prerequisite, "reason": "Course not completed"})
                continue

            if prereq.min_grade:
                required = GRADE_POINTS[LetterGrade(prereq.min_grade)]
                best = max(
                    (GRADE_POINTS[LetterGrade(e.grade)] for e in completed if e.grade),
                    default=None,
                )
                if best is not None and best < required:
                    unmet.append({
                        "prerequisite": prereq.prerequisite,
                        "reason": f"Grade does not meet minimum requirement of {prereq.min_grade}",
                    })

        return {"has_met_prerequisites": not unmet, "unmet_prerequisites": unmet}
