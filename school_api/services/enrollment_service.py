# school_api/services/enrollment_service.py
"""Enrollment registration, status tracking and removal."""
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID
from sqlalchemy import select, func, or_, delete
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .class_service import ClassService
from .course_service import CourseService
from .student_service import StudentService
from ..core.constants import EntityName, EnrollmentStatus
from ..core.exceptions import BadRequestError
from ..core.unit_of_work import UnitOfWork
from ..models.attendance import Attendance
from ..models.class_model import ClassRoom
from ..models.enrollment import Enrollment
from ..models.grade import Grade
from ..models.student import Student
from ..schemas.enrollment_schemas import EnrollmentDrop, EnrollmentQuery, EnrollmentRegister, EnrollmentUpdate

logger = logging.getLogger(__name__)


def history_entry(status: str, reason: str) -> Dict[str, Any]:
    return {"status": status, "date": datetime.now(timezone.utc).isoformat(), "reason": reason}


class EnrollmentService(BaseService[Enrollment]):
    entity_name = EntityName.ENROLLMENT
    soft_delete = False

    def __init__(self, db: AsyncSession):
        super().__init__(Enrollment, db)
        self.students = StudentService(db)
        self.classes = ClassService(db)
        self.courses = CourseService(db)

    async def is_enrollment_available(self, student_id: UUID, class_id: UUID,
                                      uow: Optional[UnitOfWork] = None) -> bool:
        """Raise if the student already holds an enrollment in the class"""
        existing = await self.get_one(student_id=student_id, class_id=class_id, uow=uow)
        if existing:
            raise BadRequestError(EntityName.ENROLLMENT, "Student is already enrolled in this class")
        return True

    async def active_count(self, class_id: UUID) -> int:
        """Enrollments that hold a seat, i.e. anything not DROPPED"""
        return await self.classes.enrollment_count(class_id, seats_only=True)

    async def validate_enrollment_eligibility(self, student_id: UUID, class_id: UUID) -> ClassRoom:
        await self.students.get_one_or_throw(id=student_id)
        class_ = await self.classes.get_one_or_throw(id=class_id)

        await self.is_enrollment_available(student_id, class_id)

        if class_.max_enrollment and await self.active_count(class_id) >= class_.max_enrollment:
            raise BadRequestError(EntityName.ENROLLMENT, "Class has reached maximum enrollment capacity")

        if class_.course_id:
            check = await self.courses.check_prerequisites(class_.course_id, student_id)
            if not check["has_met_prerequisites"]:
                unmet = ", ".join(
                    f"{item['prerequisite'].code}: {item['reason']}" for item in check["unmet_prerequisites"]
                )
                raise BadRequestError(
                    EntityName.ENROLLMENT,
                    f"Student does not meet prerequisites for this course: {unmet}",
                )
        return class_

    async def register(self, student_id: UUID, dto: EnrollmentRegister) -> Enrollment:
        """Enroll a student in a class.

        The duplicate check and the insert are separate statements; under
        concurrent requests the unique (student_id, class_id) constraint
        rejects the loser, which surfaces as ``ExistsError``.
        """
        logger.info(f"Registering student {student_id} for class {dto.class_id}")
        await self.validate_enrollment_eligibility(student_id, dto.class_id)

        enrollment = Enrollment(
            student_id=student_id,
            class_id=dto.class_id,
            enrollment_date=date.today(),
            status=EnrollmentStatus.ACTIVE.value,
            notes=dto.notes,
            status_history=[history_entry(EnrollmentStatus.ACTIVE.value, "Initial enrollment")],
        )
        enrollment = await self.save(enrollment)
        logger.info(f"Student {student_id} enrolled in class {dto.class_id}")
        return enrollment

    async def update(self, id: UUID, student_id: UUID, dto: EnrollmentUpdate) -> Enrollment:
        enrollment = await self.get_one_or_throw(id=id, student_id=student_id)
        values = dto.model_dump(exclude_unset=True)

        status = values.get("status")
        if status and status != enrollment.status:
            # JSON columns only detect reassignment
            enrollment.status_history = [
                *(enrollment.status_history or []),
                history_entry(status, values.get("reason") or "Status updated"),
            ]
            enrollment.status = status
            if status == EnrollmentStatus.COMPLETED.value:
                enrollment.completion_date = date.today()
            logger.info(f"Enrollment {id} moved to {status}")

        if "notes" in values:
            enrollment.notes = values["notes"]
        if "grade" in values:
            enrollment.grade = values["grade"]

        return await self.save(enrollment)

    async def drop(self, id: UUID, student_id: UUID, dto: EnrollmentDrop) -> Enrollment:
        logger.info(f"Student {student_id} dropping enrollment {id}")
        return await self.update(
            id, student_id, EnrollmentUpdate(status=EnrollmentStatus.DROPPED, reason=dto.reason)
        )

    async def purge(self, *criteria, uow: Optional[UnitOfWork] = None) -> None:
        """Hard-delete matching enrollments with their attendance and grade records"""
        session = self.get_repository(uow)
        enrollment_ids = select(Enrollment.id).where(*criteria)
        for model in (Attendance, Grade):
            await session.execute(delete(model).where(model.enrollment_id.in_(enrollment_ids)))
        await session.execute(delete(Enrollment).where(*criteria))
        await self._persist(session, None, uow)

    async def delete(self, student_id: UUID, enrollment_id: UUID) -> None:
        """Remove one of the student's enrollments.

        Both ids are part of the lookup, so an enrollment belonging to another
        student is reported as not found.
        """
        enrollment = await self.get_one_or_throw(id=enrollment_id, student_id=student_id)
        await self.purge(Enrollment.id == enrollment.id)
        self.db.expunge(enrollment)
        logger.info(f"Deleted enrollment {enrollment_id} of student {student_id}")

    @staticmethod
    def relations_for(query: EnrollmentQuery) -> List[str]:
        relations = []
        if query.include_attendances:
            relations.append("attendances")
        if query.include_class:
            relations.append("class_.course")
        return relations

    async def get_enrollments(self, query: EnrollmentQuery) -> Dict[str, Any]:
        criteria = []
        if query.student_id:
            criteria.append(Enrollment.student_id == query.student_id)
        if query.class_id:
            criteria.append(Enrollment.class_id == query.class_id)
        if query.status:
            criteria.append(Enrollment.status == query.status.value)
        if query.start_date:
            criteria.append(Enrollment.enrollment_date >= query.start_date)
        if query.end_date:
            criteria.append(Enrollment.enrollment_date <= query.end_date)
        if query.course_id:
            criteria.append(Enrollment.class_id.in_(
                select(ClassRoom.id).where(ClassRoom.course_id == query.course_id)
            ))
        if query.q:
            pattern = f"%{query.q.lower()}%"
            criteria.append(Enrollment.student_id.in_(
                select(Student.id).where(or_(
                    func.lower(Student.first_name).like(pattern),
                    func.lower(Student.last_name).like(pattern),
                ))
            ))

        return await self.get_paginated(
            query,
            *criteria,
            relations=self.relations_for(query),
            order_by=[Enrollment.enrollment_date.desc(), Enrollment.created_at.desc()],
        )

    async def get_enrollment_by_id(self, id: UUID, relations: Sequence[str] = ()) -> Enrollment:
        return await self.get_one_or_throw(id=id, relations=relations)
