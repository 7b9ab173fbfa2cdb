# school_api/services/class_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .course_service import CourseService
from .room_service import RoomService
from .semester_service import SemesterService
from ..core.constants import DayOfWeek, EnrollmentStatus, EntityName
from ..core.exceptions import BadRequestError, ExistsError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.class_model import ClassRoom, ClassAssignment
from ..models.enrollment import Enrollment
from ..models.student import Student
from ..models.teacher import Teacher
from ..schemas.class_schemas import AssignTeacher, ClassCreate, ClassQuery, ClassRoom as ClassRoomSchema, ClassUpdate

logger = logging.getLogger(__name__)


class ClassAssignmentService(BaseService[ClassAssignment]):
    entity_name = EntityName.CLASS_ASSIGNMENT

    def __init__(self, db: AsyncSession):
        super().__init__(ClassAssignment, db)


class ClassService(BaseService[ClassRoom]):
    entity_name = EntityName.CLASS

    def __init__(self, db: AsyncSession):
        super().__init__(ClassRoom, db)
        self.courses = CourseService(db)
        self.semesters = SemesterService(db)
        self.rooms = RoomService(db)
        self.assignments = ClassAssignmentService(db)

    async def _check_references(self, values: Dict[str, Any], class_id: Optional[UUID] = None,
                                current: Optional[ClassRoom] = None) -> None:
        """Referenced course, semester and room exist and the room is free in that slot"""
        if values.get("course_id"):
            await self.courses.get_one_or_throw(id=values["course_id"])
        if values.get("semester_id"):
            await self.semesters.get_one_or_throw(id=values["semester_id"])

        def pick(field):
            if field in values:
                return values[field]
            return getattr(current, field) if current is not None else None

        room_id = pick("room_id")
        if values.get("room_id"):
            await self.rooms.get_one_or_throw(id=room_id)

        day, start, end = pick("day_of_week"), pick("start_time"), pick("end_time")
        if start and end and start >= end:
            raise BadRequestError(EntityName.CLASS, "start_time must be before end_time")
        if room_id and day and start and end:
            available = await self.rooms.is_room_available(room_id, DayOfWeek(day), start, end, class_id)
            if not available:
                raise BadRequestError(EntityName.CLASS, "Room is already booked for that time slot")

    async def create(self, dto: ClassCreate) -> ClassRoom:
        values = dto.model_dump()
        await self._check_references(values)
        class_ = await self.save(ClassRoom(**values))
        logger.info(f"Created class {class_.name} ({class_.id})")
        return class_

    async def update(self, id: UUID, dto: ClassUpdate) -> ClassRoom:
        class_ = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)
        await self._check_references(values, class_id=id, current=class_)
        return await self.update_fields(class_, values)

    async def enrollment_count(self, id: UUID, seats_only: bool = False) -> int:
        """Enrollments in the class; with ``seats_only`` DROPPED ones are left out"""
        stmt = select(func.count()).select_from(Enrollment).where(
            Enrollment.class_id == id, Enrollment.is_deleted == False
        )
        if seats_only:
            stmt = stmt.where(Enrollment.status != EnrollmentStatus.DROPPED.value)
        return (await self.db.execute(stmt)).scalar_one()

    async def delete(self, id: UUID) -> None:
        class_ = await self.get_one_or_throw(id=id)
        enrollments = await self.enrollment_count(id)
        if enrollments > 0:
            logger.warning(f"Refusing to delete class {id}: {enrollments} enrollment(s)")
            raise BadRequestError(
                f"Cannot delete class with {enrollments} enrollments. Remove enrollments first."
            )
        async with UnitOfWork(self.db) as uow:
            await self.assignments.delete_where(ClassAssignment.class_id == id, uow=uow)
            await super().delete(class_, uow)
        logger.info(f"Deleted class {id}")

    async def get_classes(self, query: ClassQuery) -> Dict[str, Any]:
        criteria = []
        if query.name:
            criteria.append(func.lower(ClassRoom.name).like(f"%{query.name.lower()}%"))
        for field in ("course_id", "semester_id", "room_id", "grade_level", "section"):
            value = getattr(query, field)
            if value is not None:
                criteria.append(getattr(ClassRoom, field) == value)
        if query.day_of_week:
            criteria.append(ClassRoom.day_of_week == query.day_of_week.value)
        if query.status:
            criteria.append(ClassRoom.status == query.status.value)

        column = getattr(ClassRoom, query.sort_by)
        order = column.desc() if query.sort_order == "desc" else column.asc()
        return await self.get_paginated(query, *criteria, order_by=[order])

    async def get_class_details(self, id: UUID) -> Dict[str, Any]:
        """Class with enrollment count, free seats and assigned teachers"""
        class_ = await self.get_one_or_throw(id=id)
        enrollment_count = await self.enrollment_count(id, seats_only=True)
        details = ClassRoomSchema.model_validate(class_).model_dump()
        details.update(
            enrollment_count=enrollment_count,
            available_seats=max(class_.max_enrollment - enrollment_count, 0),
            teachers=await self.get_class_teachers(id, verify=False),
        )
        return details

    async def assign_teacher(self, id: UUID, dto: AssignTeacher) -> ClassAssignment:
        await self.get_one_or_throw(id=id)
        teacher = await self.db.execute(
            select(Teacher).where(Teacher.id == dto.teacher_id, Teacher.is_deleted == False)
        )
        if teacher.scalars().first() is None:
            raise NotFoundError(EntityName.TEACHER, {"id": dto.teacher_id})

        existing = await self.assignments.get_one(class_id=id, teacher_id=dto.teacher_id)
        if existing:
            raise ExistsError(EntityName.CLASS_ASSIGNMENT)

        assignment = await self.assignments.save(ClassAssignment(class_id=id, **dto.model_dump()))
        logger.info(f"Assigned teacher {dto.teacher_id} to class {id}")
        return assignment

    async def remove_teacher(self, id: UUID, teacher_id: UUID) -> None:
        assignment = await self.assignments.get_one_or_throw(class_id=id, teacher_id=teacher_id)
        # Hard delete so the teacher can be assigned again later
        await self.db.execute(delete(ClassAssignment).where(ClassAssignment.id == assignment.id))
        await self.db.commit()
        logger.info(f"Removed teacher {teacher_id} from class {id}")

    async def get_class_teachers(self, id: UUID, verify: bool = True) -> List[Dict[str, Any]]:
        if verify:
            await self.get_one_or_throw(id=id)
        result = await self.db.execute(
            select(ClassAssignment, Teacher)
            .join(Teacher, ClassAssignment.teacher_id == Teacher.id)
            .where(ClassAssignment.class_id == id, ClassAssignment.is_deleted == False)
            .order_by(Teacher.last_name)
        )
        return [
            {
                "assignment_id": assignment.id,
                "teacher_id": teacher.id,
                "name": teacher.full_name,
                "email": teacher.email,
                "start_date": assignment.start_date,
                "end_date": assignment.end_date,
            }
            for assignment, teacher in result.all()
        ]

    async def get_enrolled_students(self, id: UUID) -> List[Dict[str, Any]]:
        await self.get_one_or_throw(id=id)
        result = await self.db.execute(
            select(Enrollment, Student)
            .join(Student, Enrollment.student_id == Student.id)
            .where(Enrollment.class_id == id, Enrollment.is_deleted == False)
            .order_by(Student.last_name, Student.first_name)
        )
        return [
            {
                "enrollment_id": enrollment.id,
                "student_id": student.id,
                "name": student.full_name,
                "email": student.email,
                "enrollment_date": enrollment.enrollment_date,
                "status": enrollment.status,
                "grade": enrollment.grade,
            }
            for enrollment, student in result.all()
        ]
