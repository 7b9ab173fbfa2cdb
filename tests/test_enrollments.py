"""Enrollment registration, status history, drop and removal."""
import uuid
from datetime import date

import pytest
from sqlalchemy import select

from school_api.core.constants import EnrollmentStatus, LetterGrade
from school_api.core.exceptions import BadRequestError, NotFoundError
from school_api.models.attendance import Attendance
from school_api.models.enrollment import Enrollment
from school_api.schemas.attendance_schemas import AttendanceCreate
from school_api.schemas.class_schemas import ClassCreate
from school_api.schemas.course_schemas import CourseCreate, PrerequisiteCreate
from school_api.schemas.enrollment_schemas import (
    EnrollmentDrop, EnrollmentQuery, EnrollmentRegister, EnrollmentUpdate
)
from school_api.services.attendance_service import AttendanceService
from school_api.services.class_service import ClassService
from school_api.services.course_service import CourseService
from school_api.services.enrollment_service import EnrollmentService
from school_api.services.student_service import StudentService


# =============================================================================
# Registration
# =============================================================================

async def test_register_twice_fails_second_time(db, student, class_room):
    service = EnrollmentService(db)

    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    assert enrollment.status == EnrollmentStatus.ACTIVE.value
    assert enrollment.enrollment_date == date.today()
    assert enrollment.status_history[0]["status"] == "ACTIVE"
    assert enrollment.status_history[0]["reason"] == "Initial enrollment"

    with pytest.raises(BadRequestError) as exc_info:
        await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    assert exc_info.value.code == "enrollment_bad_request"


async def test_register_unknown_student_or_class(db, student, class_room):
    service = EnrollmentService(db)

    with pytest.raises(NotFoundError) as exc_info:
        await service.register(uuid.uuid4(), EnrollmentRegister(class_id=class_room.id))
    assert exc_info.value.code == "student_not_found"

    with pytest.raises(NotFoundError) as exc_info:
        await service.register(student.id, EnrollmentRegister(class_id=uuid.uuid4()))
    assert exc_info.value.code == "class_not_found"


async def test_register_refused_when_class_full(db, student, other_student, course, semester):
    class_ = await ClassService(db).create(
        ClassCreate(name="Seminar", course_id=course.id, semester_id=semester.id, max_enrollment=1)
    )
    service = EnrollmentService(db)
    await service.register(student.id, EnrollmentRegister(class_id=class_.id))

    with pytest.raises(BadRequestError) as exc_info:
        await service.register(other_student.id, EnrollmentRegister(class_id=class_.id))
    assert "maximum enrollment" in exc_info.value.detail


async def test_dropped_enrollment_frees_a_seat(db, student, other_student, course, semester):
    class_ = await ClassService(db).create(
        ClassCreate(name="Seminar", course_id=course.id, semester_id=semester.id, max_enrollment=1)
    )
    service = EnrollmentService(db)
    first = await service.register(student.id, EnrollmentRegister(class_id=class_.id))
    await service.drop(first.id, student.id, EnrollmentDrop(reason="Schedule conflict"))

    second = await service.register(other_student.id, EnrollmentRegister(class_id=class_.id))
    assert second.status == "ACTIVE"


async def test_class_details_count_seats_like_registration(db, student, course, semester):
    classes = ClassService(db)
    class_ = await classes.create(
        ClassCreate(name="Seminar", course_id=course.id, semester_id=semester.id, max_enrollment=1)
    )
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_.id))

    details = await classes.get_class_details(class_.id)
    assert details["available_seats"] == 0

    await service.drop(enrollment.id, student.id, EnrollmentDrop())

    details = await classes.get_class_details(class_.id)
    assert details["enrollment_count"] == 0
    assert details["available_seats"] == 1


# =============================================================================
# Status history
# =============================================================================

async def test_update_appends_history_and_completes(db, student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))

    updated = await service.update(
        enrollment.id, student.id,
        EnrollmentUpdate(status=EnrollmentStatus.COMPLETED, grade=LetterGrade.B_PLUS),
    )

    assert updated.status == "COMPLETED"
    assert updated.grade == "B_PLUS"
    assert updated.completion_date == date.today()
    assert [h["status"] for h in updated.status_history] == ["ACTIVE", "COMPLETED"]
    assert updated.status_history[-1]["reason"] == "Status updated"


async def test_drop_records_reason(db, student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))

    dropped = await service.drop(enrollment.id, student.id, EnrollmentDrop(reason="Moved away"))

    assert dropped.status == "DROPPED"
    assert dropped.status_history[-1] == {
        "status": "DROPPED",
        "date": dropped.status_history[-1]["date"],
        "reason": "Moved away",
    }


async def test_same_status_does_not_add_history(db, student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))

    updated = await service.update(enrollment.id, student.id, EnrollmentUpdate(status="ACTIVE", notes="Front row"))

    assert len(updated.status_history) == 1
    assert updated.notes == "Front row"


async def test_update_of_other_students_enrollment_not_found(db, student, other_student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))

    with pytest.raises(NotFoundError):
        await service.drop(enrollment.id, other_student.id, EnrollmentDrop())


# =============================================================================
# Removal
# =============================================================================

async def test_delete_requires_owning_student(db, student, other_student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))

    with pytest.raises(NotFoundError) as exc_info:
        await service.delete(other_student.id, enrollment.id)
    assert exc_info.value.code == "enrollment_not_found"

    assert await service.get(enrollment.id) is not None


async def test_delete_removes_enrollment_and_attendance(db, student, class_room):
    service = EnrollmentService(db)
    enrollment = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    await AttendanceService(db).create(
        AttendanceCreate(enrollment_id=enrollment.id, attendance_date=date.today(), status="PRESENT")
    )

    await service.delete(student.id, enrollment.id)

    assert (await db.execute(select(Enrollment).where(Enrollment.id == enrollment.id))).first() is None
    remaining = await db.execute(select(Attendance).where(Attendance.enrollment_id == enrollment.id))
    assert remaining.first() is None

    # The pair can be registered again
    again = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    assert again.id != enrollment.id


async def test_student_delete_removes_enrollments(db, student, class_room):
    enrollment = await EnrollmentService(db).register(student.id, EnrollmentRegister(class_id=class_room.id))

    await StudentService(db).delete(student.id)

    assert (await db.execute(select(Enrollment).where(Enrollment.id == enrollment.id))).first() is None
    assert await StudentService(db).get(student.id) is None


# =============================================================================
# Listing
# =============================================================================

async def test_get_enrollments_filters_and_expands(db, student, other_student, class_room):
    service = EnrollmentService(db)
    mine = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    await service.register(other_student.id, EnrollmentRegister(class_id=class_room.id))

    page = await service.get_enrollments(
        EnrollmentQuery(student_id=student.id, include_class=True, include_attendances=True)
    )

    assert page["count"] == 1
    assert page["results"][0].id == mine.id
    assert page["results"][0].class_.course.code == "MA101"
    assert page["results"][0].attendances == []


async def test_get_enrollments_by_course_and_name(db, student, other_student, class_room):
    service = EnrollmentService(db)
    await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    await service.register(other_student.id, EnrollmentRegister(class_id=class_room.id))

    by_course = await service.get_enrollments(EnrollmentQuery(course_id=class_room.course_id))
    by_name = await service.get_enrollments(EnrollmentQuery(q="turing"))

    assert by_course["count"] == 2
    assert by_name["count"] == 1
    assert by_name["results"][0].student_id == other_student.id


# =============================================================================
# Prerequisites
# =============================================================================

@pytest.fixture
async def advanced_class(db, course, department, semester):
    """Class of a course requiring Algebra I with at least a C"""
    courses = CourseService(db)
    advanced = await courses.create(CourseCreate(name="Algebra II", code="MA201", department_id=department.id))
    await courses.add_prerequisite(advanced.id, PrerequisiteCreate(prerequisite_id=course.id, min_grade="C"))
    return await ClassService(db).create(
        ClassCreate(name="Algebra II - A", course_id=advanced.id, semester_id=semester.id)
    )


async def test_register_refused_without_prerequisite(db, student, advanced_class):
    with pytest.raises(BadRequestError) as exc_info:
        await EnrollmentService(db).register(student.id, EnrollmentRegister(class_id=advanced_class.id))
    assert "prerequisites" in exc_info.value.detail
    assert "MA101" in exc_info.value.detail


async def test_register_refused_below_minimum_grade(db, student, class_room, advanced_class):
    service = EnrollmentService(db)
    base = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    await service.update(base.id, student.id, EnrollmentUpdate(status="COMPLETED", grade="D"))

    with pytest.raises(BadRequestError):
        await service.register(student.id, EnrollmentRegister(class_id=advanced_class.id))


async def test_register_allowed_once_prerequisite_completed(db, student, class_room, advanced_class):
    service = EnrollmentService(db)
    base = await service.register(student.id, EnrollmentRegister(class_id=class_room.id))
    await service.update(base.id, student.id, EnrollmentUpdate(status="COMPLETED", grade="B"))

    enrollment = await service.register(student.id, EnrollmentRegister(class_id=advanced_class.id))
    assert enrollment.status == "ACTIVE"
