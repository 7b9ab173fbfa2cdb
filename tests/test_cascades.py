"""Deletes that are refused while dependent rows exist."""
import pytest

from school_api.core.exceptions import BadRequestError, NotFoundError
from school_api.schemas.class_schemas import AssignTeacher
from school_api.schemas.course_schemas import CourseCreate, PrerequisiteCreate
from school_api.schemas.department_schemas import DepartmentCreate
from school_api.schemas.enrollment_schemas import EnrollmentRegister
from school_api.schemas.teacher_schemas import TeacherCreate
from school_api.services.class_service import ClassService
from school_api.services.course_service import CourseService
from school_api.services.department_service import DepartmentService
from school_api.services.enrollment_service import EnrollmentService
from school_api.services.room_service import RoomService
from school_api.services.semester_service import SemesterService
from school_api.services.teacher_service import TeacherService


# =============================================================================
# Departments
# =============================================================================

async def test_department_with_teacher_cannot_be_deleted(db):
    departments = DepartmentService(db)
    department = await departments.create(DepartmentCreate(name="Physics", code="PH"))
    await TeacherService(db).create(
        TeacherCreate(
            first_name="Marie",
            last_name="Curie",
            email="marie@school.edu",
            username="marie",
            password="marie-pass",
            department_ids=[department.id],
        )
    )

    with pytest.raises(BadRequestError) as exc_info:
        await departments.remove(department.id)
    assert "associated teachers or courses" in exc_info.value.detail

    assert await departments.get(department.id) is not None


async def test_department_with_course_cannot_be_deleted(db, department, course):
    with pytest.raises(BadRequestError):
        await DepartmentService(db).remove(department.id)


async def test_empty_department_is_deleted(db):
    departments = DepartmentService(db)
    department = await departments.create(DepartmentCreate(name="History", code="HI"))

    await departments.remove(department.id)

    assert await departments.get(department.id) is None
    with pytest.raises(NotFoundError):
        await departments.remove(department.id)


async def test_department_deletable_after_teacher_removed(db):
    departments = DepartmentService(db)
    department = await departments.create(DepartmentCreate(name="Chemistry", code="CH"))
    teacher = await TeacherService(db).create(
        TeacherCreate(
            first_name="Rosalind",
            last_name="Franklin",
            email="rosalind@school.edu",
            username="rosalind",
            password="rosalind-pass",
        )
    )
    await departments.add_teacher(department.id, teacher.id)
    await departments.remove_teacher(department.id, teacher.id)

    await departments.remove(department.id)
    assert await departments.get(department.id) is None


# =============================================================================
# Courses
# =============================================================================

async def test_course_with_class_cannot_be_deleted(db, course, class_room):
    courses = CourseService(db)

    with pytest.raises(BadRequestError) as exc_info:
        await courses.delete(course.id)
    assert "associated with 1 class" in exc_info.value.detail

    await ClassService(db).delete(class_room.id)
    await courses.delete(course.id)

    assert await courses.get(course.id) is None


async def test_course_delete_removes_prerequisite_links(db, course, department):
    courses = CourseService(db)
    advanced = await courses.create(CourseCreate(name="Algebra II", code="MA201", department_id=department.id))
    await courses.add_prerequisite(advanced.id, PrerequisiteCreate(prerequisite_id=course.id))

    await courses.delete(course.id)

    assert await courses.get_prerequisites(advanced.id) == []


# =============================================================================
# Rooms, semesters and classes
# =============================================================================

async def test_room_with_class_cannot_be_deleted(db, room, class_room):
    with pytest.raises(BadRequestError) as exc_info:
        await RoomService(db).delete(room.id)
    assert "1 class(es) assigned" in exc_info.value.detail


async def test_semester_with_class_cannot_be_deleted(db, semester, class_room):
    with pytest.raises(BadRequestError) as exc_info:
        await SemesterService(db).delete(semester.id)
    assert 'Cannot delete semester "Fall 2030"' in exc_info.value.detail


async def test_class_with_enrollment_cannot_be_deleted(db, student, class_room):
    enrollments = EnrollmentService(db)
    enrollment = await enrollments.register(student.id, EnrollmentRegister(class_id=class_room.id))
    classes = ClassService(db)

    with pytest.raises(BadRequestError) as exc_info:
        await classes.delete(class_room.id)
    assert "1 enrollments" in exc_info.value.detail

    await enrollments.delete(student.id, enrollment.id)
    await classes.delete(class_room.id)
    assert await classes.get(class_room.id) is None


# =============================================================================
# Teachers
# =============================================================================

async def test_teacher_delete_removes_class_assignments(db, class_room):
    teachers = TeacherService(db)
    teacher = await teachers.create(
        TeacherCreate(
            first_name="Emmy",
            last_name="Noether",
            email="emmy@school.edu",
            username="emmy",
            password="emmy-pass",
        )
    )
    classes = ClassService(db)
    await classes.assign_teacher(class_room.id, AssignTeacher(teacher_id=teacher.id))

    await teachers.delete(teacher.id)

    assert await teachers.get(teacher.id) is None
    assert await classes.get_class_teachers(class_room.id) == []
