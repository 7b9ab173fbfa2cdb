"""Uniqueness validators and their storage-level backstop."""
from datetime import date

import pytest

from school_api.core.constants import Role
from school_api.core.exceptions import ExistsError
from school_api.models.course import Course
from school_api.schemas.course_schemas import CourseCreate, CourseUpdate
from school_api.schemas.department_schemas import DepartmentCreate, DepartmentUpdate
from school_api.schemas.room_schemas import RoomCreate
from school_api.schemas.semester_schemas import SemesterCreate
from school_api.schemas.user_schemas import UserCreate
from school_api.services.course_service import CourseService
from school_api.services.department_service import DepartmentService
from school_api.services.room_service import RoomService
from school_api.services.semester_service import SemesterService
from school_api.services.user_service import UserService
from school_api.services.validators import ensure_unique


async def test_department_name_collision_regardless_of_code(db, department):
    with pytest.raises(ExistsError) as exc_info:
        await DepartmentService(db).create(DepartmentCreate(name="Mathematics", code="SCI"))
    assert exc_info.value.code == "department_already_exists"


async def test_department_code_collision(db, department):
    with pytest.raises(ExistsError):
        await DepartmentService(db).create(DepartmentCreate(name="Statistics", code="MA"))


async def test_course_name_and_code_unique(db, course, department):
    service = CourseService(db)
    with pytest.raises(ExistsError):
        await service.create(CourseCreate(name="Algebra I", code="MA999", department_id=department.id))
    with pytest.raises(ExistsError):
        await service.create(CourseCreate(name="Algebra II", code="MA101", department_id=department.id))


async def test_room_number_unique(db, room):
    with pytest.raises(ExistsError) as exc_info:
        await RoomService(db).create(RoomCreate(room_number="R-101", capacity=10))
    assert exc_info.value.code == "room_already_exists"


async def test_semester_name_unique(db, semester):
    with pytest.raises(ExistsError):
        await SemesterService(db).create(
            SemesterCreate(name="Fall 2030", start_date=date(2031, 1, 10), end_date=date(2031, 5, 1))
        )


async def test_username_and_email_unique(db, admin_user):
    service = UserService(db)
    with pytest.raises(ExistsError):
        await service.create(UserCreate(username="admin", password="secret1", role=Role.TEACHER))
    with pytest.raises(ExistsError):
        await service.create(
            UserCreate(username="someone", email="admin@school.edu", password="secret1", role=Role.TEACHER)
        )


async def test_update_excludes_own_row(db, department):
    service = DepartmentService(db)
    assert await ensure_unique(service, "name", "Mathematics", exclude_id=department.id)

    updated = await service.update(department.id, DepartmentUpdate(name="Mathematics", description="Numbers"))
    assert updated.description == "Numbers"


async def test_rename_onto_taken_value_fails(db, department):
    service = DepartmentService(db)
    other = await service.create(DepartmentCreate(name="Physics", code="PH"))
    with pytest.raises(ExistsError):
        await service.update(other.id, DepartmentUpdate(name="Mathematics"))


async def test_soft_deleted_value_can_be_reused(db, department):
    service = DepartmentService(db)
    await service.remove(department.id)

    again = await service.create(DepartmentCreate(name="Mathematics", code="MA"))
    assert again.id != department.id


async def test_storage_constraint_backs_skipped_check(db, course, department):
    """An insert that bypasses the validator still fails as ExistsError"""
    service = CourseService(db)
    with pytest.raises(ExistsError) as exc_info:
        await service.save(Course(name="Algebra I", code="OTHER", department_id=department.id))
    assert exc_info.value.code == "course_already_exists"

    # Session is usable again after the rollback
    assert await service.count() == 1


async def test_course_update_code_collision(db, course, department):
    service = CourseService(db)
    other = await service.create(CourseCreate(name="Geometry", code="MA102", department_id=department.id))
    with pytest.raises(ExistsError):
        await service.update(other.id, CourseUpdate(code="MA101"))
