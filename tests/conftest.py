"""Shared fixtures: a fresh in-memory database per test and an API client bound to it."""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import date, time

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from school_api.core.constants import Role
from school_api.core.database import get_db
from school_api.core.security import create_token
from school_api.main import app
from school_api.models import Base
from school_api.schemas.class_schemas import ClassCreate
from school_api.schemas.course_schemas import CourseCreate
from school_api.schemas.department_schemas import DepartmentCreate
from school_api.schemas.room_schemas import RoomCreate
from school_api.schemas.semester_schemas import SemesterCreate
from school_api.schemas.student_schemas import StudentCreate
from school_api.schemas.user_schemas import UserCreate
from school_api.services.class_service import ClassService
from school_api.services.course_service import CourseService
from school_api.services.department_service import DepartmentService
from school_api.services.room_service import RoomService
from school_api.services.semester_service import SemesterService
from school_api.services.student_service import StudentService
from school_api.services.user_service import UserService


# =============================================================================
# Database and client
# =============================================================================

@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """API client; each request gets its own session on the test database"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_token(str(user.id), user.role)}"}


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
async def admin_user(db):
    return await UserService(db).create(
        UserCreate(username="admin", email="admin@school.edu", password="admin-pass", role=Role.ADMIN)
    )


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
async def student(db):
    return await StudentService(db).create(
        StudentCreate(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@school.edu",
            username="ada",
            password="ada-pass",
        )
    )


@pytest.fixture
async def student_headers(db, student):
    user = await UserService(db).get_one(student_id=student.id)
    return auth_headers(user)


@pytest.fixture
async def other_student(db):
    return await StudentService(db).create(
        StudentCreate(
            first_name="Alan",
            last_name="Turing",
            email="alan@school.edu",
            username="alan",
            password="alan-pass",
        )
    )


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture
async def department(db):
    return await DepartmentService(db).create(DepartmentCreate(name="Mathematics", code="MA"))


@pytest.fixture
async def course(db, department):
    return await CourseService(db).create(
        CourseCreate(name="Algebra I", code="MA101", department_id=department.id)
    )


@pytest.fixture
async def semester(db):
    return await SemesterService(db).create(
        SemesterCreate(name="Fall 2030", start_date=date(2030, 9, 1), end_date=date(2030, 12, 20))
    )


@pytest.fixture
async def room(db):
    return await RoomService(db).create(RoomCreate(room_number="R-101", building="Main", capacity=30))


@pytest.fixture
async def class_room(db, course, semester, room):
    return await ClassService(db).create(
        ClassCreate(
            name="Algebra I - A",
            course_id=course.id,
            semester_id=semester.id,
            room_id=room.id,
            day_of_week="MONDAY",
            start_time=time(9, 0),
            end_time=time(10, 0),
        )
    )
