"""BaseService: fetch-or-fail, soft/hard delete, pagination and units of work."""
import uuid

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from school_api.core.exceptions import ExistsError, NotFoundError
from school_api.core.unit_of_work import UnitOfWork
from school_api.models.department import Department
from school_api.models.room import Room
from school_api.schemas.class_schemas import ClassUpdate
from school_api.schemas.department_schemas import DepartmentCreate, DepartmentUpdate
from school_api.services.department_service import DepartmentService
from school_api.services.room_service import RoomService
from school_api.utils.pagination import PaginationParams


async def test_get_one_returns_none_when_absent(db):
    assert await DepartmentService(db).get_one(id=uuid.uuid4()) is None


async def test_get_one_or_throw_raises_not_found_with_entity_and_filter(db):
    missing = uuid.uuid4()
    with pytest.raises(NotFoundError) as exc_info:
        await DepartmentService(db).get_one_or_throw(id=missing)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "department_not_found"
    assert exc_info.value.filters == {"id": missing}


async def test_soft_deleted_rows_are_invisible(db, department):
    service = DepartmentService(db)
    await service.delete(department)

    assert department.is_deleted is True
    assert department.deleted_at is not None
    assert await service.get(department.id) is None
    assert await service.count() == 0


async def test_hard_delete_removes_row(db, room):
    service = RoomService(db)
    await service.delete(room.id)

    assert await service.get(room.id) is None
    assert await db.get(Room, room.id) is None


async def test_get_paginated_shape(db):
    service = DepartmentService(db)
    for i in range(12):
        await service.create(DepartmentCreate(name=f"Department {i:02d}", code=f"D{i:02d}"))

    page = await service.get_paginated(PaginationParams(page=2, page_size=5), order_by=[Department.name.asc()])

    assert page["count"] == 12
    assert page["page"] == 2
    assert page["page_size"] == 5
    assert page["total_pages"] == 3
    assert [d.name for d in page["results"]] == [f"Department {i:02d}" for i in range(5, 10)]


async def test_pagination_skip_computed_from_page():
    assert PaginationParams(page=3, page_size=20).skip == 40
    assert PaginationParams().skip == 0


async def test_unit_of_work_rolls_back_every_write(db):
    service = DepartmentService(db)

    with pytest.raises(ExistsError):
        async with UnitOfWork(db) as uow:
            await service.create(DepartmentCreate(name="Physics", code="PH"), uow)
            await service.create(DepartmentCreate(name="Physics", code="PH2"), uow)

    assert await service.count() == 0


# =============================================================================
# Integrity errors
# =============================================================================

def test_update_schema_rejects_null_for_required_columns():
    with pytest.raises(ValidationError):
        DepartmentUpdate(name=None)
    with pytest.raises(ValidationError):
        ClassUpdate(max_enrollment=None)

    # Omitted fields and nullable columns are still fine
    assert DepartmentUpdate().model_dump(exclude_unset=True) == {}
    assert DepartmentUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}


async def test_not_null_violation_is_not_reported_as_duplicate(db):
    service = DepartmentService(db)

    with pytest.raises(IntegrityError):
        await service.save(Department(name=None, code="NULL"))

    assert await service.count() == 0


async def test_patch_with_null_name_is_validation_error(client, admin_headers, department):
    response = await client.patch(
        f"/api/v1/departments/{department.id}", json={"name": None}, headers=admin_headers
    )

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
