"""Department endpoints."""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.department_schemas import (
    Department, DepartmentCreate, DepartmentTeacher, DepartmentUpdate, serialize_department
)
from ..schemas.pagination import PaginatedResponse
from ..services.department_service import DepartmentService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/departments", tags=["Departments"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Department, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_department(dto: DepartmentCreate, db: AsyncSession = Depends(get_db)):
    return await DepartmentService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Department])
async def get_departments(
    q: Optional[str] = Query(None, max_length=100, description="Search name or code"),
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await DepartmentService(db).get_departments(params, q)


@router.get("/{department_id}", response_model=dict)
async def get_department(
    department_id: UUID,
    include_teachers: bool = Query(False),
    include_courses: bool = Query(False),
    db: AsyncSession = Depends(get_db)
):
    """Get a department, optionally with its teachers and courses"""
    department = await DepartmentService(db).get_department(department_id, include_teachers, include_courses)
    return serialize_department(department, include_teachers, include_courses)


@router.patch("/{department_id}", response_model=Department, dependencies=[Depends(require_admin)])
async def update_department(department_id: UUID, dto: DepartmentUpdate, db: AsyncSession = Depends(get_db)):
    return await DepartmentService(db).update(department_id, dto)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_department(department_id: UUID, db: AsyncSession = Depends(get_db)):
    """Refused while the department still has teachers or courses"""
    await DepartmentService(db).remove(department_id)


@router.post("/{department_id}/teachers", status_code=status.HTTP_204_NO_CONTENT,
             dependencies=[Depends(require_admin)])
async def add_department_teacher(department_id: UUID, dto: DepartmentTeacher, db: AsyncSession = Depends(get_db)):
    await DepartmentService(db).add_teacher(department_id, dto.teacher_id)


@router.delete("/{department_id}/teachers/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_admin)])
async def remove_department_teacher(department_id: UUID, teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    await DepartmentService(db).remove_teacher(department_id, teacher_id)
