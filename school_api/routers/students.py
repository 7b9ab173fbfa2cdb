"""Student management endpoints."""
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import EntityName
from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.address_schemas import OwnedAddress
from ..schemas.pagination import PaginatedResponse
from ..schemas.student_schemas import Student, StudentCreate, StudentUpdate
from ..services.address_service import AddressService
from ..services.student_service import StudentService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/students", tags=["Students"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Student, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_student(dto: StudentCreate, db: AsyncSession = Depends(get_db)):
    """Create a student together with its login and optional home address"""
    return await StudentService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Student])
async def get_students(
    q: Optional[str] = Query(None, max_length=100, description="Search name or email"),
    grade: Optional[str] = Query(None),
    parent_id: Optional[UUID] = Query(None),
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await StudentService(db).get_students(params, q, grade, parent_id)


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: UUID, db: AsyncSession = Depends(get_db)):
    return await StudentService(db).get_one_or_throw(id=student_id)


@router.get("/{student_id}/addresses", response_model=List[OwnedAddress])
async def get_student_addresses(student_id: UUID, db: AsyncSession = Depends(get_db)):
    await StudentService(db).get_one_or_throw(id=student_id)
    return await AddressService(db).get_owner_addresses(EntityName.STUDENT, student_id)


@router.patch("/{student_id}", response_model=Student, dependencies=[Depends(require_admin)])
async def update_student(student_id: UUID, dto: StudentUpdate, db: AsyncSession = Depends(get_db)):
    return await StudentService(db).update(student_id, dto)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_student(student_id: UUID, db: AsyncSession = Depends(get_db)):
    """Soft-delete the student; its login, address links and enrollments go with it"""
    await StudentService(db).delete(student_id)
