"""Teacher management endpoints."""
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import EntityName
from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.address_schemas import OwnedAddress
from ..schemas.pagination import PaginatedResponse
from ..schemas.teacher_schemas import Teacher, TeacherCreate, TeacherUpdate
from ..services.address_service import AddressService
from ..services.teacher_service import TeacherService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/teachers", tags=["Teachers"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Teacher, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_teacher(dto: TeacherCreate, db: AsyncSession = Depends(get_db)):
    return await TeacherService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Teacher])
async def get_teachers(
    q: Optional[str] = Query(None, max_length=100),
    department_id: Optional[UUID] = Query(None),
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await TeacherService(db).get_teachers(params, q, department_id)


@router.get("/{teacher_id}", response_model=Teacher)
async def get_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    return await TeacherService(db).get_one_or_throw(id=teacher_id)


@router.get("/{teacher_id}/addresses", response_model=List[OwnedAddress])
async def get_teacher_addresses(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    await TeacherService(db).get_one_or_throw(id=teacher_id)
    return await AddressService(db).get_owner_addresses(EntityName.TEACHER, teacher_id)


@router.patch("/{teacher_id}", response_model=Teacher, dependencies=[Depends(require_admin)])
async def update_teacher(teacher_id: UUID, dto: TeacherUpdate, db: AsyncSession = Depends(get_db)):
    return await TeacherService(db).update(teacher_id, dto)


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    await TeacherService(db).delete(teacher_id)
