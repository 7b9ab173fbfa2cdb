"""Parent and emergency contact endpoints."""
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import EntityName
from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.address_schemas import OwnedAddress
from ..schemas.pagination import PaginatedResponse
from ..schemas.parent_schemas import Parent, ParentCreate, ParentDetail, ParentUpdate
from ..schemas.student_schemas import Student
from ..services.address_service import AddressService
from ..services.parent_service import ParentService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/parents", tags=["Parents"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=ParentDetail, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_parent(dto: ParentCreate, db: AsyncSession = Depends(get_db)):
    return await ParentService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Parent])
async def get_parents(
    q: Optional[str] = Query(None, max_length=100),
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await ParentService(db).get_parents(params, q)


@router.get("/{parent_id}", response_model=ParentDetail)
async def get_parent(parent_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ParentService(db).get_parent(parent_id)


@router.get("/{parent_id}/children", response_model=List[Student])
async def get_children(parent_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ParentService(db).get_children(parent_id)


@router.get("/{parent_id}/addresses", response_model=List[OwnedAddress])
async def get_parent_addresses(parent_id: UUID, db: AsyncSession = Depends(get_db)):
    await ParentService(db).get_one_or_throw(id=parent_id)
    return await AddressService(db).get_owner_addresses(EntityName.PARENT, parent_id)


@router.patch("/{parent_id}", response_model=ParentDetail, dependencies=[Depends(require_admin)])
async def update_parent(parent_id: UUID, dto: ParentUpdate, db: AsyncSession = Depends(get_db)):
    """Update a parent; a given emergency contact list replaces the current one"""
    return await ParentService(db).update(parent_id, dto)


@router.delete("/{parent_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_parent(parent_id: UUID, db: AsyncSession = Depends(get_db)):
    await ParentService(db).delete(parent_id)
