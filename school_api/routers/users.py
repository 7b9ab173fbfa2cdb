"""User account management (admin only)."""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import Role
from ..core.database import get_db
from ..core.deps import require_admin
from ..schemas.pagination import PaginatedResponse
from ..schemas.user_schemas import User, UserCreate, UserUpdate
from ..services.user_service import UserService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/users", tags=["Users"], dependencies=[Depends(require_admin)])


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(dto: UserCreate, db: AsyncSession = Depends(get_db)):
    return await UserService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[User])
async def get_users(
    role: Optional[Role] = Query(None),
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await UserService(db).get_users(params, role)


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get_one_or_throw(id=user_id)


@router.patch("/{user_id}", response_model=User)
async def update_user(user_id: UUID, dto: UserUpdate, db: AsyncSession = Depends(get_db)):
    return await UserService(db).update(user_id, dto)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    await UserService(db).delete(user_id)
