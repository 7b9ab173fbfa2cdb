"""Grade endpoints."""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import Role
from ..core.database import get_db
from ..core.deps import get_current_user, require_roles
from ..schemas.grade_schemas import Grade, GradeCreate, GradeUpdate
from ..schemas.pagination import PaginatedResponse
from ..services.grade_service import GradeService
from ..utils.pagination import PaginationParams, Paginator

router = APIRouter(prefix="/api/v1/grades", tags=["Grades"], dependencies=[Depends(get_current_user)])

require_staff = require_roles(Role.ADMIN, Role.TEACHER)


@router.post("/", response_model=Grade, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_grade(dto: GradeCreate, db: AsyncSession = Depends(get_db)):
    return await GradeService(db).create(dto)


@router.get("/enrollment/{enrollment_id}", response_model=PaginatedResponse[Grade])
async def get_enrollment_grades(
    enrollment_id: UUID,
    params: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    return await GradeService(db).get_enrollment_grades(enrollment_id, params)


@router.get("/{grade_id}", response_model=Grade)
async def get_grade(grade_id: UUID, db: AsyncSession = Depends(get_db)):
    return await GradeService(db).get_one_or_throw(id=grade_id)


@router.patch("/{grade_id}", response_model=Grade, dependencies=[Depends(require_staff)])
async def update_grade(grade_id: UUID, dto: GradeUpdate, db: AsyncSession = Depends(get_db)):
    return await GradeService(db).update(grade_id, dto)


@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_staff)])
async def delete_grade(grade_id: UUID, db: AsyncSession = Depends(get_db)):
    await GradeService(db).remove(grade_id)
