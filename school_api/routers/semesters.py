"""Semester and academic calendar endpoints."""
from typing import Annotated, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.pagination import PaginatedResponse
from ..schemas.semester_schemas import (
    AcademicCalendarRequest, Semester, SemesterCreate, SemesterQuery, SemesterUpdate
)
from ..services.semester_service import SemesterService

router = APIRouter(prefix="/api/v1/semesters", tags=["Semesters"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Semester, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_semester(dto: SemesterCreate, db: AsyncSession = Depends(get_db)):
    """Create a semester; its dates may not overlap another semester"""
    return await SemesterService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Semester])
async def get_semesters(query: Annotated[SemesterQuery, Query()], db: AsyncSession = Depends(get_db)):
    return await SemesterService(db).get_semesters(query)


@router.get("/current", response_model=Semester)
async def get_current_semester(db: AsyncSession = Depends(get_db)):
    return await SemesterService(db).get_current_semester()


@router.post("/academic-calendar", response_model=List[Semester], status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def generate_academic_calendar(dto: AcademicCalendarRequest, db: AsyncSession = Depends(get_db)):
    return await SemesterService(db).generate_academic_calendar(dto)


@router.post("/update-statuses", dependencies=[Depends(require_admin)])
async def update_semester_statuses(db: AsyncSession = Depends(get_db)):
    """Recompute semester statuses against today's date"""
    return await SemesterService(db).update_semester_statuses()


@router.get("/{semester_id}", response_model=Semester)
async def get_semester(semester_id: UUID, db: AsyncSession = Depends(get_db)):
    return await SemesterService(db).get_one_or_throw(id=semester_id)


@router.patch("/{semester_id}", response_model=Semester, dependencies=[Depends(require_admin)])
async def update_semester(semester_id: UUID, dto: SemesterUpdate, db: AsyncSession = Depends(get_db)):
    return await SemesterService(db).update(semester_id, dto)


@router.delete("/{semester_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_semester(semester_id: UUID, db: AsyncSession = Depends(get_db)):
    await SemesterService(db).delete(semester_id)
