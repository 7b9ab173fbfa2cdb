"""Attendance endpoints."""
from typing import Annotated
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import Role
from ..core.database import get_db
from ..core.deps import get_current_user, require_roles
from ..schemas.attendance_schemas import Attendance, AttendanceCreate, AttendanceQuery, AttendanceUpdate
from ..schemas.pagination import PaginatedResponse
from ..services.attendance_service import AttendanceService

router = APIRouter(prefix="/api/v1/attendances", tags=["Attendances"], dependencies=[Depends(get_current_user)])

require_staff = require_roles(Role.ADMIN, Role.TEACHER)


@router.post("/", response_model=Attendance, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_staff)])
async def create_attendance(dto: AttendanceCreate, db: AsyncSession = Depends(get_db)):
    return await AttendanceService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Attendance])
async def get_attendances(query: Annotated[AttendanceQuery, Query()], db: AsyncSession = Depends(get_db)):
    return await AttendanceService(db).get_attendances(query)


@router.get("/{attendance_id}", response_model=Attendance)
async def get_attendance(attendance_id: UUID, db: AsyncSession = Depends(get_db)):
    return await AttendanceService(db).get_one_or_throw(id=attendance_id)


@router.patch("/{attendance_id}", response_model=Attendance, dependencies=[Depends(require_staff)])
async def update_attendance(attendance_id: UUID, dto: AttendanceUpdate, db: AsyncSession = Depends(get_db)):
    return await AttendanceService(db).update(attendance_id, dto)


@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_staff)])
async def delete_attendance(attendance_id: UUID, db: AsyncSession = Depends(get_db)):
    await AttendanceService(db).remove(attendance_id)
