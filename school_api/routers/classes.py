"""Class scheduling and staffing endpoints."""
from typing import Annotated, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.class_schemas import (
    AssignTeacher, ClassAssignment, ClassCreate, ClassDetail, ClassQuery, ClassRoom,
    ClassTeacher, ClassUpdate, EnrolledStudent
)
from ..schemas.pagination import PaginatedResponse
from ..services.class_service import ClassService

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=ClassRoom, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_class(dto: ClassCreate, db: AsyncSession = Depends(get_db)):
    """Create a class; course, semester and room must exist and the room slot must be free"""
    return await ClassService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[ClassRoom])
async def get_classes(query: Annotated[ClassQuery, Query()], db: AsyncSession = Depends(get_db)):
    return await ClassService(db).get_classes(query)


@router.get("/{class_id}", response_model=ClassDetail)
async def get_class(class_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ClassService(db).get_class_details(class_id)


@router.patch("/{class_id}", response_model=ClassRoom, dependencies=[Depends(require_admin)])
async def update_class(class_id: UUID, dto: ClassUpdate, db: AsyncSession = Depends(get_db)):
    return await ClassService(db).update(class_id, dto)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_class(class_id: UUID, db: AsyncSession = Depends(get_db)):
    await ClassService(db).delete(class_id)


@router.get("/{class_id}/teachers", response_model=List[ClassTeacher])
async def get_class_teachers(class_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ClassService(db).get_class_teachers(class_id)


@router.post("/{class_id}/teachers", response_model=ClassAssignment, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def assign_teacher(class_id: UUID, dto: AssignTeacher, db: AsyncSession = Depends(get_db)):
    return await ClassService(db).assign_teacher(class_id, dto)


@router.delete("/{class_id}/teachers/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_admin)])
async def remove_teacher(class_id: UUID, teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    await ClassService(db).remove_teacher(class_id, teacher_id)


@router.get("/{class_id}/students", response_model=List[EnrolledStudent])
async def get_enrolled_students(class_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ClassService(db).get_enrolled_students(class_id)
