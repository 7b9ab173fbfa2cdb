"""Course and prerequisite endpoints."""
from typing import Annotated, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.course_schemas import (
    Course, CourseCreate, CourseQuery, CourseUpdate, Prerequisite, PrerequisiteCheck, PrerequisiteCreate
)
from ..schemas.pagination import PaginatedResponse
from ..services.course_service import CourseService

router = APIRouter(prefix="/api/v1/courses", tags=["Courses"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Course, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_course(dto: CourseCreate, db: AsyncSession = Depends(get_db)):
    return await CourseService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Course])
async def get_courses(query: Annotated[CourseQuery, Query()], db: AsyncSession = Depends(get_db)):
    """List courses with filters and sorting"""
    return await CourseService(db).get_courses(query)


@router.get("/department/{department_id}", response_model=PaginatedResponse[Course])
async def get_department_courses(
    department_id: UUID,
    query: Annotated[CourseQuery, Query()],
    db: AsyncSession = Depends(get_db)
):
    return await CourseService(db).get_department_courses(department_id, query)


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: UUID, db: AsyncSession = Depends(get_db)):
    return await CourseService(db).get_one_or_throw(id=course_id)


@router.patch("/{course_id}", response_model=Course, dependencies=[Depends(require_admin)])
async def update_course(course_id: UUID, dto: CourseUpdate, db: AsyncSession = Depends(get_db)):
    return await CourseService(db).update(course_id, dto)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_course(course_id: UUID, db: AsyncSession = Depends(get_db)):
    """Refused while any class is built on the course"""
    await CourseService(db).delete(course_id)


@router.get("/{course_id}/prerequisites", response_model=List[Prerequisite])
async def get_prerequisites(course_id: UUID, db: AsyncSession = Depends(get_db)):
    return await CourseService(db).get_prerequisites(course_id)


@router.post("/{course_id}/prerequisites", response_model=Prerequisite, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def add_prerequisite(course_id: UUID, dto: PrerequisiteCreate, db: AsyncSession = Depends(get_db)):
    return await CourseService(db).add_prerequisite(course_id, dto)


@router.delete("/{course_id}/prerequisites/{prerequisite_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_admin)])
async def remove_prerequisite(course_id: UUID, prerequisite_id: UUID, db: AsyncSession = Depends(get_db)):
    await CourseService(db).remove_prerequisite(course_id, prerequisite_id)


@router.get("/{course_id}/prerequisites/check/{student_id}", response_model=PrerequisiteCheck)
async def check_prerequisites(course_id: UUID, student_id: UUID, db: AsyncSession = Depends(get_db)):
    """Required prerequisites the student has not yet met"""
    return await CourseService(db).check_prerequisites(course_id, student_id)
