"""Enrollment endpoints."""
from typing import Annotated
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import EntityName, Role
from ..core.database import get_db
from ..core.deps import get_current_user, require_admin, require_roles
from ..core.exceptions import BadRequestError, ForbiddenError
from ..models.user import User
from ..schemas.enrollment_schemas import (
    EnrollmentDrop, EnrollmentQuery, EnrollmentRegister, EnrollmentUpdate, serialize_enrollment
)
from ..services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/api/v1/enrollments", tags=["Enrollments"])


def own_student_id(user: User) -> UUID:
    """Student profile behind a STUDENT login"""
    if user.student_id is None:
        raise ForbiddenError("User is not linked to a student")
    return user.student_id


@router.get("/", response_model=dict)
async def get_enrollments(
    query: Annotated[EnrollmentQuery, Query()],
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List enrollments; students only ever see their own"""
    if current_user.role == Role.STUDENT.value:
        query = query.model_copy(update={"student_id": own_student_id(current_user)})

    page = await EnrollmentService(db).get_enrollments(query)
    relations = EnrollmentService.relations_for(query)
    page["results"] = [serialize_enrollment(e, relations) for e in page["results"]]
    return page


@router.get("/{enrollment_id}", response_model=dict)
async def get_enrollment(
    enrollment_id: UUID,
    include_attendances: bool = Query(False),
    include_class: bool = Query(False),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    relations = []
    if include_attendances:
        relations.append("attendances")
    if include_class:
        relations.append("class_.course")
    enrollment = await EnrollmentService(db).get_enrollment_by_id(enrollment_id, relations)

    # Other students get the summary only
    if current_user.role == Role.STUDENT.value and current_user.student_id != enrollment.student_id:
        return {
            "id": str(enrollment.id),
            "status": enrollment.status,
            "class_id": str(enrollment.class_id),
            "enrollment_date": enrollment.enrollment_date.isoformat(),
        }
    return serialize_enrollment(enrollment, relations)


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register(
    dto: EnrollmentRegister,
    current_user: User = Depends(require_roles(Role.STUDENT, Role.ADMIN)),
    db: AsyncSession = Depends(get_db)
):
    """Register for a class; admins register on behalf of ``student_id``"""
    if current_user.role == Role.ADMIN.value:
        if dto.student_id is None:
            raise BadRequestError(EntityName.ENROLLMENT, "student_id is required")
        student_id = dto.student_id
    else:
        student_id = own_student_id(current_user)

    enrollment = await EnrollmentService(db).register(student_id, dto)
    return serialize_enrollment(enrollment, [])


@router.patch("/{enrollment_id}", response_model=dict)
async def update_enrollment(
    enrollment_id: UUID,
    dto: EnrollmentUpdate,
    current_user: User = Depends(require_roles(Role.STUDENT, Role.ADMIN)),
    db: AsyncSession = Depends(get_db)
):
    service = EnrollmentService(db)
    if current_user.role == Role.ADMIN.value:
        student_id = (await service.get_enrollment_by_id(enrollment_id)).student_id
    else:
        student_id = own_student_id(current_user)

    enrollment = await service.update(enrollment_id, student_id, dto)
    return serialize_enrollment(enrollment, [])


@router.post("/{enrollment_id}/drop", response_model=dict)
async def drop_class(
    enrollment_id: UUID,
    dto: EnrollmentDrop,
    current_user: User = Depends(require_roles(Role.STUDENT)),
    db: AsyncSession = Depends(get_db)
):
    enrollment = await EnrollmentService(db).drop(enrollment_id, own_student_id(current_user), dto)
    return serialize_enrollment(enrollment, [])


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enrollment(
    enrollment_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Remove the enrollment with its attendance and grade records"""
    service = EnrollmentService(db)
    enrollment = await service.get_enrollment_by_id(enrollment_id)
    await service.delete(enrollment.student_id, enrollment_id)
