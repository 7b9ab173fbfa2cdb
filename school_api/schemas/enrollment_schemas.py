# school_api/schemas/enrollment_schemas.py
"""Pydantic schemas for Enrollment entity."""
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from ..core.constants import EnrollmentStatus, LetterGrade
from ..utils.pagination import PaginationParams
from .attendance_schemas import Attendance
from .class_schemas import ClassRoom
from .course_schemas import Course


class EnrollmentRegister(BaseModel):
    class_id: UUID
    notes: Optional[str] = None
    student_id: Optional[UUID] = Field(default=None, description="Admins register on behalf of a student")


class EnrollmentUpdate(BaseModel):
    status: Optional[EnrollmentStatus] = None
    reason: Optional[str] = Field(default=None, max_length=500, description="Recorded in the status history")
    grade: Optional[LetterGrade] = None
    notes: Optional[str] = None

    class Config:
        use_enum_values = True


class EnrollmentDrop(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class EnrollmentQuery(PaginationParams):
    """Listing filters; all optional"""
    student_id: Optional[UUID] = None
    class_id: Optional[UUID] = None
    course_id: Optional[UUID] = None
    status: Optional[EnrollmentStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    q: Optional[str] = Field(default=None, max_length=100, description="Search student name")
    include_attendances: bool = False
    include_class: bool = False

    @model_validator(mode='after')
    def validate_dates(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError('start_date must be on or before end_date')
        return self


class StatusChange(BaseModel):
    status: EnrollmentStatus
    date: datetime
    reason: Optional[str] = None


class Enrollment(BaseModel):
    id: UUID
    student_id: UUID
    class_id: UUID
    enrollment_date: date
    status: EnrollmentStatus
    status_history: List[StatusChange] = []
    grade: Optional[LetterGrade] = None
    notes: Optional[str] = None
    completion_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClassWithCourse(ClassRoom):
    course: Optional[Course] = None


def serialize_enrollment(enrollment: Any, relations: List[str]) -> Dict[str, Any]:
    """Dump an enrollment including only the relations that were loaded"""
    data = Enrollment.model_validate(enrollment).model_dump(mode="json")
    if "attendances" in relations:
        data["attendances"] = [
            Attendance.model_validate(a).model_dump(mode="json")
            for a in enrollment.attendances if not a.is_deleted
        ]
    if "class_.course" in relations:
        data["class"] = ClassWithCourse.model_validate(enrollment.class_).model_dump(mode="json")
    return data
