# school_api/schemas/course_schemas.py
"""Pydantic schemas for Course entity and prerequisites."""
from typing import List, Literal, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

from ..core.constants import LetterGrade, RecordStatus
from ..utils.pagination import PaginationParams
from .fields import reject_null


class CourseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = None
    department_id: UUID
    credits: int = Field(default=3, ge=0, le=30)
    required: bool = False
    level: Optional[int] = Field(default=None, ge=0)
    status: RecordStatus = RecordStatus.ACTIVE
    max_students: Optional[int] = Field(default=None, gt=0)

    class Config:
        use_enum_values = True


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    description: Optional[str] = None
    department_id: Optional[UUID] = None
    credits: Optional[int] = Field(default=None, ge=0, le=30)
    required: Optional[bool] = None
    level: Optional[int] = Field(default=None, ge=0)
    status: Optional[RecordStatus] = None
    max_students: Optional[int] = Field(default=None, gt=0)

    check_not_null = reject_null("name", "code", "department_id", "credits", "required", "status")

    class Config:
        use_enum_values = True


class Course(CourseBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PrerequisiteCreate(BaseModel):
    prerequisite_id: UUID
    min_grade: Optional[LetterGrade] = None
    is_required: bool = True
    notes: Optional[str] = None

    class Config:
        use_enum_values = True


class Prerequisite(BaseModel):
    id: UUID
    course_id: UUID
    prerequisite_id: UUID
    min_grade: Optional[LetterGrade] = None
    is_required: bool
    notes: Optional[str] = None
    prerequisite: Course

    class Config:
        from_attributes = True


class UnmetPrerequisite(BaseModel):
    prerequisite: Course
    reason: str


class PrerequisiteCheck(BaseModel):
    """Outcome of checking a student against a course's prerequisites"""
    has_met_prerequisites: bool
    unmet_prerequisites: List[UnmetPrerequisite] = []


class CourseQuery(PaginationParams):
    name: Optional[str] = Field(default=None, max_length=100)
    code: Optional[str] = Field(default=None, max_length=20)
    department_id: Optional[UUID] = None
    status: Optional[RecordStatus] = None
    sort_by: Literal["name", "code", "credits", "created_at", "updated_at"] = "updated_at"
    sort_order: Literal["asc", "desc"] = "desc"
