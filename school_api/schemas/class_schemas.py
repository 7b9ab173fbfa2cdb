# school_api/schemas/class_schemas.py
"""Pydantic schemas for classes (course sections) and teacher assignments."""
from typing import List, Literal, Optional
from datetime import date, datetime, time
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from ..core.constants import DayOfWeek, RecordStatus
from ..utils.pagination import PaginationParams
from .fields import reject_null


class ClassBase(BaseModel):
    course_id: UUID
    semester_id: UUID
    room_id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=100)
    grade_level: Optional[str] = Field(default=None, max_length=20)
    section: Optional[str] = Field(default=None, max_length=10)
    description: Optional[str] = None
    max_enrollment: int = Field(default=30, gt=0)
    status: RecordStatus = RecordStatus.ACTIVE
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        use_enum_values = True

    @model_validator(mode='after')
    def validate_times(self):
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError('start_time must be before end_time')
        return self


class ClassCreate(ClassBase):
    pass


class ClassUpdate(BaseModel):
    course_id: Optional[UUID] = None
    semester_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    grade_level: Optional[str] = Field(default=None, max_length=20)
    section: Optional[str] = Field(default=None, max_length=10)
    description: Optional[str] = None
    max_enrollment: Optional[int] = Field(default=None, gt=0)
    status: Optional[RecordStatus] = None
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    check_not_null = reject_null("semester_id", "name", "max_enrollment", "status")

    class Config:
        use_enum_values = True


class ClassRoom(BaseModel):
    id: UUID
    course_id: Optional[UUID] = None
    semester_id: UUID
    room_id: Optional[UUID] = None
    name: str
    grade_level: Optional[str] = None
    section: Optional[str] = None
    description: Optional[str] = None
    max_enrollment: int
    status: str
    day_of_week: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssignTeacher(BaseModel):
    teacher_id: UUID
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ClassAssignment(BaseModel):
    id: UUID
    class_id: UUID
    teacher_id: UUID
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        from_attributes = True


class ClassQuery(PaginationParams):
    name: Optional[str] = Field(default=None, max_length=100)
    course_id: Optional[UUID] = None
    semester_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    grade_level: Optional[str] = None
    section: Optional[str] = None
    day_of_week: Optional[DayOfWeek] = None
    status: Optional[RecordStatus] = None
    sort_by: Literal["name", "start_time", "created_at", "updated_at"] = "updated_at"
    sort_order: Literal["asc", "desc"] = "desc"


class ClassTeacher(BaseModel):
    assignment_id: UUID
    teacher_id: UUID
    name: str
    email: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ClassDetail(ClassRoom):
    enrollment_count: int
    available_seats: int
    teachers: List[ClassTeacher] = []


class EnrolledStudent(BaseModel):
    enrollment_id: UUID
    student_id: UUID
    name: str
    email: Optional[str] = None
    enrollment_date: date
    status: str
    grade: Optional[str] = None
