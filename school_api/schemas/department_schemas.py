# school_api/schemas/department_schemas.py
"""Pydantic schemas for Department entity."""
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from .teacher_schemas import Teacher
from .course_schemas import Course
from .fields import reject_null


class DepartmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Department name")
    code: str = Field(..., min_length=1, max_length=20, description="Short unique code")
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=20)
    head_id: Optional[UUID] = Field(default=None, description="Teacher heading the department")


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=20)
    head_id: Optional[UUID] = None

    check_not_null = reject_null("name", "code")


class Department(DepartmentBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DepartmentTeacher(BaseModel):
    teacher_id: UUID


def serialize_department(department: Any, include_teachers: bool = False,
                         include_courses: bool = False) -> Dict[str, Any]:
    """Dump a department plus whichever relations were loaded"""
    data = Department.model_validate(department).model_dump(mode="json")
    if include_teachers:
        data["teachers"] = [
            Teacher.model_validate(t).model_dump(mode="json") for t in department.teachers if not t.is_deleted
        ]
    if include_courses:
        data["courses"] = [Course.model_validate(c).model_dump(mode="json") for c in department.courses]
    return data
