# school_api/schemas/teacher_schemas.py
"""Pydantic schemas for Teacher entity."""
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ..core.constants import EmploymentType, Gender, Title
from .address_schemas import AddressCreate
from .fields import reject_null


class TeacherBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    hire_date: Optional[date] = None
    salary: Optional[Decimal] = Field(default=None, ge=0)
    title: Optional[Title] = None
    employment_type: Optional[EmploymentType] = None

    class Config:
        use_enum_values = True


class TeacherCreate(TeacherBase):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    department_ids: List[UUID] = Field(default_factory=list)
    address: Optional[AddressCreate] = None


class TeacherUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    hire_date: Optional[date] = None
    salary: Optional[Decimal] = Field(default=None, ge=0)
    title: Optional[Title] = None
    employment_type: Optional[EmploymentType] = None

    check_not_null = reject_null("first_name", "last_name")

    class Config:
        use_enum_values = True


class Teacher(TeacherBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
