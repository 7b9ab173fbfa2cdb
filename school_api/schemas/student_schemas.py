# school_api/schemas/student_schemas.py
"""Pydantic schemas for Student entity."""
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ..core.constants import Gender
from .address_schemas import AddressCreate
from .fields import reject_null


class StudentBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    dob: Optional[date] = Field(default=None, description="Date of birth")
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    grade: Optional[str] = Field(default=None, max_length=20)
    enrollment_date: Optional[date] = None
    previous_school: Optional[str] = Field(default=None, max_length=200)
    academic_year: Optional[str] = Field(default=None, max_length=20)
    additional_notes: Optional[str] = None
    parent_id: Optional[UUID] = None

    class Config:
        use_enum_values = True


class StudentCreate(StudentBase):
    """Student plus the login account and home address created with it"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    address: Optional[AddressCreate] = None


class StudentUpdate(BaseModel):
    """Schema for updating student - all fields optional"""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    dob: Optional[date] = None
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    grade: Optional[str] = Field(default=None, max_length=20)
    enrollment_date: Optional[date] = None
    previous_school: Optional[str] = Field(default=None, max_length=200)
    academic_year: Optional[str] = Field(default=None, max_length=20)
    additional_notes: Optional[str] = None
    parent_id: Optional[UUID] = None

    check_not_null = reject_null("first_name", "last_name")

    class Config:
        use_enum_values = True


class Student(StudentBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
