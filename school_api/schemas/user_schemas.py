# school_api/schemas/user_schemas.py
"""Pydantic schemas for User accounts."""
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ..core.constants import Role
from .fields import reject_null


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, description="Login name")
    email: Optional[EmailStr] = Field(default=None, description="Email address")
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    photo_url: Optional[str] = Field(default=None, max_length=500)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)
    role: Role = Field(..., description="Account role")
    student_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None


class UserUpdate(BaseModel):
    """Schema for updating a user - all fields optional"""
    username: Optional[str] = Field(default=None, min_length=3, max_length=50)
    email: Optional[EmailStr] = Field(default=None)
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    photo_url: Optional[str] = Field(default=None, max_length=500)
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    is_active: Optional[bool] = Field(default=None)

    check_not_null = reject_null("username", "password", "is_active")


class User(UserBase):
    id: UUID
    role: Role
    is_active: bool
    student_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
