# school_api/schemas/parent_schemas.py
"""Pydantic schemas for Parent entity and its emergency contacts."""
from typing import List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ..core.constants import RelationshipToStudent
from .address_schemas import AddressCreate
from .fields import reject_null


class EmergencyContactBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    relationship: Optional[str] = Field(default=None, max_length=50)
    phone_number: str = Field(..., min_length=3, max_length=20)
    email: Optional[EmailStr] = None


class EmergencyContact(EmergencyContactBase):
    id: UUID
    relationship: Optional[str] = Field(default=None, validation_alias="relationship_to_parent")

    class Config:
        from_attributes = True


class ParentBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    relationship_to_student: Optional[RelationshipToStudent] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    occupation: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None

    class Config:
        use_enum_values = True


class ParentCreate(ParentBase):
    username: Optional[str] = Field(default=None, min_length=3, max_length=50, description="Creates a login when set")
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    address: Optional[AddressCreate] = None
    emergency_contacts: List[EmergencyContactBase] = Field(default_factory=list)


class ParentUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    relationship_to_student: Optional[RelationshipToStudent] = None
    contact_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    occupation: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None
    # Replaces the full list when given
    emergency_contacts: Optional[List[EmergencyContactBase]] = Field(default=None, min_length=1)

    check_not_null = reject_null("first_name", "last_name", "emergency_contacts")

    class Config:
        use_enum_values = True


class Parent(ParentBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ParentDetail(Parent):
    emergency_contacts: List[EmergencyContact] = []
