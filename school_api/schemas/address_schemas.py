# school_api/schemas/address_schemas.py
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

from .fields import reject_null


class AddressBase(BaseModel):
    address: str = Field(..., min_length=1, max_length=255, description="Street address")
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)


class AddressCreate(AddressBase):
    pass


class AddressUpdate(BaseModel):
    address: Optional[str] = Field(default=None, min_length=1, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)

    check_not_null = reject_null("address", "city")


class AddressAssociate(BaseModel):
    """Link an existing address to exactly one owner"""
    student_id: Optional[UUID] = None
    parent_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    address_type: str = Field(default="HOME", max_length=20)


class Address(AddressBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OwnedAddress(BaseModel):
    """Address as seen through an owner's link row"""
    id: UUID
    address_id: UUID
    address_type: str
    address: Address

    class Config:
        from_attributes = True
