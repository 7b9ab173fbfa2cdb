# school_api/schemas/room_schemas.py
"""Pydantic schemas for Room entity."""
from typing import Optional
from datetime import datetime, time
from uuid import UUID
from pydantic import BaseModel, Field

from ..core.constants import DayOfWeek, RecordStatus, RoomType
from ..utils.pagination import PaginationParams
from .fields import reject_null


class RoomBase(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    building: Optional[str] = Field(default=None, max_length=100)
    name: Optional[str] = Field(default=None, max_length=100)
    capacity: int = Field(..., gt=0)
    room_type: RoomType = RoomType.CLASS_ROOM
    has_projector: bool = False
    has_whiteboard: bool = True
    status: RecordStatus = RecordStatus.ACTIVE
    notes: Optional[str] = None

    class Config:
        use_enum_values = True


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    building: Optional[str] = Field(default=None, max_length=100)
    name: Optional[str] = Field(default=None, max_length=100)
    capacity: Optional[int] = Field(default=None, gt=0)
    room_type: Optional[RoomType] = None
    has_projector: Optional[bool] = None
    has_whiteboard: Optional[bool] = None
    status: Optional[RecordStatus] = None
    notes: Optional[str] = None

    check_not_null = reject_null(
        "room_number", "capacity", "room_type", "has_projector", "has_whiteboard", "status"
    )

    class Config:
        use_enum_values = True


class RoomQuery(PaginationParams):
    building: Optional[str] = None
    room_type: Optional[RoomType] = None
    status: Optional[RecordStatus] = None
    min_capacity: Optional[int] = Field(default=None, ge=0)
    has_projector: Optional[bool] = None


class RoomAvailabilityQuery(BaseModel):
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    exclude_class_id: Optional[UUID] = None


class Room(RoomBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
