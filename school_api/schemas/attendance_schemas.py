# school_api/schemas/attendance_schemas.py
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field

from ..core.constants import AttendanceStatus
from ..utils.pagination import PaginationParams
from .fields import reject_null


class AttendanceCreate(BaseModel):
    enrollment_id: UUID
    attendance_date: date
    status: AttendanceStatus
    notes: Optional[str] = Field(default=None, max_length=500)

    class Config:
        use_enum_values = True


class AttendanceUpdate(BaseModel):
    attendance_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    check_not_null = reject_null("attendance_date", "status")

    class Config:
        use_enum_values = True


class AttendanceQuery(PaginationParams):
    enrollment_id: Optional[UUID] = None
    status: Optional[AttendanceStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Attendance(BaseModel):
    id: UUID
    enrollment_id: UUID
    attendance_date: date
    status: AttendanceStatus
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
