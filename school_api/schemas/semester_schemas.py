# school_api/schemas/semester_schemas.py
"""Pydantic schemas for Semester entity."""
from typing import Literal, Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field

from ..core.constants import SemesterStatus
from ..utils.pagination import PaginationParams
from .fields import reject_null


class SemesterBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date
    academic_year: Optional[str] = Field(default=None, max_length=20, description="Derived from the dates when omitted")
    current_semester: bool = False
    description: Optional[str] = None


class SemesterCreate(SemesterBase):
    status: Optional[SemesterStatus] = Field(default=None, description="Derived from today when omitted")


class SemesterUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    academic_year: Optional[str] = Field(default=None, max_length=20)
    current_semester: Optional[bool] = None
    description: Optional[str] = None
    status: Optional[SemesterStatus] = None

    check_not_null = reject_null("name", "start_date", "end_date", "current_semester", "status")

    class Config:
        use_enum_values = True


class SemesterQuery(PaginationParams):
    status: Optional[SemesterStatus] = None
    current_semester: Optional[bool] = None
    academic_year: Optional[str] = None
    q: Optional[str] = Field(default=None, max_length=100)
    sort_by: Literal["start_date", "end_date", "name", "created_at"] = "start_date"
    sort_order: Literal["asc", "desc"] = "desc"


class SemesterDates(BaseModel):
    start_date: date
    end_date: date


class AcademicCalendarRequest(BaseModel):
    """Dates are given for the first academic year and shifted by whole years after that"""
    starting_academic_year: str = Field(..., pattern=r"^\d{4}-\d{4}$", examples=["2024-2025"])
    first_semester: SemesterDates
    second_semester: SemesterDates
    summer_semester: Optional[SemesterDates] = None
    number_of_years: int = Field(default=1, ge=1, le=5)


class Semester(SemesterBase):
    id: UUID
    status: SemesterStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
