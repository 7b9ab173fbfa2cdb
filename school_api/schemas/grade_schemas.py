# school_api/schemas/grade_schemas.py
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field

from .fields import reject_null


class GradeCreate(BaseModel):
    enrollment_id: UUID
    assignment_name: str = Field(..., min_length=1, max_length=100)
    score: Decimal = Field(..., ge=0, le=100)
    grade_date: date
    category: Optional[str] = Field(default=None, max_length=50)
    weighting: Decimal = Field(default=Decimal("1"), gt=0)


class GradeUpdate(BaseModel):
    assignment_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    score: Optional[Decimal] = Field(default=None, ge=0, le=100)
    grade_date: Optional[date] = None
    category: Optional[str] = Field(default=None, max_length=50)
    weighting: Optional[Decimal] = Field(default=None, gt=0)

    check_not_null = reject_null("assignment_name", "score", "grade_date", "weighting")


class Grade(BaseModel):
    id: UUID
    enrollment_id: UUID
    assignment_name: str
    score: Decimal
    grade_date: date
    category: Optional[str] = None
    weighting: Decimal
    created_at: datetime

    class Config:
        from_attributes = True
