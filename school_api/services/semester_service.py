# school_api/services/semester_service.py
"""Semesters: date-overlap validation, status tracking and calendar generation."""
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .validators import ensure_unique
from ..core.constants import EntityName, SemesterStatus
from ..core.exceptions import BadRequestError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.class_model import ClassRoom
from ..models.semester import Semester
from ..schemas.semester_schemas import (
    AcademicCalendarRequest, SemesterCreate, SemesterQuery, SemesterUpdate
)

logger = logging.getLogger(__name__)


def derive_status(start_date: date, end_date: date, today: Optional[date] = None) -> SemesterStatus:
    today = today or date.today()
    if start_date <= today <= end_date:
        return SemesterStatus.ACTIVE
    if today > end_date:
        return SemesterStatus.COMPLETED
    return SemesterStatus.UPCOMING


def extract_academic_year(start_date: date, end_date: date) -> str:
    """Academic years run autumn to summer, e.g. "2024-2025"."""
    if start_date.year == end_date.year:
        # Spring and summer terms belong to the year that started the previous autumn
        if start_date.month < 7:
            return f"{start_date.year - 1}-{start_date.year}"
        return f"{start_date.year}-{start_date.year + 1}"
    return f"{start_date.year}-{end_date.year}"


def _shift_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year + years, day=28)


class SemesterService(BaseService[Semester]):
    entity_name = EntityName.SEMESTER

    def __init__(self, db: AsyncSession):
        super().__init__(Semester, db)

    async def is_name_available(self, name: str, id: Optional[UUID] = None,
                                uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "name", name, id, uow)

    async def check_date_overlap(self, start_date: date, end_date: date,
                                 exclude_id: Optional[UUID] = None,
                                 uow: Optional[UnitOfWork] = None) -> bool:
        """Reject an empty or reversed range, or one intersecting another live semester.

        Ranges that only touch (one ends the day the next starts) do not overlap.
        """
        if start_date >= end_date:
            raise BadRequestError("Start date must be before end date")

        criteria = [Semester.start_date < end_date, Semester.end_date > start_date]
        if exclude_id is not None:
            criteria.append(Semester.id != exclude_id)
        overlapping = await self.get_one(*criteria, uow=uow)
        if overlapping:
            logger.warning(f"Semester range {start_date}..{end_date} overlaps {overlapping.name}")
            raise BadRequestError(f"Semester dates overlap with existing semester: {overlapping.name}")
        return True

    async def create(self, dto: SemesterCreate, uow: Optional[UnitOfWork] = None) -> Semester:
        await self.is_name_available(dto.name, uow=uow)
        await self.check_date_overlap(dto.start_date, dto.end_date, uow=uow)

        status = dto.status or derive_status(dto.start_date, dto.end_date)
        if dto.current_semester:
            await self._clear_current(uow=uow)
        semester = Semester(
            name=dto.name,
            start_date=dto.start_date,
            end_date=dto.end_date,
            status=status.value,
            current_semester=dto.current_semester,
            academic_year=dto.academic_year or extract_academic_year(dto.start_date, dto.end_date),
            description=dto.description,
        )
        semester = await self.save(semester, uow)
        logger.info(f"Created semester {semester.name} ({semester.academic_year})")
        return semester

    async def update(self, id: UUID, dto: SemesterUpdate) -> Semester:
        semester = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)

        if values.get("name") and values["name"] != semester.name:
            await self.is_name_available(values["name"], id)

        if values.get("start_date") or values.get("end_date"):
            start_date = values.get("start_date") or semester.start_date
            end_date = values.get("end_date") or semester.end_date
            await self.check_date_overlap(start_date, end_date, exclude_id=id)
            if not values.get("academic_year"):
                values["academic_year"] = extract_academic_year(start_date, end_date)

        async with UnitOfWork(self.db) as uow:
            # Only one semester carries the current flag
            if values.get("current_semester"):
                await self._clear_current(exclude_id=id, uow=uow)
            await self.update_fields(semester, values, uow)

        await self.db.refresh(semester)
        return semester

    async def delete(self, id: UUID) -> None:
        semester = await self.get_one_or_throw(id=id)
        stmt = select(func.count()).select_from(ClassRoom).where(
            ClassRoom.semester_id == id, ClassRoom.is_deleted == False
        )
        classes = (await self.db.execute(stmt)).scalar_one()
        if classes > 0:
            logger.warning(f"Refusing to delete semester {semester.name}: {classes} class(es)")
            raise BadRequestError(
                f'Cannot delete semester "{semester.name}" as it has {classes} classes associated with it.'
            )
        await super().delete(semester)
        logger.info(f"Deleted semester {semester.name}")

    async def get_semesters(self, query: SemesterQuery) -> Dict[str, Any]:
        criteria = []
        if query.q:
            criteria.append(func.lower(Semester.name).like(f"%{query.q.lower()}%"))
        if query.status:
            criteria.append(Semester.status == query.status.value)
        if query.academic_year:
            criteria.append(Semester.academic_year == query.academic_year)
        if query.current_semester is not None:
            criteria.append(Semester.current_semester == query.current_semester)

        column = getattr(Semester, query.sort_by)
        order = column.desc() if query.sort_order == "desc" else column.asc()
        return await self.get_paginated(query, *criteria, order_by=[order])

    async def get_current_semester(self) -> Semester:
        """Flagged semester, else the one running today, else the next upcoming one"""
        current = await self.get_one(current_semester=True)
        if current:
            return current

        today = date.today()
        active = await self.get_one(
            Semester.start_date <= today,
            Semester.end_date >= today,
            status=SemesterStatus.ACTIVE.value,
        )
        if active:
            return active

        upcoming, _ = await self.find_and_count(
            Semester.start_date > today,
            status=SemesterStatus.UPCOMING.value,
            take=1,
            order_by=[Semester.start_date.asc()],
        )
        if upcoming:
            return upcoming[0]
        raise NotFoundError(EntityName.SEMESTER, {"current": True})

    async def generate_academic_calendar(self, dto: AcademicCalendarRequest) -> List[Semester]:
        """Create fall, spring and optionally summer semesters for consecutive years"""
        terms = [("Fall", 0, dto.first_semester), ("Spring", 1, dto.second_semester)]
        if dto.summer_semester:
            terms.append(("Summer", 1, dto.summer_semester))
        for _, _, dates in terms:
            if dates.start_date >= dates.end_date:
                raise BadRequestError("Start dates must be before end dates")

        first_year = int(dto.starting_academic_year.split("-")[0])
        created = []
        async with UnitOfWork(self.db) as uow:
            for offset in range(dto.number_of_years):
                year = first_year + offset
                academic_year = f"{year}-{year + 1}"
                for label, year_shift, dates in terms:
                    created.append(await self.create(
                        SemesterCreate(
                            name=f"{label} {year + year_shift}",
                            start_date=_shift_years(dates.start_date, offset),
                            end_date=_shift_years(dates.end_date, offset),
                            academic_year=academic_year,
                            description=f"{label} semester for {academic_year} academic year",
                        ),
                        uow,
                    ))

        for semester in created:
            await self.db.refresh(semester)
        logger.info(f"Generated {len(created)} semesters from {dto.starting_academic_year}")
        return created

    async def update_semester_statuses(self) -> Dict[str, int]:
        """Move finished semesters to COMPLETED and running ones to ACTIVE"""
        today = date.today()
        async with UnitOfWork(self.db) as uow:
            completed = await uow.session.execute(
                update(Semester)
                .where(
                    Semester.is_deleted == False,
                    Semester.status != SemesterStatus.COMPLETED.value,
                    Semester.end_date < today,
                )
                .values(status=SemesterStatus.COMPLETED.value, current_semester=False)
                .execution_options(synchronize_session=False)
            )
            activated, _ = await self.find_and_count(
                Semester.start_date <= today,
                Semester.end_date >= today,
                status=SemesterStatus.UPCOMING.value,
                uow=uow,
            )
            if activated:
                await self._clear_current(uow=uow)
                for semester in activated:
                    semester.status = SemesterStatus.ACTIVE.value
                    semester.current_semester = True
                await uow.flush()

        logger.info(f"Semester statuses updated: {completed.rowcount} completed, {len(activated)} activated")
        return {"completed": completed.rowcount, "activated": len(activated)}

    async def _clear_current(self, exclude_id: Optional[UUID] = None, uow: Optional[UnitOfWork] = None) -> None:
        stmt = update(Semester).where(Semester.current_semester == True).values(current_semester=False)
        if exclude_id is not None:
            stmt = stmt.where(Semester.id != exclude_id)
        await self.get_repository(uow).execute(stmt.execution_options(synchronize_session=False))
