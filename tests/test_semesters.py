"""Semester date ranges, academic years and calendar generation."""
from datetime import date

import pytest

from school_api.core.exceptions import BadRequestError
from school_api.schemas.semester_schemas import (
    AcademicCalendarRequest, SemesterCreate, SemesterDates, SemesterUpdate
)
from school_api.services.semester_service import SemesterService, derive_status, extract_academic_year


# =============================================================================
# Date range validation
# =============================================================================

@pytest.mark.parametrize("start, end", [
    (date(2031, 2, 1), date(2031, 1, 1)),
    (date(2031, 1, 1), date(2031, 1, 1)),
])
async def test_empty_or_reversed_range_rejected(db, start, end):
    with pytest.raises(BadRequestError) as exc_info:
        await SemesterService(db).create(SemesterCreate(name="Broken", start_date=start, end_date=end))
    assert exc_info.value.detail == "Start date must be before end date"


async def test_overlapping_range_names_the_other_semester(db, semester):
    with pytest.raises(BadRequestError) as exc_info:
        await SemesterService(db).create(
            SemesterCreate(name="Autumn Intensive", start_date=date(2030, 12, 1), end_date=date(2031, 1, 15))
        )
    assert exc_info.value.detail == "Semester dates overlap with existing semester: Fall 2030"


async def test_touching_ranges_are_allowed(db, semester):
    spring = await SemesterService(db).create(
        SemesterCreate(name="Spring 2031", start_date=date(2030, 12, 20), end_date=date(2031, 5, 15))
    )
    assert spring.academic_year == "2030-2031"


async def test_update_with_same_range_excludes_itself(db, semester):
    updated = await SemesterService(db).update(
        semester.id,
        SemesterUpdate(start_date=semester.start_date, end_date=semester.end_date, description="Unchanged"),
    )
    assert updated.description == "Unchanged"


async def test_update_into_other_semester_rejected(db, semester):
    service = SemesterService(db)
    spring = await service.create(
        SemesterCreate(name="Spring 2031", start_date=date(2031, 1, 10), end_date=date(2031, 5, 15))
    )

    with pytest.raises(BadRequestError):
        await service.update(spring.id, SemesterUpdate(start_date=date(2030, 12, 1)))


async def test_deleted_semester_does_not_block_range(db, semester):
    service = SemesterService(db)
    await service.delete(semester.id)

    replacement = await service.create(
        SemesterCreate(name="Fall 2030 (revised)", start_date=date(2030, 9, 1), end_date=date(2030, 12, 20))
    )
    assert replacement.id != semester.id


# =============================================================================
# Derived fields
# =============================================================================

@pytest.mark.parametrize("start, end, expected", [
    (date(2024, 9, 1), date(2025, 1, 31), "2024-2025"),
    (date(2025, 2, 1), date(2025, 6, 15), "2024-2025"),
    (date(2025, 8, 20), date(2025, 12, 20), "2025-2026"),
])
def test_extract_academic_year(start, end, expected):
    assert extract_academic_year(start, end) == expected


def test_derive_status():
    today = date(2030, 10, 1)
    assert derive_status(date(2030, 9, 1), date(2030, 12, 20), today).value == "ACTIVE"
    assert derive_status(date(2031, 1, 1), date(2031, 5, 1), today).value == "UPCOMING"
    assert derive_status(date(2030, 1, 1), date(2030, 5, 1), today).value == "COMPLETED"


async def test_only_one_current_semester(db, semester):
    service = SemesterService(db)
    await service.update(semester.id, SemesterUpdate(current_semester=True))
    spring = await service.create(
        SemesterCreate(
            name="Spring 2031", start_date=date(2031, 1, 10), end_date=date(2031, 5, 15), current_semester=True
        )
    )

    await db.refresh(semester)
    assert semester.current_semester is False
    assert (await service.get_current_semester()).id == spring.id


# =============================================================================
# Academic calendar
# =============================================================================

async def test_generate_academic_calendar(db):
    request = AcademicCalendarRequest(
        starting_academic_year="2040-2041",
        first_semester=SemesterDates(start_date=date(2040, 9, 1), end_date=date(2040, 12, 20)),
        second_semester=SemesterDates(start_date=date(2041, 1, 10), end_date=date(2041, 5, 20)),
        summer_semester=SemesterDates(start_date=date(2041, 6, 1), end_date=date(2041, 8, 1)),
        number_of_years=2,
    )

    created = await SemesterService(db).generate_academic_calendar(request)

    assert [s.name for s in created] == [
        "Fall 2040", "Spring 2041", "Summer 2041",
        "Fall 2041", "Spring 2042", "Summer 2042",
    ]
    assert created[3].start_date == date(2041, 9, 1)
    assert created[3].academic_year == "2041-2042"
    assert all(s.status == "UPCOMING" for s in created)


async def test_calendar_rolled_back_on_overlap(db):
    service = SemesterService(db)
    await service.create(
        SemesterCreate(name="Intersession", start_date=date(2041, 10, 1), end_date=date(2041, 10, 15))
    )
    request = AcademicCalendarRequest(
        starting_academic_year="2040-2041",
        first_semester=SemesterDates(start_date=date(2040, 9, 1), end_date=date(2040, 12, 20)),
        second_semester=SemesterDates(start_date=date(2041, 1, 10), end_date=date(2041, 5, 20)),
        number_of_years=2,
    )

    # The second year's fall term collides with the intersession
    with pytest.raises(BadRequestError):
        await service.generate_academic_calendar(request)

    assert await service.count() == 1
