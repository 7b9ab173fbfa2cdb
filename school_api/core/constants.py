# school_api/core/constants.py
"""Enumerations shared by models, schemas and services."""
from enum import Enum


class EntityName(str, Enum):
    USER = "user"
    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"
    ADDRESS = "address"
    DEPARTMENT = "department"
    COURSE = "course"
    PREREQUISITE = "prerequisite"
    CLASS = "class"
    CLASS_ASSIGNMENT = "class_assignment"
    ENROLLMENT = "enrollment"
    ATTENDANCE = "attendance"
    GRADE = "grade"
    ROOM = "room"
    SEMESTER = "semester"


class Role(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class RelationshipToStudent(str, Enum):
    MOTHER = "MOTHER"
    FATHER = "FATHER"
    OTHER = "OTHER"


class LetterGrade(str, Enum):
    A_PLUS = "A_PLUS"
    A = "A"
    A_MINUS = "A_MINUS"
    B_PLUS = "B_PLUS"
    B = "B"
    B_MINUS = "B_MINUS"
    C_PLUS = "C_PLUS"
    C = "C"
    C_MINUS = "C_MINUS"
    D_PLUS = "D_PLUS"
    D = "D"
    F = "F"


# Grade points used for prerequisite minimum-grade checks
GRADE_POINTS = {
    LetterGrade.A_PLUS: 4.3,
    LetterGrade.A: 4.0,
    LetterGrade.A_MINUS: 3.7,
    LetterGrade.B_PLUS: 3.3,
    LetterGrade.B: 3.0,
    LetterGrade.B_MINUS: 2.7,
    LetterGrade.C_PLUS: 2.3,
    LetterGrade.C: 2.0,
    LetterGrade.C_MINUS: 1.7,
    LetterGrade.D_PLUS: 1.3,
    LetterGrade.D: 1.0,
    LetterGrade.F: 0.0,
}


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class RoomType(str, Enum):
    CLASS_ROOM = "CLASS_ROOM"
    LAB = "LAB"
    OFFICE = "OFFICE"
    AUDITORIUM = "AUDITORIUM"
    OTHER = "OTHER"


class Title(str, Enum):
    DR = "DR"
    MR = "MR"
    MS = "MS"
    MRS = "MRS"
    PROF = "PROF"


class EmploymentType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    TEMPORARY = "TEMPORARY"


class SemesterStatus(str, Enum):
    ACTIVE = "ACTIVE"
    UPCOMING = "UPCOMING"
    COMPLETED = "COMPLETED"


class EnrollmentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DROPPED = "DROPPED"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"
    WAITLISTED = "WAITLISTED"


class RecordStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"
