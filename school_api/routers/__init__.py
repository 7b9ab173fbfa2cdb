from . import (
    health, auth, users, students, teachers, parents, addresses, departments,
    courses, classes, enrollments, attendances, grades, rooms, semesters
)

__all__ = [
    "health",
    "auth",
    "users",
    "students",
    "teachers",
    "parents",
    "addresses",
    "departments",
    "courses",
    "classes",
    "enrollments",
    "attendances",
    "grades",
    "rooms",
    "semesters"
]
