# school_api/models/__init__.py
"""Import all models here, needed for Alembic autogenerate and create_all."""
from .base import Base

from .user import User
from .student import Student
from .teacher import Teacher, teacher_departments
from .parent import Parent, EmergencyContact
from .address import Address, StudentAddress, ParentAddress, TeacherAddress
from .department import Department
from .course import Course, CoursePrerequisite
from .class_model import ClassRoom, ClassAssignment
from .enrollment import Enrollment
from .attendance import Attendance
from .grade import Grade
from .room import Room
from .semester import Semester

# This ensures all models are loaded when importing models
