from .base_service import BaseService
from .user_service import UserService
from .auth_service import AuthService
from .address_service import AddressService
from .student_service import StudentService
from .teacher_service import TeacherService
from .parent_service import ParentService, EmergencyContactService
from .department_service import DepartmentService
from .course_service import CourseService
from .class_service import ClassService, ClassAssignmentService
from .enrollment_service import EnrollmentService
from .attendance_service import AttendanceService
from .grade_service import GradeService
from .room_service import RoomService
from .semester_service import SemesterService

__all__ = [
    "BaseService",
    "UserService",
    "AuthService",
    "AddressService",
    "StudentService",
    "TeacherService",
    "ParentService",
    "EmergencyContactService",
    "DepartmentService",
    "CourseService",
    "ClassService",
    "ClassAssignmentService",
    "EnrollmentService",
    "AttendanceService",
    "GradeService",
    "RoomService",
    "SemesterService",
]
