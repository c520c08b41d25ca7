"""Business-logic repositories composed from the DAOs."""

from .attendance import AttendanceRepository, AttendanceStats, summarize_check_ins
from .course import CourseRepository
from .enrollment import EnrollmentRepository
from .errors import DuplicateEmailError, ValidationError
from .student import StudentRepository
from .subject import SubjectRepository
from .teacher import TeacherRepository

__all__ = [
    "AttendanceRepository",
    "AttendanceStats",
    "CourseRepository",
    "DuplicateEmailError",
    "EnrollmentRepository",
    "StudentRepository",
    "SubjectRepository",
    "TeacherRepository",
    "ValidationError",
    "summarize_check_ins",
]
