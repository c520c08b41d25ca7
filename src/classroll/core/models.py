"""
Core data models for the attendance system.

Entities mirror the SQLite tables one-to-one; relation views bundle an entity
with the rows reached through its foreign keys or cross-reference tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AttendanceStatus(str, Enum):
    """Outcome recorded for a single check-in."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


def _join_name(*parts: str) -> str:
    return " ".join(part.strip() for part in parts if part and part.strip())


@dataclass(frozen=True)
class Teacher:
    """A registered teacher account."""

    teacher_id: str
    first_name: str
    middle_name: str
    last_name: str
    email: str
    password: str = ""

    @property
    def full_name(self) -> str:
        return _join_name(self.first_name, self.middle_name, self.last_name)


@dataclass(frozen=True)
class Student:
    """A student, optionally placed in a course."""

    student_id: str
    first_name: str
    middle_name: str
    last_name: str
    course_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return _join_name(self.first_name, self.middle_name, self.last_name)


@dataclass(frozen=True)
class Course:
    """A course owned by exactly one teacher."""

    course_id: str
    course_name: str
    course_code: str
    teacher_id: str


@dataclass(frozen=True)
class Subject:
    """A subject owned by exactly one teacher."""

    subject_id: str
    subject_name: str
    subject_code: str
    teacher_id: str
    description: str = ""


@dataclass(frozen=True)
class CheckIn:
    """A single attendance record for a student in a subject."""

    check_in_id: str
    student_id: str
    subject_id: str
    teacher_id: str
    check_in_time: str
    check_in_date: str
    status: AttendanceStatus = AttendanceStatus.PRESENT


@dataclass(frozen=True)
class TeacherStudentCrossRef:
    teacher_id: str
    student_id: str


@dataclass(frozen=True)
class CourseSubjectCrossRef:
    course_id: str
    subject_id: str


@dataclass(frozen=True)
class StudentSubjectCrossRef:
    student_id: str
    subject_id: str


@dataclass(frozen=True)
class TeacherWithStudents:
    teacher: Teacher
    students: List[Student] = field(default_factory=list)


@dataclass(frozen=True)
class TeacherWithAllData:
    """A teacher together with everything the teacher owns or is linked to."""

    teacher: Teacher
    students: List[Student] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    subjects: List[Subject] = field(default_factory=list)


@dataclass(frozen=True)
class StudentWithTeachers:
    student: Student
    teachers: List[Teacher] = field(default_factory=list)


@dataclass(frozen=True)
class StudentWithAttendance:
    student: Student
    check_ins: List[CheckIn] = field(default_factory=list)


@dataclass(frozen=True)
class StudentWithSubjects:
    student: Student
    subjects: List[Subject] = field(default_factory=list)


@dataclass(frozen=True)
class CourseWithSubjects:
    course: Course
    subjects: List[Subject] = field(default_factory=list)


@dataclass(frozen=True)
class SubjectWithCourses:
    subject: Subject
    courses: List[Course] = field(default_factory=list)


@dataclass(frozen=True)
class SubjectWithEnrolledStudents:
    subject: Subject
    students: List[Student] = field(default_factory=list)
