"""Core data models for the attendance system."""

from .models import (
    AttendanceStatus,
    CheckIn,
    Course,
    CourseSubjectCrossRef,
    CourseWithSubjects,
    Student,
    StudentSubjectCrossRef,
    StudentWithAttendance,
    StudentWithSubjects,
    StudentWithTeachers,
    Subject,
    SubjectWithCourses,
    SubjectWithEnrolledStudents,
    Teacher,
    TeacherStudentCrossRef,
    TeacherWithAllData,
    TeacherWithStudents,
)

__all__ = [
    "AttendanceStatus",
    "CheckIn",
    "Course",
    "CourseSubjectCrossRef",
    "CourseWithSubjects",
    "Student",
    "StudentSubjectCrossRef",
    "StudentWithAttendance",
    "StudentWithSubjects",
    "StudentWithTeachers",
    "Subject",
    "SubjectWithCourses",
    "SubjectWithEnrolledStudents",
    "Teacher",
    "TeacherStudentCrossRef",
    "TeacherWithAllData",
    "TeacherWithStudents",
]
