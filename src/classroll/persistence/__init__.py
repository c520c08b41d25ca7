"""Persistence utilities for classroll."""

from .cross_refs import (
    CourseSubjectCrossRefDao,
    StudentSubjectCrossRefDao,
    TeacherStudentCrossRefDao,
)
from .daos import CheckInsDao, CourseDao, StudentDao, SubjectDao, TeacherDao
from .storage import SQLiteStorage, get_storage

__all__ = [
    "CheckInsDao",
    "CourseDao",
    "CourseSubjectCrossRefDao",
    "SQLiteStorage",
    "StudentDao",
    "StudentSubjectCrossRefDao",
    "SubjectDao",
    "TeacherDao",
    "TeacherStudentCrossRefDao",
    "get_storage",
]
