"""
Central factory for the attendance system's repositories.

A :class:`RepositoryProvider` wraps one database handle and builds each
repository the first time it is requested. Later reads return the same
object, so every caller shares one repository per kind and all of them share
the handle. Building a repository only asks the handle for DAO objects; no
query runs until a repository method is called.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Callable, Dict, Protocol, TypeVar

from .persistence.cross_refs import (
    CourseSubjectCrossRefDao,
    StudentSubjectCrossRefDao,
    TeacherStudentCrossRefDao,
)
from .persistence.daos import CheckInsDao, CourseDao, StudentDao, SubjectDao, TeacherDao
from .persistence.storage import get_storage
from .repositories import (
    AttendanceRepository,
    CourseRepository,
    EnrollmentRepository,
    StudentRepository,
    SubjectRepository,
    TeacherRepository,
)

T = TypeVar("T")


class DatabaseHandle(Protocol):
    """What the provider needs from a database: one accessor per DAO."""

    def teacher_dao(self) -> TeacherDao: ...

    def student_dao(self) -> StudentDao: ...

    def course_dao(self) -> CourseDao: ...

    def subject_dao(self) -> SubjectDao: ...

    def check_ins_dao(self) -> CheckInsDao: ...

    def teacher_student_cross_ref_dao(self) -> TeacherStudentCrossRefDao: ...

    def course_subject_cross_ref_dao(self) -> CourseSubjectCrossRefDao: ...

    def student_subject_cross_ref_dao(self) -> StudentSubjectCrossRefDao: ...


class RepositoryProvider:
    """Lazily builds and memoizes the six repositories over one database handle."""

    def __init__(self, database: DatabaseHandle) -> None:
        self._database = database
        self._repositories: Dict[str, object] = {}
        self._lock = threading.Lock()

    @property
    def database(self) -> DatabaseHandle:
        return self._database

    @property
    def teacher_repository(self) -> TeacherRepository:
        return self._get_or_create("teacher", lambda db: TeacherRepository(db.teacher_dao()))

    @property
    def student_repository(self) -> StudentRepository:
        return self._get_or_create(
            "student",
            lambda db: StudentRepository(db.student_dao(), db.teacher_student_cross_ref_dao()),
        )

    @property
    def course_repository(self) -> CourseRepository:
        return self._get_or_create("course", lambda db: CourseRepository(db.course_dao()))

    @property
    def subject_repository(self) -> SubjectRepository:
        return self._get_or_create(
            "subject",
            lambda db: SubjectRepository(db.subject_dao(), db.course_subject_cross_ref_dao()),
        )

    @property
    def attendance_repository(self) -> AttendanceRepository:
        return self._get_or_create(
            "attendance", lambda db: AttendanceRepository(db.check_ins_dao())
        )

    @property
    def enrollment_repository(self) -> EnrollmentRepository:
        return self._get_or_create(
            "enrollment",
            lambda db: EnrollmentRepository(db.student_subject_cross_ref_dao()),
        )

    def _get_or_create(self, key: str, factory: Callable[[DatabaseHandle], T]) -> T:
        # The factory runs at most once per key; a failing factory caches nothing.
        repository = self._repositories.get(key)
        if repository is None:
            with self._lock:
                repository = self._repositories.get(key)
                if repository is None:
                    repository = factory(self._database)
                    self._repositories[key] = repository
        return repository  # type: ignore[return-value]


@lru_cache(maxsize=1)
def get_provider() -> RepositoryProvider:
    """Return a cached provider over the default storage."""
    return RepositoryProvider(get_storage())
