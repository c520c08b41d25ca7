"""Tests for the lazily memoizing repository provider."""

from __future__ import annotations

import threading
import time
from collections import Counter

import pytest

from classroll.persistence.storage import SQLiteStorage
from classroll.provider import RepositoryProvider, get_provider
from classroll.repositories import (
    AttendanceRepository,
    CourseRepository,
    EnrollmentRepository,
    StudentRepository,
    SubjectRepository,
    TeacherRepository,
)

ACCESSORS = (
    "teacher_repository",
    "student_repository",
    "course_repository",
    "subject_repository",
    "attendance_repository",
    "enrollment_repository",
)


class StubDatabase:
    """Database handle that hands out marker objects and counts accessor calls."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls: Counter = Counter()
        self.daos = {}
        self._delay = delay
        self._lock = threading.Lock()

    def _dao(self, name: str):
        if self._delay:
            time.sleep(self._delay)
        with self._lock:
            self.calls[name] += 1
            return self.daos.setdefault(name, object())

    def teacher_dao(self):
        return self._dao("teacher")

    def student_dao(self):
        return self._dao("student")

    def course_dao(self):
        return self._dao("course")

    def subject_dao(self):
        return self._dao("subject")

    def check_ins_dao(self):
        return self._dao("check_ins")

    def teacher_student_cross_ref_dao(self):
        return self._dao("teacher_student")

    def course_subject_cross_ref_dao(self):
        return self._dao("course_subject")

    def student_subject_cross_ref_dao(self):
        return self._dao("student_subject")


@pytest.mark.parametrize("accessor", ACCESSORS)
def test_repeated_access_returns_same_instance(accessor):
    provider = RepositoryProvider(StubDatabase())

    assert getattr(provider, accessor) is getattr(provider, accessor)


def test_construction_does_not_touch_database():
    database = StubDatabase()

    RepositoryProvider(database)

    assert sum(database.calls.values()) == 0


def test_only_requested_repository_is_built():
    database = StubDatabase()
    provider = RepositoryProvider(database)

    provider.course_repository

    assert database.calls == Counter({"course": 1})


def test_repositories_have_expected_types():
    provider = RepositoryProvider(StubDatabase())

    assert isinstance(provider.teacher_repository, TeacherRepository)
    assert isinstance(provider.student_repository, StudentRepository)
    assert isinstance(provider.course_repository, CourseRepository)
    assert isinstance(provider.subject_repository, SubjectRepository)
    assert isinstance(provider.attendance_repository, AttendanceRepository)
    assert isinstance(provider.enrollment_repository, EnrollmentRepository)


def test_repositories_wrap_exact_dao_instances():
    database = StubDatabase()
    provider = RepositoryProvider(database)

    assert provider.teacher_repository.teacher_dao is database.daos["teacher"]
    student_repository = provider.student_repository
    assert student_repository.student_dao is database.daos["student"]
    assert student_repository.teacher_student_cross_ref_dao is database.daos["teacher_student"]
    assert provider.course_repository.course_dao is database.daos["course"]
    subject_repository = provider.subject_repository
    assert subject_repository.subject_dao is database.daos["subject"]
    assert subject_repository.course_subject_cross_ref_dao is database.daos["course_subject"]
    assert provider.attendance_repository.check_ins_dao is database.daos["check_ins"]
    assert (
        provider.enrollment_repository.student_subject_cross_ref_dao
        is database.daos["student_subject"]
    )


def test_student_repository_requests_each_dao_once():
    database = StubDatabase()
    provider = RepositoryProvider(database)

    first = provider.student_repository
    second = provider.student_repository

    assert first is second
    assert database.calls["student"] == 1
    assert database.calls["teacher_student"] == 1


def test_providers_do_not_share_repositories():
    first_db, second_db = StubDatabase(), StubDatabase()
    first, second = RepositoryProvider(first_db), RepositoryProvider(second_db)

    assert first.teacher_repository is not second.teacher_repository
    assert first.teacher_repository.teacher_dao is first_db.daos["teacher"]
    assert second.teacher_repository.teacher_dao is second_db.daos["teacher"]


def test_concurrent_first_access_builds_once():
    database = StubDatabase(delay=0.01)
    provider = RepositoryProvider(database)
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(provider.attendance_repository)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(seen) == 8
    assert all(repository is seen[0] for repository in seen)
    assert database.calls["check_ins"] == 1


def test_failing_accessor_caches_nothing():
    database = StubDatabase()
    failures = iter([RuntimeError("database unavailable")])

    def flaky_teacher_dao():
        for exc in failures:
            raise exc
        return database._dao("teacher")

    database.teacher_dao = flaky_teacher_dao
    provider = RepositoryProvider(database)

    with pytest.raises(RuntimeError, match="database unavailable"):
        provider.teacher_repository

    repository = provider.teacher_repository
    assert repository is provider.teacher_repository
    assert database.calls["teacher"] == 1


def test_database_property_returns_handle():
    database = StubDatabase()

    assert RepositoryProvider(database).database is database


def test_get_provider_uses_default_storage():
    get_provider.cache_clear()
    try:
        provider = get_provider()
        assert get_provider() is provider
        assert isinstance(provider.database, SQLiteStorage)
    finally:
        get_provider.cache_clear()


def test_provider_over_sqlite_storage(provider):
    teacher = provider.teacher_repository.register(
        "Grace", "", "Hopper", "grace@example.com", "cobol!", "cobol!"
    )

    assert provider.teacher_repository.get_teacher_by_id(teacher.teacher_id) == teacher
