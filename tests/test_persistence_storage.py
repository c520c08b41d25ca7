"""Tests for the SQLite storage and its DAOs."""

from __future__ import annotations

import sqlite3

import pytest

from classroll.core.models import (
    AttendanceStatus,
    CheckIn,
    Course,
    CourseSubjectCrossRef,
    Student,
    StudentSubjectCrossRef,
    Subject,
    Teacher,
    TeacherStudentCrossRef,
)
from classroll.persistence import storage as storage_module
from classroll.persistence.storage import SQLiteStorage


def _make_teacher(**overrides) -> Teacher:
    return Teacher(
        teacher_id=overrides.get("teacher_id", "TEACH-001"),
        first_name=overrides.get("first_name", "Ada"),
        middle_name=overrides.get("middle_name", ""),
        last_name=overrides.get("last_name", "Lovelace"),
        email=overrides.get("email", "ada@example.com"),
        password=overrides.get("password", "secret1"),
    )


def _make_check_in(**overrides) -> CheckIn:
    return CheckIn(
        check_in_id=overrides.get("check_in_id", "c-1"),
        student_id=overrides.get("student_id", "STUD-001"),
        subject_id=overrides.get("subject_id", "SUBJ-001"),
        teacher_id=overrides.get("teacher_id", "TEACH-001"),
        check_in_time=overrides.get("check_in_time", "08:00:00"),
        check_in_date=overrides.get("check_in_date", "2024-09-02"),
        status=overrides.get("status", AttendanceStatus.PRESENT),
    )


@pytest.fixture
def seeded(storage):
    """One teacher owning a course, a subject and a student with one check-in."""
    storage.teacher_dao().insert_teacher(_make_teacher())
    storage.course_dao().insert_course(Course("COURSE-001", "Mathematics", "MATH", "TEACH-001"))
    storage.subject_dao().insert_subject(Subject("SUBJ-001", "Algebra", "ALG", "TEACH-001"))
    storage.student_dao().insert_student(Student("STUD-001", "Alan", "", "Turing", "COURSE-001"))
    storage.teacher_student_cross_ref_dao().insert(TeacherStudentCrossRef("TEACH-001", "STUD-001"))
    storage.course_subject_cross_ref_dao().insert(CourseSubjectCrossRef("COURSE-001", "SUBJ-001"))
    storage.student_subject_cross_ref_dao().insert(StudentSubjectCrossRef("STUD-001", "SUBJ-001"))
    storage.check_ins_dao().insert_check_in(_make_check_in())
    return storage


def test_storage_uses_env_path(tmp_path, monkeypatch):
    db_path = tmp_path / "nested" / "env.db"
    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(db_path))

    storage = SQLiteStorage()

    assert storage.db_path == db_path.resolve()
    assert db_path.parent.exists()


def test_storage_creates_schema_lazily(tmp_path):
    db_path = tmp_path / "lazy.db"

    storage = SQLiteStorage(db_path)
    assert not db_path.exists()

    assert storage.teacher_dao().get_all_teachers() == []
    assert db_path.exists()


def test_accessors_return_new_dao_objects(storage):
    assert storage.teacher_dao() is not storage.teacher_dao()


def test_get_storage_is_cached():
    storage_module.get_storage.cache_clear()
    try:
        assert storage_module.get_storage() is storage_module.get_storage()
    finally:
        storage_module.get_storage.cache_clear()


def test_duplicate_email_rejected_by_schema(storage):
    storage.teacher_dao().insert_teacher(_make_teacher())

    with pytest.raises(sqlite3.IntegrityError):
        storage.teacher_dao().insert_teacher(_make_teacher(teacher_id="TEACH-002"))


def test_max_id_number_ignores_other_prefixes(storage):
    dao = storage.teacher_dao()
    assert dao.get_max_teacher_id_number() is None

    dao.insert_teacher(_make_teacher(teacher_id="TEACH-009"))
    dao.insert_teacher(_make_teacher(teacher_id="legacy-77", email="legacy@example.com"))

    assert dao.get_max_teacher_id_number() == 9
    assert dao.teacher_id_exists("TEACH-009")
    assert not dao.teacher_id_exists("TEACH-010")


def test_teacher_with_all_data(seeded):
    bundle = seeded.teacher_dao().get_teacher_with_all_data("TEACH-001")

    assert bundle.teacher.email == "ada@example.com"
    assert [s.student_id for s in bundle.students] == ["STUD-001"]
    assert [c.course_id for c in bundle.courses] == ["COURSE-001"]
    assert [s.subject_id for s in bundle.subjects] == ["SUBJ-001"]
    assert seeded.teacher_dao().get_teacher_with_all_data("TEACH-404") is None


def test_cross_ref_insert_ignores_duplicates(seeded):
    dao = seeded.teacher_student_cross_ref_dao()

    dao.insert(TeacherStudentCrossRef("TEACH-001", "STUD-001"))

    assert dao.get_student_count_for_teacher("TEACH-001") == 1


def test_deleting_teacher_cascades(seeded):
    seeded.teacher_dao().delete_teacher(_make_teacher())

    assert seeded.course_dao().get_all_courses() == []
    assert seeded.subject_dao().get_all_subjects() == []
    assert seeded.check_ins_dao().get_all_check_ins() == []
    assert not seeded.teacher_student_cross_ref_dao().exists("TEACH-001", "STUD-001")
    # Students are shared between teachers and outlive them.
    student = seeded.student_dao().get_student_by_id("STUD-001")
    assert student is not None
    assert student.course_id is None


def test_deleting_course_detaches_students(seeded):
    seeded.course_dao().delete_course(Course("COURSE-001", "Mathematics", "MATH", "TEACH-001"))

    assert seeded.student_dao().get_student_by_id("STUD-001").course_id is None
    assert not seeded.course_subject_cross_ref_dao().exists("COURSE-001", "SUBJ-001")
    assert seeded.subject_dao().get_subject_by_id("SUBJ-001") is not None


def test_deleting_student_cascades(seeded):
    seeded.student_dao().delete_student_by_id("STUD-001")

    assert seeded.check_ins_dao().get_all_check_ins() == []
    assert seeded.student_subject_cross_ref_dao().get_subject_ids_by_student("STUD-001") == []
    assert seeded.teacher_student_cross_ref_dao().get_by_student("STUD-001") == []


def test_deleting_subject_cascades(seeded):
    seeded.subject_dao().delete_subject(Subject("SUBJ-001", "Algebra", "ALG", "TEACH-001"))

    assert seeded.check_ins_dao().get_check_ins_by_subject("SUBJ-001") == []
    assert seeded.student_subject_cross_ref_dao().get_student_ids_by_subject("SUBJ-001") == []
    assert seeded.course_subject_cross_ref_dao().get_by_course("COURSE-001") == []


def test_filtered_check_ins(seeded):
    dao = seeded.check_ins_dao()
    dao.insert_check_in(_make_check_in(check_in_id="c-2", check_in_date="2024-09-10"))
    dao.insert_check_in(_make_check_in(check_in_id="c-3", check_in_date="2024-10-01"))

    in_range = dao.get_filtered_check_ins("TEACH-001", None, "2024-09-01", "2024-09-30")
    other_subject = dao.get_filtered_check_ins("TEACH-001", "SUBJ-002", "2024-01-01", "2024-12-31")

    assert [c.check_in_id for c in in_range] == ["c-2", "c-1"]
    assert other_subject == []


def test_check_in_counts_and_lookup(seeded):
    dao = seeded.check_ins_dao()
    dao.insert_check_in(_make_check_in(check_in_id="c-2", status=AttendanceStatus.LATE))

    assert dao.get_check_in_count_by_teacher("TEACH-001") == 2
    assert dao.get_check_in_count_by_teacher_and_status("TEACH-001", AttendanceStatus.LATE) == 1
    assert dao.has_checked_in("STUD-001", "SUBJ-001", "2024-09-02")
    assert not dao.has_checked_in("STUD-001", "SUBJ-001", "2024-09-03")
    assert dao.get_check_in_by_id("c-2").status is AttendanceStatus.LATE


def test_enrollment_lookups_by_many_ids(seeded):
    dao = seeded.student_subject_cross_ref_dao()

    assert dao.get_by_student_ids([]) == []
    assert dao.get_by_student_ids(["STUD-001", "STUD-404"]) == [
        StudentSubjectCrossRef("STUD-001", "SUBJ-001")
    ]
    assert dao.get_subject_with_enrolled_students("SUBJ-001").students[0].last_name == "Turing"
