"""Tests for enrolling students in subjects."""

from __future__ import annotations

import pytest


@pytest.fixture
def school(provider, teacher):
    students = [
        provider.student_repository.create_student(first, "", "Student", None, teacher.teacher_id)
        for first in ("Ann", "Ben", "Cal")
    ]
    subjects = [
        provider.subject_repository.create_subject(name, code, teacher.teacher_id)
        for name, code in (("Algebra", "ALG"), ("Biology", "BIO"), ("Chemistry", "CHEM"))
    ]
    return [s.student_id for s in students], [s.subject_id for s in subjects]


def test_enroll_and_unenroll(provider, school):
    enrollment = provider.enrollment_repository
    (ann, ben, _), (alg, bio, _) = school

    enrollment.enroll_student(ann, alg)
    enrollment.enroll_student(ann, alg)
    enrollment.enroll_student_in_subjects(ann, [bio])
    enrollment.enroll_students_in_subject(alg, [ben])

    assert enrollment.get_enrolled_subject_ids(ann) == [alg, bio]
    assert enrollment.get_enrolled_student_ids(alg) == [ann, ben]
    assert enrollment.is_enrolled(ann, bio)
    assert enrollment.get_enrollment_count_by_student(ann) == 2
    assert enrollment.get_enrollment_count_by_subject(alg) == 2

    enrollment.unenroll_student(ann, bio)
    assert not enrollment.is_enrolled(ann, bio)


def test_update_student_enrollments_applies_difference(provider, school):
    enrollment = provider.enrollment_repository
    (ann, _, _), (alg, bio, chem) = school
    enrollment.enroll_student_in_subjects(ann, [alg, bio])

    enrollment.update_student_enrollments(ann, [bio, chem])

    assert enrollment.get_enrolled_subject_ids(ann) == [bio, chem]


def test_update_subject_enrollments_applies_difference(provider, school):
    enrollment = provider.enrollment_repository
    (ann, ben, cal), (alg, _, _) = school
    enrollment.enroll_students_in_subject(alg, [ann, ben])

    enrollment.update_subject_enrollments(alg, [ben, cal])

    assert enrollment.get_enrolled_student_ids(alg) == [ben, cal]


def test_enrollment_counts_skip_empty_entries(provider, school):
    enrollment = provider.enrollment_repository
    (ann, ben, cal), (alg, bio, chem) = school
    enrollment.enroll_student_in_subjects(ann, [alg, bio])
    enrollment.enroll_student(ben, alg)

    assert enrollment.get_enrollment_counts_for_students([ann, ben, cal]) == {ann: 2, ben: 1}
    assert enrollment.get_enrollment_counts_for_subjects([alg, bio, chem]) == {alg: 2, bio: 1}
    assert enrollment.get_enrollment_counts_for_students([]) == {}


def test_unenroll_all(provider, school):
    enrollment = provider.enrollment_repository
    (ann, ben, _), (alg, bio, _) = school
    enrollment.enroll_student_in_subjects(ann, [alg, bio])
    enrollment.enroll_student(ben, alg)

    enrollment.unenroll_student_from_all(ann)
    assert enrollment.get_enrolled_subject_ids(ann) == []

    enrollment.unenroll_all_from_subject(alg)
    assert enrollment.get_enrolled_student_ids(alg) == []


def test_relation_views(provider, school):
    enrollment = provider.enrollment_repository
    (ann, _, _), (alg, _, _) = school
    enrollment.enroll_student(ann, alg)

    assert [s.subject_code for s in enrollment.get_student_with_subjects(ann).subjects] == ["ALG"]
    assert [s.first_name for s in enrollment.get_subject_with_enrolled_students(alg).students] == [
        "Ann"
    ]
    assert enrollment.get_student_with_subjects("STUD-404") is None
