"""Enrollment of students in subjects."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.models import StudentSubjectCrossRef, StudentWithSubjects, SubjectWithEnrolledStudents
from ..persistence.cross_refs import StudentSubjectCrossRefDao


class EnrollmentRepository:
    """Business facade over :class:`StudentSubjectCrossRefDao`."""

    def __init__(self, student_subject_cross_ref_dao: StudentSubjectCrossRefDao) -> None:
        self.student_subject_cross_ref_dao = student_subject_cross_ref_dao

    def get_student_with_subjects(self, student_id: str) -> Optional[StudentWithSubjects]:
        return self.student_subject_cross_ref_dao.get_student_with_subjects(student_id)

    def get_subject_with_enrolled_students(
        self, subject_id: str
    ) -> Optional[SubjectWithEnrolledStudents]:
        return self.student_subject_cross_ref_dao.get_subject_with_enrolled_students(subject_id)

    def get_enrolled_subject_ids(self, student_id: str) -> List[str]:
        return self.student_subject_cross_ref_dao.get_subject_ids_by_student(student_id)

    def get_enrolled_student_ids(self, subject_id: str) -> List[str]:
        return self.student_subject_cross_ref_dao.get_student_ids_by_subject(subject_id)

    def is_enrolled(self, student_id: str, subject_id: str) -> bool:
        return self.student_subject_cross_ref_dao.exists(student_id, subject_id)

    def get_enrollment_count_by_student(self, student_id: str) -> int:
        return self.student_subject_cross_ref_dao.get_enrollment_count_by_student(student_id)

    def get_enrollment_count_by_subject(self, subject_id: str) -> int:
        return self.student_subject_cross_ref_dao.get_enrollment_count_by_subject(subject_id)

    def get_enrollment_counts_for_students(self, student_ids: Sequence[str]) -> Dict[str, int]:
        """Subject counts keyed by student id; students with no enrollment are left out."""
        if not student_ids:
            return {}
        refs = self.student_subject_cross_ref_dao.get_by_student_ids(student_ids)
        return dict(Counter(ref.student_id for ref in refs))

    def get_enrollment_counts_for_subjects(self, subject_ids: Sequence[str]) -> Dict[str, int]:
        """Student counts keyed by subject id; empty subjects are left out."""
        if not subject_ids:
            return {}
        refs = self.student_subject_cross_ref_dao.get_by_subject_ids(subject_ids)
        return dict(Counter(ref.subject_id for ref in refs))

    def enroll_student(self, student_id: str, subject_id: str) -> None:
        self.student_subject_cross_ref_dao.insert(StudentSubjectCrossRef(student_id, subject_id))

    def unenroll_student(self, student_id: str, subject_id: str) -> None:
        self.student_subject_cross_ref_dao.delete_by_ids(student_id, subject_id)

    def enroll_student_in_subjects(self, student_id: str, subject_ids: Iterable[str]) -> None:
        self.student_subject_cross_ref_dao.insert_all(
            [StudentSubjectCrossRef(student_id, subject_id) for subject_id in subject_ids]
        )

    def update_student_enrollments(self, student_id: str, subject_ids: Iterable[str]) -> None:
        """Make ``subject_ids`` the exact enrollment set of ``student_id``."""
        current = set(self.get_enrolled_subject_ids(student_id))
        wanted = set(subject_ids)
        for subject_id in sorted(current - wanted):
            self.student_subject_cross_ref_dao.delete_by_ids(student_id, subject_id)
        self.enroll_student_in_subjects(student_id, sorted(wanted - current))

    def unenroll_student_from_all(self, student_id: str) -> None:
        self.student_subject_cross_ref_dao.delete_all_by_student(student_id)

    def enroll_students_in_subject(self, subject_id: str, student_ids: Iterable[str]) -> None:
        self.student_subject_cross_ref_dao.insert_all(
            [StudentSubjectCrossRef(student_id, subject_id) for student_id in student_ids]
        )

    def update_subject_enrollments(self, subject_id: str, student_ids: Iterable[str]) -> None:
        """Make ``student_ids`` the exact enrolled set of ``subject_id``."""
        current = set(self.get_enrolled_student_ids(subject_id))
        wanted = set(student_ids)
        for student_id in sorted(current - wanted):
            self.student_subject_cross_ref_dao.delete_by_ids(student_id, subject_id)
        self.enroll_students_in_subject(subject_id, sorted(wanted - current))

    def unenroll_all_from_subject(self, subject_id: str) -> None:
        self.student_subject_cross_ref_dao.delete_all_by_subject(subject_id)
