"""Subjects owned by a teacher and their links to courses."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.models import CourseSubjectCrossRef, Subject, SubjectWithCourses
from ..persistence.cross_refs import CourseSubjectCrossRefDao
from ..persistence.daos import SubjectDao
from .helpers import next_identifier, require

SUBJECT_ID_PREFIX = "SUBJ-"

logger = logging.getLogger(__name__)


class SubjectRepository:
    """Business facade over the subject table and the course-subject links."""

    def __init__(
        self,
        subject_dao: SubjectDao,
        course_subject_cross_ref_dao: CourseSubjectCrossRefDao,
    ) -> None:
        self.subject_dao = subject_dao
        self.course_subject_cross_ref_dao = course_subject_cross_ref_dao

    def get_all_subjects(self) -> List[Subject]:
        return self.subject_dao.get_all_subjects()

    def get_subjects_by_teacher(self, teacher_id: str) -> List[Subject]:
        return self.subject_dao.get_subjects_by_teacher(teacher_id)

    def get_subjects_by_course(self, course_id: str) -> List[Subject]:
        return self.subject_dao.get_subjects_by_course(course_id)

    def get_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        return self.subject_dao.get_subject_by_id(subject_id)

    def get_subject_with_courses(self, subject_id: str) -> Optional[SubjectWithCourses]:
        return self.subject_dao.get_subject_with_courses(subject_id)

    def search_subjects(self, query: str, teacher_id: Optional[str] = None) -> List[Subject]:
        return self.subject_dao.search_subjects(query.strip(), teacher_id)

    def create_subject(
        self,
        subject_name: str,
        subject_code: str,
        teacher_id: str,
        description: str = "",
    ) -> Subject:
        """Persist a new subject; the code is stored upper-cased."""
        name = require(subject_name, "Subject name is required")
        code = require(subject_code, "Subject code is required")
        teacher = require(teacher_id, "Teacher assignment is required")

        subject = Subject(
            subject_id=self._generate_subject_id(),
            subject_name=name,
            subject_code=code.upper(),
            teacher_id=teacher,
            description=(description or "").strip(),
        )
        self.subject_dao.insert_subject(subject)
        logger.info("Created subject %s (%s)", subject.subject_id, subject.subject_code)
        return subject

    def create_subject_with_courses(
        self,
        subject_name: str,
        subject_code: str,
        teacher_id: str,
        course_ids: Iterable[str],
        description: str = "",
    ) -> Subject:
        subject = self.create_subject(subject_name, subject_code, teacher_id, description)
        for course_id in course_ids:
            self.assign_subject_to_course(subject.subject_id, course_id)
        return subject

    def update_subject(self, subject: Subject) -> None:
        self.subject_dao.update_subject(subject)

    def delete_subject(self, subject: Subject) -> None:
        """Delete a subject; course links, enrollments and check-ins cascade."""
        self.subject_dao.delete_subject(subject)
        logger.info("Deleted subject %s", subject.subject_id)

    def assign_subject_to_course(self, subject_id: str, course_id: str) -> bool:
        """Link a subject to a course. Returns False when the link already existed."""
        if self.course_subject_cross_ref_dao.exists(course_id, subject_id):
            return False
        self.course_subject_cross_ref_dao.insert(
            CourseSubjectCrossRef(course_id=course_id, subject_id=subject_id)
        )
        return True

    def remove_subject_from_course(self, subject_id: str, course_id: str) -> None:
        self.course_subject_cross_ref_dao.delete_by_ids(course_id, subject_id)

    def update_subject_courses(self, subject_id: str, course_ids: Iterable[str]) -> None:
        """Replace every course link of ``subject_id`` with ``course_ids``."""
        self.course_subject_cross_ref_dao.delete_all_by_subject(subject_id)
        self.course_subject_cross_ref_dao.insert_all(
            [CourseSubjectCrossRef(course_id=course_id, subject_id=subject_id) for course_id in course_ids]
        )

    def is_subject_in_course(self, subject_id: str, course_id: str) -> bool:
        return self.course_subject_cross_ref_dao.exists(course_id, subject_id)

    def get_course_ids_for_subject(self, subject_id: str) -> List[str]:
        return self.course_subject_cross_ref_dao.get_course_ids_for_subject(subject_id)

    def is_teacher_owner(self, subject_id: str, teacher_id: str) -> bool:
        subject = self.subject_dao.get_subject_by_id(subject_id)
        return subject is not None and subject.teacher_id == teacher_id

    def get_subject_count_for_teacher(self, teacher_id: str) -> int:
        return self.subject_dao.get_subject_count_by_teacher(teacher_id)

    def _generate_subject_id(self) -> str:
        return next_identifier(
            SUBJECT_ID_PREFIX,
            self.subject_dao.get_max_subject_id_number(),
            self.subject_dao.subject_id_exists,
        )
