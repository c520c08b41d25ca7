"""Courses owned by a teacher."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.models import Course, CourseWithSubjects
from ..persistence.daos import CourseDao
from .helpers import next_identifier, require

COURSE_ID_PREFIX = "COURSE-"

logger = logging.getLogger(__name__)


class CourseRepository:
    """Business facade over :class:`CourseDao`."""

    def __init__(self, course_dao: CourseDao) -> None:
        self.course_dao = course_dao

    def get_all_courses(self) -> List[Course]:
        return self.course_dao.get_all_courses()

    def get_courses_by_teacher(self, teacher_id: str) -> List[Course]:
        return self.course_dao.get_courses_by_teacher(teacher_id)

    def get_courses_with_subjects_by_teacher(self, teacher_id: str) -> List[CourseWithSubjects]:
        return self.course_dao.get_courses_with_subjects_by_teacher(teacher_id)

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        return self.course_dao.get_course_by_id(course_id)

    def get_course_with_subjects(self, course_id: str) -> Optional[CourseWithSubjects]:
        return self.course_dao.get_course_with_subjects(course_id)

    def search_courses(self, query: str, teacher_id: Optional[str] = None) -> List[Course]:
        return self.course_dao.search_courses(query.strip(), teacher_id)

    def create_course(self, course_name: str, course_code: str, teacher_id: str) -> Course:
        """Persist a new course; the code is stored upper-cased."""
        name = require(course_name, "Course name is required")
        code = require(course_code, "Course code is required")
        teacher = require(teacher_id, "Teacher assignment is required")

        course = Course(
            course_id=self._generate_course_id(),
            course_name=name,
            course_code=code.upper(),
            teacher_id=teacher,
        )
        self.course_dao.insert_course(course)
        logger.info("Created course %s (%s)", course.course_id, course.course_code)
        return course

    def update_course(self, course: Course) -> None:
        self.course_dao.update_course(course)

    def delete_course(self, course: Course) -> None:
        """Delete a course; subject links are removed and students lose their course."""
        self.course_dao.delete_course(course)
        logger.info("Deleted course %s", course.course_id)

    def is_teacher_owner(self, course_id: str, teacher_id: str) -> bool:
        course = self.course_dao.get_course_by_id(course_id)
        return course is not None and course.teacher_id == teacher_id

    def get_course_count_for_teacher(self, teacher_id: str) -> int:
        return self.course_dao.get_course_count_by_teacher(teacher_id)

    def _generate_course_id(self) -> str:
        return next_identifier(
            COURSE_ID_PREFIX,
            self.course_dao.get_max_course_id_number(),
            self.course_dao.course_id_exists,
        )
