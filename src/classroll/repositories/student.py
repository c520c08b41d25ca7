"""Students and their links to teachers."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.models import (
    Student,
    StudentWithAttendance,
    StudentWithTeachers,
    TeacherStudentCrossRef,
)
from ..persistence.cross_refs import TeacherStudentCrossRefDao
from ..persistence.daos import StudentDao
from .helpers import next_identifier, require

STUDENT_ID_PREFIX = "STUD-"

logger = logging.getLogger(__name__)


class StudentRepository:
    """Business facade over the student table and the teacher-student links."""

    def __init__(
        self,
        student_dao: StudentDao,
        teacher_student_cross_ref_dao: TeacherStudentCrossRefDao,
    ) -> None:
        self.student_dao = student_dao
        self.teacher_student_cross_ref_dao = teacher_student_cross_ref_dao

    def get_all_students(self) -> List[Student]:
        return self.student_dao.get_all_students()

    def get_students_by_teacher(self, teacher_id: str) -> List[Student]:
        return self.student_dao.get_students_by_teacher(teacher_id)

    def get_students_by_course(self, course_id: str) -> List[Student]:
        return self.student_dao.get_students_by_course(course_id)

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.student_dao.get_student_by_id(student_id)

    def get_student_with_teachers(self, student_id: str) -> Optional[StudentWithTeachers]:
        return self.student_dao.get_student_with_teachers(student_id)

    def get_student_with_attendance(self, student_id: str) -> Optional[StudentWithAttendance]:
        return self.student_dao.get_student_with_attendance(student_id)

    def search_students(self, query: str, teacher_id: Optional[str] = None) -> List[Student]:
        """Match first name, last name or id; restrict to one teacher's students when given."""
        query = query.strip()
        if teacher_id is not None:
            return self.student_dao.search_students_by_teacher(teacher_id, query)
        return self.student_dao.search_students(query)

    def create_student(
        self,
        first_name: str,
        middle_name: str,
        last_name: str,
        course_id: Optional[str],
        teacher_id: str,
    ) -> Student:
        """Persist a new student and link it to ``teacher_id``."""
        first = require(first_name, "First name is required")
        last = require(last_name, "Last name is required")
        teacher = require(teacher_id, "Teacher assignment is required")

        student = Student(
            student_id=self._generate_student_id(),
            first_name=first,
            middle_name=(middle_name or "").strip(),
            last_name=last,
            course_id=(course_id or "").strip() or None,
        )
        self.student_dao.insert_student(student)
        self.teacher_student_cross_ref_dao.insert(
            TeacherStudentCrossRef(teacher_id=teacher, student_id=student.student_id)
        )
        logger.info("Created student %s for teacher %s", student.student_id, teacher)
        return student

    def update_student(self, student: Student) -> None:
        self.student_dao.update_student(student)

    def delete_student(self, student: Student) -> None:
        """Delete a student; check-ins, enrollments and teacher links cascade."""
        self.student_dao.delete_student(student)
        logger.info("Deleted student %s", student.student_id)

    def assign_student_to_teacher(self, student_id: str, teacher_id: str) -> bool:
        """Link a student to a teacher. Returns False when the link already existed."""
        if self.teacher_student_cross_ref_dao.exists(teacher_id, student_id):
            return False
        self.teacher_student_cross_ref_dao.insert(
            TeacherStudentCrossRef(teacher_id=teacher_id, student_id=student_id)
        )
        return True

    def remove_student_from_teacher(self, student_id: str, teacher_id: str) -> None:
        self.teacher_student_cross_ref_dao.delete_by_ids(teacher_id, student_id)

    def is_student_assigned_to_teacher(self, student_id: str, teacher_id: str) -> bool:
        return self.teacher_student_cross_ref_dao.exists(teacher_id, student_id)

    def get_student_count_for_teacher(self, teacher_id: str) -> int:
        return self.teacher_student_cross_ref_dao.get_student_count_for_teacher(teacher_id)

    def _generate_student_id(self) -> str:
        return next_identifier(
            STUDENT_ID_PREFIX,
            self.student_dao.get_max_student_id_number(),
            self.student_dao.student_id_exists,
        )
