"""DAOs for the many-to-many cross-reference tables."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.models import (
    CourseSubjectCrossRef,
    StudentSubjectCrossRef,
    StudentWithSubjects,
    SubjectWithEnrolledStudents,
    TeacherStudentCrossRef,
)
from .daos import BaseDao, _row_to_student, _row_to_subject


class TeacherStudentCrossRefDao(BaseDao):
    """Links between teachers and the students they teach."""

    def insert(self, cross_ref: TeacherStudentCrossRef) -> None:
        self.insert_all([cross_ref])

    def insert_all(self, cross_refs: Sequence[TeacherStudentCrossRef]) -> None:
        self._execute_many(
            "INSERT OR IGNORE INTO teacher_student_cross_ref (teacher_id, student_id) VALUES (?, ?)",
            [(ref.teacher_id, ref.student_id) for ref in cross_refs],
        )

    def delete_by_ids(self, teacher_id: str, student_id: str) -> None:
        self._execute(
            "DELETE FROM teacher_student_cross_ref WHERE teacher_id = ? AND student_id = ?",
            (teacher_id, student_id),
        )

    def delete_all_by_student(self, student_id: str) -> None:
        self._execute("DELETE FROM teacher_student_cross_ref WHERE student_id = ?", (student_id,))

    def get_by_student(self, student_id: str) -> List[TeacherStudentCrossRef]:
        rows = self._fetch_all(
            "SELECT * FROM teacher_student_cross_ref WHERE student_id = ?", (student_id,)
        )
        return [TeacherStudentCrossRef(row["teacher_id"], row["student_id"]) for row in rows]

    def exists(self, teacher_id: str, student_id: str) -> bool:
        return self._exists(
            "SELECT 1 FROM teacher_student_cross_ref WHERE teacher_id = ? AND student_id = ?",
            (teacher_id, student_id),
        )

    def get_student_count_for_teacher(self, teacher_id: str) -> int:
        return self._count(
            "SELECT COUNT(*) FROM teacher_student_cross_ref WHERE teacher_id = ?", (teacher_id,)
        )


class CourseSubjectCrossRefDao(BaseDao):
    """Links between courses and the subjects they include."""

    def insert(self, cross_ref: CourseSubjectCrossRef) -> None:
        self.insert_all([cross_ref])

    def insert_all(self, cross_refs: Sequence[CourseSubjectCrossRef]) -> None:
        self._execute_many(
            "INSERT OR IGNORE INTO course_subject_cross_ref (course_id, subject_id) VALUES (?, ?)",
            [(ref.course_id, ref.subject_id) for ref in cross_refs],
        )

    def delete_by_ids(self, course_id: str, subject_id: str) -> None:
        self._execute(
            "DELETE FROM course_subject_cross_ref WHERE course_id = ? AND subject_id = ?",
            (course_id, subject_id),
        )

    def delete_all_by_subject(self, subject_id: str) -> None:
        self._execute("DELETE FROM course_subject_cross_ref WHERE subject_id = ?", (subject_id,))

    def get_by_course(self, course_id: str) -> List[CourseSubjectCrossRef]:
        rows = self._fetch_all(
            "SELECT * FROM course_subject_cross_ref WHERE course_id = ?", (course_id,)
        )
        return [CourseSubjectCrossRef(row["course_id"], row["subject_id"]) for row in rows]

    def exists(self, course_id: str, subject_id: str) -> bool:
        return self._exists(
            "SELECT 1 FROM course_subject_cross_ref WHERE course_id = ? AND subject_id = ?",
            (course_id, subject_id),
        )

    def get_course_ids_for_subject(self, subject_id: str) -> List[str]:
        rows = self._fetch_all(
            "SELECT course_id FROM course_subject_cross_ref WHERE subject_id = ? ORDER BY course_id",
            (subject_id,),
        )
        return [row["course_id"] for row in rows]


class StudentSubjectCrossRefDao(BaseDao):
    """Enrollment of students in subjects."""

    def insert(self, cross_ref: StudentSubjectCrossRef) -> None:
        self.insert_all([cross_ref])

    def insert_all(self, cross_refs: Sequence[StudentSubjectCrossRef]) -> None:
        self._execute_many(
            "INSERT OR IGNORE INTO student_subject_cross_ref (student_id, subject_id) VALUES (?, ?)",
            [(ref.student_id, ref.subject_id) for ref in cross_refs],
        )

    def delete_by_ids(self, student_id: str, subject_id: str) -> None:
        self._execute(
            "DELETE FROM student_subject_cross_ref WHERE student_id = ? AND subject_id = ?",
            (student_id, subject_id),
        )

    def delete_all_by_student(self, student_id: str) -> None:
        self._execute("DELETE FROM student_subject_cross_ref WHERE student_id = ?", (student_id,))

    def delete_all_by_subject(self, subject_id: str) -> None:
        self._execute("DELETE FROM student_subject_cross_ref WHERE subject_id = ?", (subject_id,))

    def get_student_with_subjects(self, student_id: str) -> Optional[StudentWithSubjects]:
        row = self._fetch_one("SELECT * FROM students WHERE student_id = ?", (student_id,))
        if row is None:
            return None
        subjects = self._fetch_all(
            """
            SELECT s.* FROM subjects AS s
            JOIN student_subject_cross_ref AS ssc ON s.subject_id = ssc.subject_id
            WHERE ssc.student_id = ?
            ORDER BY s.subject_id
            """,
            (student_id,),
        )
        return StudentWithSubjects(
            student=_row_to_student(row), subjects=[_row_to_subject(r) for r in subjects]
        )

    def get_subject_with_enrolled_students(
        self, subject_id: str
    ) -> Optional[SubjectWithEnrolledStudents]:
        row = self._fetch_one("SELECT * FROM subjects WHERE subject_id = ?", (subject_id,))
        if row is None:
            return None
        students = self._fetch_all(
            """
            SELECT s.* FROM students AS s
            JOIN student_subject_cross_ref AS ssc ON s.student_id = ssc.student_id
            WHERE ssc.subject_id = ?
            ORDER BY s.student_id
            """,
            (subject_id,),
        )
        return SubjectWithEnrolledStudents(
            subject=_row_to_subject(row), students=[_row_to_student(r) for r in students]
        )

    def get_student_ids_by_subject(self, subject_id: str) -> List[str]:
        rows = self._fetch_all(
            "SELECT student_id FROM student_subject_cross_ref WHERE subject_id = ? ORDER BY student_id",
            (subject_id,),
        )
        return [row["student_id"] for row in rows]

    def get_subject_ids_by_student(self, student_id: str) -> List[str]:
        rows = self._fetch_all(
            "SELECT subject_id FROM student_subject_cross_ref WHERE student_id = ? ORDER BY subject_id",
            (student_id,),
        )
        return [row["subject_id"] for row in rows]

    def exists(self, student_id: str, subject_id: str) -> bool:
        return self._exists(
            "SELECT 1 FROM student_subject_cross_ref WHERE student_id = ? AND subject_id = ?",
            (student_id, subject_id),
        )

    def get_enrollment_count_by_student(self, student_id: str) -> int:
        return self._count(
            "SELECT COUNT(*) FROM student_subject_cross_ref WHERE student_id = ?", (student_id,)
        )

    def get_enrollment_count_by_subject(self, subject_id: str) -> int:
        return self._count(
            "SELECT COUNT(*) FROM student_subject_cross_ref WHERE subject_id = ?", (subject_id,)
        )

    def get_by_student_ids(self, student_ids: Sequence[str]) -> List[StudentSubjectCrossRef]:
        return self._select_in("student_id", student_ids)

    def get_by_subject_ids(self, subject_ids: Sequence[str]) -> List[StudentSubjectCrossRef]:
        return self._select_in("subject_id", subject_ids)

    def _select_in(self, column: str, values: Sequence[str]) -> List[StudentSubjectCrossRef]:
        if not values:
            return []
        placeholders = ", ".join("?" for _ in values)
        rows = self._fetch_all(
            f"SELECT * FROM student_subject_cross_ref WHERE {column} IN ({placeholders})",
            values,
        )
        return [StudentSubjectCrossRef(row["student_id"], row["subject_id"]) for row in rows]
