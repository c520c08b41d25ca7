"""Entity DAOs: one class per table, plain SQL over the storage connection."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from ..core.models import (
    AttendanceStatus,
    CheckIn,
    Course,
    CourseWithSubjects,
    Student,
    StudentWithAttendance,
    StudentWithTeachers,
    Subject,
    SubjectWithCourses,
    Teacher,
    TeacherWithAllData,
    TeacherWithStudents,
)

if TYPE_CHECKING:  # pragma: no cover
    from .storage import SQLiteStorage

CHECK_IN_ORDER = "ORDER BY check_in_date DESC, check_in_time DESC"


class BaseDao:
    """Shared query helpers; every call runs on its own short-lived connection."""

    def __init__(self, storage: "SQLiteStorage") -> None:
        self._storage = storage

    def _fetch_all(self, sql: str, params: Sequence[object] = ()) -> list:
        with self._storage.connection() as conn:
            return conn.execute(sql, tuple(params)).fetchall()

    def _fetch_one(self, sql: str, params: Sequence[object] = ()):
        with self._storage.connection() as conn:
            return conn.execute(sql, tuple(params)).fetchone()

    def _execute(self, sql: str, params: Sequence[object] = ()) -> int:
        with self._storage.connection() as conn:
            cursor = conn.execute(sql, tuple(params))
            return cursor.rowcount or 0

    def _execute_many(self, sql: str, rows: Sequence[Sequence[object]]) -> None:
        if not rows:
            return
        with self._storage.connection() as conn:
            conn.executemany(sql, [tuple(row) for row in rows])

    def _exists(self, sql: str, params: Sequence[object] = ()) -> bool:
        row = self._fetch_one(f"SELECT EXISTS({sql})", params)
        return bool(row[0])

    def _count(self, sql: str, params: Sequence[object] = ()) -> int:
        row = self._fetch_one(sql, params)
        return int(row[0] or 0)

    def _max_id_number(self, table: str, column: str, prefix: str) -> Optional[int]:
        row = self._fetch_one(
            f"SELECT MAX(CAST(SUBSTR({column}, ?) AS INTEGER)) FROM {table} WHERE {column} LIKE ?",
            (len(prefix) + 1, f"{prefix}%"),
        )
        if row is None or row[0] is None:
            return None
        return int(row[0])


class TeacherDao(BaseDao):
    """Access to the ``teachers`` table."""

    def insert_teacher(self, teacher: Teacher) -> None:
        self._execute(
            """
            INSERT INTO teachers (teacher_id, first_name, middle_name, last_name, email, password)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                teacher.teacher_id,
                teacher.first_name,
                teacher.middle_name,
                teacher.last_name,
                teacher.email,
                teacher.password,
            ),
        )

    def update_teacher(self, teacher: Teacher) -> None:
        self._execute(
            """
            UPDATE teachers
            SET first_name = ?, middle_name = ?, last_name = ?, email = ?, password = ?
            WHERE teacher_id = ?
            """,
            (
                teacher.first_name,
                teacher.middle_name,
                teacher.last_name,
                teacher.email,
                teacher.password,
                teacher.teacher_id,
            ),
        )

    def delete_teacher(self, teacher: Teacher) -> None:
        self._execute("DELETE FROM teachers WHERE teacher_id = ?", (teacher.teacher_id,))

    def get_teacher_by_id(self, teacher_id: str) -> Optional[Teacher]:
        row = self._fetch_one("SELECT * FROM teachers WHERE teacher_id = ?", (teacher_id,))
        return _row_to_teacher(row) if row is not None else None

    def get_all_teachers(self) -> List[Teacher]:
        rows = self._fetch_all("SELECT * FROM teachers ORDER BY teacher_id")
        return [_row_to_teacher(row) for row in rows]

    def login(self, email: str, password: str) -> Optional[Teacher]:
        row = self._fetch_one(
            "SELECT * FROM teachers WHERE email = ? AND password = ? LIMIT 1",
            (email, password),
        )
        return _row_to_teacher(row) if row is not None else None

    def is_email_exists(self, email: str) -> bool:
        return self._exists("SELECT 1 FROM teachers WHERE email = ?", (email,))

    def get_teacher_with_students(self, teacher_id: str) -> Optional[TeacherWithStudents]:
        teacher = self.get_teacher_by_id(teacher_id)
        if teacher is None:
            return None
        return TeacherWithStudents(teacher=teacher, students=self._students_for(teacher_id))

    def get_teacher_with_all_data(self, teacher_id: str) -> Optional[TeacherWithAllData]:
        teacher = self.get_teacher_by_id(teacher_id)
        if teacher is None:
            return None
        courses = self._fetch_all(
            "SELECT * FROM courses WHERE teacher_id = ? ORDER BY course_id", (teacher_id,)
        )
        subjects = self._fetch_all(
            "SELECT * FROM subjects WHERE teacher_id = ? ORDER BY subject_id", (teacher_id,)
        )
        return TeacherWithAllData(
            teacher=teacher,
            students=self._students_for(teacher_id),
            courses=[_row_to_course(row) for row in courses],
            subjects=[_row_to_subject(row) for row in subjects],
        )

    def search_teachers(self, query: str) -> List[Teacher]:
        rows = self._fetch_all(
            """
            SELECT * FROM teachers
            WHERE first_name LIKE '%' || ? || '%'
               OR last_name LIKE '%' || ? || '%'
               OR email LIKE '%' || ? || '%'
            ORDER BY teacher_id
            """,
            (query, query, query),
        )
        return [_row_to_teacher(row) for row in rows]

    def get_max_teacher_id_number(self) -> Optional[int]:
        return self._max_id_number("teachers", "teacher_id", "TEACH-")

    def teacher_id_exists(self, teacher_id: str) -> bool:
        return self._exists("SELECT 1 FROM teachers WHERE teacher_id = ?", (teacher_id,))

    def _students_for(self, teacher_id: str) -> List[Student]:
        rows = self._fetch_all(
            """
            SELECT s.* FROM students AS s
            JOIN teacher_student_cross_ref AS tsc ON s.student_id = tsc.student_id
            WHERE tsc.teacher_id = ?
            ORDER BY s.student_id
            """,
            (teacher_id,),
        )
        return [_row_to_student(row) for row in rows]


class StudentDao(BaseDao):
    """Access to the ``students`` table."""

    def insert_student(self, student: Student) -> None:
        self.insert_students([student])

    def insert_students(self, students: Sequence[Student]) -> None:
        self._execute_many(
            """
            INSERT INTO students (student_id, first_name, middle_name, last_name, course_id)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (s.student_id, s.first_name, s.middle_name, s.last_name, s.course_id)
                for s in students
            ],
        )

    def update_student(self, student: Student) -> None:
        self._execute(
            """
            UPDATE students
            SET first_name = ?, middle_name = ?, last_name = ?, course_id = ?
            WHERE student_id = ?
            """,
            (
                student.first_name,
                student.middle_name,
                student.last_name,
                student.course_id,
                student.student_id,
            ),
        )

    def delete_student(self, student: Student) -> None:
        self.delete_student_by_id(student.student_id)

    def delete_student_by_id(self, student_id: str) -> None:
        self._execute("DELETE FROM students WHERE student_id = ?", (student_id,))

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        row = self._fetch_one("SELECT * FROM students WHERE student_id = ?", (student_id,))
        return _row_to_student(row) if row is not None else None

    def get_all_students(self) -> List[Student]:
        rows = self._fetch_all("SELECT * FROM students ORDER BY student_id")
        return [_row_to_student(row) for row in rows]

    def get_students_by_course(self, course_id: str) -> List[Student]:
        rows = self._fetch_all(
            "SELECT * FROM students WHERE course_id = ? ORDER BY student_id", (course_id,)
        )
        return [_row_to_student(row) for row in rows]

    def get_students_by_teacher(self, teacher_id: str) -> List[Student]:
        rows = self._fetch_all(
            """
            SELECT s.* FROM students AS s
            JOIN teacher_student_cross_ref AS tsc ON s.student_id = tsc.student_id
            WHERE tsc.teacher_id = ?
            ORDER BY s.student_id
            """,
            (teacher_id,),
        )
        return [_row_to_student(row) for row in rows]

    def get_student_with_teachers(self, student_id: str) -> Optional[StudentWithTeachers]:
        student = self.get_student_by_id(student_id)
        if student is None:
            return None
        rows = self._fetch_all(
            """
            SELECT t.* FROM teachers AS t
            JOIN teacher_student_cross_ref AS tsc ON t.teacher_id = tsc.teacher_id
            WHERE tsc.student_id = ?
            ORDER BY t.teacher_id
            """,
            (student_id,),
        )
        return StudentWithTeachers(student=student, teachers=[_row_to_teacher(r) for r in rows])

    def get_student_with_attendance(self, student_id: str) -> Optional[StudentWithAttendance]:
        student = self.get_student_by_id(student_id)
        if student is None:
            return None
        rows = self._fetch_all(
            f"SELECT * FROM check_ins WHERE student_id = ? {CHECK_IN_ORDER}", (student_id,)
        )
        return StudentWithAttendance(student=student, check_ins=[_row_to_check_in(r) for r in rows])

    def search_students(self, query: str) -> List[Student]:
        rows = self._fetch_all(
            """
            SELECT * FROM students
            WHERE first_name LIKE '%' || ? || '%'
               OR last_name LIKE '%' || ? || '%'
               OR student_id LIKE '%' || ? || '%'
            ORDER BY student_id
            """,
            (query, query, query),
        )
        return [_row_to_student(row) for row in rows]

    def search_students_by_teacher(self, teacher_id: str, query: str) -> List[Student]:
        rows = self._fetch_all(
            """
            SELECT s.* FROM students AS s
            JOIN teacher_student_cross_ref AS tsc ON s.student_id = tsc.student_id
            WHERE tsc.teacher_id = ?
              AND (s.first_name LIKE '%' || ? || '%'
                   OR s.last_name LIKE '%' || ? || '%'
                   OR s.student_id LIKE '%' || ? || '%')
            ORDER BY s.student_id
            """,
            (teacher_id, query, query, query),
        )
        return [_row_to_student(row) for row in rows]

    def get_max_student_id_number(self) -> Optional[int]:
        return self._max_id_number("students", "student_id", "STUD-")

    def student_id_exists(self, student_id: str) -> bool:
        return self._exists("SELECT 1 FROM students WHERE student_id = ?", (student_id,))


class CourseDao(BaseDao):
    """Access to the ``courses`` table."""

    def insert_course(self, course: Course) -> None:
        self._execute(
            "INSERT INTO courses (course_id, course_name, course_code, teacher_id) VALUES (?, ?, ?, ?)",
            (course.course_id, course.course_name, course.course_code, course.teacher_id),
        )

    def update_course(self, course: Course) -> None:
        self._execute(
            "UPDATE courses SET course_name = ?, course_code = ?, teacher_id = ? WHERE course_id = ?",
            (course.course_name, course.course_code, course.teacher_id, course.course_id),
        )

    def delete_course(self, course: Course) -> None:
        self._execute("DELETE FROM courses WHERE course_id = ?", (course.course_id,))

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        row = self._fetch_one("SELECT * FROM courses WHERE course_id = ?", (course_id,))
        return _row_to_course(row) if row is not None else None

    def get_all_courses(self) -> List[Course]:
        rows = self._fetch_all("SELECT * FROM courses ORDER BY course_id")
        return [_row_to_course(row) for row in rows]

    def get_courses_by_teacher(self, teacher_id: str) -> List[Course]:
        rows = self._fetch_all(
            "SELECT * FROM courses WHERE teacher_id = ? ORDER BY course_id", (teacher_id,)
        )
        return [_row_to_course(row) for row in rows]

    def get_course_with_subjects(self, course_id: str) -> Optional[CourseWithSubjects]:
        course = self.get_course_by_id(course_id)
        if course is None:
            return None
        return CourseWithSubjects(course=course, subjects=self._subjects_for(course_id))

    def get_courses_with_subjects_by_teacher(self, teacher_id: str) -> List[CourseWithSubjects]:
        return [
            CourseWithSubjects(course=course, subjects=self._subjects_for(course.course_id))
            for course in self.get_courses_by_teacher(teacher_id)
        ]

    def search_courses(self, query: str, teacher_id: Optional[str] = None) -> List[Course]:
        sql = """
            SELECT * FROM courses
            WHERE (course_name LIKE '%' || ? || '%' OR course_code LIKE '%' || ? || '%')
        """
        params: list[object] = [query, query]
        if teacher_id is not None:
            sql += " AND teacher_id = ?"
            params.append(teacher_id)
        rows = self._fetch_all(sql + " ORDER BY course_id", params)
        return [_row_to_course(row) for row in rows]

    def get_course_count_by_teacher(self, teacher_id: str) -> int:
        return self._count("SELECT COUNT(*) FROM courses WHERE teacher_id = ?", (teacher_id,))

    def get_max_course_id_number(self) -> Optional[int]:
        return self._max_id_number("courses", "course_id", "COURSE-")

    def course_id_exists(self, course_id: str) -> bool:
        return self._exists("SELECT 1 FROM courses WHERE course_id = ?", (course_id,))

    def _subjects_for(self, course_id: str) -> List[Subject]:
        rows = self._fetch_all(
            """
            SELECT s.* FROM subjects AS s
            JOIN course_subject_cross_ref AS csc ON s.subject_id = csc.subject_id
            WHERE csc.course_id = ?
            ORDER BY s.subject_id
            """,
            (course_id,),
        )
        return [_row_to_subject(row) for row in rows]


class SubjectDao(BaseDao):
    """Access to the ``subjects`` table."""

    def insert_subject(self, subject: Subject) -> None:
        self._execute(
            """
            INSERT INTO subjects (subject_id, subject_name, subject_code, description, teacher_id)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                subject.subject_id,
                subject.subject_name,
                subject.subject_code,
                subject.description,
                subject.teacher_id,
            ),
        )

    def update_subject(self, subject: Subject) -> None:
        self._execute(
            """
            UPDATE subjects
            SET subject_name = ?, subject_code = ?, description = ?, teacher_id = ?
            WHERE subject_id = ?
            """,
            (
                subject.subject_name,
                subject.subject_code,
                subject.description,
                subject.teacher_id,
                subject.subject_id,
            ),
        )

    def delete_subject(self, subject: Subject) -> None:
        self._execute("DELETE FROM subjects WHERE subject_id = ?", (subject.subject_id,))

    def get_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        row = self._fetch_one("SELECT * FROM subjects WHERE subject_id = ?", (subject_id,))
        return _row_to_subject(row) if row is not None else None

    def get_all_subjects(self) -> List[Subject]:
        rows = self._fetch_all("SELECT * FROM subjects ORDER BY subject_id")
        return [_row_to_subject(row) for row in rows]

    def get_subjects_by_teacher(self, teacher_id: str) -> List[Subject]:
        rows = self._fetch_all(
            "SELECT * FROM subjects WHERE teacher_id = ? ORDER BY subject_id", (teacher_id,)
        )
        return [_row_to_subject(row) for row in rows]

    def get_subjects_by_course(self, course_id: str) -> List[Subject]:
        rows = self._fetch_all(
            """
            SELECT s.* FROM subjects AS s
            JOIN course_subject_cross_ref AS csc ON s.subject_id = csc.subject_id
            WHERE csc.course_id = ?
            ORDER BY s.subject_id
            """,
            (course_id,),
        )
        return [_row_to_subject(row) for row in rows]

    def get_subject_with_courses(self, subject_id: str) -> Optional[SubjectWithCourses]:
        subject = self.get_subject_by_id(subject_id)
        if subject is None:
            return None
        rows = self._fetch_all(
            """
            SELECT c.* FROM courses AS c
            JOIN course_subject_cross_ref AS csc ON c.course_id = csc.course_id
            WHERE csc.subject_id = ?
            ORDER BY c.course_id
            """,
            (subject_id,),
        )
        return SubjectWithCourses(subject=subject, courses=[_row_to_course(r) for r in rows])

    def search_subjects(self, query: str, teacher_id: Optional[str] = None) -> List[Subject]:
        sql = """
            SELECT * FROM subjects
            WHERE (subject_name LIKE '%' || ? || '%' OR subject_code LIKE '%' || ? || '%')
        """
        params: list[object] = [query, query]
        if teacher_id is not None:
            sql += " AND teacher_id = ?"
            params.append(teacher_id)
        rows = self._fetch_all(sql + " ORDER BY subject_id", params)
        return [_row_to_subject(row) for row in rows]

    def get_subject_count_by_teacher(self, teacher_id: str) -> int:
        return self._count("SELECT COUNT(*) FROM subjects WHERE teacher_id = ?", (teacher_id,))

    def get_max_subject_id_number(self) -> Optional[int]:
        return self._max_id_number("subjects", "subject_id", "SUBJ-")

    def subject_id_exists(self, subject_id: str) -> bool:
        return self._exists("SELECT 1 FROM subjects WHERE subject_id = ?", (subject_id,))


class CheckInsDao(BaseDao):
    """Access to the ``check_ins`` table."""

    def insert_check_in(self, check_in: CheckIn) -> None:
        self.insert_check_ins([check_in])

    def insert_check_ins(self, check_ins: Sequence[CheckIn]) -> None:
        self._execute_many(
            """
            INSERT OR REPLACE INTO check_ins (
                check_in_id, student_id, subject_id, teacher_id,
                check_in_time, check_in_date, status
            )
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    c.check_in_id,
                    c.student_id,
                    c.subject_id,
                    c.teacher_id,
                    c.check_in_time,
                    c.check_in_date,
                    c.status.value,
                )
                for c in check_ins
            ],
        )

    def update_check_in(self, check_in: CheckIn) -> None:
        self._execute(
            """
            UPDATE check_ins
            SET student_id = ?, subject_id = ?, teacher_id = ?,
                check_in_time = ?, check_in_date = ?, status = ?
            WHERE check_in_id = ?
            """,
            (
                check_in.student_id,
                check_in.subject_id,
                check_in.teacher_id,
                check_in.check_in_time,
                check_in.check_in_date,
                check_in.status.value,
                check_in.check_in_id,
            ),
        )

    def delete_check_in(self, check_in: CheckIn) -> None:
        self._execute("DELETE FROM check_ins WHERE check_in_id = ?", (check_in.check_in_id,))

    def get_check_in_by_id(self, check_in_id: str) -> Optional[CheckIn]:
        row = self._fetch_one("SELECT * FROM check_ins WHERE check_in_id = ?", (check_in_id,))
        return _row_to_check_in(row) if row is not None else None

    def get_all_check_ins(self) -> List[CheckIn]:
        return self._select(f"SELECT * FROM check_ins {CHECK_IN_ORDER}")

    def get_check_ins_by_student(self, student_id: str) -> List[CheckIn]:
        return self._select(
            f"SELECT * FROM check_ins WHERE student_id = ? {CHECK_IN_ORDER}", (student_id,)
        )

    def get_check_ins_by_subject(self, subject_id: str) -> List[CheckIn]:
        return self._select(
            f"SELECT * FROM check_ins WHERE subject_id = ? {CHECK_IN_ORDER}", (subject_id,)
        )

    def get_check_ins_by_teacher(self, teacher_id: str) -> List[CheckIn]:
        return self._select(
            f"SELECT * FROM check_ins WHERE teacher_id = ? {CHECK_IN_ORDER}", (teacher_id,)
        )

    def get_check_ins_by_date(self, date: str) -> List[CheckIn]:
        return self._select(
            "SELECT * FROM check_ins WHERE check_in_date = ? ORDER BY check_in_time DESC", (date,)
        )

    def get_check_ins_by_date_and_teacher(self, date: str, teacher_id: str) -> List[CheckIn]:
        return self._select(
            """
            SELECT * FROM check_ins
            WHERE check_in_date = ? AND teacher_id = ?
            ORDER BY check_in_time DESC
            """,
            (date, teacher_id),
        )

    def get_check_ins_by_subject_and_date(self, subject_id: str, date: str) -> List[CheckIn]:
        return self._select(
            """
            SELECT * FROM check_ins
            WHERE subject_id = ? AND check_in_date = ?
            ORDER BY check_in_time DESC
            """,
            (subject_id, date),
        )

    def has_checked_in(self, student_id: str, subject_id: str, date: str) -> bool:
        return self._exists(
            """
            SELECT 1 FROM check_ins
            WHERE student_id = ? AND subject_id = ? AND check_in_date = ?
            """,
            (student_id, subject_id, date),
        )

    def get_check_in_count_by_teacher(self, teacher_id: str) -> int:
        return self._count("SELECT COUNT(*) FROM check_ins WHERE teacher_id = ?", (teacher_id,))

    def get_check_in_count_by_teacher_and_status(
        self, teacher_id: str, status: AttendanceStatus
    ) -> int:
        return self._count(
            "SELECT COUNT(*) FROM check_ins WHERE teacher_id = ? AND status = ?",
            (teacher_id, status.value),
        )

    def get_filtered_check_ins(
        self,
        teacher_id: str,
        subject_id: Optional[str],
        start_date: str,
        end_date: str,
    ) -> List[CheckIn]:
        clauses = ["teacher_id = ?", "check_in_date >= ?", "check_in_date <= ?"]
        params: list[object] = [teacher_id, start_date, end_date]
        if subject_id is not None:
            clauses.append("subject_id = ?")
            params.append(subject_id)
        return self._select(
            "SELECT * FROM check_ins WHERE " + " AND ".join(clauses) + f" {CHECK_IN_ORDER}",
            params,
        )

    def _select(self, sql: str, params: Sequence[object] = ()) -> List[CheckIn]:
        return [_row_to_check_in(row) for row in self._fetch_all(sql, params)]


def _row_to_teacher(row) -> Teacher:
    return Teacher(
        teacher_id=row["teacher_id"],
        first_name=row["first_name"],
        middle_name=row["middle_name"],
        last_name=row["last_name"],
        email=row["email"],
        password=row["password"],
    )


def _row_to_student(row) -> Student:
    return Student(
        student_id=row["student_id"],
        first_name=row["first_name"],
        middle_name=row["middle_name"],
        last_name=row["last_name"],
        course_id=row["course_id"],
    )


def _row_to_course(row) -> Course:
    return Course(
        course_id=row["course_id"],
        course_name=row["course_name"],
        course_code=row["course_code"],
        teacher_id=row["teacher_id"],
    )


def _row_to_subject(row) -> Subject:
    return Subject(
        subject_id=row["subject_id"],
        subject_name=row["subject_name"],
        subject_code=row["subject_code"],
        description=row["description"],
        teacher_id=row["teacher_id"],
    )


def _row_to_check_in(row) -> CheckIn:
    return CheckIn(
        check_in_id=row["check_in_id"],
        student_id=row["student_id"],
        subject_id=row["subject_id"],
        teacher_id=row["teacher_id"],
        check_in_time=row["check_in_time"],
        check_in_date=row["check_in_date"],
        status=AttendanceStatus(row["status"]),
    )
