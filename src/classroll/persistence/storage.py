"""SQLite-backed database handle for the attendance system."""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from .cross_refs import (
    CourseSubjectCrossRefDao,
    StudentSubjectCrossRefDao,
    TeacherStudentCrossRefDao,
)
from .daos import CheckInsDao, CourseDao, StudentDao, SubjectDao, TeacherDao

DEFAULT_DB_PATH = Path.home() / ".classroll" / "classroll.db"
DB_ENV_VAR = "CLASSROLL_DB_PATH"

logger = logging.getLogger(__name__)

SCHEMA = """
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS teachers (
    teacher_id TEXT PRIMARY KEY,
    first_name TEXT NOT NULL,
    middle_name TEXT NOT NULL DEFAULT '',
    last_name TEXT NOT NULL,
    email TEXT NOT NULL,
    password TEXT NOT NULL DEFAULT ''
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_teachers_email ON teachers(email);

CREATE TABLE IF NOT EXISTS courses (
    course_id TEXT PRIMARY KEY,
    course_name TEXT NOT NULL,
    course_code TEXT NOT NULL,
    teacher_id TEXT NOT NULL REFERENCES teachers(teacher_id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_courses_teacher ON courses(teacher_id);

CREATE TABLE IF NOT EXISTS students (
    student_id TEXT PRIMARY KEY,
    first_name TEXT NOT NULL,
    middle_name TEXT NOT NULL DEFAULT '',
    last_name TEXT NOT NULL,
    course_id TEXT REFERENCES courses(course_id) ON DELETE SET NULL
);

CREATE INDEX IF NOT EXISTS idx_students_course ON students(course_id);

CREATE TABLE IF NOT EXISTS subjects (
    subject_id TEXT PRIMARY KEY,
    subject_name TEXT NOT NULL,
    subject_code TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    teacher_id TEXT NOT NULL REFERENCES teachers(teacher_id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_subjects_teacher ON subjects(teacher_id);

CREATE TABLE IF NOT EXISTS check_ins (
    check_in_id TEXT PRIMARY KEY,
    student_id TEXT NOT NULL REFERENCES students(student_id) ON DELETE CASCADE,
    subject_id TEXT NOT NULL REFERENCES subjects(subject_id) ON DELETE CASCADE,
    teacher_id TEXT NOT NULL REFERENCES teachers(teacher_id) ON DELETE CASCADE,
    check_in_time TEXT NOT NULL,
    check_in_date TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'PRESENT'
);

CREATE INDEX IF NOT EXISTS idx_check_ins_student ON check_ins(student_id);
CREATE INDEX IF NOT EXISTS idx_check_ins_subject ON check_ins(subject_id);
CREATE INDEX IF NOT EXISTS idx_check_ins_teacher ON check_ins(teacher_id);
CREATE INDEX IF NOT EXISTS idx_check_ins_date ON check_ins(check_in_date);

CREATE TABLE IF NOT EXISTS teacher_student_cross_ref (
    teacher_id TEXT NOT NULL REFERENCES teachers(teacher_id) ON DELETE CASCADE,
    student_id TEXT NOT NULL REFERENCES students(student_id) ON DELETE CASCADE,
    PRIMARY KEY (teacher_id, student_id)
);

CREATE INDEX IF NOT EXISTS idx_tsc_student ON teacher_student_cross_ref(student_id);

CREATE TABLE IF NOT EXISTS course_subject_cross_ref (
    course_id TEXT NOT NULL REFERENCES courses(course_id) ON DELETE CASCADE,
    subject_id TEXT NOT NULL REFERENCES subjects(subject_id) ON DELETE CASCADE,
    PRIMARY KEY (course_id, subject_id)
);

CREATE INDEX IF NOT EXISTS idx_csc_subject ON course_subject_cross_ref(subject_id);

CREATE TABLE IF NOT EXISTS student_subject_cross_ref (
    student_id TEXT NOT NULL REFERENCES students(student_id) ON DELETE CASCADE,
    subject_id TEXT NOT NULL REFERENCES subjects(subject_id) ON DELETE CASCADE,
    PRIMARY KEY (student_id, subject_id)
);

CREATE INDEX IF NOT EXISTS idx_ssc_subject ON student_subject_cross_ref(subject_id);
"""


def _determine_db_path() -> Path:
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return DEFAULT_DB_PATH


class SQLiteStorage:
    """
    Thin wrapper around the SQLite database file.

    The storage owns the schema and hands out DAO objects. Creating a storage
    touches nothing but the parent directory; the schema is created on the
    first connection a DAO requests.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = Path(db_path) if db_path is not None else _determine_db_path()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialized = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        conn = self._connect()
        try:
            conn.executescript(SCHEMA)
        finally:
            conn.close()
        logger.debug("Initialized schema at %s", self._db_path)
        self._initialized = True

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and is always closed."""
        self._ensure_initialized()
        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def teacher_dao(self) -> TeacherDao:
        return TeacherDao(self)

    def student_dao(self) -> StudentDao:
        return StudentDao(self)

    def course_dao(self) -> CourseDao:
        return CourseDao(self)

    def subject_dao(self) -> SubjectDao:
        return SubjectDao(self)

    def check_ins_dao(self) -> CheckInsDao:
        return CheckInsDao(self)

    def teacher_student_cross_ref_dao(self) -> TeacherStudentCrossRefDao:
        return TeacherStudentCrossRefDao(self)

    def course_subject_cross_ref_dao(self) -> CourseSubjectCrossRefDao:
        return CourseSubjectCrossRefDao(self)

    def student_subject_cross_ref_dao(self) -> StudentSubjectCrossRefDao:
        return StudentSubjectCrossRefDao(self)


@lru_cache(maxsize=1)
def get_storage() -> SQLiteStorage:
    """Return a cached storage instance."""
    return SQLiteStorage()
