"""Teacher accounts: registration, login and lookups."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.models import Teacher, TeacherWithAllData, TeacherWithStudents
from ..persistence.daos import TeacherDao
from .errors import DuplicateEmailError, ValidationError
from .helpers import next_identifier

TEACHER_ID_PREFIX = "TEACH-"
MIN_PASSWORD_LENGTH = 6

logger = logging.getLogger(__name__)


class TeacherRepository:
    """Business facade over :class:`TeacherDao`."""

    def __init__(self, teacher_dao: TeacherDao) -> None:
        self.teacher_dao = teacher_dao

    def login(self, email: str, password: str) -> Optional[Teacher]:
        """Return the teacher matching the credentials, or ``None``."""
        return self.teacher_dao.login(_normalize_email(email), password)

    def register(
        self,
        first_name: str,
        middle_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> Teacher:
        """
        Validate and persist a new teacher account.

        Checks run in a fixed order and the first failure is raised as a
        ``ValidationError``: names, e-mail shape, password length, password
        confirmation, then e-mail uniqueness.
        """
        if not (first_name or "").strip() or not (last_name or "").strip():
            raise ValidationError("First name and last name are required")
        normalized_email = _normalize_email(email)
        if not normalized_email or "@" not in normalized_email:
            raise ValidationError("Please enter a valid email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        if self.teacher_dao.is_email_exists(normalized_email):
            raise DuplicateEmailError(normalized_email)

        teacher = Teacher(
            teacher_id=self._generate_teacher_id(),
            first_name=first_name.strip(),
            middle_name=(middle_name or "").strip(),
            last_name=last_name.strip(),
            email=normalized_email,
            password=password,
        )
        self.teacher_dao.insert_teacher(teacher)
        logger.info("Registered teacher %s", teacher.teacher_id)
        return teacher

    def is_email_registered(self, email: str) -> bool:
        return self.teacher_dao.is_email_exists(_normalize_email(email))

    def get_all_teachers(self) -> List[Teacher]:
        return self.teacher_dao.get_all_teachers()

    def get_teacher_by_id(self, teacher_id: str) -> Optional[Teacher]:
        return self.teacher_dao.get_teacher_by_id(teacher_id)

    def get_teacher_with_students(self, teacher_id: str) -> Optional[TeacherWithStudents]:
        return self.teacher_dao.get_teacher_with_students(teacher_id)

    def get_teacher_with_all_data(self, teacher_id: str) -> Optional[TeacherWithAllData]:
        return self.teacher_dao.get_teacher_with_all_data(teacher_id)

    def search_teachers(self, query: str) -> List[Teacher]:
        return self.teacher_dao.search_teachers(query.strip())

    def update_teacher(self, teacher: Teacher) -> None:
        self.teacher_dao.update_teacher(teacher)

    def delete_teacher(self, teacher: Teacher) -> None:
        """Delete a teacher; owned courses, subjects, check-ins and student links cascade."""
        self.teacher_dao.delete_teacher(teacher)
        logger.info("Deleted teacher %s", teacher.teacher_id)

    def _generate_teacher_id(self) -> str:
        return next_identifier(
            TEACHER_ID_PREFIX,
            self.teacher_dao.get_max_teacher_id_number(),
            self.teacher_dao.teacher_id_exists,
        )


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()
