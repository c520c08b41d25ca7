"""Checks that tell a teacher whether taking attendance makes sense yet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..provider import RepositoryProvider


class AttendanceWarning(Enum):
    NO_COURSES = (
        "No courses created yet",
        "Consider organizing students into courses for better management",
    )
    FEW_STUDENTS = (
        "You have very few students",
        "Add more students to make attendance tracking meaningful",
    )
    SINGLE_SUBJECT = (
        "Only one subject available",
        "Create more subjects to categorize attendance by class",
    )

    def __init__(self, message: str, suggestion: str) -> None:
        self.message = message
        self.suggestion = suggestion


class AttendanceBlocker(Enum):
    NO_STUDENTS = (
        "No Students Found",
        "You need to add students before you can take attendance. Students are required "
        "to record who is present or absent.",
        "Add Students",
    )
    NO_SUBJECTS = (
        "No Subjects Found",
        "You need to create at least one subject to record attendance. Subjects help "
        "categorize attendance by class or period.",
        "Create Subject",
    )
    NOT_LOGGED_IN = (
        "Not Logged In",
        "You must be logged in as a teacher to take attendance.",
        "Login",
    )

    def __init__(self, title: str, message: str, action_label: str) -> None:
        self.title = title
        self.message = message
        self.action_label = action_label


class FeedbackType(str, Enum):
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    INFO = "INFO"


@dataclass(frozen=True)
class AttendanceFeedback:
    type: FeedbackType
    title: str
    message: str
    action_label: Optional[str] = None
    action_route: Optional[str] = None


def blocker_feedback(blocker: AttendanceBlocker, action_route: Optional[str] = None) -> AttendanceFeedback:
    return AttendanceFeedback(
        type=FeedbackType.ERROR,
        title=blocker.title,
        message=blocker.message,
        action_label=blocker.action_label,
        action_route=action_route,
    )


def warning_feedback(warning: AttendanceWarning) -> AttendanceFeedback:
    return AttendanceFeedback(
        type=FeedbackType.WARNING,
        title="Heads Up",
        message=f"{warning.message}. {warning.suggestion}",
    )


@dataclass(frozen=True)
class AttendanceReadinessState:
    """Blockers prevent taking attendance; warnings are advisory."""

    student_count: int
    subject_count: int
    course_count: int
    warnings: List[AttendanceWarning] = field(default_factory=list)
    blockers: List[AttendanceBlocker] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return not self.blockers

    @property
    def has_students(self) -> bool:
        return self.student_count > 0

    @property
    def has_subjects(self) -> bool:
        return self.subject_count > 0

    @property
    def has_courses(self) -> bool:
        return self.course_count > 0

    @classmethod
    def from_counts(
        cls, student_count: int, subject_count: int, course_count: int
    ) -> "AttendanceReadinessState":
        warnings: List[AttendanceWarning] = []
        blockers: List[AttendanceBlocker] = []

        if student_count == 0:
            blockers.append(AttendanceBlocker.NO_STUDENTS)
        if subject_count == 0:
            blockers.append(AttendanceBlocker.NO_SUBJECTS)
        if course_count == 0 and student_count > 0:
            warnings.append(AttendanceWarning.NO_COURSES)
        if 1 <= student_count <= 2:
            warnings.append(AttendanceWarning.FEW_STUDENTS)
        if subject_count == 1:
            warnings.append(AttendanceWarning.SINGLE_SUBJECT)

        return cls(
            student_count=student_count,
            subject_count=subject_count,
            course_count=course_count,
            warnings=warnings,
            blockers=blockers,
        )

    @classmethod
    def not_logged_in(cls) -> "AttendanceReadinessState":
        return cls(0, 0, 0, blockers=[AttendanceBlocker.NOT_LOGGED_IN])


def check_readiness(provider: RepositoryProvider, teacher_id: Optional[str]) -> AttendanceReadinessState:
    """Count the teacher's students, subjects and courses and evaluate readiness."""
    if not (teacher_id or "").strip():
        return AttendanceReadinessState.not_logged_in()
    return AttendanceReadinessState.from_counts(
        student_count=provider.student_repository.get_student_count_for_teacher(teacher_id),
        subject_count=provider.subject_repository.get_subject_count_for_teacher(teacher_id),
        course_count=provider.course_repository.get_course_count_for_teacher(teacher_id),
    )
