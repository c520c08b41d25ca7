"""Services built on top of the repositories."""

from .name_format import StudentNameFormat, format_student_name
from .readiness import (
    AttendanceBlocker,
    AttendanceFeedback,
    AttendanceReadinessState,
    AttendanceWarning,
    FeedbackType,
    blocker_feedback,
    check_readiness,
    warning_feedback,
)
from .student_export import (
    ImportResult,
    StudentExportData,
    StudentsExport,
    export_students,
    import_students,
)

__all__ = [
    "AttendanceBlocker",
    "AttendanceFeedback",
    "AttendanceReadinessState",
    "AttendanceWarning",
    "FeedbackType",
    "ImportResult",
    "StudentExportData",
    "StudentNameFormat",
    "StudentsExport",
    "blocker_feedback",
    "check_readiness",
    "export_students",
    "format_student_name",
    "import_students",
    "warning_feedback",
]
