"""JSON export and import of a teacher's student roster."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..core.models import Student
from ..repositories.student import StudentRepository


class StudentExportData(BaseModel):
    """Name fields of one exported student."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(..., description="Given name")
    middle_name: str = Field("", description="Middle name, may be empty")
    last_name: str = Field(..., description="Family name")

    @field_validator("first_name", "middle_name", "last_name")
    @classmethod
    def strip_names(cls, v):
        return v.strip()

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.middle_name, self.last_name) if part)


class StudentsExport(BaseModel):
    """
    Top-level document written by :func:`export_students`.

    Keys are camelCase on the wire (``exportDate``, ``studentCount``,
    ``firstName``); snake_case names are accepted on input too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    export_date: str = Field(..., description="Timestamp the export was produced")
    student_count: int = Field(..., ge=0, description="Number of students in the export")
    students: List[StudentExportData] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


@dataclass
class ImportResult:
    """Outcome of :func:`import_students`."""

    success_count: int = 0
    skipped_count: int = 0
    skipped_names: List[str] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.error_message is None

    @property
    def total_processed(self) -> int:
        return self.success_count + self.skipped_count


def export_students(students: Iterable[Student], now: Optional[datetime] = None) -> StudentsExport:
    """Build the export document for ``students``."""
    entries = [
        StudentExportData(
            first_name=student.first_name,
            middle_name=student.middle_name,
            last_name=student.last_name,
        )
        for student in students
    ]
    stamp = (now or datetime.now()).isoformat(timespec="seconds")
    return StudentsExport(export_date=stamp, student_count=len(entries), students=entries)


def import_students(repository: StudentRepository, payload: str, teacher_id: str) -> ImportResult:
    """
    Create students from an export document and link them to ``teacher_id``.

    A malformed document produces a result carrying ``error_message`` and no
    changes. Entries with a blank first or last name, and entries whose full
    name (case-insensitive) already belongs to the teacher or appeared earlier
    in the same document, are skipped.
    """
    try:
        document = StudentsExport.model_validate_json(payload)
    except ValidationError as exc:
        return ImportResult(error_message=f"Invalid student file: {exc.error_count()} error(s)")

    result = ImportResult()
    known = {student.full_name.lower() for student in repository.get_students_by_teacher(teacher_id)}
    for entry in document.students:
        name = entry.full_name
        if not entry.first_name or not entry.last_name or name.lower() in known:
            result.skipped_count += 1
            result.skipped_names.append(name)
            continue
        repository.create_student(
            entry.first_name, entry.middle_name, entry.last_name, None, teacher_id
        )
        known.add(name.lower())
        result.success_count += 1
    return result
