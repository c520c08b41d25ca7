"""Tests for exporting and importing student rosters."""

from __future__ import annotations

import json
from datetime import datetime

from classroll.services.student_export import StudentsExport, export_students, import_students


def test_export_students(provider, teacher):
    provider.student_repository.create_student("Alan", "M", "Turing", None, teacher.teacher_id)
    students = provider.student_repository.get_students_by_teacher(teacher.teacher_id)

    document = export_students(students, now=datetime(2024, 9, 2, 8, 0, 0))

    assert document.export_date == "2024-09-02T08:00:00"
    assert document.student_count == 1
    assert document.students[0].full_name == "Alan M Turing"
    written = json.loads(document.to_json())
    assert written["studentCount"] == 1
    assert written["students"][0] == {"firstName": "Alan", "middleName": "M", "lastName": "Turing"}


def test_import_students_skips_duplicates_and_blanks(provider, teacher):
    repository = provider.student_repository
    repository.create_student("Alan", "", "Turing", None, teacher.teacher_id)
    payload = json.dumps(
        {
            "export_date": "2024-09-02T08:00:00",
            "student_count": 4,
            "students": [
                {"first_name": "alan", "middle_name": "", "last_name": "TURING"},
                {"first_name": "Grace", "last_name": "Hopper"},
                {"first_name": " Grace ", "last_name": "Hopper"},
                {"first_name": "", "last_name": "Nobody"},
            ],
        }
    )

    result = import_students(repository, payload, teacher.teacher_id)

    assert result.is_success
    assert result.success_count == 1
    assert result.skipped_count == 3
    assert result.total_processed == 4
    assert result.skipped_names == ["alan TURING", "Grace Hopper", "Nobody"]
    names = [s.full_name for s in repository.get_students_by_teacher(teacher.teacher_id)]
    assert names == ["Alan Turing", "Grace Hopper"]


def test_import_students_rejects_malformed_document(provider, teacher):
    result = import_students(provider.student_repository, '{"students": "nope"}', teacher.teacher_id)

    assert not result.is_success
    assert result.error_message.startswith("Invalid student file")
    assert provider.student_repository.get_students_by_teacher(teacher.teacher_id) == []


def test_export_round_trips_through_model():
    document = StudentsExport(export_date="2024-09-02T08:00:00", student_count=0)

    assert StudentsExport.model_validate_json(document.to_json()) == document


def test_import_accepts_camel_case_keys(provider, teacher):
    payload = json.dumps(
        {
            "exportDate": "2024-09-02 08:00:00",
            "studentCount": 1,
            "students": [{"firstName": "Grace", "middleName": "Brewster", "lastName": "Hopper"}],
        }
    )

    result = import_students(provider.student_repository, payload, teacher.teacher_id)

    assert result.success_count == 1
    students = provider.student_repository.get_students_by_teacher(teacher.teacher_id)
    assert [s.full_name for s in students] == ["Grace Brewster Hopper"]
