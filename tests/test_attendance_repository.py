"""Tests for recording attendance and the derived statistics."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from datetime import date, datetime

import pytest

from classroll.core.models import AttendanceStatus, CheckIn
from classroll.repositories import AttendanceRepository, ValidationError, summarize_check_ins

FIXED_NOW = datetime(2024, 9, 2, 8, 30, 15)


@pytest.fixture
def attendance(storage):
    return AttendanceRepository(storage.check_ins_dao(), clock=lambda: FIXED_NOW)


@pytest.fixture
def roster(provider, teacher):
    """Three students and one subject owned by ``teacher``."""
    students = [
        provider.student_repository.create_student(first, "", last, None, teacher.teacher_id)
        for first, last in (("Alan", "Turing"), ("Edsger", "Dijkstra"), ("Barbara", "Liskov"))
    ]
    subject = provider.subject_repository.create_subject("Algebra", "ALG", teacher.teacher_id)
    return students, subject


def test_current_date_and_time_follow_clock(attendance):
    assert attendance.get_current_date() == "2024-09-02"
    assert attendance.get_current_time() == "08:30:15"


def test_record_attendance_stamps_clock(attendance, teacher, roster):
    students, subject = roster

    check_in = attendance.record_attendance(
        f" {students[0].student_id} ", subject.subject_id, teacher.teacher_id
    )

    assert check_in.student_id == students[0].student_id
    assert check_in.check_in_date == "2024-09-02"
    assert check_in.check_in_time == "08:30:15"
    assert check_in.status is AttendanceStatus.PRESENT
    assert attendance.get_check_in_by_id(check_in.check_in_id) == check_in
    assert attendance.has_attendance_record(
        students[0].student_id, subject.subject_id, "2024-09-02"
    )


def test_record_attendance_on_explicit_date(attendance, teacher, roster):
    students, subject = roster

    check_in = attendance.record_attendance(
        students[0].student_id,
        subject.subject_id,
        teacher.teacher_id,
        AttendanceStatus.LATE,
        on=date(2024, 8, 30),
    )

    assert check_in.check_in_date == "2024-08-30"
    assert attendance.get_today_check_ins(teacher.teacher_id) == []


def test_repeated_check_ins_are_kept(attendance, teacher, roster):
    students, subject = roster

    first = attendance.record_attendance(students[0].student_id, subject.subject_id, teacher.teacher_id)
    second = attendance.record_attendance(students[0].student_id, subject.subject_id, teacher.teacher_id)

    assert first.check_in_id != second.check_in_id
    assert len(attendance.get_check_ins_by_student(students[0].student_id)) == 2


@pytest.mark.parametrize(
    "student_id, subject_id, teacher_id, message",
    [
        ("", "SUBJ-001", "TEACH-001", "Student ID is required"),
        ("STUD-001", " ", "TEACH-001", "Subject ID is required"),
        ("STUD-001", "SUBJ-001", "", "Teacher ID is required"),
    ],
)
def test_record_attendance_validation(attendance, student_id, subject_id, teacher_id, message):
    with pytest.raises(ValidationError, match=message):
        attendance.record_attendance(student_id, subject_id, teacher_id)


def test_record_bulk_attendance(attendance, teacher, roster):
    students, subject = roster
    ids = [student.student_id for student in students]

    recorded = attendance.record_bulk_attendance(
        ids,
        subject.subject_id,
        teacher.teacher_id,
        {ids[1]: AttendanceStatus.ABSENT, ids[2]: AttendanceStatus.LATE},
    )

    assert recorded == 3
    statuses = {c.student_id: c.status for c in attendance.get_check_ins_by_subject(subject.subject_id)}
    assert statuses == {
        ids[0]: AttendanceStatus.PRESENT,
        ids[1]: AttendanceStatus.ABSENT,
        ids[2]: AttendanceStatus.LATE,
    }


def test_record_bulk_attendance_validation(attendance):
    with pytest.raises(ValidationError, match="No students specified"):
        attendance.record_bulk_attendance([], "SUBJ-001", "TEACH-001")
    with pytest.raises(ValidationError, match="Subject and Teacher IDs are required"):
        attendance.record_bulk_attendance(["STUD-001"], "SUBJ-001", " ")


def test_attendance_stats(attendance, teacher, roster):
    students, subject = roster
    ids = [student.student_id for student in students]
    attendance.record_bulk_attendance(
        ids, subject.subject_id, teacher.teacher_id, {ids[1]: AttendanceStatus.ABSENT}
    )
    attendance.record_attendance(
        ids[2], subject.subject_id, teacher.teacher_id, AttendanceStatus.EXCUSED, on=date(2024, 9, 1)
    )

    stats = attendance.get_attendance_stats(teacher.teacher_id)

    assert stats.total_check_ins == 4
    assert stats.today_check_ins == 3
    assert stats.present_count == 2
    assert stats.absent_count == 1
    assert stats.excused_count == 1
    assert stats.late_count == 0
    assert stats.attendance_rate == 50
    assert attendance.get_student_attendance_stats(ids[1]).attendance_rate == 0
    assert attendance.get_subject_attendance_stats(subject.subject_id).total_check_ins == 4


def test_attendance_rate_truncates():
    check_ins = [
        CheckIn(f"c-{index}", "STUD-001", "SUBJ-001", "TEACH-001", "08:00:00", "2024-09-01", status)
        for index, status in enumerate(
            [AttendanceStatus.LATE, AttendanceStatus.ABSENT, AttendanceStatus.EXCUSED]
        )
    ]

    assert summarize_check_ins(check_ins, "2024-09-02").attendance_rate == 33
    assert summarize_check_ins([], "2024-09-02").attendance_rate == 0


def test_filtered_check_ins_by_date_range(attendance, teacher, roster):
    students, subject = roster
    for day in (1, 15, 30):
        attendance.record_attendance(
            students[0].student_id, subject.subject_id, teacher.teacher_id, on=date(2024, 9, day)
        )

    found = attendance.get_filtered_check_ins(
        teacher.teacher_id, subject.subject_id, date(2024, 9, 2), date(2024, 9, 30)
    )

    assert [c.check_in_date for c in found] == ["2024-09-30", "2024-09-15"]


def test_update_and_delete_attendance(attendance, teacher, roster):
    students, subject = roster
    check_in = attendance.record_attendance(students[0].student_id, subject.subject_id, teacher.teacher_id)

    attendance.update_attendance(replace(check_in, status=AttendanceStatus.LATE))
    assert attendance.get_check_in_by_id(check_in.check_in_id).status is AttendanceStatus.LATE

    attendance.delete_attendance(check_in)
    assert attendance.get_check_in_by_id(check_in.check_in_id) is None


def test_record_bulk_attendance_on_date(attendance, teacher, roster):
    students, subject = roster
    ids = [student.student_id for student in students]

    recorded = attendance.record_bulk_attendance(
        ids, subject.subject_id, teacher.teacher_id, on=date(2024, 8, 30)
    )

    assert recorded == 3
    assert len(attendance.get_check_ins_by_subject_and_date(subject.subject_id, "2024-08-30")) == 3
    assert attendance.get_today_check_ins(teacher.teacher_id) == []


def test_record_bulk_attendance_is_all_or_nothing(attendance, teacher, roster):
    students, subject = roster

    with pytest.raises(sqlite3.IntegrityError):
        attendance.record_bulk_attendance(
            [students[0].student_id, "STUD-404"],
            subject.subject_id,
            teacher.teacher_id,
            on=date(2024, 9, 2),
        )

    assert attendance.get_all_check_ins() == []


def test_record_bulk_attendance_reads_clock_once(storage, teacher, roster):
    students, subject = roster
    ticks = iter([datetime(2024, 9, 2, 23, 59, 59), datetime(2024, 9, 3, 0, 0, 1)])
    repository = AttendanceRepository(storage.check_ins_dao(), clock=lambda: next(ticks))

    repository.record_bulk_attendance(
        [student.student_id for student in students], subject.subject_id, teacher.teacher_id
    )

    stamps = {(c.check_in_date, c.check_in_time) for c in repository.get_all_check_ins()}
    assert stamps == {("2024-09-02", "23:59:59")}
