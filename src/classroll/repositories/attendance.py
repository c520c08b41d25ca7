"""Attendance check-ins and the statistics derived from them."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from ..core.models import AttendanceStatus, CheckIn
from ..persistence.daos import CheckInsDao
from .errors import ValidationError
from .helpers import require

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceStats:
    """Counts per status plus the share of PRESENT and LATE records, in whole percent."""

    total_check_ins: int = 0
    today_check_ins: int = 0
    present_count: int = 0
    absent_count: int = 0
    late_count: int = 0
    excused_count: int = 0
    attendance_rate: int = 0


def summarize_check_ins(check_ins: Iterable[CheckIn], today: str) -> AttendanceStats:
    """Aggregate ``check_ins`` into :class:`AttendanceStats`."""
    records = list(check_ins)
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        counts[record.status] += 1
    total = len(records)
    attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]
    rate = int(attended / total * 100) if total else 0
    return AttendanceStats(
        total_check_ins=total,
        today_check_ins=sum(1 for record in records if record.check_in_date == today),
        present_count=counts[AttendanceStatus.PRESENT],
        absent_count=counts[AttendanceStatus.ABSENT],
        late_count=counts[AttendanceStatus.LATE],
        excused_count=counts[AttendanceStatus.EXCUSED],
        attendance_rate=rate,
    )


class AttendanceRepository:
    """
    Business facade over :class:`CheckInsDao`.

    Several check-ins per student, subject and day are allowed; each gets a
    fresh uuid4 identifier. ``clock`` supplies the current local time and
    exists so callers can pin "today".
    """

    def __init__(
        self,
        check_ins_dao: CheckInsDao,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.check_ins_dao = check_ins_dao
        self._clock = clock

    def get_current_date(self) -> str:
        return self._clock().strftime(DATE_FORMAT)

    def get_current_time(self) -> str:
        return self._clock().strftime(TIME_FORMAT)

    def get_all_check_ins(self) -> List[CheckIn]:
        return self.check_ins_dao.get_all_check_ins()

    def get_check_ins_by_teacher(self, teacher_id: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_teacher(teacher_id)

    def get_check_ins_by_subject(self, subject_id: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_subject(subject_id)

    def get_check_ins_by_student(self, student_id: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_student(student_id)

    def get_check_ins_by_date(self, on: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_date(on)

    def get_check_ins_by_subject_and_date(self, subject_id: str, on: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_subject_and_date(subject_id, on)

    def get_check_ins_by_date_and_teacher(self, on: str, teacher_id: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_date_and_teacher(on, teacher_id)

    def get_today_check_ins(self, teacher_id: str) -> List[CheckIn]:
        return self.check_ins_dao.get_check_ins_by_date_and_teacher(
            self.get_current_date(), teacher_id
        )

    def get_check_in_by_id(self, check_in_id: str) -> Optional[CheckIn]:
        return self.check_ins_dao.get_check_in_by_id(check_in_id)

    def get_filtered_check_ins(
        self,
        teacher_id: str,
        subject_id: Optional[str],
        start_date: date,
        end_date: date,
    ) -> List[CheckIn]:
        """Return a teacher's check-ins in ``[start_date, end_date]``, optionally for one subject."""
        return self.check_ins_dao.get_filtered_check_ins(
            teacher_id,
            subject_id,
            start_date.strftime(DATE_FORMAT),
            end_date.strftime(DATE_FORMAT),
        )

    def record_attendance(
        self,
        student_id: str,
        subject_id: str,
        teacher_id: str,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        on: Optional[date] = None,
    ) -> CheckIn:
        """Record one check-in stamped with the current time, dated ``on`` or today."""
        student = require(student_id, "Student ID is required")
        subject = require(subject_id, "Subject ID is required")
        teacher = require(teacher_id, "Teacher ID is required")

        check_in = self._new_check_in(student, subject, teacher, status, on, self._clock())
        self.check_ins_dao.insert_check_in(check_in)
        logger.debug(
            "Recorded %s for %s in %s on %s",
            status.value,
            student,
            subject,
            check_in.check_in_date,
        )
        return check_in

    def record_bulk_attendance(
        self,
        student_ids: Sequence[str],
        subject_id: str,
        teacher_id: str,
        statuses: Optional[Mapping[str, AttendanceStatus]] = None,
        on: Optional[date] = None,
    ) -> int:
        """
        Record a check-in for every student, dated ``on`` or today.

        Students missing from ``statuses`` are PRESENT. The batch shares one
        timestamp and is written in a single transaction, so a failing row
        leaves nothing behind.
        """
        if not student_ids:
            raise ValidationError("No students specified")
        if not (subject_id or "").strip() or not (teacher_id or "").strip():
            raise ValidationError("Subject and Teacher IDs are required")

        statuses = statuses or {}
        now = self._clock()
        check_ins = [
            self._new_check_in(
                student_id,
                subject_id.strip(),
                teacher_id.strip(),
                statuses.get(student_id, AttendanceStatus.PRESENT),
                on,
                now,
            )
            for student_id in student_ids
        ]
        self.check_ins_dao.insert_check_ins(check_ins)
        logger.info("Recorded %d check-ins for subject %s", len(check_ins), subject_id)
        return len(check_ins)

    def update_attendance(self, check_in: CheckIn) -> None:
        self.check_ins_dao.update_check_in(check_in)

    def delete_attendance(self, check_in: CheckIn) -> None:
        self.check_ins_dao.delete_check_in(check_in)

    def get_attendance_stats(self, teacher_id: str) -> AttendanceStats:
        return summarize_check_ins(
            self.check_ins_dao.get_check_ins_by_teacher(teacher_id), self.get_current_date()
        )

    def get_subject_attendance_stats(self, subject_id: str) -> AttendanceStats:
        return summarize_check_ins(
            self.check_ins_dao.get_check_ins_by_subject(subject_id), self.get_current_date()
        )

    def get_student_attendance_stats(self, student_id: str) -> AttendanceStats:
        return summarize_check_ins(
            self.check_ins_dao.get_check_ins_by_student(student_id), self.get_current_date()
        )

    def has_attendance_record(self, student_id: str, subject_id: str, on: str) -> bool:
        return self.check_ins_dao.has_checked_in(student_id, subject_id, on)

    def _new_check_in(
        self,
        student_id: str,
        subject_id: str,
        teacher_id: str,
        status: AttendanceStatus,
        on: Optional[date],
        now: datetime,
    ) -> CheckIn:
        check_in_date = (on or now).strftime(DATE_FORMAT)
        return CheckIn(
            check_in_id=str(uuid.uuid4()),
            student_id=student_id,
            subject_id=subject_id,
            teacher_id=teacher_id,
            check_in_time=now.strftime(TIME_FORMAT),
            check_in_date=check_in_date,
            status=status,
        )
