"""Display formats for student names."""

from __future__ import annotations

from enum import Enum


class StudentNameFormat(Enum):
    FIRST_MIDDLE_LAST = ("First Middle Last", "John Michael Smith")
    FIRST_LAST = ("First Last", "John Smith")
    LAST_FIRST_MIDDLE = ("Last, First Middle", "Smith, John Michael")
    LAST_FIRST_MI = ("Last, First M.", "Smith, John M.")
    LAST_FIRST = ("Last, First", "Smith, John")
    FIRST_MI_LAST = ("First M. Last", "John M. Smith")

    def __init__(self, display_name: str, example: str) -> None:
        self.display_name = display_name
        self.example = example

    @classmethod
    def from_string(cls, value: str) -> "StudentNameFormat":
        """Parse a format name; anything unknown falls back to FIRST_MIDDLE_LAST."""
        try:
            return cls[(value or "").strip().upper()]
        except KeyError:
            return cls.FIRST_MIDDLE_LAST


def format_student_name(
    first_name: str,
    middle_name: str,
    last_name: str,
    name_format: StudentNameFormat = StudentNameFormat.FIRST_MIDDLE_LAST,
) -> str:
    first = (first_name or "").strip()
    middle = (middle_name or "").strip()
    last = (last_name or "").strip()
    initial = f"{middle[0]}." if middle else ""

    if name_format is StudentNameFormat.FIRST_LAST:
        return f"{first} {last}"
    if name_format is StudentNameFormat.LAST_FIRST_MIDDLE:
        return f"{last}, {first} {middle}" if middle else f"{last}, {first}"
    if name_format is StudentNameFormat.LAST_FIRST_MI:
        return f"{last}, {first} {initial}" if middle else f"{last}, {first}"
    if name_format is StudentNameFormat.LAST_FIRST:
        return f"{last}, {first}"
    if name_format is StudentNameFormat.FIRST_MI_LAST:
        return f"{first} {initial} {last}" if middle else f"{first} {last}"
    return f"{first} {middle} {last}" if middle else f"{first} {last}"
