"""Identifier generation and input checks shared by the repositories."""

from __future__ import annotations

from typing import Callable, Optional

from .errors import ValidationError


def next_identifier(
    prefix: str,
    max_number: Optional[int],
    exists: Callable[[str], bool],
) -> str:
    """Return ``<prefix><NNN>`` one past ``max_number``, skipping identifiers already taken."""
    number = (max_number or 0) + 1
    candidate = f"{prefix}{number:03d}"
    while exists(candidate):
        number += 1
        candidate = f"{prefix}{number:03d}"
    return candidate


def require(value: Optional[str], message: str) -> str:
    """Return ``value`` stripped, raising ``ValidationError`` when it is blank."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(message)
    return text
