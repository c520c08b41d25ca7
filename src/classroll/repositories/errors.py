"""Exceptions raised by the repository layer."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when input fails repository validation."""


class DuplicateEmailError(ValidationError):
    """Raised when registering an e-mail address that already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered")
