"""
Classroll - classroom attendance tracking.

Teachers, students, courses, subjects, enrollments and check-ins stored in
SQLite and reached through a shared :class:`RepositoryProvider`.
"""

__version__ = "0.1.0"

from .provider import DatabaseHandle, RepositoryProvider, get_provider

__all__ = [
    "DatabaseHandle",
    "RepositoryProvider",
    "get_provider",
]
