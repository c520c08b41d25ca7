"""Common dependency providers for the web application."""

from __future__ import annotations

from ..provider import RepositoryProvider
from ..provider import get_provider as _get_cached_provider


def get_provider() -> RepositoryProvider:
    """
    FastAPI dependency that yields the repository provider.

    Tests can override this dependency to supply a provider over a scratch database.
    """
    return _get_cached_provider()
