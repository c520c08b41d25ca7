"""Pytest configuration and fixtures."""

import pytest

from classroll import provider as provider_module
from classroll.persistence import storage as storage_module
from classroll.persistence.storage import SQLiteStorage
from classroll.provider import RepositoryProvider


@pytest.fixture(scope="session", autouse=True)
def isolated_persistence(tmp_path_factory):
    """Ensure tests use an isolated SQLite database and reset caches between runs."""

    db_dir = tmp_path_factory.mktemp("persistence-db")
    db_path = db_dir / "classroll.db"
    monkeypatch = pytest.MonkeyPatch()
    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(db_path))
    storage_module.get_storage.cache_clear()
    provider_module.get_provider.cache_clear()
    try:
        yield
    finally:
        storage_module.get_storage.cache_clear()
        provider_module.get_provider.cache_clear()
        monkeypatch.undo()


@pytest.fixture
def storage(tmp_path):
    """A storage over a fresh database file."""
    return SQLiteStorage(tmp_path / "classroll.db")


@pytest.fixture
def provider(storage):
    return RepositoryProvider(storage)


@pytest.fixture
def teacher(provider):
    """A registered teacher to own students, courses and subjects."""
    return provider.teacher_repository.register(
        "Ada", "", "Lovelace", "ada@example.com", "secret1", "secret1"
    )
