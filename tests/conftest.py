"""
Pytest configuration and shared fixtures.
"""

import itertools

import pytest

from parceltracker.database import dispose_engines, init_database, get_session
from parceltracker.logger import StructuredLogger, reset_logger
from parceltracker.models import Parcel, ParcelStatus
from parceltracker.store import ParcelStore

# Unique client ids for the whole test run
_client_ids = itertools.count(1_000_000)

ENV_VARS = ("PARCEL_DB_PATH", "PARCEL_LOG_LEVEL", "PARCEL_LOG_DIR")


@pytest.fixture(autouse=True)
def _reset_global_logger():
    """Each test starts without a cached global logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Settings start unset; anything a .env file loads is undone afterwards."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _dispose_engines():
    yield
    dispose_engines()


@pytest.fixture
def db_path(tmp_path):
    """Path to an initialized, empty database."""
    path = tmp_path / "tracker.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on the temporary database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    """Logger without console or file output."""
    return StructuredLogger(
        name="parceltracker.test",
        level="DEBUG",
        log_dir=tmp_path,
        enable_file=False,
        enable_console=False,
    )


@pytest.fixture
def store(db_session, quiet_logger) -> ParcelStore:
    return ParcelStore(db_session, logger=quiet_logger)


@pytest.fixture
def new_client_id():
    """Factory returning a client id not used elsewhere in this run."""
    return lambda: next(_client_ids)


@pytest.fixture
def sample_parcel() -> Parcel:
    """A freshly registered parcel, not yet stored."""
    return Parcel(
        client=1000,
        status=ParcelStatus.REGISTERED.value,
        address="test",
        created_at="2024-01-31T12:00:00Z",
    )
