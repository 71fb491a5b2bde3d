"""Pytest configuration and shared fixtures for the settings store tests.

Database tests run against a throwaway SQLite file per test; façade tests use
a private ConfigProvider so registered defaults never leak between tests.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pytest
from sqlmodel import Session, create_engine, select

from runtime_settings.config import TestConfig
from runtime_settings.config_provider import ConfigProvider
from runtime_settings.infra.database import ConnectionGroups, init_database
from runtime_settings.models import Setting
from runtime_settings.services.settings import Settings


class Example:
    """Configuration class whose attributes are the defaults under test."""

    siteName = "Settings Test"
    maxUploads = 3
    features = ["search"]


@contextmanager
def session_scope(engine) -> Iterator[Session]:
    """Open an ORM session on the test database and commit on exit."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# =============================================================================
# Defaults
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_data_dir(monkeypatch, tmp_path):
    """Keep config objects from creating ``instance/`` in the working tree."""

    monkeypatch.setenv("RUNTIME_SETTINGS_DATA_DIR", str(tmp_path / "instance"))


@pytest.fixture
def provider() -> ConfigProvider:
    """A provider knowing only the Example config class."""

    config_provider = ConfigProvider()
    config_provider.register(Example)
    return config_provider


@pytest.fixture
def example_class(provider) -> str:
    """The class name rows for ``Example.*`` settings are stored under."""

    return provider.canonical_name("Example")


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file with the settings table.

    Yields:
        Engine: SQLAlchemy engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def connections(db_engine) -> ConnectionGroups:
    """Connection groups with ``default`` bound to the test database."""

    groups = ConnectionGroups(TestConfig())
    groups.register("default", db_engine)
    return groups


@pytest.fixture
def stored_rows(db_engine):
    """Return a callable listing every row of the settings table."""

    def _rows() -> list[Setting]:
        with session_scope(db_engine) as session:
            rows = list(session.exec(select(Setting).order_by(Setting.id)).all())
            session.expunge_all()
        return rows

    return _rows


# =============================================================================
# Façades
# =============================================================================


@pytest.fixture
def settings(provider) -> Settings:
    """Array-backed façade, the fast configuration used by most tests."""

    return Settings(TestConfig(), provider=provider)


@pytest.fixture
def db_settings(provider, connections) -> Settings:
    """Database-backed façade writing to the test database."""

    config = TestConfig()
    config.HANDLERS = ["database"]
    return Settings(config, provider=provider, connections=connections)


@pytest.fixture(params=["array", "database"])
def any_settings(request, settings, provider, connections) -> Settings:
    """Façade over each handler in turn, for behaviour both must share."""

    if request.param == "array":
        return settings
    config = TestConfig()
    config.HANDLERS = ["database"]
    return Settings(config, provider=provider, connections=connections)
