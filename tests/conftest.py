# tests/conftest.py
from __future__ import annotations

from itertools import count

import pytest

from hexattach.common.settings import AssociationConfig
from hexattach.domain.entities.host import HostRef
from hexattach.domain.entities.media import Media
from hexattach.services.associations.session import AssociationSession
from hexattach.services.stores.in_memory import InMemoryAssociationStore

APP_SCHEMA = "hexattach"


# ---------------------------------------------------------------------------
# In-memory fixtures (no database needed)
# ---------------------------------------------------------------------------
@pytest.fixture()
def store() -> InMemoryAssociationStore:
    return InMemoryAssociationStore()


@pytest.fixture()
def assoc_session() -> AssociationSession:
    return AssociationSession()


@pytest.fixture()
def config() -> AssociationConfig:
    return AssociationConfig(rehydrate_media=True, detach_on_soft_delete=False)


@pytest.fixture()
def host() -> HostRef:
    return HostRef.of("post", 1)


@pytest.fixture()
def make_media():
    """Factory for unsaved Media with unique storage locations."""
    seq = count(1)

    def _make(**kw) -> Media:
        n = next(seq)
        kw.setdefault("disk_in", "tmp")
        kw.setdefault("directory_in", "uploads")
        kw.setdefault("filename_in", f"file{n}")
        kw.setdefault("extension_in", "jpg")
        kw.setdefault("mime_type", "image/jpeg")
        kw.setdefault("size", 100 * n)
        return Media(**kw)

    return _make


# ---------------------------------------------------------------------------
# PostgreSQL (testcontainers) for the SQLAlchemy adapter
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def _postgres_container():
    from testcontainers.postgres import PostgresContainer
    from hexattach.common.settings import get_settings

    if not get_settings().use_testcontainers:
        pytest.skip("testcontainers disabled (USE_TESTCONTAINERS=false)")

    try:
        container = PostgresContainer(get_settings().test_db_image)
        container.start()
    except Exception as exc:  # no docker daemon in this environment
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    try:
        # testcontainers defaults to psycopg2; we ship psycopg (v3)
        yield container.get_connection_url().replace("psycopg2", "psycopg")
    finally:
        container.stop()


def _prepare_schema(engine, schema: str = APP_SCHEMA) -> None:
    from sqlalchemy import text

    with engine.begin() as conn:
        conn.execute(text(f'create schema if not exists "{schema}"'))
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS pgcrypto"))


@pytest.fixture(scope="session")
def db_engine(_postgres_container):
    from sqlalchemy import create_engine
    from hexattach.database.models import Base

    engine = create_engine(_postgres_container, future=True)
    _prepare_schema(engine, APP_SCHEMA)

    # no Alembic here; tables straight from the models
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
