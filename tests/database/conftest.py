# tests/database/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

APP_SCHEMA = "hexattach"


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test Session bound to an outer transaction that is rolled back after
    each test. Store writes use SAVEPOINTs inside it.
    """
    connection = db_engine.connect()
    trans = connection.begin()
    connection.execute(text(f'SET search_path TO "{APP_SCHEMA}", public'))

    session = Session(bind=connection, future=True, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()
