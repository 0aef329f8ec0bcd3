# tests/services/conftest.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from hexattach.services.api.app import create_app
from hexattach.services.api.deps import get_association_store
from hexattach.services.stores.in_memory import InMemoryAssociationStore


@pytest.fixture()
def api_store() -> InMemoryAssociationStore:
    return InMemoryAssociationStore()


@pytest.fixture()
def api_client(api_store):
    """
    A TestClient whose `get_association_store` dependency yields one shared
    in-memory store, so POST -> GET works across requests without a database.
    """
    app = create_app()
    app.dependency_overrides[get_association_store] = lambda: api_store

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
