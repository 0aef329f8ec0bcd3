from __future__ import annotations

import pytest

from hexattach.domain.errors import StoreError
from hexattach.services.associations.manager import MediaAssociations
from hexattach.services.stores.in_memory import InMemoryAssociationStore


class FailingSaveStore(InMemoryAssociationStore):
    """Saves succeed until `fail_saves` is switched on."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_saves = False

    def save(self, media):
        if self.fail_saves:
            raise StoreError("store unavailable")
        return super().save(media)


class CountingStore(InMemoryAssociationStore):
    def __init__(self) -> None:
        super().__init__()
        self.calls: dict[str, int] = {}

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def find_all(self, host):
        self._count("find_all")
        return super().find_all(host)

    def find_for_hosts(self, hosts, tag_filter=None):
        self._count("find_for_hosts")
        return super().find_for_hosts(hosts, tag_filter)


@pytest.fixture()
def failing_store() -> FailingSaveStore:
    return FailingSaveStore()


@pytest.fixture()
def counting_store() -> CountingStore:
    return CountingStore()


@pytest.fixture()
def assoc(host, store, assoc_session, config) -> MediaAssociations:
    return MediaAssociations(host, store, session=assoc_session, config=config)


@pytest.fixture()
def saved(store, make_media):
    """Factory: persist a fresh unattached media and return it."""

    def _saved(**kw):
        return store.save(make_media(**kw))

    return _saved
