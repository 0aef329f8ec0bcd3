import uuid

import pytest

from hexattach.domain.entities.host import HostRef
from hexattach.domain.errors import StoreConflictError, StoreError, UnsupportedOperationError
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.services.stores.in_memory import InMemoryAssociationStore


def _attached(make_media, host, tags):
    m = make_media()
    m.attach_to(host)
    m.add_tags(tags)
    return m


def test_save_assigns_identity_and_timestamps(store, make_media):
    saved = store.save(make_media())
    assert saved.id is not None
    assert saved.date_created is not None and saved.last_updated is not None
    assert store.get(saved.id) == saved


def test_records_are_copied(store, make_media):
    saved = store.save(make_media())
    saved.add_tags("local-only")
    assert "local-only" not in store.get(saved.id).tags


def test_save_unknown_id_raises(store, make_media):
    m = make_media()
    m.id = uuid.uuid4()
    with pytest.raises(StoreError):
        store.save(m)


def test_duplicate_location_conflicts(store, make_media):
    store.save(make_media(filename_in="same"))
    with pytest.raises(StoreConflictError):
        store.save(make_media(filename_in="same"))
    assert len(store) == 1


def test_find_all_in_insertion_order(store, make_media, host):
    ids = [store.save(_attached(make_media, host, ["a"])).id for _ in range(3)]
    store.save(_attached(make_media, HostRef.of("post", 2), ["a"]))
    assert [m.id for m in store.find_all(host)] == ids


def test_find_by_tags_matches_filter_apply(store, make_media, host):
    for tags in (["a"], ["b"], ["a", "b"], []):
        store.save(_attached(make_media, host, tags))
    for f in (TagFilter.build(["a", "b"]), TagFilter.build(["a", "b"], True), TagFilter.build("b")):
        assert store.find_by_tags(host, f) == f.apply(store.find_all(host))


def test_trashed_media_disappear_from_reads(store, make_media, host):
    m = store.save(_attached(make_media, host, ["a"]))
    store.trash(m)
    assert store.get(m.id) is None
    assert store.find_all(host) == []
    assert len(store) == 1


def test_delete(store, make_media):
    m = store.save(make_media())
    store.delete(m)
    assert store.get(m.id) is None
    with pytest.raises(StoreError):
        store.delete(m)


def test_find_for_hosts_groups_by_host(store, make_media):
    h1, h2, h3 = HostRef.of("post", 1), HostRef.of("post", 2), HostRef.of("post", 3)
    a = store.save(_attached(make_media, h1, ["a"]))
    b = store.save(_attached(make_media, h2, ["b"]))
    store.save(_attached(make_media, h3, ["a"]))

    grouped = store.find_for_hosts([h1, h2])
    assert set(grouped) == {h1.key(), h2.key()}
    assert grouped[h1.key()] == [a] and grouped[h2.key()] == [b]

    only_a = store.find_for_hosts([h1, h2], TagFilter.build("a"))
    assert set(only_a) == {h1.key()}


def test_find_host_ids_with_media(store, make_media):
    store.save(_attached(make_media, HostRef.of("post", 2), ["a"]))
    store.save(_attached(make_media, HostRef.of("post", 1), ["a", "b"]))
    store.save(_attached(make_media, HostRef.of("post", 2), ["b"]))
    store.save(_attached(make_media, HostRef.of("user", 9), ["a"]))

    assert store.find_host_ids_with_media("post", TagFilter.build("a")) == ["2", "1"]
    assert store.find_host_ids_with_media("post", TagFilter.build(["a", "b"], True)) == ["1"]


def test_host_queries_can_be_disabled():
    store = InMemoryAssociationStore(supports_host_queries=False)
    with pytest.raises(UnsupportedOperationError):
        store.find_host_ids_with_media("post", TagFilter.build("a"))
