from http import HTTPStatus

BASE = "/api/hosts/post/1"


def _create(client, name):
    payload = {
        "location": {"disk": "s3", "directory": "uploads", "filename": name, "extension": "jpg"},
        "mime_type": "image/jpeg",
        "aggregate_type": "image",
        "size": 123,
    }
    r = client.post("/api/media", json=payload)
    assert r.status_code == HTTPStatus.CREATED, r.text
    return r.json()


def test_healthz_reports_association_flags(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert "rehydrate_media" in body and "detach_on_soft_delete" in body


def test_media_create_get_delete(api_client):
    created = _create(api_client, "cat")
    assert created["aggregate_type"] == "image"
    assert created["tags"] == [] and created["host_type"] is None

    r = api_client.get(f"/api/media/{created['id']}")
    assert r.status_code == 200
    assert r.json()["location"]["filename"] == "cat"

    assert api_client.delete(f"/api/media/{created['id']}").status_code == HTTPStatus.NO_CONTENT
    assert api_client.get(f"/api/media/{created['id']}").status_code == HTTPStatus.NOT_FOUND


def test_soft_deleted_media_is_hidden(api_client):
    created = _create(api_client, "dog")
    r = api_client.delete(f"/api/media/{created['id']}", params={"soft": "true"})
    assert r.status_code == HTTPStatus.NO_CONTENT
    assert api_client.get(f"/api/media/{created['id']}").status_code == HTTPStatus.NOT_FOUND


def test_duplicate_location_is_a_conflict(api_client):
    _create(api_client, "same")
    r = api_client.post(
        "/api/media",
        json={"location": {"disk": "s3", "directory": "uploads", "filename": "same", "extension": "jpg"}},
    )
    assert r.status_code == HTTPStatus.CONFLICT


def test_attach_and_query(api_client):
    a, b = _create(api_client, "a"), _create(api_client, "b")

    r = api_client.post(f"{BASE}/media", json={"media_ids": [a["id"]], "tags": ["thumb", "cover"]})
    assert r.status_code == HTTPStatus.CREATED, r.text
    assert r.json()[0]["tags"] == ["cover", "thumb"]
    assert r.json()[0]["host_id"] == "1"

    api_client.post(f"{BASE}/media", json={"media_ids": [b["id"]], "tags": ["thumb"]})

    r = api_client.get(f"{BASE}/media", params={"tags": ["thumb"]})
    assert [m["id"] for m in r.json()] == [a["id"], b["id"]]

    r = api_client.get(f"{BASE}/media", params={"tags": ["thumb", "cover"], "match_all": "true"})
    assert [m["id"] for m in r.json()] == [a["id"]]

    r = api_client.get(f"{BASE}/media")
    assert len(r.json()) == 2

    assert api_client.get(f"{BASE}/media/exists", params={"tags": ["cover"]}).json() == {"has_media": True}
    assert api_client.get(f"{BASE}/media/exists", params={"tags": ["nope"]}).json() == {"has_media": False}
    assert api_client.get(f"{BASE}/media/first", params={"tags": ["thumb"]}).json()["id"] == a["id"]
    assert api_client.get(f"{BASE}/media/last", params={"tags": ["thumb"]}).json()["id"] == b["id"]
    assert api_client.get(f"{BASE}/media/last", params={"tags": ["nope"]}).status_code == HTTPStatus.NOT_FOUND

    buckets = api_client.get(f"{BASE}/media/by-tag").json()["buckets"]
    assert {t: [m["id"] for m in ms] for t, ms in buckets.items()} == {
        "cover": [a["id"]],
        "thumb": [a["id"], b["id"]],
    }

    r = api_client.get(f"{BASE}/media/{a['id']}/tags")
    assert r.json() == {"media_id": a["id"], "tags": ["cover", "thumb"]}

    # other hosts see nothing
    assert api_client.get("/api/hosts/post/2/media", params={"tags": ["thumb"]}).json() == []


def test_attach_unknown_media_is_404(api_client):
    r = api_client.post(
        f"{BASE}/media",
        json={"media_ids": ["00000000-0000-0000-0000-000000000000"], "tags": ["x"]},
    )
    assert r.status_code == HTTPStatus.NOT_FOUND


def test_attach_requires_tags_and_ids(api_client):
    a = _create(api_client, "a")
    assert api_client.post(f"{BASE}/media", json={"media_ids": [a["id"]], "tags": []}).status_code == 422
    assert api_client.post(f"{BASE}/media", json={"media_ids": [], "tags": ["x"]}).status_code == 422


def test_detach_and_sync(api_client):
    a, b, c = _create(api_client, "a"), _create(api_client, "b"), _create(api_client, "c")
    api_client.post(f"{BASE}/media", json={"media_ids": [a["id"], b["id"]], "tags": ["gallery", "x"]})

    r = api_client.post(f"{BASE}/media/{a['id']}/detach", json={"tags": ["x"]})
    assert r.status_code == 200
    assert r.json()["tags"] == ["gallery"]

    r = api_client.post(f"{BASE}/media/{b['id']}/detach")
    assert r.json()["tags"] == []

    r = api_client.put(f"{BASE}/media", json={"media_ids": [c["id"]], "tags": ["gallery"]})
    assert r.status_code == 200
    assert [m["id"] for m in api_client.get(f"{BASE}/media", params={"tags": ["gallery"]}).json()] == [c["id"]]

    r = api_client.delete(f"{BASE}/media", params={"tags": ["gallery"]})
    assert [m["id"] for m in r.json()] == [c["id"]]
    assert api_client.get(f"{BASE}/media", params={"tags": ["gallery"]}).json() == []


def test_host_deleted_hook(api_client):
    a = _create(api_client, "a")
    api_client.post(f"{BASE}/media", json={"media_ids": [a["id"]], "tags": ["x"]})

    r = api_client.post(f"{BASE}/deleted", json={"soft": True})
    assert r.json() == {"host_type": "post", "host_id": "1", "media_deleted": 0}

    r = api_client.post(f"{BASE}/deleted", json={"soft": False})
    assert r.json()["media_deleted"] == 1
    assert api_client.get(f"/api/media/{a['id']}").status_code == HTTPStatus.NOT_FOUND


def test_store_failures_map_to_503(api_client, api_store):
    from hexattach.domain.errors import StoreError

    def boom(media_id):
        raise StoreError("database unavailable")

    api_store.get = boom  # type: ignore[method-assign]
    r = api_client.get("/api/media/00000000-0000-0000-0000-000000000000")
    assert r.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert r.json() == {"detail": "database unavailable"}
