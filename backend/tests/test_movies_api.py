"""HTTP tests for the /resource endpoints."""
import pytest

import database
from config.app_config import AppConfig
from dependencies import get_app_config, get_memory_store, get_movie_store
from init_db import init_database
from exceptions import DatabaseError
from repositories.memory_repository import InMemoryMovieRepository


def _post(client, n: int, **overrides):
    payload = {"title": f"Movie {n}", "genre": "Drama", "duration_minutes": 95}
    payload.update(overrides)
    response = client.post("/resource", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_returns_201_with_location(client, movie_payload):
    response = client.post("/resource", json=movie_payload)

    assert response.status_code == 201
    body = response.json()
    assert response.headers["Location"] == f"/resource/{body['id']}"
    assert body["title"] == movie_payload["title"]
    assert body["duration_formatted"] == "2h 55m"
    assert body["length_category"] == "EPIC"
    assert "created_at" in body


def test_create_ignores_client_supplied_id(client, movie_payload):
    first = _post(client, 1)
    body = client.post("/resource", json={**movie_payload, "id": first["id"]}).json()
    assert body["id"] != first["id"]


@pytest.mark.parametrize("payload, field", [
    ({"genre": "Drama", "duration_minutes": 90}, "title"),
    ({"title": "   ", "genre": "Drama", "duration_minutes": 90}, "title"),
    ({"title": "X", "genre": "Drama", "duration_minutes": 0}, "duration_minutes"),
    ({"title": "X", "genre": "Drama", "duration_minutes": "long"}, "duration_minutes"),
    ({"title": "X", "genre": "", "duration_minutes": 90}, "genre"),
])
def test_create_validation_failure_is_400_with_field_detail(client, payload, field):
    response = client.post("/resource", json=payload)

    assert response.status_code == 400
    assert field in response.json()["detail"]["errors"]
    assert client.get("/resource").json()["total"] == 0


def test_get_by_id(client):
    created = _post(client, 1)

    response = client.get(f"/resource/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_never_created_id_is_404(client):
    assert client.get("/resource/4242").status_code == 404


def test_list_scenario(client):
    created = [_post(client, n) for n in range(3)]

    first = client.get("/resource", params={"page": 1, "pageSize": 2}).json()
    second = client.get("/resource", params={"page": 2, "pageSize": 2}).json()
    third = client.get("/resource", params={"page": 3, "pageSize": 2}).json()

    assert [m["id"] for m in first["items"]] == [created[0]["id"], created[1]["id"]]
    assert first["total"] == 3
    assert [m["id"] for m in second["items"]] == [created[2]["id"]]
    assert second["total"] == 3
    assert third["items"] == []
    assert third["total"] == 3


def test_list_defaults_and_clamping(client):
    for n in range(12):
        _post(client, n)

    default = client.get("/resource").json()
    clamped = client.get("/resource", params={"page": 0, "pageSize": 0}).json()

    assert (default["page"], default["page_size"], len(default["items"])) == (1, 10, 10)
    assert (clamped["page"], clamped["page_size"], len(clamped["items"])) == (1, 1, 1)


def test_list_with_bad_query_is_400(client):
    assert client.get("/resource", params={"pageSize": "many"}).status_code == 400


def test_put_replaces_and_resets_omitted_fields(client):
    created = _post(client, 1, description="to be cleared")

    response = client.put(
        f"/resource/{created['id']}",
        json={"title": "Replaced", "genre": "Western", "duration_minutes": 120},
    )
    fetched = client.get(f"/resource/{created['id']}").json()

    assert response.status_code == 204
    assert response.content == b""
    assert fetched["title"] == "Replaced"
    assert fetched["genre"] == "Western"
    assert fetched["description"] is None
    assert fetched["created_at"] == created["created_at"]


def test_put_unknown_is_404(client):
    response = client.put("/resource/9", json={"title": "A", "genre": "B", "duration_minutes": 50})
    assert response.status_code == 404


def test_put_invalid_is_400(client):
    created = _post(client, 1)

    response = client.put(f"/resource/{created['id']}", json={"title": "A", "genre": "B"})

    assert response.status_code == 400
    assert "duration_minutes" in response.json()["detail"]["errors"]


def test_patch_sparse_object(client):
    created = _post(client, 1, description="stays")

    response = client.patch(f"/resource/{created['id']}", json={"duration_minutes": 30})
    fetched = client.get(f"/resource/{created['id']}").json()

    assert response.status_code == 204
    assert fetched["duration_minutes"] == 30
    assert fetched["length_category"] == "SHORT"
    assert fetched["title"] == created["title"]
    assert fetched["description"] == "stays"


def test_patch_operation_list(client):
    created = _post(client, 1, description="goes away")

    response = client.patch(
        f"/resource/{created['id']}",
        json=[
            {"op": "replace", "path": "/title", "value": "Patched"},
            {"op": "remove", "path": "/description"},
        ],
    )
    fetched = client.get(f"/resource/{created['id']}").json()

    assert response.status_code == 204
    assert fetched["title"] == "Patched"
    assert fetched["description"] is None
    assert fetched["genre"] == created["genre"]


@pytest.mark.parametrize("body", [
    {"duration_minutes": -1},
    {"title": None},
    {"id": 55},
    {"created_at": "2020-01-01T00:00:00Z"},
    [{"op": "move", "path": "/title"}],
])
def test_patch_invalid_is_400_and_changes_nothing(client, body):
    created = _post(client, 1)

    response = client.patch(f"/resource/{created['id']}", json=body)

    assert response.status_code == 400
    assert client.get(f"/resource/{created['id']}").json() == created


def test_patch_unknown_is_404(client):
    assert client.patch("/resource/31", json={"title": "X"}).status_code == 404


def test_delete_then_delete_again(client):
    created = _post(client, 1)

    assert client.delete(f"/resource/{created['id']}").status_code == 204
    assert client.delete(f"/resource/{created['id']}").status_code == 404
    assert client.get(f"/resource/{created['id']}").status_code == 404


def test_deleted_id_is_not_reused(client):
    first = _post(client, 1)
    client.delete(f"/resource/{first['id']}")

    second = _post(client, 2)

    assert second["id"] > first["id"]


class BrokenStore(InMemoryMovieRepository):
    def find_by_id(self, movie_id):
        raise DatabaseError("find_by_id", "connection refused by db-host-7")


def test_storage_failure_is_500_without_internal_detail(client):
    from main import app

    app.dependency_overrides[get_movie_store] = lambda: BrokenStore()

    response = client.get("/resource/1")

    assert response.status_code == 500
    assert "db-host-7" not in response.text


def test_memory_store_backend(client):
    from main import app

    store = InMemoryMovieRepository()
    app.dependency_overrides[get_movie_store] = lambda: store

    created = _post(client, 1)

    assert store.find_by_id(created["id"]).title == "Movie 1"


OUT_OF_RANGE_ID = 99999999999999999999


@pytest.mark.parametrize("store_kind", ["sql", "memory"])
def test_ids_beyond_storage_range_are_404(client, store_kind):
    from main import app

    if store_kind == "memory":
        app.dependency_overrides[get_movie_store] = lambda: InMemoryMovieRepository()
    url = f"/resource/{OUT_OF_RANGE_ID}"

    assert client.get(url).status_code == 404
    assert client.put(url, json={"title": "A", "genre": "B", "duration_minutes": 50}).status_code == 404
    assert client.patch(url, json={"title": "A"}).status_code == 404
    assert client.delete(url).status_code == 404


def test_page_far_past_the_end_is_empty(client):
    _post(client, 1)

    response = client.get("/resource", params={"page": 10**17, "pageSize": 100})

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["total"] == 1


@pytest.mark.parametrize("duration", ["120", 120.0, True])
def test_duration_must_be_a_json_integer(client, duration):
    response = client.post("/resource", json={"title": "X", "genre": "Drama", "duration_minutes": duration})

    assert response.status_code == 400
    assert "duration_minutes" in response.json()["detail"]["errors"]


@pytest.fixture
def configured_client(client):
    """Client whose store comes from get_movie_store and the configured URL."""
    from main import app

    app.dependency_overrides.pop(get_movie_store)

    def configure(database_url: str):
        config = AppConfig(_env_file=None, database_url=database_url)
        app.dependency_overrides[get_app_config] = lambda: config
        return client

    get_memory_store.cache_clear()
    yield configure
    get_memory_store.cache_clear()


def test_memory_url_selects_shared_memory_store(configured_client):
    client = configured_client("memory://")

    created = _post(client, 1)

    assert client.get(f"/resource/{created['id']}").json() == created
    assert get_memory_store().find_by_id(created["id"]).title == "Movie 1"


def test_sql_url_uses_request_scoped_sessions(configured_client, tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'movies.db'}"
    monkeypatch.setattr(database, "_engine", None)
    engine = database.init_engine(url)
    init_database(engine)
    client = configured_client(url)

    try:
        created = _post(client, 1)
        fetched = client.get(f"/resource/{created['id']}").json()
        listed = client.get("/resource").json()
    finally:
        engine.dispose()

    assert fetched == created
    assert listed["total"] == 1
