from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the capybara_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from capybara_api.app import create_app  # noqa: E402
from capybara_api.core import config as core_config  # noqa: E402
from capybara_api.db.create_tables import create_all  # noqa: E402
from capybara_api.domain.capybaras import StorageError  # noqa: E402
from capybara_api.repositories.memory_repository import MemoryRepository  # noqa: E402
from capybara_api.repositories.sql_repository import SQLRepository  # noqa: E402


@pytest.fixture()
def settings(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    core_config.get_settings.cache_clear()
    yield core_config.get_settings()
    core_config.get_settings.cache_clear()


@pytest.fixture(params=["memory", "sql"])
def client(request, tmp_path, settings):
    if request.param == "sql":
        repository = SQLRepository.from_url(f"sqlite:///{tmp_path / 'api.db'}")
        create_all(repository.engine)
    else:
        repository = MemoryRepository()
    app = create_app(settings, repository=repository)
    with TestClient(app) as test_client:
        yield test_client


class FailingRepository:
    def _fail(self, *args, **kwargs):
        raise StorageError("connection refused")

    list_all = get_by_id = insert = update = delete = _fail

    def close(self) -> None:
        pass


class BrokenRepository(FailingRepository):
    def _fail(self, *args, **kwargs):
        raise RuntimeError("disk on fire")

    list_all = get_by_id = insert = update = delete = _fail


def test_full_lifecycle(client):
    resp = client.post("/capybaras", json={"name": "Fluffy"})
    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "name": "Fluffy"}

    resp = client.get("/capybaras/1")
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "Fluffy"}

    resp = client.put("/capybaras/1", json={"name": "Chonky"})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "Chonky"}

    resp = client.delete("/capybaras/1")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = client.get("/capybaras/1")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Capybara not found"}


def test_list_starts_empty_and_is_ordered(client):
    resp = client.get("/capybaras")
    assert resp.status_code == 200
    assert resp.json() == []

    for name in ("Fluffy", "Chonky", "Nibbles"):
        client.post("/capybaras", json={"name": name})
    body = client.get("/capybaras").json()
    assert [c["id"] for c in body] == [1, 2, 3]
    assert [c["name"] for c in body] == ["Fluffy", "Chonky", "Nibbles"]


@pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": None}, {"name": 5}, [1, 2], "Fluffy"])
def test_create_requires_name(client, payload):
    resp = client.post("/capybaras", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Name is required"}
    assert client.get("/capybaras").json() == []


def test_create_without_body(client):
    resp = client.post("/capybaras")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Name is required"}


def test_create_with_malformed_json(client):
    resp = client.post("/capybaras", content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400


def test_created_name_roundtrips(client):
    for name in ("Fluffy", "Señor Capy", "  spaced  ", "x" * 300):
        created = client.post("/capybaras", json={"name": name}).json()
        assert client.get(f"/capybaras/{created['id']}").json()["name"] == name


@pytest.mark.parametrize(
    "payload",
    [{"name": "Chonky"}, {}, {"name": ""}, {"name": 5}, [1, 2], "str", None],
)
def test_update_missing_id_is_404_regardless_of_body(client, payload):
    resp = client.put("/capybaras/42", json=payload)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Capybara not found"}


def test_update_missing_id_without_body(client):
    resp = client.put("/capybaras/42")
    assert resp.status_code == 404


@pytest.mark.parametrize("payload", [{"name": ""}, {}, {"name": 5}, [1, 2], "str"])
def test_update_existing_requires_name(client, payload):
    client.post("/capybaras", json={"name": "Fluffy"})
    resp = client.put("/capybaras/1", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Name is required"}
    assert client.get("/capybaras/1").json()["name"] == "Fluffy"


def test_delete_missing_id_is_404(client):
    resp = client.delete("/capybaras/7")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Capybara not found"}


def test_non_integer_id_is_not_found(client):
    assert client.get("/capybaras/abc").status_code == 404
    assert client.delete("/capybaras/abc").status_code == 404
    assert client.put("/capybaras/abc", json={"name": "x"}).status_code == 404


@pytest.mark.parametrize("capybara_id", ["99999999999999999999", "2147483648", "0", "-1"])
def test_out_of_range_id_is_not_found(client, capybara_id):
    client.post("/capybaras", json={"name": "Fluffy"})
    for resp in (
        client.get(f"/capybaras/{capybara_id}"),
        client.put(f"/capybaras/{capybara_id}", json={"name": "Chonky"}),
        client.delete(f"/capybaras/{capybara_id}"),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"message": "Capybara not found"}
    assert client.get("/capybaras").json() == [{"id": 1, "name": "Fluffy"}]


def test_ids_not_reused_after_delete(client):
    client.post("/capybaras", json={"name": "a"})
    client.post("/capybaras", json={"name": "b"})
    client.delete("/capybaras/2")
    assert client.post("/capybaras", json={"name": "c"}).json()["id"] == 3


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/capybaras", {}),
        ("get", "/capybaras/1", {}),
        ("post", "/capybaras", {"json": {"name": "Fluffy"}}),
        ("put", "/capybaras/1", {"json": {"name": "Fluffy"}}),
        ("delete", "/capybaras/1", {}),
    ],
)
def test_storage_errors_are_500(settings, method, path, kwargs):
    app = create_app(settings, repository=FailingRepository())
    with TestClient(app) as test_client:
        resp = getattr(test_client, method)(path, **kwargs)
    assert resp.status_code == 500
    assert resp.json() == {"error": "connection refused"}


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/capybaras", {}),
        ("get", "/capybaras/1", {}),
        ("post", "/capybaras", {"json": {"name": "Fluffy"}}),
        ("delete", "/capybaras/1", {}),
    ],
)
def test_unexpected_errors_are_json_500(settings, method, path, kwargs):
    app = create_app(settings, repository=BrokenRepository())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        resp = getattr(test_client, method)(path, **kwargs)
    assert resp.status_code == 500
    assert resp.headers["content-type"] == "application/json"
    assert resp.json() == {"error": "disk on fire"}


def test_validation_runs_before_storage_on_create(settings):
    app = create_app(settings, repository=FailingRepository())
    with TestClient(app) as test_client:
        resp = test_client.post("/capybaras", json={})
    assert resp.status_code == 400


def test_docs_are_served(client):
    for path in ("/", "/api-docs"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert "swagger-ui" in resp.text

    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "Capybara API"
    assert schema["info"]["version"] == "1.0.0"
    assert set(schema["paths"]) == {"/capybaras", "/capybaras/{capybara_id}"}
    assert set(schema["paths"]["/capybaras/{capybara_id}"]) == {"get", "put", "delete"}
    assert "Capybara" in schema["components"]["schemas"]
    body = schema["paths"]["/capybaras"]["post"]["requestBody"]["content"]["application/json"]["schema"]
    assert "name" in body["properties"]


def test_cors_headers(client):
    resp = client.get("/capybaras", headers={"Origin": "http://example.test"})
    assert resp.headers.get("access-control-allow-origin") == "*"


def test_sql_backend_from_settings(tmp_path, settings):
    url = f"sqlite:///{tmp_path / 'configured.db'}"
    sql_settings = replace(settings, storage_backend="sql", database_url=url)
    bootstrap = SQLRepository.from_url(url)
    create_all(bootstrap.engine)
    bootstrap.close()

    app = create_app(sql_settings)
    assert isinstance(app.state.repository, SQLRepository)
    with TestClient(app) as test_client:
        assert test_client.post("/capybaras", json={"name": "Fluffy"}).status_code == 201
        assert test_client.get("/capybaras").json() == [{"id": 1, "name": "Fluffy"}]
