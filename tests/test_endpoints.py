from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from shelfkit.config import Settings, get_settings
from shelfkit.main import create_app


@pytest.fixture(scope="module")
def client() -> TestClient:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def small_batch_client():
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(max_batch_size=1)
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_convert_names(client: TestClient) -> None:
    response = client.post("/api/folders/convert", json={"names": ["Dozory/", "Documents"]})

    assert response.status_code == 200, response.text
    payload = response.json()
    first, second = payload["items"]
    assert first == {
        "original": "Dozory/",
        "converted": "Дозоры/",
        "changed": True,
        "is_directory_hint": True,
    }
    assert second["converted"] == "Documents"
    assert second["changed"] is False
    assert payload["changed_count"] == 1


def test_sort_names(client: TestClient) -> None:
    response = client.post(
        "/api/folders/sort",
        json={"names": ["Romany/", "Архив", "Briendon Sandierson"]},
    )

    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["names"] == ["Архив", "Briendon Sandierson", "Romany/"]
    assert payload["keys"] == ["Архив", "Брендон Сандерсон", "Романы"]


def test_labels(client: TestClient) -> None:
    response = client.post(
        "/api/folders/labels",
        json={
            "entries": [
                {"text": "Portaly/"},
                {"text": "Portaly.epub", "is_file": True},
                {"text": "✪ Romany/"},
            ]
        },
    )

    assert response.status_code == 200, response.text
    assert response.json()["labels"] == ["Порталы/", "Portaly.epub", "✪ Romany/"]


def test_batch_limit(small_batch_client: TestClient) -> None:
    response = small_batch_client.post("/api/folders/convert", json={"names": ["a", "b"]})

    assert response.status_code == 400
    error = response.json()["meta"]["error"]
    assert error == {"code": "BAD_REQUEST", "reason": "batch_too_large"}
    debug = response.json()["meta"]["debug"]
    assert debug["batch_size"] == 2
    assert debug["max_batch_size"] == 1


def test_evaluate_batch_limit(small_batch_client: TestClient) -> None:
    response = small_batch_client.post(
        "/api/collections/evaluate",
        json={"rules": {"rules": []}, "books": {"/a.epub": None, "/b.epub": None}},
    )

    assert response.status_code == 400
    assert response.json()["meta"]["error"]["reason"] == "batch_too_large"


def test_labels_ignore_server_paths(client: TestClient, tmp_path) -> None:
    folder = tmp_path / "Dozory"
    folder.mkdir()

    response = client.post(
        "/api/folders/labels",
        json={"entries": [{"text": "Dozory", "path": str(folder)}]},
    )

    assert response.status_code == 200, response.text
    assert response.json()["labels"] == ["Dozory"]


def test_evaluate_collection(client: TestClient) -> None:
    response = client.post(
        "/api/collections/evaluate",
        json={
            "rules": {
                "combine_operator": "OR",
                "rules": [
                    {"field": "authors", "operator": "contains", "value": "Lukianienko"},
                    {"field": "series", "operator": "equals", "value": "dozory"},
                ],
            },
            "books": {
                "/books/dozor.fb2": {"authors": "Siergiei Lukianienko", "series": "Dozory"},
                "/books/other.fb2": {"authors": "Terry Pratchett"},
                "/books/broken.fb2": None,
            },
            "members": ["/books/other.fb2"],
        },
    )

    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["added"] == ["/books/dozor.fb2"]
    assert payload["removed"] == ["/books/other.fb2"]
    assert payload["checked"] == 3
    assert payload["with_metadata"] == 2


def test_evaluate_numeric_rule_value(client: TestClient) -> None:
    response = client.post(
        "/api/collections/evaluate",
        json={
            "rules": {"rules": [{"field": "pages", "operator": "greater_than", "value": 300}]},
            "books": {"/a.epub": {"pages": 365}, "/b.epub": {"pages": 120}},
        },
    )

    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["matches"] == {"/a.epub": True, "/b.epub": False}
    assert payload["added"] == ["/a.epub"]


def test_evaluate_rejects_unknown_operator(client: TestClient) -> None:
    response = client.post(
        "/api/collections/evaluate",
        json={"rules": {"rules": [{"field": "title", "operator": "matches", "value": "x"}]}},
    )

    assert response.status_code == 422
    assert response.json()["meta"]["error"]["code"] == "BAD_REQUEST"
    assert response.json()["meta"]["debug"]["trace_id"]


def test_field_operators(client: TestClient) -> None:
    response = client.get("/api/collections/operators/pages")

    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["numeric"] is True
    assert "greater_than" in [opt["value"] for opt in payload["operators"]]


def test_unknown_field_operators(client: TestClient) -> None:
    response = client.get("/api/collections/operators/isbn")

    assert response.status_code == 404
    assert response.json()["meta"]["error"]["reason"] == "unknown_field"
    assert response.json()["meta"]["debug"]["field"] == "isbn"
