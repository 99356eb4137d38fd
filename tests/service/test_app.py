"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from litdoc.languages import DEFAULT_REGISTRY, Language
from litdoc.service import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_languages_endpoint_lists_registry(client: TestClient) -> None:
    response = client.get("/languages")
    assert response.status_code == 200
    payload = {item["extension"]: item for item in response.json()}
    assert payload[".fs"]["multiline_start"] == "(*"
    assert payload[".vb"]["doc_marker"] == "'''"
    assert payload[".sql"]["multiline_end"] is None


def test_segment_endpoint_returns_sections(client: TestClient) -> None:
    text = "\n".join(["/// ignore me", "// doc one", "code1", "/* ml", "ml2", "*/", "code2"])

    response = client.post("/segment", json={"filename": "Program.cs", "text": text})

    assert response.status_code == 200
    assert response.json() == {
        "language": "csharp",
        "sections": [
            {"docs": "doc one\n", "code": "code1\n"},
            {"docs": "ml\nml2\n", "code": "code2\n"},
        ],
    }


def test_segment_endpoint_rejects_unknown_extension(client: TestClient) -> None:
    response = client.post("/segment", json={"filename": "notes.txt", "text": "hello"})
    assert response.status_code == 422
    assert "notes.txt" in response.json()["detail"]


def test_render_endpoint_returns_html(client: TestClient) -> None:
    response = client.post(
        "/render",
        json={"filename": "query.sql", "text": "-- Pick *all* rows.\nSELECT * FROM t;", "highlight": False},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["language"] == "sql"
    assert body["sections"] == [
        {"docs_html": "<p>Pick <em>all</em> rows.</p>", "code_html": "SELECT * FROM t;"}
    ]


def test_custom_registry_factory_is_used() -> None:
    registry = DEFAULT_REGISTRY.extend({".weird": Language(name="weird", singleline="%%")})
    client = TestClient(create_app(lambda: registry))

    response = client.post("/segment", json={"filename": "a.weird", "text": "%% hi\nbody"})

    assert response.status_code == 200
    assert response.json()["sections"] == [{"docs": "hi\n", "code": "body\n"}]
