import pytest

PROJECT = {"name": "demo", "description": "x", "language": "go"}
FILE = {"name": "main.go", "path": "/main.go", "content": "package main", "language": "go"}


@pytest.fixture
def project_id(client):
    return client.post("/api/projects", json=PROJECT).json()["id"]


def test_create_project_returns_201_with_camel_case(client):
    response = client.post("/api/projects", json=PROJECT)

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "demo"
    assert body["files"] == []
    assert "createdAt" in body and "updatedAt" in body


def test_create_project_validation(client):
    response = client.post("/api/projects", json={"name": "demo"})

    assert response.status_code == 400
    assert {v["field"] for v in response.json()["violations"]} == {"description", "language"}


def test_added_file_appears_on_project(client, project_id):
    added = client.post(f"/api/projects/{project_id}/files", json=FILE)
    project = client.get(f"/api/projects/{project_id}").json()

    assert added.status_code == 201
    assert len(project["files"]) == 1
    assert project["files"][0]["content"] == "package main"
    assert project["files"][0]["id"] == added.json()["id"]


def test_list_projects_and_files(client, project_id):
    client.post(f"/api/projects/{project_id}/files", json=FILE)

    projects = client.get("/api/projects").json()
    files = client.get(f"/api/projects/{project_id}/files").json()

    assert [p["id"] for p in projects] == [project_id]
    assert [f["name"] for f in files] == ["main.go"]


def test_update_project_is_partial(client, project_id):
    response = client.put(f"/api/projects/{project_id}", json={"description": "new"})

    body = response.json()
    assert body["id"] == project_id
    assert body["description"] == "new"
    assert body["name"] == "demo"


def test_update_rejects_blank_name(client, project_id):
    response = client.put(f"/api/projects/{project_id}", json={"name": "   "})

    assert response.status_code == 400
    assert [v["field"] for v in response.json()["violations"]] == ["name"]
    assert client.get(f"/api/projects/{project_id}").json()["name"] == "demo"


def test_update_file_rejects_blank_path(client, project_id):
    file_id = client.post(f"/api/projects/{project_id}/files", json=FILE).json()["id"]

    response = client.put(f"/api/projects/{project_id}/files/{file_id}", json={"path": " "})

    assert response.status_code == 400
    assert [v["field"] for v in response.json()["violations"]] == ["path"]


def test_update_and_delete_file(client, project_id):
    file_id = client.post(f"/api/projects/{project_id}/files", json=FILE).json()["id"]

    updated = client.put(
        f"/api/projects/{project_id}/files/{file_id}",
        json={"content": "package util"},
    )
    fetched = client.get(f"/api/projects/{project_id}/files/{file_id}")
    deleted = client.delete(f"/api/projects/{project_id}/files/{file_id}")

    assert updated.json()["content"] == "package util"
    assert fetched.json()["content"] == "package util"
    assert deleted.status_code == 204
    assert client.get(f"/api/projects/{project_id}/files/{file_id}").status_code == 404


def test_delete_project_returns_204(client, project_id):
    response = client.delete(f"/api/projects/{project_id}")

    assert response.status_code == 204
    assert client.get(f"/api/projects/{project_id}").status_code == 404


@pytest.mark.parametrize("method, path", [
    ("get", "/api/projects/missing"),
    ("put", "/api/projects/missing"),
    ("delete", "/api/projects/missing"),
    ("post", "/api/projects/missing/files"),
    ("get", "/api/projects/missing/files"),
    ("get", "/api/projects/missing/files/f1"),
    ("delete", "/api/projects/missing/files/f1"),
])
def test_unknown_project_is_404(client, method, path):
    kwargs = {"json": FILE} if method in ("put", "post") else {}

    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 404
    assert response.json()["error_code"] == "not_found"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_health_endpoints(client):
    health = client.get("/health").json()
    ready = client.get("/health/ready").json()

    assert health["status"] == "ok"
    assert ready["status"] == "ready"
