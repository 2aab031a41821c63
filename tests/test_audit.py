from dataclasses import replace

from fastapi.testclient import TestClient

from devstudio.api.main import create_app
from devstudio.core.audit import operation_for


def test_operation_for_ai_paths():
    assert operation_for("/api/review") == "review"
    assert operation_for("/api/chat/") == "chat"
    assert operation_for("/api/projects") is None
    assert operation_for("/api/memory/clear") is None


def test_audit_stamps_request_id_and_timing(settings, llm_client):
    app = create_app(replace(settings, enable_audit_logging=True), llm_client=llm_client)
    client = TestClient(app)

    generated = client.get("/api/models")
    echoed = client.get("/api/models", headers={"X-Request-ID": "trace-123"})

    assert generated.headers["X-Request-ID"]
    assert generated.headers["X-Response-Time"].endswith("s")
    assert echoed.headers["X-Request-ID"] == "trace-123"


def test_security_headers_on_every_response(client):
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
