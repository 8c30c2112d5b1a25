from fastapi.testclient import TestClient

from app.main import app


def test_health_check():
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"


def test_request_id_header_is_set():
    client = TestClient(app)

    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"


def test_unknown_route_is_404():
    client = TestClient(app)

    assert client.get("/api/v1/nope").status_code == 404
