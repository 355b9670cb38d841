"""
Application-level behaviour: health check, error envelope and request tracking headers.
"""
from fastapi import status


class TestApp:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["database"] == "ok"
        assert "total_requests" in data["requests"]

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    def test_request_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.headers["X-Response-Time"].endswith("ms")

    def test_request_id_is_generated(self, client):
        response = client.get("/")

        assert response.headers["X-Request-ID"]
