def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness_reports_database(client):
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] is True
    assert resp.json()["checks"]["relay_bridge"] is False


def test_request_id_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["x-request-id"] == "req-123"


def test_unknown_route_uses_error_payload(client):
    resp = client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["status_code"] == 404
