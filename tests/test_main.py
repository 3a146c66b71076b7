from __future__ import annotations

from fastapi.testclient import TestClient

from exquisite_corpse.main import app

client = TestClient(app)


def test_healthz():
    """Test the /healthz endpoint (includes a DB round trip)."""
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "db": True}


def test_version():
    """Test the /version endpoint."""
    response = client.get("/version")
    assert response.status_code == 200
    # The version comes from package metadata, so only check its type
    assert isinstance(response.json()["version"], str)
