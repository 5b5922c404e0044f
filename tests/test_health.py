"""
Tests: Health check and version endpoints
"""
from fastapi.testclient import TestClient
from thainews.main import app

client = TestClient(app)


def test_health_endpoint_returns_200():
    """Test that /health returns HTTP 200"""
    response = client.get("/health")
    assert response.status_code == 200


def test_health_endpoint_returns_ok_status():
    """Test that /health returns status: ok"""
    response = client.get("/health")
    data = response.json()
    assert data["status"] == "ok"


def test_version_endpoint_returns_name_and_version():
    """Test that /version reports the app name and version"""
    response = client.get("/version")
    data = response.json()
    assert data["name"] == "Thai News"
    assert data["version"].startswith("v")
