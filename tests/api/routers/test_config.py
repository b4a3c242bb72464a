"""Tests for the config router."""

from fastapi.testclient import TestClient


def test_get_model_config(client: TestClient) -> None:
    """Test the endpoint reports the provider and model in use."""
    response = client.get("/v1/config/model")

    assert response.status_code == 200
    assert response.json() == {"provider": "gemini", "model": "fake-model"}
