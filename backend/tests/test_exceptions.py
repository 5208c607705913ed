"""Tests for the JSON error responses."""
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from fraudcheck.exceptions import NotFoundError, register_exception_handlers


def test_unknown_route(client):
    response = client.get("/nope")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Not Found"}


def test_wrong_method(client):
    response = client.put("/register", json={})
    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json() == {"message": "Method Not Allowed"}
    assert "POST" in response.headers["allow"]


def test_service_error_keeps_its_status():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Assignment not found")

    response = TestClient(app).get("/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Assignment not found"}


def test_unhandled_error_returns_json(caplog):
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/boom")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"message": "Internal server error"}
    assert "unexpected" in caplog.text
