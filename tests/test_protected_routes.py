"""Tests for role-protected endpoints."""

import pytest
from fastapi.testclient import TestClient

from core.security.dependencies import get_token_service
from main import app


@pytest.fixture
def client(token_service):
    app.dependency_overrides[get_token_service] = lambda: token_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _bearer(client, email, password):
    response = client.post("/authentication/login-user", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_student_reaches_student_endpoints(client, student_user, user_password):
    headers = _bearer(client, student_user.email, user_password)

    assert client.get("/student", headers=headers).status_code == 200
    response = client.get("/home/student", headers=headers)
    assert response.status_code == 200
    assert response.json() == "Welcome to HomeController - Student"


def test_student_is_forbidden_from_manager_endpoints(client, student_user, user_password):
    headers = _bearer(client, student_user.email, user_password)

    assert client.get("/management", headers=headers).status_code == 403
    assert client.get("/home/manager", headers=headers).status_code == 403


def test_manager_reaches_manager_endpoints(client, manager_user, user_password):
    headers = _bearer(client, manager_user.email, user_password)

    assert client.get("/management", headers=headers).json() == "Welcome to ManagementController"
    assert client.get("/home/manager", headers=headers).status_code == 200
    assert client.get("/student", headers=headers).status_code == 403


def test_missing_token_is_unauthorized(client):
    assert client.get("/management").status_code == 401


def test_expired_token_is_unauthorized(client, student_user, user_password, clock):
    headers = _bearer(client, student_user.email, user_password)
    clock.advance(seconds=61)

    response = client.get("/student", headers=headers)

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
