"""Route tests against the mocked container.

Persistence mocks are request scoped, so each test exercises a single HTTP
request; multi-step flows are covered by the use case tests.
"""

from uuid import uuid4

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from cleartrack.config import Settings
from cleartrack.domain.service import JWTService
from cleartrack.domain.value import UserId
from cleartrack.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    app = create_app(build_test_container(set(), FastapiProvider()))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def settings():
    return Settings()


def auth_cookie(settings: Settings) -> dict[str, str]:
    token = JWTService(settings.auth).create_token(UserId(uuid4()), None)
    return {"auth_token": token}


class TestHealth:
    def test_health(self, client, settings):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == settings.environment


class TestAuthRoutes:
    def test_signup_sets_cookie(self, client):
        response = client.post(
            "/auth/signup",
            json={"email": "lerato@example.com", "password": "s3cret!"},
        )

        assert response.status_code == 201
        assert "auth_token" in response.cookies

    def test_unknown_login(self, client):
        response = client.post(
            "/auth/login", json={"email": "nobody@example.com", "password": "x"}
        )

        assert response.status_code == 401
        assert response.json() == {
            "error": "unauthenticated",
            "message": "Invalid email or password",
        }

    def test_me_is_anonymous_without_cookie(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_me_is_anonymous_for_token_without_profile(self, client, settings):
        client.cookies.update(auth_cookie(settings))

        response = client.get("/auth/me")

        assert response.json()["authenticated"] is False


class TestRequestRoutes:
    def test_create_requires_login(self, client):
        response = client.post("/requests", json={"needs": ["tax"]})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    def test_create_without_practitioners_is_unassigned(self, client, settings):
        client.cookies.update(auth_cookie(settings))

        response = client.post("/requests", json={"needs": ["tax"]})

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "unassigned"
        assert body["assigned_practitioner_id"] is None

    def test_empty_needs(self, client, settings):
        client.cookies.update(auth_cookie(settings))

        response = client.post("/requests", json={"needs": []})

        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid-argument",
            "message": "Needs array is required",
        }

    def test_inbox_for_unknown_profile(self, client, settings):
        client.cookies.update(auth_cookie(settings))

        response = client.get("/requests/assigned")

        assert response.status_code == 404
        assert response.json()["error"] == "not-found"

    def test_respond_requires_action(self, client):
        response = client.post(f"/requests/{uuid4()}/respond", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid-argument"
        assert "action" in body["message"]


class TestApplicationRoutes:
    def test_submit(self, client):
        response = client.post(
            "/applications",
            json={
                "first_name": "Thandi",
                "last_name": "Mokoena",
                "email": "thandi@example.com",
                "phone": "+27 82 555 0101",
                "practice_name": "Mokoena Tax",
                "qualifications": "CA(SA)",
                "years_experience": 8,
                "specializations": ["tax"],
            },
        )

        assert response.status_code == 201
        assert response.json()["status"] == "pending"

    def test_submit_missing_fields(self, client):
        response = client.post("/applications", json={"first_name": "Thandi"})

        assert response.status_code == 400
        assert "Required fields are missing" in response.json()["message"]

    def test_approve_requires_login(self, client):
        response = client.post(f"/applications/{uuid4()}/approve")

        assert response.status_code == 401

    @pytest.mark.parametrize("headers", [{}, {"X-Events-Secret": "wrong"}])
    def test_event_rejects_bad_secret(self, client, headers):
        response = client.post(
            "/applications/events/updated",
            json={"application_id": str(uuid4())},
            headers=headers,
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid events secret"

    def test_event_ignores_non_approval(self, client, settings):
        response = client.post(
            "/applications/events/updated",
            json={
                "application_id": str(uuid4()),
                "before_status": "approved",
                "after_status": "approved",
            },
            headers={"X-Events-Secret": settings.auth.events_secret},
        )

        assert response.status_code == 200
        assert response.json() == {"handled": False, "email_sent": False}


class TestRegistrationRoutes:
    def test_unknown_token(self, client):
        response = client.post(
            "/registration/verify", json={"token": str(uuid4()), "code": "12345678"}
        )

        assert response.status_code == 404
        assert response.json() == {
            "error": "not-found",
            "message": "Invalid registration link",
        }

    def test_missing_code(self, client):
        response = client.post(
            "/registration/verify", json={"token": str(uuid4()), "code": ""}
        )

        assert response.status_code == 400
