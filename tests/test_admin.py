"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from ai_fusion.api.app import create_app
from ai_fusion.containers import AppContainer
from tests.conftest import USER_ID, InMemoryProfileRepository, make_profile

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_health_requires_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/health")

    assert response.status_code == 401


def test_admin_health_accepts_valid_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/health", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_reset_daily_usage(
    container: AppContainer, profile_repository: InMemoryProfileRepository
) -> None:
    profile_repository.profiles[USER_ID] = make_profile(messages=15, images=5)
    client = TestClient(create_app(container))

    response = client.post("/admin/usage/reset-daily", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"reset": 1}
    assert profile_repository.profiles[USER_ID] == make_profile(messages=0, images=5)


def test_reset_daily_usage_requires_token(
    container: AppContainer, profile_repository: InMemoryProfileRepository
) -> None:
    profile_repository.profiles[USER_ID] = make_profile(messages=15)
    client = TestClient(create_app(container))

    response = client.post("/admin/usage/reset-daily", headers={"X-Admin-Token": "no"})

    assert response.status_code == 401
    assert profile_repository.profiles[USER_ID].daily_message_count == 15


def test_profile_detail(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    found = client.get(f"/admin/profiles/{USER_ID}", headers=ADMIN_HEADERS)
    missing = client.get(
        "/admin/profiles/00000000-0000-0000-0000-000000000002", headers=ADMIN_HEADERS
    )

    assert found.json() == {
        "id": str(USER_ID),
        "tier": "free",
        "daily_message_count": 0,
        "image_generation_count": 0,
    }
    assert missing.status_code == 404
    assert missing.json()["error"] == "profile_not_found"
