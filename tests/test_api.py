"""Tests for the HTTP API."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import httpx
from fastapi.testclient import TestClient

from smartbite.api.app import create_app
from tests.conftest import InMemoryUserRepository, RecordingAlertSink


def _client(container) -> TestClient:  # type: ignore[no-untyped-def]
    return TestClient(create_app(container))


def _in_days(days: int) -> str:
    return (datetime.now(tz=UTC) + timedelta(days=days)).isoformat()


def test_health_endpoint(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_update_profile(container, user_repository: InMemoryUserRepository) -> None:
    user = user_repository.add_user()

    response = _client(container).put(
        f"/users/{user.id}/profile",
        json={
            "allergies": ["Peanuts", {"name": "milk", "severity": "mild"}],
            "dietaryPreferences": ["Low Sugar"],
        },
    )

    assert response.status_code == 200
    profile = response.json()["health_profile"]
    assert profile["allergies"] == [
        {"name": "Peanuts"},
        {"name": "milk", "severity": "mild"},
    ]
    assert profile["dietary_preferences"] == ["low sugar"]


def test_unknown_user_is_404(container) -> None:
    client = _client(container)
    user_id = uuid4()

    assert client.put(f"/users/{user_id}/profile", json={}).status_code == 404
    assert client.get(f"/users/{user_id}/foods").status_code == 404
    assert client.get(f"/users/{user_id}/foods/stats").status_code == 404
    assert client.get(f"/users/{user_id}/health-insights").status_code == 404
    assert client.post(f"/users/{user_id}/expiry-check").status_code == 404
    response = client.post(f"/users/{user_id}/foods", json={"name": "Milk"})
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_analyze_endpoint(container, user_repository: InMemoryUserRepository) -> None:
    user = user_repository.add_user({"diseases": ["diabetes"]})

    response = _client(container).post(
        f"/users/{user.id}/health-risk/analyze",
        json={"name": "Cola", "ingredients": ["water", "sugar"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["overall_risk"] == "risky"
    assert data["diseases"][0]["disease"] == "diabetes"


def test_food_payload_requires_name(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user()

    response = _client(container).post(f"/users/{user.id}/foods", json={"name": ""})

    assert response.status_code == 422


def test_food_lifecycle(
    container,
    user_repository: InMemoryUserRepository,
    alert_sink: RecordingAlertSink,
) -> None:
    user = user_repository.add_user({"allergies": ["peanuts"]})
    client = _client(container)

    created = client.post(
        f"/users/{user.id}/foods",
        json={
            "name": "Peanut Bar",
            "category": "snacks",
            "ingredients": "peanuts, honey",
            "expiry_date": _in_days(30),
        },
    )
    assert created.status_code == 201
    body = created.json()
    food_id = body["food"]["id"]
    assert body["health_risk"]["overall_risk"] == "harmful"
    assert body["alerts"][0]["type"] == "health_risk"
    assert len(alert_sink.delivered) == 1

    listed = client.get(f"/users/{user.id}/foods").json()["foods"]
    assert [item["id"] for item in listed] == [food_id]
    assert listed[0]["expiry_status"] == "safe"

    risk = client.get(f"/users/{user.id}/foods/{food_id}/health-risk")
    assert risk.status_code == 200
    assert risk.json()["verdict"]["allergens"][0]["allergen"] == "peanuts"

    replaced = client.put(
        f"/users/{user.id}/foods/{food_id}",
        json={"name": "Oat Bar", "category": "snacks", "ingredients": "oats"},
    )
    assert replaced.status_code == 200
    assert client.get(f"/users/{user.id}/foods/{food_id}").json()["name"] == "Oat Bar"

    assert client.delete(f"/users/{user.id}/foods/{food_id}").status_code == 204
    assert client.get(f"/users/{user.id}/foods/{food_id}").status_code == 404
    assert client.delete(f"/users/{user.id}/foods/{food_id}").status_code == 404


def test_stats_and_expiry_check(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user()
    client = _client(container)
    client.post(
        f"/users/{user.id}/foods",
        json={"name": "Old Milk", "expiry_date": _in_days(-2)},
    )
    client.post(f"/users/{user.id}/foods", json={"name": "Rice"})

    stats = client.get(f"/users/{user.id}/foods/stats").json()
    assert stats == {"total": 2, "expired": 1, "expiring_soon": 0, "expiring_week": 0}

    result = client.post(f"/users/{user.id}/expiry-check").json()
    assert [alert["type"] for alert in result["alerts"]] == ["expiry_critical"]
    assert result["expired_marked"] == 1
    assert client.get(f"/users/{user.id}/foods/stats").json()["total"] == 1


def test_health_insights_endpoint(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user({"diseases": ["hypertension"]})
    client = _client(container)
    client.post(f"/users/{user.id}/foods", json={"name": "Butter"})

    response = client.get(f"/users/{user.id}/health-insights")

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_foods"] == 1
    assert data["per_food"][0]["overall_risk"] == "risky"


def test_nutrition_search(container) -> None:
    response = _client(container).get(
        "/nutrition/search", params={"query": "butter", "limit": 1}
    )

    assert response.status_code == 200
    assert response.json()["foods"][0]["fdc_id"] == 173430


def test_nutrition_search_provider_error(container) -> None:
    async def failing_search(query: str, page_size: int = 10) -> dict[str, object]:
        raise httpx.ConnectError("offline")

    container.nutrition_service.fdc_client.search_foods = failing_search
    container.nutrition_service.retry_delay_seconds = 0

    response = _client(container).get("/nutrition/search", params={"query": "kale"})

    assert response.status_code == 502


def test_get_profile(container, user_repository: InMemoryUserRepository) -> None:
    user = user_repository.add_user({"allergies": ["soy"], "diseases": ["gout"]})
    client = _client(container)

    response = client.get(f"/users/{user.id}/profile")

    assert response.status_code == 200
    assert response.json()["health_profile"]["allergies"] == [{"name": "soy"}]
    assert client.get(f"/users/{uuid4()}/profile").status_code == 404


def test_food_payload_rejects_unknown_category(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user()

    response = _client(container).post(
        f"/users/{user.id}/foods", json={"name": "Milk", "category": "toys"}
    )

    assert response.status_code == 422


def test_expiring_foods_endpoint(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user()
    client = _client(container)
    for name, days in (("Milk", 2), ("Jam", 6)):
        client.post(
            f"/users/{user.id}/foods",
            json={"name": name, "expiry_date": _in_days(days)},
        )

    default = client.get(f"/users/{user.id}/foods/expiring")
    week = client.get(f"/users/{user.id}/foods/expiring", params={"days": 7})

    assert default.status_code == 200
    assert [item["name"] for item in default.json()["foods"]] == ["Milk"]
    assert [item["name"] for item in week.json()["foods"]] == ["Milk", "Jam"]
    assert client.get(f"/users/{user.id}/foods/expiring?days=0").status_code == 422
    assert client.get(f"/users/{uuid4()}/foods/expiring").status_code == 404


def test_notification_preferences_endpoints(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user()
    client = _client(container)

    current = client.get(f"/users/{user.id}/notification-preferences").json()
    assert current["channels"]["email"] is True
    assert current["expiry_days"] == 3

    updated = client.put(
        f"/users/{user.id}/notification-preferences",
        json={"channels": {"sms": True}, "expiry_days": 5},
    )
    assert updated.status_code == 200
    assert updated.json()["channels"] == {
        "email": True,
        "whatsapp": False,
        "sms": True,
        "in_app": True,
    }
    assert updated.json()["expiry_days"] == 5

    invalid = client.put(
        f"/users/{user.id}/notification-preferences", json={"expiry_days": 0}
    )
    assert invalid.status_code == 422
    missing = client.get(f"/users/{uuid4()}/notification-preferences")
    assert missing.status_code == 404


def test_notification_inbox_endpoints(
    container, user_repository: InMemoryUserRepository
) -> None:
    user = user_repository.add_user({"allergies": ["peanuts"]})
    client = _client(container)
    for name in ("Peanut Bar", "Peanut Cookies"):
        client.post(
            f"/users/{user.id}/foods", json={"name": name, "ingredients": "peanuts"}
        )
    base = f"/users/{user.id}/notifications"

    inbox = client.get(base).json()
    assert inbox["total"] == 2
    assert inbox["unread_count"] == 2
    first_id = inbox["notifications"][0]["id"]
    assert inbox["notifications"][0]["type"] == "health_risk"

    assert client.patch(f"{base}/{first_id}/read").json() == {"read": True}
    assert client.patch(f"{base}/{uuid4()}/read").status_code == 404
    unread = client.get(base, params={"unread_only": True}).json()
    assert unread["total"] == 1

    stats = client.get(f"{base}/stats").json()
    assert stats["total"] == 2
    assert stats["unread"] == 1
    assert stats["by_type"] == {"health_risk": 2}

    assert client.patch(f"{base}/read-all").json() == {"updated": 1}
    assert client.delete(f"{base}/{first_id}").status_code == 204
    assert client.delete(f"{base}/{first_id}").status_code == 404
    assert client.get(base).json()["total"] == 1

    assert client.delete(base).status_code == 204
    assert client.get(base).json()["total"] == 0
    assert client.get(f"/users/{uuid4()}/notifications").status_code == 404
