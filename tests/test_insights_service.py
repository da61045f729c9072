"""Tests for the inventory health insights report."""

import asyncio
from uuid import UUID, uuid4

from smartbite.services.cache import InMemoryCache
from smartbite.services.health_risk import HealthRiskService
from smartbite.services.insights import HealthInsightsService
from smartbite.services.nutrition import NutritionService
from smartbite.services.users import ProfileService
from tests.conftest import (
    FakeFdcClient,
    InMemoryFoodRepository,
    InMemoryUserRepository,
)


def _service(
    users: InMemoryUserRepository,
    foods: InMemoryFoodRepository,
    nutrition: NutritionService | None = None,
) -> HealthInsightsService:
    return HealthInsightsService(
        repository=foods,
        profiles=ProfileService(users),
        health_risk=HealthRiskService(),
        nutrition=nutrition,
    )


def _stock(foods: InMemoryFoodRepository, user_id: UUID) -> None:
    foods.create_food(user_id, {"name": "Butter", "category": "dairy"})
    foods.create_food(
        user_id,
        {
            "name": "Apple",
            "category": "fruits",
            "nutrition": {"macronutrients": {"fiber": 2.4}},
        },
    )
    foods.create_food(
        user_id,
        {"name": "Pretzels", "category": "snacks", "ingredients": "wheat flour, salt"},
    )


def test_report_enriches_missing_nutrition() -> None:
    users = InMemoryUserRepository()
    foods = InMemoryFoodRepository()
    user = users.add_user({"diseases": ["hypertension"], "allergies": ["soy"]})
    _stock(foods, user.id)
    client = FakeFdcClient()
    nutrition = NutritionService(client, InMemoryCache())

    report = asyncio.run(_service(users, foods, nutrition).build_report(user.id))

    assert report is not None
    assert report.summary == {
        "total_foods": 3,
        "safe": 1,
        "moderate": 0,
        "risky": 2,
        "harmful": 0,
    }
    assert report.allergen_exposure == {"soy": 0}
    assert report.disease_risk_foods == {"hypertension": 2}
    assert client.search_calls == 2

    butter = next(item for item in report.per_food if item.food.name == "Butter")
    assert [finding.found for finding in butter.verdict.diseases] == ["sodium (high)"]
    assert [item.name for item in butter.alternatives] == ["Apple"]
    assert report.recommendations == [
        "Choose items with lower sugar/sodium/saturated fat based on your conditions."
    ]

    payload = report.to_dict()
    assert payload["per_food"][0]["risks"]["allergens"] == []


def test_report_without_nutrition_service_uses_keywords_only() -> None:
    users = InMemoryUserRepository()
    foods = InMemoryFoodRepository()
    user = users.add_user({"diseases": ["hypertension"]})
    _stock(foods, user.id)

    report = asyncio.run(_service(users, foods).build_report(user.id))

    assert report is not None
    assert report.disease_risk_foods == {"hypertension": 1}
    assert report.summary["safe"] == 2


def test_report_respects_item_limit_and_unknown_user() -> None:
    users = InMemoryUserRepository()
    foods = InMemoryFoodRepository()
    user = users.add_user()
    _stock(foods, user.id)
    service = _service(users, foods)
    service.item_limit = 2

    report = asyncio.run(service.build_report(user.id))

    assert report is not None
    assert report.summary["total_foods"] == 2
    assert asyncio.run(service.build_report(uuid4())) is None
