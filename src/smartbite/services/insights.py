"""Inventory-wide health insights report."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from uuid import UUID

from smartbite.domain.foods import FoodItem, FoodStatus
from smartbite.domain.profile import HealthProfile
from smartbite.domain.recommendations import Alternative
from smartbite.domain.risk import RiskVerdict, Severity
from smartbite.services.alternatives import find_alternatives
from smartbite.services.foods import FoodRepository
from smartbite.services.health_risk import HealthRiskService
from smartbite.services.nutrition import NutritionService
from smartbite.services.users import ProfileService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoodInsight:
    food: FoodItem
    verdict: RiskVerdict
    alternatives: list[Alternative]

    def to_dict(self) -> dict[str, object]:
        verdict = self.verdict.to_dict()
        return {
            "id": str(self.food.id) if self.food.id else None,
            "name": self.food.name,
            "brand": self.food.brand,
            "category": self.food.category,
            "overall_risk": verdict["overall_risk"],
            "risks": {
                "allergens": verdict["allergens"],
                "diseases": verdict["diseases"],
                "drug_interactions": verdict["drug_interactions"],
                "symptoms": verdict["symptoms"],
            },
            "recommendations": verdict["recommendations"],
            "alternatives": [item.to_dict() for item in self.alternatives],
        }


@dataclass(frozen=True)
class InsightsReport:
    """Per-food verdicts plus inventory-level summaries."""

    summary: dict[str, int]
    allergen_exposure: dict[str, int]
    disease_risk_foods: dict[str, int]
    per_food: list[FoodInsight] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": dict(self.summary),
            "allergen_exposure": dict(self.allergen_exposure),
            "disease_risk_foods": dict(self.disease_risk_foods),
            "per_food": [item.to_dict() for item in self.per_food],
            "recommendations": list(self.recommendations),
        }


@dataclass
class HealthInsightsService:
    """Evaluates a user's whole active inventory in one pass.

    Foods without nutrition are enriched through the nutrition service
    first. Lookups run concurrently up to ``max_concurrency``; a failed or
    slow lookup leaves the food as-is so keyword heuristics still apply.
    """

    repository: FoodRepository
    profiles: ProfileService
    health_risk: HealthRiskService
    nutrition: NutritionService | None = None
    item_limit: int = 50
    max_concurrency: int = 5
    alternatives_limit: int = 3

    async def build_report(self, user_id: UUID) -> InsightsReport | None:
        user = self.profiles.get_user(user_id)
        if user is None:
            return None
        foods = self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
        foods = await self._enrich(foods[: self.item_limit])
        analyzed = self.health_risk.evaluate_many(foods, user.health_profile)
        safe_pool = [food for food, verdict in analyzed if verdict.is_safe]
        per_food = [
            FoodInsight(
                food=food,
                verdict=verdict,
                alternatives=find_alternatives(
                    food, verdict, safe_pool, limit=self.alternatives_limit
                ),
            )
            for food, verdict in analyzed
        ]
        report = _summarize(per_food, user.health_profile)
        _logger.info(
            "Health insights built: user_id=%s foods=%s harmful=%s",
            user_id,
            report.summary["total_foods"],
            report.summary["harmful"],
        )
        return report

    async def _enrich(self, foods: list[FoodItem]) -> list[FoodItem]:
        if self.nutrition is None:
            return foods
        nutrition = self.nutrition
        semaphore = asyncio.Semaphore(max(1, self.max_concurrency))

        async def enrich_one(food: FoodItem) -> FoodItem:
            if food.nutrition is not None or not food.name:
                return food
            async with semaphore:
                facts = await nutrition.lookup(food.name)
            return food if facts is None else replace(food, nutrition=facts)

        return list(await asyncio.gather(*(enrich_one(food) for food in foods)))


def _summarize(per_food: list[FoodInsight], profile: HealthProfile) -> InsightsReport:
    summary = {"total_foods": len(per_food)}
    for severity in Severity:
        summary[severity.label] = sum(
            1 for item in per_food if item.verdict.overall_risk == severity
        )
    flagged = [item.verdict for item in per_food if not item.verdict.is_safe]
    allergen_exposure = {
        allergy.name: sum(
            1
            for verdict in flagged
            if any(_same(f.subject, allergy.name) for f in verdict.allergens)
        )
        for allergy in profile.allergies
    }
    disease_risk_foods = {
        disease.name: sum(
            1
            for verdict in flagged
            if any(_same(f.subject, disease.name) for f in verdict.diseases)
        )
        for disease in profile.diseases
    }

    recommendations: list[str] = []
    if summary[Severity.HARMFUL.label]:
        recommendations.append("Avoid harmful items detected in your inventory.")
    if any(allergen_exposure.values()):
        recommendations.append(
            "Reduce allergen exposure by substituting flagged items."
        )
    if any(disease_risk_foods.values()):
        recommendations.append(
            "Choose items with lower sugar/sodium/saturated fat based on your "
            "conditions."
        )
    return InsightsReport(
        summary=summary,
        allergen_exposure=allergen_exposure,
        disease_risk_foods=disease_risk_foods,
        per_food=per_food,
        recommendations=recommendations,
    )


def _same(left: str, right: str) -> bool:
    return left.strip().lower() == right.strip().lower()
