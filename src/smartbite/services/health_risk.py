"""Health risk evaluation of foods against a user's health profile."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from smartbite.domain.foods import FoodItem
from smartbite.domain.profile import HealthProfile
from smartbite.domain.risk import RiskVerdict
from smartbite.services.aggregator import aggregate
from smartbite.services.checkers import (
    check_allergens,
    check_diseases,
    check_drug_interactions,
    check_symptoms,
)
from smartbite.services.heuristics import DEFAULT_HEURISTICS, Heuristic
from smartbite.services.ingredients import extract_tokens
from smartbite.services.knowledge import KnowledgeBase, default_knowledge_base
from smartbite.services.preferences import (
    DEFAULT_PREFERENCE_RULES,
    PreferenceRule,
    adjust_for_preferences,
)

_logger = logging.getLogger(__name__)


@dataclass
class HealthRiskService:
    """Rule-based evaluator producing a RiskVerdict per food.

    Evaluation is pure: the same food and profile always give the same
    verdict, and nothing is read from or written to external systems.
    """

    knowledge: KnowledgeBase = field(default_factory=default_knowledge_base)
    heuristics: Mapping[str, Heuristic] = field(
        default_factory=lambda: DEFAULT_HEURISTICS
    )
    preference_rules: Mapping[str, PreferenceRule] = field(
        default_factory=lambda: DEFAULT_PREFERENCE_RULES
    )
    debug: bool = False

    def evaluate(self, food: FoodItem, profile: HealthProfile) -> RiskVerdict:
        """Evaluate one food against one health profile."""
        tokens = extract_tokens(food)
        draft = RiskVerdict(
            allergens=check_allergens(tokens, profile.allergies, self.knowledge),
            diseases=check_diseases(
                tokens,
                food.nutrition,
                profile.diseases,
                self.knowledge,
                self.heuristics,
                name=food.name or "",
                category=food.category or "",
            ),
            drug_interactions=check_drug_interactions(
                tokens, profile.medications, self.knowledge
            ),
            symptoms=check_symptoms(tokens, profile.symptoms, self.knowledge),
        )
        adjusted = adjust_for_preferences(
            draft,
            profile.dietary_preferences,
            self.knowledge,
            self.preference_rules,
        )
        overall, recommendations = aggregate(adjusted.findings)
        verdict = replace(
            adjusted, overall_risk=overall, recommendations=recommendations
        )
        if self.debug:
            _logger.info(
                "Health risk evaluated: food=%s overall=%s findings=%s",
                food.name,
                verdict.overall_risk.label,
                sum(1 for _ in verdict.findings),
            )
        return verdict

    def evaluate_many(
        self, foods: list[FoodItem], profile: HealthProfile
    ) -> list[tuple[FoodItem, RiskVerdict]]:
        """Evaluate several foods against the same profile, keeping order."""
        return [(food, self.evaluate(food, profile)) for food in foods]
