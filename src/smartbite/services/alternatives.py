"""Safer alternatives and static substitutions for risky foods."""

from collections.abc import Iterable

from smartbite.domain.foods import FoodItem
from smartbite.domain.profile import ProfileEntry
from smartbite.domain.recommendations import Alternative, Substitution
from smartbite.domain.risk import RiskVerdict
from smartbite.services.ingredients import extract_tokens
from smartbite.services.matching import any_token_contains

_SUBSTITUTIONS = {
    "white bread": (
        ("Whole grain bread", "Ezekiel bread", "Cauliflower bread"),
        "Higher fiber, better blood sugar control",
    ),
    "white rice": (
        ("Brown rice", "Quinoa", "Cauliflower rice"),
        "More nutrients, lower glycemic index",
    ),
    "soda": (
        ("Sparkling water with fruit", "Herbal tea", "Kombucha"),
        "No added sugars, better hydration",
    ),
    "chips": (
        ("Baked vegetable chips", "Air-popped popcorn", "Nuts"),
        "Less processed, healthier fats",
    ),
    "ice cream": (
        ("Frozen yogurt", "Nice cream (frozen banana)", "Sorbet"),
        "Lower calories, less saturated fat",
    ),
}

_DISEASE_SUBSTITUTIONS = {
    "diabetes": {
        "pasta": (
            ("Zucchini noodles", "Shirataki noodles", "Lentil pasta"),
            "Lower carbs, better blood sugar control",
        ),
    },
    "hypertension": {
        "table salt": (
            ("Herbs and spices", "Lemon juice", "Garlic powder"),
            "Flavor without sodium",
        ),
    },
}


def find_alternatives(
    food: FoodItem,
    verdict: RiskVerdict,
    safe_pool: Iterable[FoodItem],
    limit: int = 3,
) -> list[Alternative]:
    """Suggest safe inventory items, preferring the same category.

    ``safe_pool`` must already be filtered to foods judged safe for the
    same user. Falls back to any safe food when none share the category.
    """
    if verdict.is_safe or limit <= 0:
        return []
    others = [candidate for candidate in safe_pool if not _same_food(candidate, food)]
    category = food.category or "other"
    same_category = [
        candidate for candidate in others if (candidate.category or "other") == category
    ]
    chosen = same_category or others
    return [
        Alternative(
            id=candidate.id,
            name=candidate.name,
            brand=candidate.brand or "",
            category=candidate.category or "other",
        )
        for candidate in chosen[:limit]
    ]


def substitution_catalog(diseases: Iterable[ProfileEntry]) -> list[Substitution]:
    """Full substitution map for a user, including disease-specific swaps."""
    table = dict(_SUBSTITUTIONS)
    for disease in diseases:
        table.update(_DISEASE_SUBSTITUTIONS.get(disease.name.strip().lower(), {}))
    return [
        Substitution(unhealthy_food=name, alternatives=swaps, reason=reason)
        for name, (swaps, reason) in table.items()
    ]


def suggest_substitutions(
    food: FoodItem, diseases: Iterable[ProfileEntry]
) -> list[Substitution]:
    """Substitutions whose staple appears in the food's tokens."""
    tokens = extract_tokens(food)
    return [
        substitution
        for substitution in substitution_catalog(diseases)
        if any_token_contains(tokens, substitution.unhealthy_food)
    ]


def generic_suggestions(verdict: RiskVerdict) -> list[str]:
    """Short hints keyed on which kinds of risk were found."""
    suggestions: list[str] = []
    if verdict.allergens:
        suggestions.append("Look for allergen-free alternatives in the same category")
    flagged = {finding.subject.strip().lower() for finding in verdict.diseases}
    if "diabetes" in flagged:
        suggestions.append("Consider sugar-free or low-carb alternatives")
    if "hypertension" in flagged:
        suggestions.append("Look for low-sodium or no-salt-added versions")
    return suggestions


def _same_food(candidate: FoodItem, food: FoodItem) -> bool:
    if food.id is not None:
        return candidate.id == food.id
    return candidate is food
