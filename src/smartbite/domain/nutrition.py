"""Nutrition domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient amounts per 100 g, split into macro and micro nutrients."""

    macronutrients: dict[str, float] = field(default_factory=dict)
    micronutrients: dict[str, float] = field(default_factory=dict)

    def merged(self) -> dict[str, float]:
        """Return one flat nutrient map; micronutrients win on name clashes."""
        return {**self.macronutrients, **self.micronutrients}

    @property
    def is_empty(self) -> bool:
        return not any(self.merged().values())

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "macronutrients": dict(self.macronutrients),
            "micronutrients": dict(self.micronutrients),
        }

    @classmethod
    def from_dict(cls, raw: object) -> "NutritionFacts | None":
        """Build facts from a stored or submitted mapping, if it has any."""
        if not isinstance(raw, dict):
            return None
        facts = cls(
            macronutrients=_numeric_map(raw.get("macronutrients")),
            micronutrients=_numeric_map(raw.get("micronutrients")),
        )
        if not facts.macronutrients and not facts.micronutrients:
            return None
        return facts


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from FDC."""

    fdc_id: int
    description: str
    brand_owner: str | None
    brand_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodDetails:
    """FDC food with its nutrient facts."""

    summary: FoodSummary
    nutrition: NutritionFacts
    serving_size_g: float | None


def _numeric_map(raw: object) -> dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    values: dict[str, float] = {}
    for key, value in raw.items():
        if isinstance(value, bool):
            continue
        if isinstance(value, int | float):
            values[str(key)] = float(value)
    return values
