"""Domain models for the food inventory."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID

from smartbite.domain.nutrition import NutritionFacts

_SECONDS_PER_DAY = 86400


class FoodCategory(str, Enum):
    """Inventory category accepted for food items."""

    DAIRY = "dairy"
    MEAT = "meat"
    FRUITS = "fruits"
    VEGETABLES = "vegetables"
    GRAINS = "grains"
    SNACKS = "snacks"
    BEVERAGES = "beverages"
    CONDIMENTS = "condiments"
    FROZEN = "frozen"
    CANNED = "canned"
    BAKERY = "bakery"
    OTHER = "other"


class FoodStatus(str, Enum):
    """Lifecycle status of an inventory item."""

    ACTIVE = "active"
    CONSUMED = "consumed"
    EXPIRED = "expired"
    WASTED = "wasted"


class ExpiryStatus(str, Enum):
    """Expiry tier derived from the expiry date."""

    UNKNOWN = "unknown"
    EXPIRED = "expired"
    EXPIRING_TODAY = "expiring-today"
    EXPIRING_SOON = "expiring-soon"
    EXPIRING_WEEK = "expiring-week"
    SAFE = "safe"


@dataclass(frozen=True)
class FoodItem:
    """Represents a food item in a user's inventory."""

    name: str
    brand: str | None = None
    category: str | None = None
    ingredients: list[str] | str | None = None
    allergens: list[str] = field(default_factory=list)
    nutrition: NutritionFacts | None = None
    expiry_date: datetime | None = None
    status: FoodStatus = FoodStatus.ACTIVE
    id: UUID | None = None
    user_id: UUID | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id) if self.id else None,
            "user_id": str(self.user_id) if self.user_id else None,
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "ingredients": self.ingredients,
            "allergens": list(self.allergens),
            "nutrition": self.nutrition.to_dict() if self.nutrition else None,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "status": self.status.value,
        }


def food_from_dict(raw: Mapping[str, object]) -> FoodItem:
    """Build a FoodItem from a stored row or a submitted payload."""
    ingredients = raw.get("ingredients")
    if not isinstance(ingredients, str | list):
        ingredients = None
    allergens = raw.get("allergens")
    if not isinstance(allergens, list):
        allergens = []
    return FoodItem(
        name=str(raw.get("name") or ""),
        brand=_optional_text(raw.get("brand")),
        category=_optional_text(raw.get("category")),
        ingredients=ingredients,
        allergens=[str(tag) for tag in allergens],
        nutrition=NutritionFacts.from_dict(raw.get("nutrition")),
        expiry_date=parse_datetime(raw.get("expiry_date")),
        status=_parse_status(raw.get("status")),
        id=_parse_uuid(raw.get("id")),
        user_id=_parse_uuid(raw.get("user_id")),
    )


def parse_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp or date; naive values are treated as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_status(value: object) -> FoodStatus:
    try:
        return FoodStatus(str(value).strip().lower())
    except ValueError:
        return FoodStatus.ACTIVE


def _parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str) and value:
        return UUID(value)
    return None


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def days_until_expiry(food: FoodItem, now: datetime) -> int | None:
    """Whole days until expiry, rounded up; negative once expired."""
    if food.expiry_date is None:
        return None
    delta = (food.expiry_date - now).total_seconds()
    return math.ceil(delta / _SECONDS_PER_DAY)


def is_expired(food: FoodItem, now: datetime) -> bool:
    return food.expiry_date is not None and now > food.expiry_date


def is_expiring_soon(food: FoodItem, now: datetime, days: int = 3) -> bool:
    """Return True when the food expires within ``days`` and has not expired."""
    remaining = days_until_expiry(food, now)
    if remaining is None:
        return False
    return 0 <= remaining <= days


def expiry_status(food: FoodItem, now: datetime) -> ExpiryStatus:
    """Classify a food into its expiry tier."""
    remaining = days_until_expiry(food, now)
    if remaining is None:
        return ExpiryStatus.UNKNOWN
    if remaining < 0:
        return ExpiryStatus.EXPIRED
    if remaining <= 1:
        return ExpiryStatus.EXPIRING_TODAY
    if remaining <= 3:  # noqa: PLR2004
        return ExpiryStatus.EXPIRING_SOON
    if remaining <= 7:  # noqa: PLR2004
        return ExpiryStatus.EXPIRING_WEEK
    return ExpiryStatus.SAFE
