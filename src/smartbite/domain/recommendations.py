"""Domain models for safer alternatives."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Alternative:
    """Safe item from the user's own inventory."""

    id: UUID | None
    name: str
    brand: str
    category: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
        }


@dataclass(frozen=True)
class Substitution:
    """Static swap for a common unhealthy staple."""

    unhealthy_food: str
    alternatives: tuple[str, ...]
    reason: str

    def to_dict(self) -> dict[str, object]:
        return {
            "unhealthy_food": self.unhealthy_food,
            "alternatives": list(self.alternatives),
            "reason": self.reason,
            "category": "substitution",
        }
