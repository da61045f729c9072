"""Food inventory services: CRUD, risk checks and expiry sweeps."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from smartbite.domain.foods import (
    ExpiryStatus,
    FoodItem,
    FoodStatus,
    days_until_expiry,
    expiry_status,
    food_from_dict,
    is_expired,
    is_expiring_soon,
)
from smartbite.domain.notifications import AlertPayload
from smartbite.domain.profile import HealthProfile
from smartbite.domain.recommendations import Alternative, Substitution
from smartbite.domain.risk import RiskVerdict
from smartbite.services.alternatives import (
    find_alternatives,
    generic_suggestions,
    suggest_substitutions,
)
from smartbite.services.health_risk import HealthRiskService
from smartbite.services.notifications import (
    NotificationService,
    build_expiring_item_alert,
    build_expiry_alerts,
    build_health_alert,
)
from smartbite.services.users import ProfileService

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for inventory items."""

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Update a food item and return it."""

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def list_foods(
        self, user_id: UUID, status: FoodStatus | None = None
    ) -> list[FoodItem]:
        """Return a user's foods, optionally filtered by status."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food item."""

    def mark_status(self, food_ids: list[UUID], status: FoodStatus) -> None:
        """Set the status of several food items."""


@dataclass(frozen=True)
class FoodAssessment:
    """A newly stored food with its verdict and the alerts it raised."""

    food: FoodItem
    verdict: RiskVerdict
    alerts: list[AlertPayload] = field(default_factory=list)


@dataclass(frozen=True)
class FoodRiskReport:
    """Verdict for a stored food plus ways to replace it."""

    food: FoodItem
    verdict: RiskVerdict
    alternatives: list[Alternative]
    substitutions: list[Substitution]
    suggestions: list[str]

    def to_dict(self) -> dict[str, object]:
        return {
            "food": self.food.to_dict(),
            "verdict": self.verdict.to_dict(),
            "alternatives": [item.to_dict() for item in self.alternatives],
            "substitutions": [item.to_dict() for item in self.substitutions],
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class InventoryEntry:
    """Food item with its expiry view at a point in time."""

    food: FoodItem
    days_until_expiry: int | None
    expiry_status: ExpiryStatus

    def to_dict(self) -> dict[str, object]:
        return {
            **self.food.to_dict(),
            "days_until_expiry": self.days_until_expiry,
            "expiry_status": self.expiry_status.value,
        }


@dataclass(frozen=True)
class ExpiryCheckResult:
    """Outcome of one user's expiry sweep."""

    alerts: list[AlertPayload]
    dispatched: int
    expired_marked: int


@dataclass(frozen=True)
class DashboardStats:
    """Inventory counts by expiry window."""

    total: int
    expired: int
    expiring_soon: int
    expiring_week: int


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodService:
    """Application service for the food inventory."""

    repository: FoodRepository
    profiles: ProfileService
    health_risk: HealthRiskService
    notifications: NotificationService
    alternatives_limit: int = 3
    expiry_warning_days: int = 3
    clock: Callable[[], datetime] = _utcnow

    def add_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodAssessment | None:
        """Store a food, evaluate it and raise health and expiry alerts."""
        user = self.profiles.get_user(user_id)
        if user is None:
            return None
        food = self.repository.create_food(user_id, payload)
        verdict = self.health_risk.evaluate(food, user.health_profile)
        candidates = [
            build_health_alert(food, verdict),
            build_expiring_item_alert(food, self.clock(), self.expiry_warning_days),
        ]
        alerts = [
            alert
            for alert in candidates
            if alert is not None and self.notifications.dispatch(user, alert)
        ]
        _logger.info(
            "Food added: user_id=%s food_id=%s risk=%s alerts=%s",
            user_id,
            food.id,
            verdict.overall_risk.label,
            len(alerts),
        )
        return FoodAssessment(food=food, verdict=verdict, alerts=alerts)

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodItem | None:
        """Return a food only when it belongs to the user."""
        food = self.repository.get_food(food_id)
        if food is None or food.user_id != user_id:
            return None
        return food

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        if self.get_food(user_id, food_id) is None:
            return None
        return self.repository.update_food(food_id, payload)

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        if self.get_food(user_id, food_id) is None:
            return False
        self.repository.delete_food(food_id)
        return True

    def list_foods(self, user_id: UUID) -> list[InventoryEntry] | None:
        """List a user's active foods, soonest expiry first."""
        if self.profiles.get_user(user_id) is None:
            return None
        now = self.clock()
        foods = self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
        return _inventory(foods, now)

    def list_expiring(self, user_id: UUID, days: int) -> list[InventoryEntry] | None:
        """Active foods that have not expired and expire within ``days``."""
        if self.profiles.get_user(user_id) is None:
            return None
        now = self.clock()
        foods = [
            food
            for food in self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
            if is_expiring_soon(food, now, days)
        ]
        return _inventory(foods, now)

    def get_health_risk(self, user_id: UUID, food_id: UUID) -> FoodRiskReport | None:
        """Evaluate a stored food with alternatives from the safe inventory."""
        user = self.profiles.get_user(user_id)
        food = self.get_food(user_id, food_id)
        if user is None or food is None:
            return None
        profile = user.health_profile
        verdict = self.health_risk.evaluate(food, profile)
        alternatives: list[Alternative] = []
        if not verdict.is_safe:
            alternatives = find_alternatives(
                food,
                verdict,
                self._safe_pool(user_id, profile),
                limit=self.alternatives_limit,
            )
        return FoodRiskReport(
            food=food,
            verdict=verdict,
            alternatives=alternatives,
            substitutions=suggest_substitutions(food, profile.diseases),
            suggestions=generic_suggestions(verdict),
        )

    def analyze(
        self, user_id: UUID, payload: Mapping[str, object]
    ) -> RiskVerdict | None:
        """Evaluate an unsaved food payload against the user's profile."""
        profile = self.profiles.get_profile(user_id)
        if profile is None:
            return None
        return self.health_risk.evaluate(food_from_dict(payload), profile)

    def expire_overdue(
        self, user_id: UUID, now: datetime | None = None
    ) -> list[FoodItem]:
        """Mark active foods past their expiry date as expired."""
        moment = now or self.clock()
        overdue = [
            food
            for food in self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
            if is_expired(food, moment) and food.id is not None
        ]
        if overdue:
            self.repository.mark_status(
                [food.id for food in overdue], FoodStatus.EXPIRED
            )
        return overdue

    def run_expiry_check(
        self, user_id: UUID, now: datetime | None = None
    ) -> ExpiryCheckResult | None:
        """Send expiry alerts for a user, then mark overdue items expired."""
        user = self.profiles.get_user(user_id)
        if user is None:
            return None
        moment = now or self.clock()
        foods = self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
        alerts = build_expiry_alerts(
            foods, moment, user.notification_preferences.expiry_days
        )
        dispatched = sum(
            1 for alert in alerts if self.notifications.dispatch(user, alert)
        )
        expired = self.expire_overdue(user_id, moment)
        _logger.info(
            "Expiry check: user_id=%s alerts=%s dispatched=%s expired=%s",
            user_id,
            len(alerts),
            dispatched,
            len(expired),
        )
        return ExpiryCheckResult(
            alerts=alerts, dispatched=dispatched, expired_marked=len(expired)
        )

    def dashboard_stats(
        self, user_id: UUID, now: datetime | None = None
    ) -> DashboardStats | None:
        if self.profiles.get_user(user_id) is None:
            return None
        moment = now or self.clock()
        foods = self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
        expired = [food for food in foods if is_expired(food, moment)]
        fresh = [food for food in foods if not is_expired(food, moment)]
        return DashboardStats(
            total=len(foods),
            expired=len(expired),
            expiring_soon=sum(1 for food in fresh if is_expiring_soon(food, moment, 3)),
            expiring_week=sum(1 for food in fresh if is_expiring_soon(food, moment, 7)),
        )

    def _safe_pool(self, user_id: UUID, profile: HealthProfile) -> list[FoodItem]:
        foods = self.repository.list_foods(user_id, status=FoodStatus.ACTIVE)
        return [
            food
            for food, verdict in self.health_risk.evaluate_many(foods, profile)
            if verdict.is_safe
        ]


def _inventory(foods: list[FoodItem], now: datetime) -> list[InventoryEntry]:
    ordered = sorted(
        foods, key=lambda food: (food.expiry_date is None, food.expiry_date or now)
    )
    return [
        InventoryEntry(
            food=food,
            days_until_expiry=days_until_expiry(food, now),
            expiry_status=expiry_status(food, now),
        )
        for food in ordered
    ]
