"""Alert payload builders and dispatch to the notification sink."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from smartbite.domain.foods import FoodItem, days_until_expiry, is_expired
from smartbite.domain.notifications import (
    AlertFoodItem,
    AlertPayload,
    NotificationStats,
    StoredAlert,
)
from smartbite.domain.profile import UserRecord
from smartbite.domain.risk import RiskVerdict, Severity
from smartbite.services.users import ProfileService

_logger = logging.getLogger(__name__)

HEALTH_RISK = "health_risk"
EXPIRY_WARNING = "expiry_warning"
EXPIRY_CRITICAL = "expiry_critical"

_EXPIRED_RECOMMENDATIONS = [
    "Check and dispose of expired items safely",
    "Update your inventory to remove expired items",
    "Consider meal planning to reduce food waste",
]

_EXPIRING_RECOMMENDATIONS = [
    "Plan meals using these ingredients",
    "Consider freezing items if possible",
    "Share with friends or family if you cannot use them",
]


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class AlertSink(Protocol):
    """Delivery target for alert payloads."""

    def deliver(
        self, user_id: UUID, payload: AlertPayload, channels: list[str]
    ) -> None:
        """Hand an alert to the delivery subsystem."""


def build_health_alert(food: FoodItem, verdict: RiskVerdict) -> AlertPayload | None:
    """Build a health alert for a non-safe verdict."""
    if verdict.is_safe:
        return None
    if verdict.overall_risk == Severity.HARMFUL:
        label, emoji = "CRITICAL", "🚨"
    else:
        label, emoji = "WARNING", "⚠️"
    by_brand = f" by {food.brand}" if food.brand else ""
    return AlertPayload(
        kind=HEALTH_RISK,
        severity_label=label,
        title=f"{emoji} Health {label}: {food.name}",
        message=(
            f'The food item "{food.name}"{by_brand} has been flagged with '
            "health risks based on your profile."
        ),
        food_items=[_alert_item(food)],
        recommendations=list(verdict.recommendations),
    )


def build_expiring_item_alert(
    food: FoodItem, now: datetime, within_days: int
) -> AlertPayload | None:
    """Warn about a single newly added item that expires soon."""
    remaining = days_until_expiry(food, now)
    if remaining is None or not 0 <= remaining <= within_days:
        return None
    by_brand = f" by {food.brand}" if food.brand else ""
    plural = "" if remaining == 1 else "s"
    return AlertPayload(
        kind=EXPIRY_WARNING,
        severity_label="WARNING",
        title=f"⚠️ Food Expiring Soon: {food.name}",
        message=(
            f"{food.name}{by_brand} expires in {remaining} day{plural}. "
            "Plan to use it soon!"
        ),
        food_items=[_alert_item(food)],
        recommendations=[
            "Plan a meal using this ingredient",
            "Consider freezing if possible",
            "Share with friends or family",
        ],
    )


def build_expiry_alerts(
    foods: Iterable[FoodItem], now: datetime, within_days: int
) -> list[AlertPayload]:
    """Build up to two alerts: expired items and items expiring soon."""
    expired: list[FoodItem] = []
    expiring: list[FoodItem] = []
    for food in foods:
        if food.expiry_date is None:
            continue
        if is_expired(food, now):
            expired.append(food)
            continue
        remaining = days_until_expiry(food, now)
        if remaining is not None and remaining <= within_days:
            expiring.append(food)

    alerts: list[AlertPayload] = []
    if expired:
        alerts.append(
            AlertPayload(
                kind=EXPIRY_CRITICAL,
                severity_label="CRITICAL",
                title=f"⚠️ {len(expired)} Food Item(s) Expired",
                message=(
                    f"You have {len(expired)} food item(s) that have already "
                    "expired. Please check your inventory and dispose of expired "
                    "items safely."
                ),
                food_items=[_alert_item(food) for food in expired],
                recommendations=list(_EXPIRED_RECOMMENDATIONS),
            )
        )
    if expiring:
        alerts.append(
            AlertPayload(
                kind=EXPIRY_WARNING,
                severity_label="WARNING",
                title=f"📅 {len(expiring)} Food Item(s) Expiring Soon",
                message=(
                    f"You have {len(expiring)} food item(s) expiring within "
                    f"{within_days} days. Plan to use them soon to avoid waste."
                ),
                food_items=[_alert_item(food) for food in expiring],
                recommendations=list(_EXPIRING_RECOMMENDATIONS),
            )
        )
    return alerts


@dataclass
class NotificationService:
    """Routes alerts to the sink according to user preferences."""

    sink: AlertSink

    def dispatch(self, user: UserRecord, payload: AlertPayload) -> bool:
        """Deliver an alert unless the user turned its type off.

        Returns True when the payload was handed to the sink.
        """
        preferences = user.notification_preferences
        if payload.kind == HEALTH_RISK and not preferences.health_warnings:
            return False
        if payload.kind in {EXPIRY_WARNING, EXPIRY_CRITICAL} and not preferences.expiry:
            return False
        channels = preferences.enabled_channels()
        if not channels:
            return False
        self.sink.deliver(user.id, payload, channels)
        _logger.info(
            "Alert dispatched: user_id=%s type=%s channels=%s",
            user.id,
            payload.kind,
            ",".join(channels),
        )
        return True


def _alert_item(food: FoodItem) -> AlertFoodItem:
    return AlertFoodItem(name=food.name, brand=food.brand, expiry_date=food.expiry_date)


class AlertRepository(AlertSink, Protocol):
    """Alert sink that also keeps the user's in-app inbox."""

    def list_alerts(self, user_id: UUID) -> list[StoredAlert]:
        """Return a user's alerts, newest first."""

    def mark_read(self, user_id: UUID, alert_id: UUID) -> bool:
        """Mark one alert read; False when it does not exist."""

    def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread alert read and return how many changed."""

    def delete_alert(self, user_id: UUID, alert_id: UUID) -> bool:
        """Delete one alert; False when it does not exist."""

    def clear_alerts(self, user_id: UUID) -> None:
        """Delete all of a user's alerts."""


@dataclass(frozen=True)
class AlertPage:
    """One page of the inbox plus counts over the filtered list."""

    alerts: list[StoredAlert]
    total: int
    unread_count: int


@dataclass
class AlertInboxService:
    """Reads and maintains a user's notification inbox."""

    repository: AlertRepository
    profiles: ProfileService
    clock: Callable[[], datetime] = _utcnow

    def list_alerts(
        self,
        user_id: UUID,
        limit: int = 20,
        skip: int = 0,
        unread_only: bool = False,
    ) -> AlertPage | None:
        if self.profiles.get_user(user_id) is None:
            return None
        alerts = self.repository.list_alerts(user_id)
        if unread_only:
            alerts = [alert for alert in alerts if not alert.read]
        return AlertPage(
            alerts=alerts[skip : skip + limit],
            total=len(alerts),
            unread_count=sum(1 for alert in alerts if not alert.read),
        )

    def mark_read(self, user_id: UUID, alert_id: UUID) -> bool:
        return self.repository.mark_read(user_id, alert_id)

    def mark_all_read(self, user_id: UUID) -> int | None:
        if self.profiles.get_user(user_id) is None:
            return None
        updated = self.repository.mark_all_read(user_id)
        _logger.info("Alerts marked read: user_id=%s count=%s", user_id, updated)
        return updated

    def delete_alert(self, user_id: UUID, alert_id: UUID) -> bool:
        return self.repository.delete_alert(user_id, alert_id)

    def clear_alerts(self, user_id: UUID) -> bool:
        if self.profiles.get_user(user_id) is None:
            return False
        self.repository.clear_alerts(user_id)
        return True

    def stats(self, user_id: UUID) -> NotificationStats | None:
        """Counts by read state, age and alert type."""
        if self.profiles.get_user(user_id) is None:
            return None
        now = self.clock()
        alerts = self.repository.list_alerts(user_id)
        by_type: dict[str, int] = {}
        for alert in alerts:
            by_type[alert.payload.kind] = by_type.get(alert.payload.kind, 0) + 1
        return NotificationStats(
            total=len(alerts),
            unread=sum(1 for alert in alerts if not alert.read),
            this_week=_created_since(alerts, now - timedelta(days=7)),
            this_month=_created_since(alerts, now - timedelta(days=30)),
            by_type=by_type,
        )


def _created_since(alerts: list[StoredAlert], since: datetime) -> int:
    return sum(
        1
        for alert in alerts
        if alert.created_at is not None and alert.created_at >= since
    )
