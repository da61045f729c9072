"""Alert payloads handed to the notification delivery subsystem."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from smartbite.domain.foods import parse_datetime


@dataclass(frozen=True)
class AlertFoodItem:
    """Food item referenced by an alert."""

    name: str
    brand: str | None
    expiry_date: datetime | None


@dataclass(frozen=True)
class AlertPayload:
    """Structured alert ready for email, SMS, WhatsApp or in-app delivery."""

    kind: str
    severity_label: str
    title: str
    message: str
    food_items: list[AlertFoodItem] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.kind,
            "severity_label": self.severity_label,
            "title": self.title,
            "message": self.message,
            "food_items": [
                {
                    "name": item.name,
                    "brand": item.brand,
                    "expiry_date": item.expiry_date.isoformat()
                    if item.expiry_date
                    else None,
                }
                for item in self.food_items
            ],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class StoredAlert:
    """Alert as kept in a user's notification inbox."""

    id: UUID
    user_id: UUID
    payload: AlertPayload
    channels: list[str] = field(default_factory=list)
    read: bool = False
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            **self.payload.to_dict(),
            "channels": list(self.channels),
            "read": self.read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NotificationStats:
    """Inbox counts for one user."""

    total: int
    unread: int
    this_week: int
    this_month: int
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "unread": self.unread,
            "this_week": self.this_week,
            "this_month": self.this_month,
            "by_type": dict(self.by_type),
        }


def alert_from_row(row: Mapping[str, object]) -> StoredAlert:
    """Build a StoredAlert from a ``notifications`` table row."""
    food_items = row.get("food_items")
    recommendations = row.get("recommendations")
    channels = row.get("channels")
    payload = AlertPayload(
        kind=str(row.get("type") or ""),
        severity_label=str(row.get("severity") or ""),
        title=str(row.get("title") or ""),
        message=str(row.get("message") or ""),
        food_items=[
            AlertFoodItem(
                name=str(item.get("name") or ""),
                brand=item.get("brand"),
                expiry_date=parse_datetime(item.get("expiry_date")),
            )
            for item in (food_items if isinstance(food_items, list) else [])
            if isinstance(item, Mapping)
        ],
        recommendations=[str(text) for text in recommendations or []],
    )
    return StoredAlert(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        payload=payload,
        channels=[str(name) for name in channels or []],
        read=bool(row.get("read")),
        created_at=parse_datetime(row.get("created_at")),
    )
