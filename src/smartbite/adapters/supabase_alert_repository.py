"""Supabase repository for in-app notifications."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from smartbite.domain.notifications import AlertPayload, StoredAlert, alert_from_row
from smartbite.services.notifications import AlertRepository

_TABLE = "notifications"


@dataclass
class SupabaseAlertRepository(AlertRepository):
    """Stores alerts in the ``notifications`` table.

    Email, SMS and WhatsApp workers pick rows up by their ``channels``;
    the same rows back the user's in-app inbox.
    """

    client: Client

    def deliver(
        self, user_id: UUID, payload: AlertPayload, channels: list[str]
    ) -> None:
        alert = payload.to_dict()
        self.client.table(_TABLE).insert(
            {
                "user_id": str(user_id),
                "type": alert["type"],
                "severity": alert["severity_label"],
                "title": alert["title"],
                "message": alert["message"],
                "food_items": alert["food_items"],
                "recommendations": alert["recommendations"],
                "channels": channels,
                "read": False,
            }
        ).execute()

    def list_alerts(self, user_id: UUID) -> list[StoredAlert]:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [alert_from_row(row) for row in response.data or []]

    def mark_read(self, user_id: UUID, alert_id: UUID) -> bool:
        response = (
            self.client.table(_TABLE)
            .update({"read": True})
            .eq("id", str(alert_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def mark_all_read(self, user_id: UUID) -> int:
        response = (
            self.client.table(_TABLE)
            .update({"read": True})
            .eq("user_id", str(user_id))
            .eq("read", False)
            .execute()
        )
        return len(response.data or [])

    def delete_alert(self, user_id: UUID, alert_id: UUID) -> bool:
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(alert_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def clear_alerts(self, user_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("user_id", str(user_id)).execute()
