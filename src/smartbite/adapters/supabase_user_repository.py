"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from smartbite.domain.profile import (
    HealthProfile,
    NotificationPreferences,
    UserRecord,
    parse_health_profile,
    parse_notification_preferences,
)
from smartbite.services.users import UserRepository

_COLUMNS = "id, name, email, health_profile, notification_preferences"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for users and health profiles.

    The health profile and notification preferences are stored as JSON
    columns on the ``users`` row.
    """

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def update_health_profile(
        self, user_id: UUID, profile: HealthProfile
    ) -> UserRecord:
        """Store a normalized profile and return the updated user."""
        return self._update(user_id, {"health_profile": profile.to_dict()})

    def update_notification_preferences(
        self, user_id: UUID, preferences: NotificationPreferences
    ) -> UserRecord:
        return self._update(
            user_id, {"notification_preferences": preferences.to_dict()}
        )

    def _update(self, user_id: UUID, values: dict[str, object]) -> UserRecord:
        response = (
            self.client.table("users")
            .update({**values, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    profile = row.get("health_profile")
    preferences = row.get("notification_preferences")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=row.get("email"),
        health_profile=parse_health_profile(
            profile if isinstance(profile, dict) else None
        ),
        notification_preferences=parse_notification_preferences(
            preferences if isinstance(preferences, dict) else None
        ),
    )
