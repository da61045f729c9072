"""User and health profile business logic."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from smartbite.domain.profile import (
    HealthProfile,
    NotificationPreferences,
    UserRecord,
    merge_notification_preferences,
    parse_health_profile,
)

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for users and their health profiles."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with profile and preferences, if present."""

    def update_health_profile(
        self, user_id: UUID, profile: HealthProfile
    ) -> UserRecord:
        """Replace the stored health profile and return the updated user."""

    def update_notification_preferences(
        self, user_id: UUID, preferences: NotificationPreferences
    ) -> UserRecord:
        """Replace the stored notification preferences."""


@dataclass
class ProfileService:
    """Application service for reading and updating health profiles."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.repository.get_user(user_id)

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        user = self.repository.get_user(user_id)
        return user.health_profile if user else None

    def update_profile(
        self, user_id: UUID, raw: Mapping[str, object]
    ) -> UserRecord | None:
        """Normalize a submitted profile and store it for an existing user."""
        if self.repository.get_user(user_id) is None:
            return None
        profile = parse_health_profile(raw)
        updated = self.repository.update_health_profile(user_id, profile)
        _logger.info(
            "Health profile updated: user_id=%s allergies=%s diseases=%s",
            user_id,
            len(profile.allergies),
            len(profile.diseases),
        )
        return updated

    def get_notification_preferences(
        self, user_id: UUID
    ) -> NotificationPreferences | None:
        user = self.repository.get_user(user_id)
        return user.notification_preferences if user else None

    def update_notification_preferences(
        self, user_id: UUID, raw: Mapping[str, object]
    ) -> NotificationPreferences | None:
        """Merge a partial preferences update into the stored preferences."""
        user = self.repository.get_user(user_id)
        if user is None:
            return None
        preferences = merge_notification_preferences(
            user.notification_preferences, raw
        )
        updated = self.repository.update_notification_preferences(
            user_id, preferences
        )
        _logger.info(
            "Notification preferences updated: user_id=%s channels=%s",
            user_id,
            ",".join(preferences.enabled_channels()),
        )
        return updated.notification_preferences
