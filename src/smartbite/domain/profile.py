"""Domain models for users and their health profiles."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class ProfileEntry:
    """Named allergy, disease, medication or symptom entry."""

    name: str
    severity: str | None = None
    frequency: str | None = None


@dataclass(frozen=True)
class HealthProfile:
    """Health conditions the risk engine evaluates foods against."""

    allergies: list[ProfileEntry] = field(default_factory=list)
    diseases: list[ProfileEntry] = field(default_factory=list)
    medications: list[ProfileEntry] = field(default_factory=list)
    symptoms: list[ProfileEntry] = field(default_factory=list)
    dietary_preferences: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.allergies
            or self.diseases
            or self.medications
            or self.symptoms
            or self.dietary_preferences
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "allergies": [_entry_to_dict(entry) for entry in self.allergies],
            "diseases": [_entry_to_dict(entry) for entry in self.diseases],
            "medications": [_entry_to_dict(entry) for entry in self.medications],
            "symptoms": [_entry_to_dict(entry) for entry in self.symptoms],
            "dietary_preferences": list(self.dietary_preferences),
        }


@dataclass(frozen=True)
class NotificationPreferences:
    """Per-channel and per-type notification toggles."""

    email: bool = True
    whatsapp: bool = False
    sms: bool = False
    in_app: bool = True
    expiry: bool = True
    health_warnings: bool = True
    expiry_days: int = 3

    def enabled_channels(self) -> list[str]:
        channels = {
            "email": self.email,
            "whatsapp": self.whatsapp,
            "sms": self.sms,
            "in_app": self.in_app,
        }
        return [name for name, enabled in channels.items() if enabled]

    def to_dict(self) -> dict[str, object]:
        """Stored shape, readable by ``parse_notification_preferences``."""
        return {
            "channels": {
                "email": self.email,
                "whatsapp": self.whatsapp,
                "sms": self.sms,
                "in_app": self.in_app,
            },
            "types": {"expiry": self.expiry, "health_warnings": self.health_warnings},
            "expiry_days": self.expiry_days,
        }


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str | None = None
    health_profile: HealthProfile = field(default_factory=HealthProfile)
    notification_preferences: NotificationPreferences = field(
        default_factory=NotificationPreferences
    )


def parse_health_profile(raw: Mapping[str, object] | None) -> HealthProfile:
    """Normalize a loosely shaped profile into a HealthProfile.

    Each condition list may contain plain strings or mappings with a
    ``name`` key; blank names are dropped and missing lists become empty.
    """
    if not raw:
        return HealthProfile()
    return HealthProfile(
        allergies=_parse_entries(raw.get("allergies")),
        diseases=_parse_entries(raw.get("diseases")),
        medications=_parse_entries(raw.get("medications")),
        symptoms=_parse_entries(raw.get("symptoms")),
        dietary_preferences=_parse_tags(
            raw.get("dietary_preferences", raw.get("dietaryPreferences"))
        ),
    )


def parse_notification_preferences(
    raw: Mapping[str, object] | None,
) -> NotificationPreferences:
    """Read notification preferences stored as nested channel/type maps."""
    if not raw:
        return NotificationPreferences()
    channels = raw.get("channels")
    types = raw.get("types")
    channels = channels if isinstance(channels, Mapping) else {}
    types = types if isinstance(types, Mapping) else {}
    defaults = NotificationPreferences()
    expiry_days = raw.get("expiry_days", defaults.expiry_days)
    return NotificationPreferences(
        email=bool(channels.get("email", defaults.email)),
        whatsapp=bool(channels.get("whatsapp", defaults.whatsapp)),
        sms=bool(channels.get("sms", defaults.sms)),
        in_app=bool(channels.get("in_app", defaults.in_app)),
        expiry=bool(types.get("expiry", defaults.expiry)),
        health_warnings=bool(types.get("health_warnings", defaults.health_warnings)),
        expiry_days=int(expiry_days)
        if isinstance(expiry_days, int | float)
        else defaults.expiry_days,
    )


def merge_notification_preferences(
    current: NotificationPreferences, raw: Mapping[str, object]
) -> NotificationPreferences:
    """Apply a partial update; keys missing from ``raw`` keep their value."""
    stored = current.to_dict()
    merged: dict[str, object] = {
        "expiry_days": raw.get("expiry_days", current.expiry_days)
    }
    for section in ("channels", "types"):
        update = raw.get(section)
        merged[section] = {
            **stored[section],
            **(update if isinstance(update, Mapping) else {}),
        }
    return parse_notification_preferences(merged)


def _parse_entries(raw: object) -> list[ProfileEntry]:
    if not isinstance(raw, Iterable) or isinstance(raw, str | bytes):
        return []
    entries: list[ProfileEntry] = []
    for item in raw:
        if isinstance(item, ProfileEntry):
            entry = item
        elif isinstance(item, str):
            entry = ProfileEntry(name=item.strip())
        elif isinstance(item, Mapping):
            entry = ProfileEntry(
                name=str(item.get("name") or "").strip(),
                severity=_optional_str(item.get("severity")),
                frequency=_optional_str(item.get("frequency")),
            )
        else:
            continue
        if entry.name:
            entries.append(entry)
    return entries


def _parse_tags(raw: object) -> list[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, Iterable):
        return []
    tags: list[str] = []
    for item in raw:
        tag = str(item).strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _entry_to_dict(entry: ProfileEntry) -> dict[str, object]:
    payload: dict[str, object] = {"name": entry.name}
    if entry.severity:
        payload["severity"] = entry.severity
    if entry.frequency:
        payload["frequency"] = entry.frequency
    return payload
