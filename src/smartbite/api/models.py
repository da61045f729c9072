"""Pydantic request models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from smartbite.domain.foods import FoodCategory


class ProfileEntryPayload(BaseModel):
    """Allergy, disease, medication or symptom with optional details."""

    name: str
    severity: str | None = None
    frequency: str | None = None


class ProfilePayload(BaseModel):
    """Health profile as submitted by clients.

    Entries may be plain names or objects; both are normalized before
    they reach the risk engine.
    """

    model_config = ConfigDict(populate_by_name=True)

    allergies: list[str | ProfileEntryPayload] = Field(default_factory=list)
    diseases: list[str | ProfileEntryPayload] = Field(default_factory=list)
    medications: list[str | ProfileEntryPayload] = Field(default_factory=list)
    symptoms: list[str | ProfileEntryPayload] = Field(default_factory=list)
    dietary_preferences: list[str] = Field(
        default_factory=list, alias="dietaryPreferences"
    )


class NutritionPayload(BaseModel):
    """Nutrient amounts per 100 g."""

    macronutrients: dict[str, float] = Field(default_factory=dict)
    micronutrients: dict[str, float] = Field(default_factory=dict)


class FoodPayload(BaseModel):
    """Food item body for create, replace and ad-hoc analysis."""

    name: str = Field(min_length=1)
    brand: str | None = None
    category: FoodCategory | None = None
    ingredients: list[str] | str | None = None
    allergens: list[str] = Field(default_factory=list)
    nutrition: NutritionPayload | None = None
    expiry_date: datetime | None = None

    def to_row(self) -> dict[str, object]:
        """Return a JSON-safe dict in the stored row shape."""
        return self.model_dump(mode="json")


class ChannelTogglesPayload(BaseModel):
    email: bool | None = None
    whatsapp: bool | None = None
    sms: bool | None = None
    in_app: bool | None = None


class AlertTypeTogglesPayload(BaseModel):
    expiry: bool | None = None
    health_warnings: bool | None = None


class NotificationPreferencesPayload(BaseModel):
    """Partial notification preferences; omitted fields keep their value."""

    channels: ChannelTogglesPayload | None = None
    types: AlertTypeTogglesPayload | None = None
    expiry_days: int | None = Field(default=None, ge=1, le=30)

    def to_update(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)
