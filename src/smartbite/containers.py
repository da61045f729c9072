"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from smartbite.adapters.fdc_client import HttpxFdcClient
from smartbite.adapters.supabase_alert_repository import SupabaseAlertRepository
from smartbite.adapters.supabase_food_repository import SupabaseFoodRepository
from smartbite.adapters.supabase_user_repository import SupabaseUserRepository
from smartbite.config import Settings
from smartbite.services.cache import InMemoryCache
from smartbite.services.foods import FoodService
from smartbite.services.health_risk import HealthRiskService
from smartbite.services.insights import HealthInsightsService
from smartbite.services.notifications import AlertInboxService, NotificationService
from smartbite.services.nutrition import NutritionService
from smartbite.services.users import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    health_risk_service: HealthRiskService
    notification_service: NotificationService
    alert_inbox_service: AlertInboxService
    nutrition_service: NutritionService
    food_service: FoodService
    insights_service: HealthInsightsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)
    alert_repository = SupabaseAlertRepository(supabase_client)

    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        lookup_timeout_seconds=resolved_settings.nutrition_timeout_seconds,
        debug=resolved_settings.debug,
    )
    profile_service = ProfileService(user_repository)
    health_risk_service = HealthRiskService(debug=resolved_settings.debug)
    notification_service = NotificationService(alert_repository)
    alert_inbox_service = AlertInboxService(alert_repository, profile_service)
    food_service = FoodService(
        repository=food_repository,
        profiles=profile_service,
        health_risk=health_risk_service,
        notifications=notification_service,
        alternatives_limit=resolved_settings.alternatives_limit,
        expiry_warning_days=resolved_settings.expiry_warning_days,
    )
    insights_service = HealthInsightsService(
        repository=food_repository,
        profiles=profile_service,
        health_risk=health_risk_service,
        nutrition=nutrition_service,
        item_limit=resolved_settings.report_item_limit,
        max_concurrency=resolved_settings.report_max_concurrency,
        alternatives_limit=resolved_settings.alternatives_limit,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        health_risk_service=health_risk_service,
        notification_service=notification_service,
        alert_inbox_service=alert_inbox_service,
        nutrition_service=nutrition_service,
        food_service=food_service,
        insights_service=insights_service,
        close_resources=close_resources,
    )
