"""Nutrition lookups against USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from smartbite.adapters.fdc_client import FdcClient
from smartbite.domain.nutrition import FoodDetails, FoodSummary, NutritionFacts
from smartbite.services.cache import Cache

# FDC nutrient id -> (section, name). Amounts are per 100 g.
_NUTRIENT_IDS = {
    1008: ("macronutrients", "calories"),
    1003: ("macronutrients", "protein"),
    1004: ("macronutrients", "fat"),
    1005: ("macronutrients", "carbohydrates"),
    1079: ("macronutrients", "fiber"),
    2000: ("macronutrients", "sugar"),
    1093: ("micronutrients", "sodium"),
    1092: ("micronutrients", "potassium"),
    1087: ("micronutrients", "calcium"),
    1089: ("micronutrients", "iron"),
    1091: ("micronutrients", "phosphorus"),
    1253: ("micronutrients", "cholesterol"),
}

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Cached FDC search and detail lookups."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    lookup_timeout_seconds: float = 8.0
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search FDC foods with caching."""
        cache_key = f"fdc:search:{query.strip().lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_summary(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition search FDC: query=%s results=%s", query, len(foods))
        return foods

    async def get_food(self, fdc_id: int) -> FoodDetails:
        """Retrieve a food with macro and micro nutrients."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodDetails):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        details = FoodDetails(
            summary=_parse_summary(payload),
            nutrition=extract_nutrition(payload.get("foodNutrients", [])),
            serving_size_g=payload.get("servingSize"),
        )
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition food FDC: fdc_id=%s", fdc_id)
        return details

    async def lookup(self, name: str) -> NutritionFacts | None:
        """Best-effort nutrition for a food name.

        Returns None on timeout, provider error or no match so callers can
        fall back to keyword heuristics.
        """
        if not name.strip():
            return None
        try:
            return await asyncio.wait_for(
                self._lookup(name), timeout=self.lookup_timeout_seconds
            )
        except TimeoutError:
            _logger.warning("Nutrition lookup timed out: name=%s", name)
        except Exception:
            _logger.exception("Nutrition lookup failed: name=%s", name)
        return None

    async def _lookup(self, name: str) -> NutritionFacts | None:
        hits = await self.search(name, limit=1)
        if not hits:
            return None
        details = await self.get_food(hits[0].fdc_id)
        if details.nutrition.is_empty:
            return None
        return details.nutrition

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        _status_code_from_exception(exc),
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_summary(raw: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=raw["fdcId"],
        description=raw.get("description", ""),
        brand_owner=raw.get("brandOwner"),
        brand_name=raw.get("brandName"),
        data_type=raw.get("dataType"),
    )


def extract_nutrition(food_nutrients: list[dict[str, object]]) -> NutritionFacts:
    """Map FDC nutrient rows onto macro and micro nutrient dicts.

    Handles both the detail shape (``nutrient.id`` + ``amount``) and the
    search shape (``nutrientId`` + ``value``).
    """
    sections: dict[str, dict[str, float]] = {
        "macronutrients": {},
        "micronutrients": {},
    }
    for row in food_nutrients:
        nutrient_info = row.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or row.get("nutrientId")
        amount = row.get("amount", row.get("value"))
        mapped = _NUTRIENT_IDS.get(nutrient_id)
        if mapped is None or amount is None:
            continue
        section, name = mapped
        sections[section][name] = float(amount)
    return NutritionFacts(
        macronutrients=sections["macronutrients"],
        micronutrients=sections["micronutrients"],
    )
