"""Supabase implementation for the food inventory."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from smartbite.domain.foods import FoodItem, FoodStatus, food_from_dict
from smartbite.services.foods import FoodRepository

_TABLE = "foods"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for inventory items."""

    client: Client

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create a food row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "status": FoodStatus.ACTIVE.value,
                    **payload,
                    "user_id": str(user_id),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return food_from_dict(response.data[0])

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Update a food row and return it."""
        response = (
            self.client.table(_TABLE).update(payload).eq("id", str(food_id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food item")
        return food_from_dict(response.data[0])

    def get_food(self, food_id: UUID) -> FoodItem | None:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return food_from_dict(response.data[0])

    def list_foods(
        self, user_id: UUID, status: FoodStatus | None = None
    ) -> list[FoodItem]:
        """Return a user's foods ordered by expiry date."""
        query = self.client.table(_TABLE).select("*").eq("user_id", str(user_id))
        if status is not None:
            query = query.eq("status", status.value)
        response = query.order("expiry_date").execute()
        return [food_from_dict(row) for row in response.data or []]

    def delete_food(self, food_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("id", str(food_id)).execute()

    def mark_status(self, food_ids: list[UUID], status: FoodStatus) -> None:
        """Set the status of several foods in one request."""
        if not food_ids:
            return
        self.client.table(_TABLE).update({"status": status.value}).in_(
            "id", [str(food_id) for food_id in food_ids]
        ).execute()
