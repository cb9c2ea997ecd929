"""Supabase-backed food catalog repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.domain.errors import PersistenceError
from food_ordering.domain.models import FoodRecord
from food_ordering.services.catalog import FoodRepository

_COLUMNS = (
    "id, name, price, stock_quantity, tags, image_url, bespoke_option, created_at"
)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for catalog foods."""

    client: Client
    unit_of_work: SupabaseUnitOfWork | None = None

    def list_foods(self) -> list[FoodRecord]:
        """Return all foods, oldest first."""
        response = (
            self.client.table("foods")
            .select(_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: UUID) -> FoodRecord | None:
        """Return a food by id."""
        response = (
            self.client.table("foods")
            .select(_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_foods(self, food_ids: list[UUID]) -> list[FoodRecord]:
        """Return foods for a list of ids."""
        if not food_ids:
            return []
        response = (
            self.client.table("foods")
            .select(_COLUMNS)
            .in_("id", [str(food_id) for food_id in food_ids])
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def create_food(self, payload: dict[str, object]) -> FoodRecord:
        """Insert a food row and return it."""
        response = self.client.table("foods").insert(payload).execute()
        if not response.data:
            raise PersistenceError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodRecord | None:
        """Update a food row and return the new state."""
        response = (
            self.client.table("foods").update(payload).eq("id", str(food_id)).execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food row."""
        response = self.client.table("foods").delete().eq("id", str(food_id)).execute()
        return bool(response.data)

    def set_stock(self, food_id: UUID, stock_quantity: int) -> None:
        """Update a food's stock level."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("foods", "id", str(food_id))
        self.client.table("foods").update({"stock_quantity": stock_quantity}).eq(
            "id", str(food_id)
        ).execute()


def _parse_food(row: dict[str, object]) -> FoodRecord:
    created_at = row.get("created_at")
    return FoodRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        price=float(row.get("price") or 0.0),
        stock_quantity=int(row.get("stock_quantity") or 0),
        tags=list(row.get("tags") or []),
        image_url=row.get("image_url"),
        bespoke_option=row.get("bespoke_option"),
        created_at=datetime.fromisoformat(str(created_at)) if created_at else None,
    )
