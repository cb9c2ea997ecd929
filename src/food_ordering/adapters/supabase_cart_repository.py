"""Supabase-backed cart repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.domain.errors import PersistenceError
from food_ordering.domain.models import CartLine, CartRecord
from food_ordering.services.cart import CartRepository


@dataclass
class SupabaseCartRepository(CartRepository):
    """Stores each cart as one row with a JSON list of lines."""

    client: Client
    unit_of_work: SupabaseUnitOfWork | None = None

    def get_cart(self, user_id: UUID) -> CartRecord | None:
        """Return a user's cart."""
        response = (
            self.client.table("carts")
            .select("id, user_id, items")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_cart(response.data[0])

    def save_cart(self, user_id: UUID, items: list[CartLine]) -> CartRecord:
        """Upsert the cart row for a user."""
        response = (
            self.client.table("carts")
            .upsert(
                {"user_id": str(user_id), "items": _serialize_lines(items)},
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to save cart")
        return _parse_cart(response.data[0])

    def delete_cart(self, user_id: UUID) -> None:
        """Delete the cart row for a user."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("carts", "user_id", str(user_id))
        self.client.table("carts").delete().eq("user_id", str(user_id)).execute()


def _serialize_lines(items: list[CartLine]) -> list[dict[str, object]]:
    return [
        {"food_id": str(item.food_id), "quantity": item.quantity, "note": item.note}
        for item in items
    ]


def _parse_cart(row: dict[str, object]) -> CartRecord:
    return CartRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        items=[
            CartLine(
                food_id=UUID(str(item["food_id"])),
                quantity=int(item.get("quantity") or 1),
                note=item.get("note"),
            )
            for item in row.get("items") or []
        ],
    )
