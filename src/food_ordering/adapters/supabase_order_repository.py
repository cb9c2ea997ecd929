"""Supabase-backed order repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.domain.errors import PersistenceError
from food_ordering.domain.models import NewOrder, OrderItem, OrderRecord
from food_ordering.services.chefs import OrderRepository

_COLUMNS = (
    "id, user_id, chef_id, items, total, delivery_fee, status, payment_status, "
    "user_location, created_at"
)


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for orders with snapshot items."""

    client: Client
    unit_of_work: SupabaseUnitOfWork | None = None

    def create_order(self, order: NewOrder) -> OrderRecord:
        """Insert an order row and return it."""
        response = (
            self.client.table("orders")
            .insert(
                {
                    "user_id": str(order.user_id),
                    "chef_id": str(order.chef_id),
                    "items": [_serialize_item(item) for item in order.items],
                    "total": order.total,
                    "delivery_fee": order.delivery_fee,
                    "status": order.status,
                    "payment_status": order.payment_status,
                    "user_location": order.user_location,
                    "created_at": order.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create order")
        created = _parse_order(response.data[0])
        if self.unit_of_work:
            self.unit_of_work.track_inserted("orders", "id", str(created.id))
        return created

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id."""
        response = (
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("id", str(order_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_order(response.data[0])

    def list_by_user(self, user_id: UUID) -> list[OrderRecord]:
        """Return a user's orders, newest first."""
        response = (
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def list_by_chef(self, chef_id: UUID) -> list[OrderRecord]:
        """Return a chef's orders, newest first."""
        response = (
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("chef_id", str(chef_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def list_orders(self) -> list[OrderRecord]:
        """Return every order, newest first."""
        response = (
            self.client.table("orders")
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def update_status(self, order_id: UUID, status: str) -> None:
        """Update an order's status."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("orders", "id", str(order_id))
        self.client.table("orders").update({"status": status}).eq(
            "id", str(order_id)
        ).execute()

    def reassign_chef(self, order_id: UUID, chef_id: UUID) -> None:
        """Point an order at a different chef."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("orders", "id", str(order_id))
        self.client.table("orders").update({"chef_id": str(chef_id)}).eq(
            "id", str(order_id)
        ).execute()


def _serialize_item(item: OrderItem) -> dict[str, object]:
    return {
        "food_id": str(item.food_id),
        "name": item.name,
        "price": item.price,
        "quantity": item.quantity,
        "note": item.note,
    }


def _parse_order(row: dict[str, object]) -> OrderRecord:
    return OrderRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        chef_id=UUID(str(row["chef_id"])),
        items=[
            OrderItem(
                food_id=UUID(str(item["food_id"])),
                name=str(item.get("name", "")),
                price=float(item.get("price") or 0.0),
                quantity=int(item.get("quantity") or 0),
                note=item.get("note"),
            )
            for item in row.get("items") or []
        ],
        total=float(row.get("total") or 0.0),
        delivery_fee=float(row.get("delivery_fee") or 0.0),
        status=str(row.get("status", "")),
        payment_status=str(row.get("payment_status", "")),
        user_location=str(row.get("user_location", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
