"""Domain records for the food ordering backend."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

ORDER_PENDING = "pending"
ORDER_OUT_FOR_DELIVERY = "out_for_delivery"
PAYMENT_COMPLETED = "completed"


@dataclass(frozen=True)
class UserRecord:
    """Represents a customer account stored in the database."""

    id: UUID
    name: str
    email: str
    credential_hash: str
    loyalty_points: int = 0
    is_admin: bool = False
    preferences: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FoodRecord:
    """Catalog entry with its live stock level."""

    id: UUID
    name: str
    price: float
    stock_quantity: int
    tags: list[str] = field(default_factory=list)
    image_url: str | None = None
    bespoke_option: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ChefRecord:
    """Chef account with its heuristic load counter."""

    id: UUID
    name: str
    email: str
    credential_hash: str
    specialty: str
    load_counter: int = 0
    rating: float = 0.0
    image_url: str | None = None


@dataclass(frozen=True)
class CartLine:
    """Single cart line; (food_id, note) is unique within a cart."""

    food_id: UUID
    quantity: int
    note: str | None = None


@dataclass(frozen=True)
class CartRecord:
    """A user's cart."""

    id: UUID
    user_id: UUID
    items: list[CartLine]


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a food line at order time."""

    food_id: UUID
    name: str
    price: float
    quantity: int
    note: str | None = None


@dataclass(frozen=True)
class NewOrder:
    """Order payload before persistence."""

    user_id: UUID
    chef_id: UUID
    items: list[OrderItem]
    total: float
    delivery_fee: float
    user_location: str
    created_at: datetime
    status: str = ORDER_PENDING
    payment_status: str = PAYMENT_COMPLETED


@dataclass(frozen=True)
class OrderRecord:
    """Persisted order."""

    id: UUID
    user_id: UUID
    chef_id: UUID
    items: list[OrderItem]
    total: float
    delivery_fee: float
    status: str
    payment_status: str
    user_location: str
    created_at: datetime

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)
