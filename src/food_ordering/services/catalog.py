"""Food catalog management."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import InvalidInputError, NotFoundError
from food_ordering.domain.models import FoodRecord


class FoodRepository(Protocol):
    """Persistence interface for catalog foods."""

    def list_foods(self) -> list[FoodRecord]:
        """Return all foods."""

    def get_food(self, food_id: UUID) -> FoodRecord | None:
        """Return a food by id."""

    def get_foods(self, food_ids: list[UUID]) -> list[FoodRecord]:
        """Return the foods matching the given ids."""

    def create_food(self, payload: dict[str, object]) -> FoodRecord:
        """Create and return a food."""

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> FoodRecord | None:
        """Update a food and return it, or None if missing."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food; return whether it existed."""

    def set_stock(self, food_id: UUID, stock_quantity: int) -> None:
        """Persist a food's stock level."""


@dataclass
class CatalogService:
    """Catalog lookups and admin edits."""

    repository: FoodRepository

    def list_foods(self) -> list[FoodRecord]:
        return self.repository.list_foods()

    def get_food(self, food_id: UUID) -> FoodRecord:
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def add_food(  # noqa: PLR0913
        self,
        name: str,
        price: float | str,
        stock_quantity: int | str,
        tags: str | None = None,
        bespoke_option: str | None = None,
        image_url: str | None = None,
    ) -> FoodRecord:
        """Validate and create a catalog entry."""
        payload = _validated_payload(name, price, stock_quantity, tags, bespoke_option)
        payload["image_url"] = image_url
        return self.repository.create_food(payload)

    def update_food(  # noqa: PLR0913
        self,
        food_id: UUID,
        name: str,
        price: float | str,
        stock_quantity: int | str,
        tags: str | None = None,
        bespoke_option: str | None = None,
        image_url: str | None = None,
    ) -> FoodRecord:
        """Validate and replace a catalog entry's fields."""
        payload = _validated_payload(name, price, stock_quantity, tags, bespoke_option)
        if image_url is not None:
            payload["image_url"] = image_url
        food = self.repository.update_food(food_id, payload)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def delete_food(self, food_id: UUID) -> None:
        if not self.repository.delete_food(food_id):
            raise NotFoundError("Food not found")


def _validated_payload(
    name: str,
    price: float | str,
    stock_quantity: int | str,
    tags: str | None,
    bespoke_option: str | None,
) -> dict[str, object]:
    if not name or not name.strip():
        raise InvalidInputError("Missing required field: name")
    try:
        parsed_price = float(price)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Price must be a non-negative number") from exc
    if parsed_price < 0:
        raise InvalidInputError("Price must be a non-negative number")
    try:
        parsed_stock = int(stock_quantity)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            "Quantity available must be a non-negative number"
        ) from exc
    if parsed_stock < 0:
        raise InvalidInputError("Quantity available must be a non-negative number")
    return {
        "name": name.strip(),
        "price": parsed_price,
        "stock_quantity": parsed_stock,
        "tags": [tag.strip() for tag in (tags or "").split(",") if tag.strip()],
        "bespoke_option": bespoke_option or "",
    }
