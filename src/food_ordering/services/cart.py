"""Shopping cart operations."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import InvalidInputError, NotFoundError
from food_ordering.domain.models import CartLine, CartRecord, FoodRecord
from food_ordering.services.catalog import FoodRepository


class CartRepository(Protocol):
    """Persistence interface for carts."""

    def get_cart(self, user_id: UUID) -> CartRecord | None:
        """Return a user's cart, if present."""

    def save_cart(self, user_id: UUID, items: list[CartLine]) -> CartRecord:
        """Create or replace a user's cart items."""

    def delete_cart(self, user_id: UUID) -> None:
        """Delete a user's cart."""


@dataclass
class CartService:
    """Cart mutations that keep (food, note) pairs unique."""

    repository: CartRepository
    food_repository: FoodRepository

    def get_cart(self, user_id: UUID) -> tuple[list[CartLine], dict[str, FoodRecord]]:
        """Return the cart lines with their foods keyed by id."""
        cart = self.repository.get_cart(user_id)
        if cart is None:
            return [], {}
        return cart.items, self._foods_for(cart.items)

    def add_item(
        self,
        user_id: UUID,
        food_id: UUID,
        quantity: int | None = None,
        note: str | None = None,
    ) -> CartRecord:
        """Add a line, merging with an existing line for the same food and note."""
        amount = quantity or 1
        if amount < 1:
            raise InvalidInputError("Quantity must be at least 1")
        if self.food_repository.get_food(food_id) is None:
            raise NotFoundError("Food not found")
        note = _normalize_note(note)
        cart = self.repository.get_cart(user_id)
        items = list(cart.items) if cart else []
        index = _find_line(items, food_id, note)
        if index is None:
            items.append(CartLine(food_id=food_id, quantity=amount, note=note))
        else:
            items[index] = replace(items[index], quantity=items[index].quantity + amount)
        return self.repository.save_cart(user_id, items)

    def update_item(
        self, user_id: UUID, food_id: UUID, quantity: int, note: str | None = None
    ) -> CartRecord:
        """Set a line's quantity; zero or less removes the line."""
        cart = self.repository.get_cart(user_id)
        if cart is None:
            raise NotFoundError("Cart not found")
        items = list(cart.items)
        index = _find_line(items, food_id, _normalize_note(note))
        if index is None:
            raise NotFoundError("Item not found in cart")
        if quantity <= 0:
            del items[index]
        else:
            items[index] = replace(items[index], quantity=quantity)
        return self.repository.save_cart(user_id, items)

    def remove_item(
        self, user_id: UUID, food_id: UUID, note: str | None = None
    ) -> CartRecord:
        return self.update_item(user_id, food_id, 0, note)

    def _foods_for(self, items: list[CartLine]) -> dict[str, FoodRecord]:
        if not items:
            return {}
        foods = self.food_repository.get_foods([item.food_id for item in items])
        return {str(food.id): food for food in foods}


def _normalize_note(note: str | None) -> str | None:
    if note is None:
        return None
    cleaned = note.strip()
    return cleaned or None


def _find_line(items: list[CartLine], food_id: UUID, note: str | None) -> int | None:
    for index, item in enumerate(items):
        if item.food_id == food_id and item.note == note:
            return index
    return None
