"""Cart endpoints for the authenticated customer."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_ordering.api.dependencies import require_user
from food_ordering.api.schemas import (
    CartAddRequest,
    CartRemoveRequest,
    CartUpdateRequest,
)
from food_ordering.domain.views import CartView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
async def get_cart(request: Request, user_id: UUID = Depends(require_user)) -> CartView:
    """Return the cart with food details."""
    container: AppContainer = request.app.state.container
    return _cart_view(container, user_id)


@router.post("/add")
async def add_to_cart(
    body: CartAddRequest, request: Request, user_id: UUID = Depends(require_user)
) -> CartView:
    container: AppContainer = request.app.state.container
    container.cart_service.add_item(
        user_id, body.food_id, quantity=body.quantity, note=body.bespoke_note
    )
    return _cart_view(container, user_id)


@router.put("/update")
async def update_cart(
    body: CartUpdateRequest, request: Request, user_id: UUID = Depends(require_user)
) -> CartView:
    """Set a line's quantity; zero removes it."""
    container: AppContainer = request.app.state.container
    container.cart_service.update_item(
        user_id, body.food_id, body.quantity, note=body.bespoke_note
    )
    return _cart_view(container, user_id)


@router.delete("/items")
async def remove_from_cart(
    body: CartRemoveRequest, request: Request, user_id: UUID = Depends(require_user)
) -> CartView:
    container: AppContainer = request.app.state.container
    container.cart_service.remove_item(user_id, body.food_id, note=body.bespoke_note)
    return _cart_view(container, user_id)


def _cart_view(container: AppContainer, user_id: UUID) -> CartView:
    lines, foods = container.cart_service.get_cart(user_id)
    return CartView.build(str(user_id), lines, foods)
