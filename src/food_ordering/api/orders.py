"""Checkout and order history endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_ordering.api.dependencies import require_user
from food_ordering.api.schemas import CheckoutRequest
from food_ordering.domain.views import OrderView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/order", tags=["order"])


@router.post("/checkout")
async def checkout(
    body: CheckoutRequest, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Turn the caller's cart into an order."""
    container: AppContainer = request.app.state.container
    result = await container.checkout_service.checkout(user_id, body.user_location)
    return {
        "msg": "Checkout successful",
        "order": OrderView.from_record(result.order).model_dump(mode="json"),
        "delivery_fee": result.delivery_fee,
        "user_coords": {"lat": result.lat, "lng": result.lng},
        "notification": result.notification,
    }


@router.get("/history")
async def history(
    request: Request, user_id: UUID = Depends(require_user)
) -> list[OrderView]:
    container: AppContainer = request.app.state.container
    return [
        OrderView.from_record(order)
        for order in container.checkout_service.order_history(user_id)
    ]
