"""Chef login, profile and order endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_ordering.api.dependencies import require_chef
from food_ordering.api.schemas import LoginRequest
from food_ordering.domain.views import ChefProfileView, ChefView, OrderView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/chef", tags=["chef"])


@router.post("/login")
async def chef_login(body: LoginRequest, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    return {"token": container.account_service.chef_login(body.email, body.password)}


@router.get("/profile")
async def chef_profile(
    request: Request, chef_id: UUID = Depends(require_chef)
) -> ChefProfileView:
    container: AppContainer = request.app.state.container
    return ChefProfileView.from_record(container.chef_service.get_chef(chef_id))


@router.get("/orders")
async def chef_orders(
    request: Request, chef_id: UUID = Depends(require_chef)
) -> list[OrderView]:
    """Return the orders assigned to the caller."""
    container: AppContainer = request.app.state.container
    return [
        OrderView.from_record(order)
        for order in container.chef_service.list_orders(chef_id)
    ]


@router.put("/orders/{order_id}/complete")
async def complete_order(
    order_id: UUID, request: Request, chef_id: UUID = Depends(require_chef)
) -> OrderView:
    """Mark an order as out for delivery."""
    container: AppContainer = request.app.state.container
    order = await container.checkout_service.complete_order(chef_id, order_id)
    return OrderView.from_record(order)


@router.get("")
async def list_chefs(request: Request) -> list[ChefView]:
    container: AppContainer = request.app.state.container
    return [ChefView.from_record(chef) for chef in container.chef_service.list_chefs()]
