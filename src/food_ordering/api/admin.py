"""Admin endpoints for catalog, chefs, orders and the email queue."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_ordering.api.dependencies import require_admin
from food_ordering.api.schemas import ChefRequest, FoodRequest
from food_ordering.domain.views import ChefView, FoodView, OrderView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.post("/food")
async def add_food(body: FoodRequest, request: Request) -> FoodView:
    container: AppContainer = request.app.state.container
    food = container.catalog_service.add_food(
        name=body.name,
        price=body.price,
        stock_quantity=body.stock_quantity,
        tags=body.tags,
        bespoke_option=body.bespoke_option,
        image_url=body.image_url,
    )
    return FoodView.from_record(food)


@router.put("/food/{food_id}")
async def update_food(food_id: UUID, body: FoodRequest, request: Request) -> FoodView:
    container: AppContainer = request.app.state.container
    food = container.catalog_service.update_food(
        food_id,
        name=body.name,
        price=body.price,
        stock_quantity=body.stock_quantity,
        tags=body.tags,
        bespoke_option=body.bespoke_option,
        image_url=body.image_url,
    )
    return FoodView.from_record(food)


@router.delete("/food/{food_id}")
async def delete_food(food_id: UUID, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_food(food_id)
    return {"msg": "Food deleted"}


@router.get("/orders")
async def list_orders(request: Request) -> list[OrderView]:
    """Return every order, newest first."""
    container: AppContainer = request.app.state.container
    return [
        OrderView.from_record(order)
        for order in container.checkout_service.list_orders()
    ]


@router.post("/chef")
async def add_chef(body: ChefRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    chef = container.chef_service.add_chef(
        name=body.name,
        email=body.email,
        password=body.password,
        specialty=body.specialty,
        rating=body.rating,
        load_counter=body.load_counter,
        image_url=body.image_url,
    )
    return {
        "msg": "Chef added successfully",
        "chef": ChefView.from_record(chef).model_dump(),
    }


@router.delete("/chef/{chef_id}")
async def delete_chef(chef_id: UUID, request: Request) -> dict[str, object]:
    """Delete a chef and reassign its orders to the least-loaded chefs."""
    container: AppContainer = request.app.state.container
    result = container.chef_service.remove_chef(chef_id)
    return {
        "msg": "Chef deleted and orders reassigned",
        "reassigned": [
            {"order_id": str(order_id), "chef_id": str(new_chef_id)}
            for order_id, new_chef_id in result.reassigned
        ],
    }


@router.get("/chefs")
async def list_chefs(request: Request) -> list[dict[str, str]]:
    container: AppContainer = request.app.state.container
    return [
        {"id": str(chef.id), "name": chef.name}
        for chef in container.chef_service.list_chefs()
    ]


@router.post("/notifications/flush")
async def flush_notifications(request: Request) -> dict[str, int]:
    """Retry emails queued while the network was unavailable."""
    container: AppContainer = request.app.state.container
    result = await container.notification_service.flush_queue()
    return {"sent": result.sent, "remaining": result.remaining}
