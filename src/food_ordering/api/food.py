"""Public catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from food_ordering.domain.views import FoodView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("")
async def list_foods(request: Request) -> list[FoodView]:
    container: AppContainer = request.app.state.container
    return [FoodView.from_record(food) for food in container.catalog_service.list_foods()]


@router.get("/{food_id}")
async def get_food(food_id: UUID, request: Request) -> FoodView:
    container: AppContainer = request.app.state.container
    return FoodView.from_record(container.catalog_service.get_food(food_id))
