"""Customer signup, login and profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_ordering.api.dependencies import require_user
from food_ordering.api.schemas import LoginRequest, SignupRequest
from food_ordering.domain.views import UserView

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
async def signup(body: SignupRequest, request: Request) -> dict[str, str]:
    """Create an account and return a bearer token."""
    container: AppContainer = request.app.state.container
    token = container.account_service.signup(
        name=body.name,
        email=body.email,
        password=body.password,
        preferences=body.preferences,
    )
    return {"token": token}


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    return {"token": container.account_service.login(body.email, body.password)}


@router.get("/profile")
async def profile(request: Request, user_id: UUID = Depends(require_user)) -> UserView:
    """Return the caller's profile without credentials."""
    container: AppContainer = request.app.state.container
    return UserView.from_record(container.account_service.get_user(user_id))
