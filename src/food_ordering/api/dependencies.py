"""Shared FastAPI dependencies for bearer-token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Header, HTTPException, Request, status

from food_ordering.services.accounts import SUBJECT_CHEF, SUBJECT_USER

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer


def container_of(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the token from an `Authorization: Bearer` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(
    request: Request, token: str | None = Depends(bearer_token)
) -> UUID:
    """Return the id of the authenticated customer."""
    container = container_of(request)
    user_id = container.token_verifier.verify(token, SUBJECT_USER)
    container.account_service.get_user(user_id)
    return user_id


async def require_chef(
    request: Request, token: str | None = Depends(bearer_token)
) -> UUID:
    """Return the id of the authenticated chef."""
    container = container_of(request)
    chef_id = container.token_verifier.verify(token, SUBJECT_CHEF)
    container.account_service.get_chef(chef_id)
    return chef_id


async def require_admin(request: Request, user_id: UUID = Depends(require_user)) -> UUID:
    """Ensure the authenticated customer is an admin."""
    user = container_of(request).account_service.get_user(user_id)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return user_id
