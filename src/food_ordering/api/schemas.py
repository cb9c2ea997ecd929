"""Request bodies accepted by the HTTP API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    preferences: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class CartAddRequest(BaseModel):
    food_id: UUID
    quantity: int | None = None
    bespoke_note: str | None = None


class CartUpdateRequest(BaseModel):
    food_id: UUID
    quantity: int
    bespoke_note: str | None = None


class CartRemoveRequest(BaseModel):
    food_id: UUID
    bespoke_note: str | None = None


class CheckoutRequest(BaseModel):
    user_location: Any = None


class FoodRequest(BaseModel):
    name: str
    price: float | str
    stock_quantity: int | str
    tags: str | None = None
    bespoke_option: str | None = None
    image_url: str | None = None


class ChefRequest(BaseModel):
    name: str
    email: str
    password: str
    specialty: str
    rating: float = 0.0
    load_counter: int = 0
    image_url: str | None = None
