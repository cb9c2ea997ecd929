"""Read models returned by the API layer.

Persisted records are never serialized directly; these views are built from
them so that presentation-only fields stay out of storage.
"""

from datetime import datetime

from pydantic import BaseModel

from food_ordering.domain.models import (
    CartLine,
    ChefRecord,
    FoodRecord,
    OrderRecord,
    UserRecord,
)


class FoodView(BaseModel):
    id: str
    name: str
    price: float
    stock_quantity: int
    tags: list[str]
    image_url: str | None
    bespoke_option: str | None

    @classmethod
    def from_record(cls, food: FoodRecord) -> "FoodView":
        return cls(
            id=str(food.id),
            name=food.name,
            price=food.price,
            stock_quantity=food.stock_quantity,
            tags=list(food.tags),
            image_url=food.image_url,
            bespoke_option=food.bespoke_option,
        )


class ChefView(BaseModel):
    id: str
    name: str
    specialty: str
    rating: float
    image_url: str | None

    @classmethod
    def from_record(cls, chef: ChefRecord) -> "ChefView":
        return cls(
            id=str(chef.id),
            name=chef.name,
            specialty=chef.specialty,
            rating=chef.rating,
            image_url=chef.image_url,
        )


class ChefProfileView(ChefView):
    email: str
    load_counter: int

    @classmethod
    def from_record(cls, chef: ChefRecord) -> "ChefProfileView":
        return cls(
            id=str(chef.id),
            name=chef.name,
            specialty=chef.specialty,
            rating=chef.rating,
            image_url=chef.image_url,
            email=chef.email,
            load_counter=chef.load_counter,
        )


class UserView(BaseModel):
    id: str
    name: str
    email: str
    loyalty_points: int
    is_admin: bool
    preferences: list[str]

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserView":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            loyalty_points=user.loyalty_points,
            is_admin=user.is_admin,
            preferences=list(user.preferences),
        )


class CartLineView(BaseModel):
    food_id: str
    quantity: int
    note: str | None
    food: FoodView | None


class CartView(BaseModel):
    user_id: str
    items: list[CartLineView]

    @classmethod
    def build(
        cls,
        user_id: str,
        lines: list[CartLine],
        foods: dict[str, FoodRecord],
    ) -> "CartView":
        items = []
        for line in lines:
            food = foods.get(str(line.food_id))
            items.append(
                CartLineView(
                    food_id=str(line.food_id),
                    quantity=line.quantity,
                    note=line.note,
                    food=FoodView.from_record(food) if food else None,
                )
            )
        return cls(user_id=user_id, items=items)


class OrderItemView(BaseModel):
    food_id: str
    name: str
    price: float
    quantity: int
    note: str | None


class OrderView(BaseModel):
    id: str
    user_id: str
    chef_id: str
    items: list[OrderItemView]
    total: float
    delivery_fee: float
    status: str
    payment_status: str
    user_location: str
    created_at: datetime

    @classmethod
    def from_record(cls, order: OrderRecord) -> "OrderView":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            chef_id=str(order.chef_id),
            items=[
                OrderItemView(
                    food_id=str(item.food_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    note=item.note,
                )
                for item in order.items
            ],
            total=order.total,
            delivery_fee=order.delivery_fee,
            status=order.status,
            payment_status=order.payment_status,
            user_location=order.user_location,
            created_at=order.created_at,
        )
