"""Checkout and order completion workflows."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from food_ordering.domain.errors import (
    EmptyCartError,
    ForbiddenError,
    InsufficientStockError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UpstreamUnavailableError,
)
from food_ordering.domain.models import (
    ORDER_OUT_FOR_DELIVERY,
    ORDER_PENDING,
    CartLine,
    FoodRecord,
    NewOrder,
    OrderItem,
    OrderRecord,
)
from food_ordering.domain.notifications import OutboundEmail
from food_ordering.services.accounts import UserRepository
from food_ordering.services.cart import CartRepository
from food_ordering.services.catalog import FoodRepository
from food_ordering.services.chefs import (
    ChefLoadBalancer,
    ChefRepository,
    OrderRepository,
)
from food_ordering.services.delivery import DeliveryFeeCalculator
from food_ordering.services.locations import LocationResolver
from food_ordering.services.notifications import (
    NotificationService,
    render_out_for_delivery,
    render_payment_confirmation,
)
from food_ordering.services.unit_of_work import UnitOfWork, transaction

NOTIFICATION_FAILED = "failed"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    """Created order plus the delivery details used to price it."""

    order: OrderRecord
    delivery_fee: float
    lat: float
    lng: float
    notification: str


@dataclass
class CheckoutService:
    """Turns a cart into an order and moves orders through their lifecycle."""

    location_resolver: LocationResolver
    fee_calculator: DeliveryFeeCalculator
    balancer: ChefLoadBalancer
    cart_repository: CartRepository
    food_repository: FoodRepository
    chef_repository: ChefRepository
    order_repository: OrderRepository
    user_repository: UserRepository
    unit_of_work: UnitOfWork
    notification_service: NotificationService

    async def checkout(self, user_id: UUID, user_location: object) -> CheckoutResult:
        """Price, persist and announce an order for the user's cart."""
        if not isinstance(user_location, str) or not user_location.strip():
            raise InvalidInputError(
                "User location (city/village name) is required"
            )
        place = user_location.strip()
        location = await self.location_resolver.resolve(place)
        delivery_fee = self.fee_calculator.fee(location.distance_km)

        cart = self.cart_repository.get_cart(user_id)
        if cart is None or not cart.items:
            raise EmptyCartError()
        items = self._snapshot_items(cart.items)
        food_total = sum(item.price * item.quantity for item in items)
        total_quantity = sum(item.quantity for item in items)
        total = food_total + delivery_fee

        user = self.user_repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        chef = self.balancer.pick_least_loaded(self.chef_repository.list_chefs())

        with transaction(self.unit_of_work):
            order = self.order_repository.create_order(
                NewOrder(
                    user_id=user_id,
                    chef_id=chef.id,
                    items=items,
                    total=total,
                    delivery_fee=delivery_fee,
                    user_location=place,
                    created_at=datetime.now(tz=UTC),
                )
            )
            for line in cart.items:
                self._take_stock(line)
            self.cart_repository.delete_cart(user_id)
            assigned = self.balancer.apply_assignment(chef, total_quantity)
            self.chef_repository.update_load(chef.id, assigned.load_counter)
            self.user_repository.set_loyalty_points(
                user_id, user.loyalty_points + math.floor(total / 100)
            )
        _logger.info(
            "Order %s created for user %s, chef %s load %s",
            order.id,
            user_id,
            chef.id,
            assigned.load_counter,
        )

        notification = await self._notify(
            render_payment_confirmation(user, order, food_total)
        )
        return CheckoutResult(
            order=order,
            delivery_fee=delivery_fee,
            lat=location.lat,
            lng=location.lng,
            notification=notification,
        )

    async def complete_order(self, chef_id: UUID, order_id: UUID) -> OrderRecord:
        """Mark a pending order as out for delivery and release chef load."""
        order = self.order_repository.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        if order.chef_id != chef_id:
            raise ForbiddenError("Not authorized")
        if order.status != ORDER_PENDING:
            raise InvalidStateError("Order is not pending")

        with transaction(self.unit_of_work):
            self.order_repository.update_status(order.id, ORDER_OUT_FOR_DELIVERY)
            chef = self.chef_repository.get_chef(chef_id)
            if chef is not None:
                released = self.balancer.apply_completion(chef, order.total_quantity)
                self.chef_repository.update_load(chef.id, released.load_counter)
        updated = replace(order, status=ORDER_OUT_FOR_DELIVERY)

        user = self.user_repository.get_user(order.user_id)
        if user is not None:
            await self._notify(render_out_for_delivery(user, updated))
        return updated

    def order_history(self, user_id: UUID) -> list[OrderRecord]:
        """Return a user's orders, newest first."""
        return self.order_repository.list_by_user(user_id)

    def list_orders(self) -> list[OrderRecord]:
        return self.order_repository.list_orders()

    def _snapshot_items(self, lines: list[CartLine]) -> list[OrderItem]:
        foods = {
            food.id: food
            for food in self.food_repository.get_foods([line.food_id for line in lines])
        }
        items = []
        for line in lines:
            food = foods.get(line.food_id)
            if food is None:
                raise NotFoundError(f"Food item {line.food_id} not found")
            items.append(
                OrderItem(
                    food_id=food.id,
                    name=food.name,
                    price=food.price,
                    quantity=line.quantity,
                    note=line.note,
                )
            )
        return items

    def _take_stock(self, line: CartLine) -> FoodRecord:
        food = self.food_repository.get_food(line.food_id)
        if food is None:
            raise NotFoundError(f"Food item {line.food_id} not found")
        if food.stock_quantity < line.quantity:
            raise InsufficientStockError(food.name)
        remaining = food.stock_quantity - line.quantity
        self.food_repository.set_stock(food.id, remaining)
        return replace(food, stock_quantity=remaining)

    async def _notify(self, message: OutboundEmail) -> str:
        try:
            return await self.notification_service.dispatch(message)
        except (UpstreamUnavailableError, OSError):
            _logger.exception("Could not deliver or queue email to %s", message.address)
            return NOTIFICATION_FAILED
