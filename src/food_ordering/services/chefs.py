"""Chef load balancing and chef administration."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import (
    InvalidInputError,
    NoChefsAvailableError,
    NotFoundError,
)
from food_ordering.domain.models import ChefRecord, NewOrder, OrderRecord
from food_ordering.services.accounts import hash_password
from food_ordering.services.unit_of_work import UnitOfWork, transaction

_logger = logging.getLogger(__name__)


class ChefRepository(Protocol):
    """Persistence interface for chefs."""

    def list_chefs(self) -> list[ChefRecord]:
        """Return all chefs in insertion order."""

    def get_chef(self, chef_id: UUID) -> ChefRecord | None:
        """Return a chef by id."""

    def get_by_email(self, email: str) -> ChefRecord | None:
        """Return a chef by login email."""

    def create_chef(self, payload: dict[str, object]) -> ChefRecord:
        """Create and return a chef."""

    def update_load(self, chef_id: UUID, load_counter: int) -> None:
        """Persist a chef's load counter."""

    def delete_chef(self, chef_id: UUID) -> None:
        """Delete a chef."""


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(self, order: NewOrder) -> OrderRecord:
        """Create and return an order."""

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id."""

    def list_by_user(self, user_id: UUID) -> list[OrderRecord]:
        """Return a user's orders, newest first."""

    def list_by_chef(self, chef_id: UUID) -> list[OrderRecord]:
        """Return the orders assigned to a chef, newest first."""

    def list_orders(self) -> list[OrderRecord]:
        """Return all orders, newest first."""

    def update_status(self, order_id: UUID, status: str) -> None:
        """Persist a new order status."""

    def reassign_chef(self, order_id: UUID, chef_id: UUID) -> None:
        """Point an order at another chef."""


@dataclass(frozen=True)
class ChefLoadBalancer:
    """Least-loaded chef selection with quantity-weighted load counters."""

    units_per_item: int = 30

    def pick_least_loaded(
        self, chefs: Iterable[ChefRecord], exclude: UUID | None = None
    ) -> ChefRecord:
        """Return the chef with the lowest load; ties go to the first seen."""
        best: ChefRecord | None = None
        for chef in chefs:
            if exclude is not None and chef.id == exclude:
                continue
            if best is None or chef.load_counter < best.load_counter:
                best = chef
        if best is None:
            raise NoChefsAvailableError()
        return best

    def apply_assignment(self, chef: ChefRecord, quantity: int) -> ChefRecord:
        """Return the chef with an order of `quantity` items added."""
        return replace(
            chef, load_counter=chef.load_counter + self.units_per_item * quantity
        )

    def apply_completion(self, chef: ChefRecord, quantity: int) -> ChefRecord:
        """Return the chef with an order of `quantity` items released."""
        return replace(
            chef,
            load_counter=max(0, chef.load_counter - self.units_per_item * quantity),
        )


@dataclass(frozen=True)
class ReassignmentResult:
    """Outcome of removing a chef."""

    removed_chef_id: UUID
    reassigned: list[tuple[UUID, UUID]]


@dataclass
class ChefService:
    """Chef lookups, registration and removal with order reassignment."""

    chef_repository: ChefRepository
    order_repository: OrderRepository
    unit_of_work: UnitOfWork
    balancer: ChefLoadBalancer

    def list_chefs(self) -> list[ChefRecord]:
        return self.chef_repository.list_chefs()

    def get_chef(self, chef_id: UUID) -> ChefRecord:
        chef = self.chef_repository.get_chef(chef_id)
        if chef is None:
            raise NotFoundError("Chef not found")
        return chef

    def list_orders(self, chef_id: UUID) -> list[OrderRecord]:
        """Return the orders assigned to a chef."""
        return self.order_repository.list_by_chef(chef_id)

    def add_chef(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password: str,
        specialty: str,
        rating: float = 0.0,
        load_counter: int = 0,
        image_url: str | None = None,
    ) -> ChefRecord:
        """Register a new chef account."""
        if not all(value.strip() for value in (name, email, password, specialty)):
            raise InvalidInputError(
                "Missing required fields: name, email, password and specialty"
            )
        if self.chef_repository.get_by_email(email.strip().lower()):
            raise InvalidInputError("Chef with this email already exists")
        return self.chef_repository.create_chef(
            {
                "name": name.strip(),
                "email": email.strip().lower(),
                "credential_hash": hash_password(password),
                "specialty": specialty.strip(),
                "rating": max(0.0, rating),
                "load_counter": max(0, load_counter),
                "image_url": image_url,
            }
        )

    def remove_chef(self, chef_id: UUID) -> ReassignmentResult:
        """Delete a chef, spreading its orders over the remaining chefs."""
        self.get_chef(chef_id)
        orders = self.order_repository.list_by_chef(chef_id)
        if orders and not _others(self.chef_repository.list_chefs(), chef_id):
            raise NoChefsAvailableError(
                "Cannot delete chef: no other chefs available to reassign orders"
            )

        reassigned: list[tuple[UUID, UUID]] = []
        with transaction(self.unit_of_work):
            for order in orders:
                target = self.balancer.pick_least_loaded(
                    self.chef_repository.list_chefs(), exclude=chef_id
                )
                updated = self.balancer.apply_assignment(target, order.total_quantity)
                self.order_repository.reassign_chef(order.id, target.id)
                self.chef_repository.update_load(target.id, updated.load_counter)
                reassigned.append((order.id, target.id))
                _logger.info(
                    "Reassigned order %s to chef %s (load %s)",
                    order.id,
                    target.id,
                    updated.load_counter,
                )
            self.chef_repository.delete_chef(chef_id)
        _logger.info("Deleted chef %s", chef_id)
        return ReassignmentResult(removed_chef_id=chef_id, reassigned=reassigned)


def _others(chefs: Sequence[ChefRecord], chef_id: UUID) -> list[ChefRecord]:
    return [chef for chef in chefs if chef.id != chef_id]
