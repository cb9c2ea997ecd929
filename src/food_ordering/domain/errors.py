"""Error taxonomy shared by services and the API layer."""


class OrderingError(Exception):
    """Base error carrying a stable kind."""

    kind = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(OrderingError):
    kind = "invalid_input"


class NotFoundError(OrderingError):
    kind = "not_found"


class OutOfRegionError(OrderingError):
    kind = "out_of_region"


class EmptyCartError(OrderingError):
    kind = "empty_cart"

    def __init__(self, detail: str = "Cart is empty") -> None:
        super().__init__(detail)


class InsufficientStockError(OrderingError):
    kind = "insufficient_stock"

    def __init__(self, food_name: str) -> None:
        super().__init__(f"Insufficient quantity available for {food_name}")
        self.food_name = food_name


class NoChefsAvailableError(OrderingError):
    kind = "no_chefs_available"

    def __init__(self, detail: str = "No chefs available") -> None:
        super().__init__(detail)


class ForbiddenError(OrderingError):
    kind = "forbidden"


class InvalidStateError(OrderingError):
    kind = "invalid_state"


class UnauthenticatedError(OrderingError):
    kind = "unauthenticated"


class UpstreamUnavailableError(OrderingError):
    kind = "upstream_unavailable"


class DeliveryError(UpstreamUnavailableError):
    """Raised when an outbound email could not be delivered."""


class PersistenceError(OrderingError):
    kind = "persistence_error"
