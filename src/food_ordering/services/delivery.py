"""Delivery fee computation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeliveryFeeCalculator:
    """Distance-based delivery fee with a floor."""

    rate_per_km: float = 42.5
    minimum_fee: float = 50.0

    def fee(self, distance_km: float) -> float:
        """Return the fee for a road distance in kilometres."""
        return max(distance_km * self.rate_per_km, self.minimum_fee)
