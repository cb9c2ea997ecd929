"""Location domain models."""

from dataclasses import dataclass

SOURCE_ROUTED = "routed"
SOURCE_HAVERSINE = "haversine"
SOURCE_OFFLINE = "offline"


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class DatasetEntry:
    """Static place entry used when the network is unavailable."""

    name: str
    lat: float
    lng: float
    distance_km: float


@dataclass(frozen=True)
class GeocodeResult:
    """First geocoding hit for a place name."""

    lat: float
    lng: float
    region: str | None


@dataclass(frozen=True)
class BoundingBox:
    """Hard bounding box for the service region."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class ResolvedLocation:
    """Resolved coordinates with a road distance to the kitchen."""

    lat: float
    lng: float
    distance_km: float
    source: str
