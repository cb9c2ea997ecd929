"""Delivery location resolution with online and offline fallbacks."""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path

from food_ordering.adapters.nominatim_client import GeocodingClient
from food_ordering.adapters.osrm_client import RoutingClient
from food_ordering.adapters.reachability import ReachabilityProbe
from food_ordering.domain.errors import (
    NotFoundError,
    OutOfRegionError,
    UpstreamUnavailableError,
)
from food_ordering.domain.locations import (
    SOURCE_HAVERSINE,
    SOURCE_OFFLINE,
    SOURCE_ROUTED,
    BoundingBox,
    Coordinates,
    DatasetEntry,
    GeocodeResult,
    ResolvedLocation,
)

EARTH_RADIUS_KM = 6371.0
TAMIL_NADU_BOX = BoundingBox(min_lat=8.0, max_lat=13.5, min_lng=76.0, max_lng=80.5)
_SNAP_WARNING_METERS = 5000
_BUNDLED_DATASET = Path(__file__).resolve().parents[1] / "data" / "tamilnadu_locations.json"

_logger = logging.getLogger(__name__)


def haversine_km(origin: Coordinates, target: Coordinates) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(target.lat - origin.lat)
    d_lng = math.radians(target.lng - origin.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.lat))
        * math.cos(math.radians(target.lat))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def load_dataset(path: str | Path | None = None) -> dict[str, DatasetEntry]:
    """Load the offline place dataset keyed by lower-cased name."""
    raw = Path(path or _BUNDLED_DATASET).read_text(encoding="utf-8")
    entries: dict[str, DatasetEntry] = {}
    for row in json.loads(raw):
        entry = DatasetEntry(
            name=str(row["name"]),
            lat=float(row["lat"]),
            lng=float(row["lon"]),
            distance_km=float(row["distance_km"]),
        )
        entries[entry.name.strip().lower()] = entry
    return entries


@dataclass
class LocationResolver:
    """Resolve a place name to coordinates and a road distance to the kitchen."""

    geocoding_client: GeocodingClient
    routing_client: RoutingClient
    probe: ReachabilityProbe
    dataset: dict[str, DatasetEntry]
    origin: Coordinates
    region: str = "Tamil Nadu"
    country: str = "India"
    bounding_box: BoundingBox = TAMIL_NADU_BOX
    circuity_factor: float = 1.4

    async def resolve(self, place_name: str) -> ResolvedLocation:
        """Resolve a place, preferring live geocoding and routing."""
        if not await self.probe.is_online():
            _logger.info("Offline mode: resolving %s from dataset", place_name)
            return self.resolve_offline(place_name)
        try:
            hit = await self._geocode(place_name)
        except UpstreamUnavailableError as exc:
            _logger.warning("Geocoding unavailable, using dataset: %s", exc)
            return self.resolve_offline(place_name)
        self._check_region(place_name, hit)
        point = Coordinates(hit.lat, hit.lng)
        return await self._route(place_name, point)

    def resolve_offline(self, place_name: str) -> ResolvedLocation:
        """Look a place up in the static dataset."""
        entry = self.dataset.get(place_name.strip().lower())
        if entry is None:
            raise NotFoundError(f'Location "{place_name}" not found in local dataset')
        return ResolvedLocation(
            lat=entry.lat,
            lng=entry.lng,
            distance_km=entry.distance_km,
            source=SOURCE_OFFLINE,
        )

    async def _geocode(self, place_name: str) -> GeocodeResult:
        query = f"{place_name.strip()}, {self.region}, {self.country}"
        payload = await self.geocoding_client.search(query)
        if not payload:
            raise NotFoundError(f'No location found for "{place_name}" in {self.region}')
        first = payload[0]
        address = first.get("address") or {}
        try:
            result = GeocodeResult(
                lat=float(first["lat"]),
                lng=float(first["lon"]),
                region=address.get("state") if isinstance(address, dict) else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailableError("Malformed geocoding response") from exc
        _logger.info("Geocoded %s to %s,%s", place_name, result.lat, result.lng)
        return result

    def _check_region(self, place_name: str, hit: GeocodeResult) -> None:
        if not self.bounding_box.contains(hit.lat, hit.lng):
            _logger.info(
                "Coordinates outside region for %s: lat=%s lng=%s",
                place_name,
                hit.lat,
                hit.lng,
            )
            raise OutOfRegionError(f'Location "{place_name}" is outside {self.region}')
        if hit.region != self.region:
            _logger.info("Location %s resolved to region %s", place_name, hit.region)
            raise OutOfRegionError(f'Location "{place_name}" is not in {self.region}')

    async def _route(self, place_name: str, point: Coordinates) -> ResolvedLocation:
        try:
            payload = await self.routing_client.route(point, self.origin)
        except UpstreamUnavailableError as exc:
            _logger.warning("Routing failed for %s: %s", place_name, exc)
            return self._haversine(point)

        waypoints = payload.get("waypoints")
        if isinstance(waypoints, list) and any(
            _distance_of(waypoint) > _SNAP_WARNING_METERS for waypoint in waypoints
        ):
            _logger.warning("Coordinates far from routable roads for %s", place_name)

        distance_m = _route_distance(payload)
        if payload.get("code") != "Ok" or distance_m <= 0:
            _logger.info(
                "Routing returned invalid distance: code=%s distance=%s",
                payload.get("code"),
                distance_m,
            )
            return self._haversine(point)
        return ResolvedLocation(
            lat=point.lat,
            lng=point.lng,
            distance_km=distance_m / 1000,
            source=SOURCE_ROUTED,
        )

    def _haversine(self, point: Coordinates) -> ResolvedLocation:
        distance_km = haversine_km(point, self.origin) * self.circuity_factor
        _logger.info("Using haversine distance: %.2f km", distance_km)
        return ResolvedLocation(
            lat=point.lat,
            lng=point.lng,
            distance_km=distance_km,
            source=SOURCE_HAVERSINE,
        )


def _route_distance(payload: dict[str, object]) -> float:
    routes = payload.get("routes")
    if not isinstance(routes, list) or not routes:
        return 0.0
    return _distance_of(routes[0])


def _distance_of(leg: object) -> float:
    if not isinstance(leg, dict):
        return 0.0
    distance = leg.get("distance")
    if isinstance(distance, int | float):
        return float(distance)
    return 0.0
