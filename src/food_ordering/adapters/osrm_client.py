"""OSRM road routing client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from food_ordering.domain.errors import UpstreamUnavailableError
from food_ordering.domain.locations import Coordinates


class RoutingClient(Protocol):
    """Interface for road routing between two points."""

    async def route(
        self, source: Coordinates, destination: Coordinates
    ) -> dict[str, object]:
        """Return the raw routing response."""


@dataclass
class HttpxOsrmClient(RoutingClient):
    """HTTPX-backed OSRM client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float = 5.0) -> "HttpxOsrmClient":
        """Create an OSRM client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def route(
        self, source: Coordinates, destination: Coordinates
    ) -> dict[str, object]:
        """Fetch a driving route; OSRM expects lng,lat pairs."""
        coords = f"{source.lng},{source.lat};{destination.lng},{destination.lat}"
        try:
            response = await self.http_client.get(
                f"{self.base_url}/{coords}",
                params={"overview": "false"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailableError(f"Routing failed: {exc}") from exc
        if not isinstance(payload, dict):
            raise UpstreamUnavailableError("Routing returned an unexpected payload")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
