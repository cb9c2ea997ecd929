"""Nominatim geocoding client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from food_ordering.domain.errors import UpstreamUnavailableError


class GeocodingClient(Protocol):
    """Interface for place-name geocoding."""

    async def search(self, query: str) -> list[dict[str, object]]:
        """Return raw geocoding hits for a query, best first."""


@dataclass
class HttpxNominatimClient(GeocodingClient):
    """HTTPX-backed Nominatim client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, timeout_seconds: float = 5.0
    ) -> "HttpxNominatimClient":
        """Create a Nominatim client with a managed httpx session."""
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search(self, query: str) -> list[dict[str, object]]:
        """Search for a place and return at most one hit with address details."""
        try:
            response = await self.http_client.get(
                self.base_url,
                params={"q": query, "format": "json", "limit": 1, "addressdetails": 1},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailableError(f"Geocoding failed: {exc}") from exc
        if not isinstance(payload, list):
            return []
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
