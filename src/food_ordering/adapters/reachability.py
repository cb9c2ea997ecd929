"""Network reachability probe."""

import logging
import secrets
from dataclasses import dataclass
from typing import Protocol

import httpx

_logger = logging.getLogger(__name__)


class ReachabilityProbe(Protocol):
    """Answers whether outbound network calls are currently possible."""

    async def is_online(self) -> bool:
        """Return true when at least one well-known endpoint responds."""


@dataclass
class HttpxReachabilityProbe(ReachabilityProbe):
    """Probe that requests well-known endpoints with a short timeout."""

    endpoints: list[str]
    http_client: httpx.AsyncClient
    timeout_seconds: float = 3.0

    @classmethod
    def create(
        cls, endpoints: list[str], timeout_seconds: float = 3.0
    ) -> "HttpxReachabilityProbe":
        """Create a probe with a managed httpx session."""
        return cls(
            endpoints=endpoints,
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout_seconds=timeout_seconds,
        )

    async def is_online(self) -> bool:
        """Try each endpoint in order; the first 2xx answer wins."""
        for endpoint in self.endpoints:
            try:
                response = await self.http_client.get(
                    endpoint,
                    params={"cache_bust": secrets.token_hex(4)},
                    headers={"Cache-Control": "no-cache"},
                    timeout=self.timeout_seconds,
                )
            except httpx.HTTPError as exc:
                _logger.info("Reachability: %s failed: %s", endpoint, exc)
                continue
            if response.is_success:
                return True
            _logger.info(
                "Reachability: %s answered %s", endpoint, response.status_code
            )
        _logger.warning("Reachability: all endpoints failed, assuming offline")
        return False

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
