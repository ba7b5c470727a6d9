"""Korea Meteorological Administration forecast API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class KmaClient(Protocol):
    """Interface for the KMA short-term forecast service."""

    async def get_ultra_short_forecast(
        self, nx: int, ny: int, base_date: str, base_time: str
    ) -> dict[str, object]:
        """Return the raw ultra-short forecast for a grid cell."""


@dataclass
class HttpxKmaClient(KmaClient):
    """HTTPX-backed KMA client."""

    service_key: str
    base_url: str
    http_client: httpx.AsyncClient
    rows: int = 60

    @classmethod
    def create(cls, service_key: str, base_url: str) -> "HttpxKmaClient":
        """Create a KMA client with a managed httpx session."""
        return cls(
            service_key=service_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def get_ultra_short_forecast(
        self, nx: int, ny: int, base_date: str, base_time: str
    ) -> dict[str, object]:
        """Fetch the ultra-short forecast (getUltraSrtFcst)."""
        url = f"{self.base_url}/getUltraSrtFcst"
        response = await self.http_client.get(
            url,
            params={
                "serviceKey": self.service_key,
                "numOfRows": self.rows,
                "pageNo": 1,
                "dataType": "JSON",
                "base_date": base_date,
                "base_time": base_time,
                "nx": nx,
                "ny": ny,
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
