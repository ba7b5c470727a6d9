"""Kakao Local (maps) API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

RESTAURANT_GROUP_CODE = "FD6"


class KakaoLocalClient(Protocol):
    """Interface for Kakao Local search and geocoding."""

    async def search_address(self, query: str) -> dict[str, object]:
        """Geocode an address and return raw API data."""

    async def search_keyword(  # noqa: PLR0913
        self,
        query: str,
        *,
        category_group_code: str | None = None,
        x: str | None = None,
        y: str | None = None,
        radius: int | None = None,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        """Search places by keyword and return raw API data."""

    async def search_category(  # noqa: PLR0913
        self,
        category_group_code: str,
        *,
        x: str,
        y: str,
        radius: int,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        """Search places of a category group around a point."""

    async def coord_to_address(self, x: str, y: str) -> dict[str, object]:
        """Reverse geocode a coordinate and return raw API data."""


@dataclass
class HttpxKakaoLocalClient(KakaoLocalClient):
    """HTTPX-backed Kakao Local client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxKakaoLocalClient":
        """Create a Kakao client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_address(self, query: str) -> dict[str, object]:
        return await self._get("/search/address.json", {"query": query})

    async def search_keyword(  # noqa: PLR0913
        self,
        query: str,
        *,
        category_group_code: str | None = None,
        x: str | None = None,
        y: str | None = None,
        radius: int | None = None,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        params: dict[str, object] = {"query": query, "page": page, "size": size}
        if category_group_code:
            params["category_group_code"] = category_group_code
        if x is not None and y is not None:
            params.update({"x": x, "y": y, "sort": "distance"})
        if radius is not None:
            params["radius"] = radius
        return await self._get("/search/keyword.json", params)

    async def search_category(  # noqa: PLR0913
        self,
        category_group_code: str,
        *,
        x: str,
        y: str,
        radius: int,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        return await self._get(
            "/search/category.json",
            {
                "category_group_code": category_group_code,
                "x": x,
                "y": y,
                "radius": radius,
                "sort": "distance",
                "page": page,
                "size": size,
            },
        )

    async def coord_to_address(self, x: str, y: str) -> dict[str, object]:
        return await self._get("/geo/coord2address.json", {"x": x, "y": y})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object]) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            params=params,
            headers={"Authorization": f"KakaoAK {self.api_key}"},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()
