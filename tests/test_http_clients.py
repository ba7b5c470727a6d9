"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from lunch_recommender.adapters.kakao_local_client import HttpxKakaoLocalClient
from lunch_recommender.adapters.kma_client import HttpxKmaClient

KAKAO_BASE_URL = "https://dapi.kakao.com/v2/local"
KMA_BASE_URL = "http://apis.data.go.kr/1360000/VilageFcstInfoService_2.0"


def test_kakao_client_sends_auth_header_and_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"documents": [{"id": "1"}], "meta": {"is_end": True}}
        )

    transport = httpx.MockTransport(handler)
    client = HttpxKakaoLocalClient(
        api_key="kakao-key",
        base_url=KAKAO_BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )

    data = asyncio.run(
        client.search_category("FD6", x="127.0", y="37.5", radius=500, page=2)
    )

    assert data["documents"] == [{"id": "1"}]
    request = seen[0]
    assert request.url.path == "/v2/local/search/category.json"
    assert request.headers["Authorization"] == "KakaoAK kakao-key"
    assert request.url.params["category_group_code"] == "FD6"
    assert request.url.params["radius"] == "500"
    assert request.url.params["page"] == "2"
    assert request.url.params["sort"] == "distance"


def test_kakao_client_endpoints() -> None:
    seen_paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        return httpx.Response(200, json={"documents": []})

    transport = httpx.MockTransport(handler)
    client = HttpxKakaoLocalClient(
        api_key="kakao-key",
        base_url=KAKAO_BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )

    async def run() -> None:
        await client.search_address("서울 중구 세종대로 110")
        await client.search_keyword("국밥", category_group_code="FD6")
        await client.coord_to_address("126.978", "37.5665")
        await client.close()

    asyncio.run(run())

    assert seen_paths == [
        "/v2/local/search/address.json",
        "/v2/local/search/keyword.json",
        "/v2/local/geo/coord2address.json",
    ]


def test_kakao_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "unauthorized"})

    transport = httpx.MockTransport(handler)
    client = HttpxKakaoLocalClient(
        api_key="bad-key",
        base_url=KAKAO_BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_address("서울"))


def test_kma_client_requests_ultra_short_forecast() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"response": {"header": {"resultCode": "00", "resultMsg": "OK"}}},
        )

    transport = httpx.MockTransport(handler)
    client = HttpxKmaClient(
        service_key="kma-key",
        base_url=KMA_BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )

    data = asyncio.run(
        client.get_ultra_short_forecast(
            nx=60, ny=127, base_date="20261018", base_time="1100"
        )
    )

    assert data["response"]["header"]["resultCode"] == "00"
    params = seen[0].url.params
    assert seen[0].url.path.endswith("/getUltraSrtFcst")
    assert params["serviceKey"] == "kma-key"
    assert params["dataType"] == "JSON"
    assert params["base_date"] == "20261018"
    assert params["base_time"] == "1100"
    assert params["nx"] == "60"
    assert params["ny"] == "127"
    asyncio.run(client.close())
