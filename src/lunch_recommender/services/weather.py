"""Weather discretization and current-weather lookup."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import httpx

from lunch_recommender.adapters.kma_client import KmaClient
from lunch_recommender.domain.weather import (
    GridPoint,
    WeatherCondition,
    WeatherSnapshot,
)
from lunch_recommender.services.cache import Cache

_logger = logging.getLogger(__name__)

_KST = ZoneInfo("Asia/Seoul")

# PTY (precipitation type): 0 none, 1 rain, 2 rain/snow, 3 snow, 4 shower.
_RAIN_PTY = {1, 4}
_SNOW_PTY = {2, 3}
# SKY: 1 clear, 3 mostly cloudy, 4 overcast.
_CLEAR_SKY = 1
HOT_THRESHOLD_C = 28
COLD_THRESHOLD_C = 5

DEFAULT_SKY = 1
DEFAULT_PTY = 0
DEFAULT_TEMPERATURE_C = 20.0

# Lambert conformal conic projection used by the KMA forecast grid.
_EARTH_RADIUS_KM = 6371.00877
_GRID_KM = 5.0
_STANDARD_LAT_1 = 30.0
_STANDARD_LAT_2 = 60.0
_ORIGIN_LON = 126.0
_ORIGIN_LAT = 38.0
_ORIGIN_X = 43
_ORIGIN_Y = 136

# Forecasts are announced at these hours and are available from HH:10.
_BASE_HOURS = (2, 5, 8, 11, 14, 17, 20, 23)
_PUBLISH_DELAY_MINUTES = 10

_DESCRIPTIONS: dict[WeatherCondition, str] = {
    WeatherCondition.RAIN: "비가 오고 있어요 ({temperature}°C)",
    WeatherCondition.SNOW: "눈이 오고 있어요 ({temperature}°C)",
    WeatherCondition.HOT: "오늘 덥네요! ({temperature}°C)",
    WeatherCondition.COLD: "오늘 춥네요 ({temperature}°C)",
    WeatherCondition.CLEAR: "맑은 날씨예요 ({temperature}°C)",
    WeatherCondition.CLOUDY: "구름이 있는 날씨예요 ({temperature}°C)",
}

_RECOMMENDATIONS: dict[WeatherCondition, list[str]] = {
    WeatherCondition.RAIN: ["국밥", "칼국수", "수제비", "라면", "우동", "부침개"],
    WeatherCondition.SNOW: ["국밥", "설렁탕", "순두부찌개", "김치찌개", "매운탕"],
    WeatherCondition.HOT: ["냉면", "콩국수", "냉모밀", "샐러드", "회", "초밥"],
    WeatherCondition.COLD: ["국밥", "설렁탕", "갈비탕", "순대국", "찌개류"],
    WeatherCondition.CLEAR: ["모든 음식이 좋아요!"],
    WeatherCondition.CLOUDY: ["모든 음식이 좋아요!"],
}


@dataclass(frozen=True)
class CachedForecast:
    """Forecast stored per grid cell; `base` is the announcement it came from."""

    base: str
    weather: WeatherSnapshot


@dataclass(frozen=True)
class WeatherReport:
    """Weather lookup result with where it came from."""

    weather: WeatherSnapshot
    source: str
    grid: GridPoint | None = None
    error: str | None = None


def determine_condition(sky: int, pty: int, temperature: float) -> WeatherCondition:
    """Discretize KMA sky/precipitation codes and temperature."""
    if pty in _RAIN_PTY:
        return WeatherCondition.RAIN
    if pty in _SNOW_PTY:
        return WeatherCondition.SNOW
    if temperature >= HOT_THRESHOLD_C:
        return WeatherCondition.HOT
    if temperature <= COLD_THRESHOLD_C:
        return WeatherCondition.COLD
    if sky == _CLEAR_SKY:
        return WeatherCondition.CLEAR
    return WeatherCondition.CLOUDY


def describe_weather(condition: WeatherCondition, temperature: float) -> str:
    return _DESCRIPTIONS[condition].format(temperature=_format_temperature(temperature))


def weather_recommendations(condition: WeatherCondition) -> list[str]:
    return list(_RECOMMENDATIONS[condition])


def create_weather_snapshot(sky: int, pty: int, temperature: float) -> WeatherSnapshot:
    """Build a weather snapshot from raw forecast values."""
    condition = determine_condition(sky, pty, temperature)
    return WeatherSnapshot(
        condition=condition,
        temperature=temperature,
        description=describe_weather(condition, temperature),
        recommendations=weather_recommendations(condition),
    )


def default_weather() -> WeatherSnapshot:
    return create_weather_snapshot(DEFAULT_SKY, DEFAULT_PTY, DEFAULT_TEMPERATURE_C)


def convert_to_grid(lat: float, lng: float) -> GridPoint:
    """Convert WGS84 latitude/longitude to a KMA forecast grid cell."""
    degrad = math.pi / 180.0
    re = _EARTH_RADIUS_KM / _GRID_KM
    slat1 = _STANDARD_LAT_1 * degrad
    slat2 = _STANDARD_LAT_2 * degrad
    olon = _ORIGIN_LON * degrad
    olat = _ORIGIN_LAT * degrad

    sn = math.tan(math.pi * 0.25 + slat2 * 0.5) / math.tan(math.pi * 0.25 + slat1 * 0.5)
    sn = math.log(math.cos(slat1) / math.cos(slat2)) / math.log(sn)
    sf = math.tan(math.pi * 0.25 + slat1 * 0.5)
    sf = (sf**sn) * math.cos(slat1) / sn
    ro = math.tan(math.pi * 0.25 + olat * 0.5)
    ro = re * sf / (ro**sn)

    ra = math.tan(math.pi * 0.25 + lat * degrad * 0.5)
    ra = re * sf / (ra**sn)
    theta = lng * degrad - olon
    if theta > math.pi:
        theta -= 2.0 * math.pi
    if theta < -math.pi:
        theta += 2.0 * math.pi
    theta *= sn

    nx = math.floor(ra * math.sin(theta) + _ORIGIN_X + 0.5)
    ny = math.floor(ro - ra * math.cos(theta) + _ORIGIN_Y + 0.5)
    return GridPoint(nx=nx, ny=ny)


def forecast_base_time(now: datetime) -> tuple[str, str]:
    """Return the latest published (base_date, base_time) in Korean time.

    Naive datetimes are read as Korean local time.
    """
    local = now.astimezone(_KST) if now.tzinfo else now.replace(tzinfo=_KST)
    base_day = local.date()
    base_hour = _BASE_HOURS[-1]
    for hour in reversed(_BASE_HOURS):
        if local.hour > hour or (
            local.hour == hour and local.minute >= _PUBLISH_DELAY_MINUTES
        ):
            base_hour = hour
            break

    first = _BASE_HOURS[0]
    if local.hour < first or (
        local.hour == first and local.minute < _PUBLISH_DELAY_MINUTES
    ):
        base_day -= timedelta(days=1)
        base_hour = _BASE_HOURS[-1]

    return base_day.strftime("%Y%m%d"), f"{base_hour:02d}00"


@dataclass
class WeatherService:
    """Looks up current weather from KMA with caching and fallbacks."""

    client: KmaClient | None
    cache: Cache
    cache_ttl_seconds: int = 600

    async def get_current(
        self, lat: float, lng: float, now: datetime | None = None
    ) -> WeatherReport:
        """Return current weather for a location.

        Without a configured KMA client the default clear 20°C weather is
        returned. KMA errors never propagate: the default weather is
        returned with the failure recorded on the report.
        """
        if self.client is None:
            _logger.warning("KMA API key is not set; returning default weather")
            return WeatherReport(weather=default_weather(), source="default")

        grid = convert_to_grid(lat, lng)
        base_date, base_time = forecast_base_time(now or datetime.now(tz=UTC))
        cache_key = f"kma:{grid.nx}:{grid.ny}"
        base = f"{base_date}{base_time}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, CachedForecast) and cached.base == base:
            return WeatherReport(weather=cached.weather, source="kma", grid=grid)

        try:
            payload = await self.client.get_ultra_short_forecast(
                nx=grid.nx, ny=grid.ny, base_date=base_date, base_time=base_time
            )
            response = payload.get("response") or {}
            header = response.get("header") or {}
            if header.get("resultCode") != "00":
                message = str(header.get("resultMsg") or "unknown KMA error")
                _logger.warning("KMA forecast error: %s", message)
                return WeatherReport(
                    weather=default_weather(), source="fallback", error=message
                )
            body = response.get("body") or {}
            items = (body.get("items") or {}).get("item") or []
            snapshot = _snapshot_from_items(items)
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
            _logger.exception(
                "KMA forecast lookup failed",
                extra={"nx": grid.nx, "ny": grid.ny},
            )
            return WeatherReport(
                weather=default_weather(), source="error", error=str(exc)
            )

        self.cache.set(
            cache_key,
            CachedForecast(base=base, weather=snapshot),
            ttl_seconds=self.cache_ttl_seconds,
        )
        return WeatherReport(weather=snapshot, source="kma", grid=grid)


def _snapshot_from_items(items: list[dict[str, object]]) -> WeatherSnapshot:
    """Build a snapshot from forecast items; later values win per category."""
    temperature = DEFAULT_TEMPERATURE_C
    sky = DEFAULT_SKY
    pty = DEFAULT_PTY
    for item in items:
        category = item.get("category")
        value = str(item.get("fcstValue", ""))
        if category == "T1H":
            temperature = float(value)
        elif category == "SKY":
            sky = int(value)
        elif category == "PTY":
            pty = int(value)
    return create_weather_snapshot(sky, pty, temperature)


def _format_temperature(temperature: float) -> str:
    if float(temperature).is_integer():
        return str(int(temperature))
    return str(temperature)
