"""Health checks for Redis and the upstream weather and geocoding APIs."""

import httpx
from redis.exceptions import RedisError

from climate_dashboard.config import (
    HTTP_TIMEOUT_S,
    NOMINATIM_BASE_URL,
    NOMINATIM_USER_AGENT,
    OPENWEATHER_API_KEY,
    OPENWEATHER_BASE_URL,
)
from climate_dashboard.logging_config import logger
from climate_dashboard.models.health import ServiceStatus
from climate_dashboard.redis_cache.cache import redis_client


def _status(available: bool) -> ServiceStatus:
    return ServiceStatus.available if available else ServiceStatus.not_available


async def is_redis_available() -> ServiceStatus:
    """Check Redis connectivity.

    Returns:
        ServiceStatus.available when Redis responds, else not_available.
    """
    try:
        await redis_client.ping()
        logger.info("REDIS_CONNECTED")
        return ServiceStatus.available
    except RedisError as exc:
        logger.error("REDIS_UNAVAILABLE", error=str(exc))
        return ServiceStatus.not_available


async def is_weather_api_available() -> ServiceStatus:
    """Check the live weather API; without a key it is reported unavailable."""
    if not OPENWEATHER_API_KEY:
        return ServiceStatus.not_available
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_S) as client:
            response = await client.get(
                f"{OPENWEATHER_BASE_URL}/data/2.5/weather",
                params={
                    "lat": 51.5,
                    "lon": 0.12,
                    "units": "metric",
                    "appid": OPENWEATHER_API_KEY,
                },
            )
            return _status(response.status_code == 200 and "main" in response.json())
    except (httpx.HTTPError, ValueError):
        return ServiceStatus.not_available


async def is_geocoding_api_available() -> ServiceStatus:
    """Check that the open geocoder answers a trivial search."""
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_S) as client:
            response = await client.get(
                f"{NOMINATIM_BASE_URL}/search",
                params={"format": "json", "q": "London", "limit": 1},
                headers={"User-Agent": NOMINATIM_USER_AGENT},
            )
            return _status(response.status_code == 200)
    except httpx.HTTPError:
        return ServiceStatus.not_available
