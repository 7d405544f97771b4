"""Free-text place resolution over a curated list and three providers.

Providers are tried in order and the first non-empty answer wins. A failing
provider is logged and skipped, so ``resolve`` only ever returns a list.
"""

import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx

from climate_dashboard.config import (
    GEOCODE_LIMIT,
    NOMINATIM_BASE_URL,
    NOMINATIM_USER_AGENT,
    OPENWEATHER_API_KEY,
    OPENWEATHER_BASE_URL,
)
from climate_dashboard.geocoding.cities import find_curated
from climate_dashboard.logging_config import logger
from climate_dashboard.metrics import GEOCODE_LOOKUPS
from climate_dashboard.models.location import LocationMatch
from climate_dashboard.redis_cache.cache import geocode_cache
from climate_dashboard.upstream import WeatherServiceError, get_json, new_client

UNKNOWN_LOCATION = "Unknown Location"


class GeocodingError(WeatherServiceError):
    """Raised when a provider payload cannot be turned into matches."""
    pass


def extract_location_name(display_name: str | None) -> str:
    """Take the text before the first comma of a free-form address."""
    if not display_name:
        return UNKNOWN_LOCATION
    return display_name.split(",")[0].strip()


def extract_country(display_name: str | None) -> str:
    """Take the text after the last comma of a free-form address."""
    if not display_name:
        return ""
    return display_name.split(",")[-1].strip()


def _opaque_id() -> str:
    return uuid.uuid4().hex


def _parse_places(
    source: str, places, build: Callable[[dict], LocationMatch]
) -> list[LocationMatch]:
    try:
        return [build(place) for place in places]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise GeocodingError(f"{source} payload malformed") from exc


def _openweather_match(place: dict, query: str) -> LocationMatch:
    name = place.get("name") or query
    country = place.get("country") or ""
    state = place.get("state") or None
    return LocationMatch(
        id=_opaque_id(),
        name=name,
        country=country,
        state=state,
        latitude=place["lat"],
        longitude=place["lon"],
        display_name=f"{name}, {state}, {country}" if state else f"{name}, {country}",
    )


async def openweather_direct(client: httpx.AsyncClient, query: str) -> list[LocationMatch]:
    """Structured direct geocoding, strongest on small towns."""
    if not OPENWEATHER_API_KEY:
        return []
    places = await get_json(
        client,
        url=f"{OPENWEATHER_BASE_URL}/geo/1.0/direct",
        params={"q": query, "limit": GEOCODE_LIMIT, "appid": OPENWEATHER_API_KEY},
        event_prefix="GEOCODE_OPENWEATHER",
        log_context={"query": query},
        error_message="OpenWeatherMap geocoding failed",
    )
    return _parse_places(
        "openweather", places, lambda place: _openweather_match(place, query)
    )


async def _nominatim_search(
    client: httpx.AsyncClient, query: str, address_details: bool
) -> list[dict]:
    params = {"format": "json", "q": query, "limit": GEOCODE_LIMIT}
    if address_details:
        params["addressdetails"] = 1
    return await get_json(
        client,
        url=f"{NOMINATIM_BASE_URL}/search",
        params=params,
        headers={"User-Agent": NOMINATIM_USER_AGENT},
        event_prefix="GEOCODE_NOMINATIM",
        log_context={"query": query, "address_details": address_details},
        error_message="Nominatim geocoding failed",
    )


def _nominatim_match(place: dict, use_address: bool) -> LocationMatch:
    display_name = place.get("display_name") or ""
    name = place.get("name") or extract_location_name(display_name)
    address = place.get("address") if use_address else None
    if address:
        country = address.get("country") or ""
        state = address.get("state") or address.get("county") or None
    else:
        country = extract_country(display_name)
        state = None
    return LocationMatch(
        id=str(place.get("place_id") or _opaque_id()),
        name=name,
        country=country,
        state=state,
        latitude=float(place["lat"]),
        longitude=float(place["lon"]),
        display_name=display_name or f"{name}, {country}",
    )


async def nominatim_detailed(client: httpx.AsyncClient, query: str) -> list[LocationMatch]:
    """Nominatim search with the structured address breakdown."""
    places = await _nominatim_search(client, query, address_details=True)
    return _parse_places(
        "nominatim", places, lambda place: _nominatim_match(place, use_address=True)
    )


async def nominatim_plain(client: httpx.AsyncClient, query: str) -> list[LocationMatch]:
    """Nominatim search relying on the display name only."""
    places = await _nominatim_search(client, query, address_details=False)
    return _parse_places(
        "nominatim", places, lambda place: _nominatim_match(place, use_address=False)
    )


@dataclass(frozen=True)
class GeocodingProvider:
    name: str
    lookup: Callable[[httpx.AsyncClient, str], Awaitable[list[LocationMatch]]]


PROVIDERS = [
    GeocodingProvider("openweather", openweather_direct),
    GeocodingProvider("nominatim_detailed", nominatim_detailed),
    GeocodingProvider("nominatim_plain", nominatim_plain),
]


async def _try_provider(
    provider: GeocodingProvider, client: httpx.AsyncClient, query: str
) -> list[LocationMatch]:
    try:
        matches = await provider.lookup(client, query)
    except WeatherServiceError as exc:
        logger.warning(
            "GEOCODE_PROVIDER_FAILED",
            provider=provider.name,
            query=query,
            error=str(exc),
        )
        GEOCODE_LOOKUPS.labels(provider=provider.name, outcome="error").inc()
        return []
    outcome = "hit" if matches else "empty"
    GEOCODE_LOOKUPS.labels(provider=provider.name, outcome=outcome).inc()
    return matches


async def search_providers(
    query: str, client: httpx.AsyncClient, providers: list[GeocodingProvider]
) -> list[LocationMatch]:
    """Return the first non-empty provider answer, or an empty list."""
    for provider in providers:
        matches = await _try_provider(provider, client, query)
        if matches:
            logger.info(
                "GEOCODE_RESOLVED",
                provider=provider.name,
                query=query,
                matches=len(matches),
            )
            return matches
    logger.info("GEOCODE_NO_RESULTS", query=query)
    return []


async def resolve(
    query: str,
    client: httpx.AsyncClient | None = None,
    providers: list[GeocodingProvider] | None = None,
) -> list[LocationMatch]:
    """Resolve free text to zero or more named coordinates.

    Args:
        query: Place name typed by the user.
        client: Async client to reuse; a short-lived one is created otherwise.
        providers: Ordered provider strategies; defaults to PROVIDERS.

    Returns:
        Matching locations. An empty list means nothing was found.
    """
    if not query or not query.strip():
        return []

    if city := find_curated(query):
        GEOCODE_LOOKUPS.labels(provider="curated", outcome="hit").inc()
        return [city.to_match()]

    cache = geocode_cache()
    if cached := await cache.get_matches(query):
        logger.info("CACHED_GEOCODE_HIT", query=query)
        return cached

    providers = PROVIDERS if providers is None else providers
    if client is None:
        async with new_client() as owned:
            matches = await search_providers(query, owned, providers)
    else:
        matches = await search_providers(query, client, providers)

    if matches:
        await cache.save_matches(query, matches)
    return matches
