"""Shared error types and the JSON GET helper used for third-party lookups."""

import httpx

from climate_dashboard.config import HTTP_TIMEOUT_S
from climate_dashboard.logging_config import logger


class WeatherServiceError(Exception):
    """Base exception for dashboard service failures."""
    pass


class ExternalAPIError(WeatherServiceError):
    """Raised when a third-party API fails or returns an unusable payload."""
    pass


class InvalidCoordinateError(WeatherServiceError):
    """Raised when a coordinate is outside the valid latitude/longitude range."""
    pass


def new_client(timeout: float = HTTP_TIMEOUT_S) -> httpx.AsyncClient:
    """Build the async client used for all upstream calls."""
    return httpx.AsyncClient(timeout=timeout)


async def get_json(
    client: httpx.AsyncClient,
    *,
    url: str,
    params: dict,
    event_prefix: str,
    log_context: dict,
    error_message: str,
    headers: dict | None = None,
):
    """Execute a single HTTP GET and decode its JSON body.

    Args:
        client: Async client to send the request with.
        url: The URL to call.
        params: Query parameters to include in the request.
        event_prefix: Log event prefix for consistent names.
        log_context: Extra log fields for all events.
        error_message: Error message to wrap in ExternalAPIError.
        headers: Optional request headers.

    Returns:
        The decoded JSON payload.

    Raises:
        ExternalAPIError: On transport errors, non-2xx statuses or invalid JSON.
    """
    try:
        response = await client.get(url, params=params, headers=headers)
        logger.info(
            f"{event_prefix}_RESPONSE", **log_context, status=response.status_code
        )
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        logger.error(
            f"{event_prefix}_BAD_STATUS",
            **log_context,
            status=exc.response.status_code,
        )
        raise ExternalAPIError(error_message) from exc
    except httpx.RequestError as exc:
        logger.error(f"{event_prefix}_REQUEST_FAILED", **log_context, error=str(exc))
        raise ExternalAPIError(error_message) from exc
    except ValueError as exc:
        logger.error(f"{event_prefix}_BAD_PAYLOAD", **log_context, error=str(exc))
        raise ExternalAPIError(error_message) from exc
