"""FastAPI application routes, middleware, and metrics."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError
from structlog.contextvars import bind_contextvars, clear_contextvars

from climate_dashboard.climate_data.extremes import ALL_TYPES, count_by_type, list_events
from climate_dashboard.climate_data.series import (
    UnsupportedTimeRangeError,
    get_series,
    summarize,
)
from climate_dashboard.geocoding.cities import suggest
from climate_dashboard.geocoding.resolver import resolve
from climate_dashboard.health.health_check import (
    is_geocoding_api_available,
    is_redis_available,
    is_weather_api_available,
)
from climate_dashboard.logging_config import logger
from climate_dashboard.metrics import REQUEST_COUNT, REQUEST_LATENCY
from climate_dashboard.models.climate import (
    ExtremesResponse,
    SeriesName,
    SeriesPoint,
    SeriesSummary,
    TimeRange,
)
from climate_dashboard.models.health import Dependencies, HealthResponse
from climate_dashboard.models.location import (
    Coordinate,
    GeocodeResponse,
    LocationMatch,
    MapClick,
)
from climate_dashboard.store.aggregation import AggregationStore, seed_major_cities
from climate_dashboard.upstream import (
    ExternalAPIError,
    InvalidCoordinateError,
    WeatherServiceError,
)
from climate_dashboard.weather_service.marker import Marker, MarkerUpdate, to_marker
from climate_dashboard.weather_service.weather import annotate

store = AggregationStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed the marker store with the major cities before serving."""
    await seed_major_cities(store)
    yield


app = FastAPI(lifespan=lifespan)


def to_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Validate raw map coordinates.

    Raises:
        InvalidCoordinateError: If either axis is out of range.
    """
    try:
        return Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError as exc:
        raise InvalidCoordinateError(
            f"Invalid coordinate: ({latitude}, {longitude})"
        ) from exc


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Log request details, attach a request ID, and record metrics.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI handler for the next middleware/app.

    Returns:
        The response produced by the downstream handler.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        duration_s = time.perf_counter() - start
        status_code = getattr(response, "status_code", 500)
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round(duration_s * 1000, 2),
        )
        REQUEST_COUNT.labels(
            method=request.method, path=request.url.path, status_code=status_code
        ).inc()
        REQUEST_LATENCY.labels(path=request.url.path).observe(duration_s)
        clear_contextvars()


@app.exception_handler(InvalidCoordinateError)
async def invalid_coordinate_handler(request: Request, exc: InvalidCoordinateError):
    """Convert out-of-range coordinates into 400 responses."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(UnsupportedTimeRangeError)
async def unsupported_time_range_handler(
    request: Request, exc: UnsupportedTimeRangeError
):
    """Reject time ranges the requested series does not offer."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ExternalAPIError)
async def external_api_error_handler(request: Request, exc: ExternalAPIError):
    """Convert external API errors into 502 responses."""
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(WeatherServiceError)
async def weather_service_error_handler(request: Request, exc: WeatherServiceError):
    """Convert unexpected service errors into 500 responses.

    The client shows a generic failure with a manual retry action.
    """
    logger.error("UNEXPECTED_SERVICE_ERROR", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Unexpected error"})


@app.get("/")
async def root():
    """Return a basic liveness response."""
    return {"message": "Climate dashboard API"}


@app.get("/climate/{series}")
async def climate_series(
    series: SeriesName, time_range: TimeRange = TimeRange.all
) -> list[SeriesPoint]:
    """Return one indicator table restricted to a time range."""
    return get_series(series.value, time_range)


@app.get("/climate/{series}/summary")
async def climate_summary(
    series: SeriesName, time_range: TimeRange = TimeRange.all
) -> SeriesSummary:
    """Return headline statistics and decade averages for an indicator."""
    return summarize(series.value, time_range)


@app.get("/extremes")
async def extremes(event_type: str = Query(ALL_TYPES, alias="type")) -> ExtremesResponse:
    """Return extreme events, optionally filtered by event type."""
    return ExtremesResponse(events=list_events(event_type), counts=count_by_type())


@app.get("/geocode")
async def geocode(q: str) -> GeocodeResponse:
    """Resolve a place name; an empty result carries a hint for the user."""
    matches = await resolve(q)
    message = None
    if not matches:
        message = f'No results found for "{q}". Try a different search term.'
    return GeocodeResponse(query=q, matches=matches, message=message)


@app.get("/suggestions")
async def suggestions(q: str = "") -> list[LocationMatch]:
    """Autocomplete a partially typed place against the curated cities."""
    return [city.to_match() for city in suggest(q)]


@app.get("/weather")
async def weather(lat: float, lon: float, name: str | None = None) -> Marker:
    """Annotate a coordinate without recording it on the map."""
    return to_marker(await annotate(to_coordinate(lat, lon), name))


@app.get("/markers")
async def markers() -> list[Marker]:
    """Return every marker in the order it was added."""
    return [to_marker(snapshot) for snapshot in store]


@app.post("/markers/search")
async def select_search_result(match: LocationMatch) -> MarkerUpdate:
    """Record the weather for a chosen search result, merging nearby markers."""
    coordinate = to_coordinate(match.latitude, match.longitude)
    ticket = store.next_ticket()
    snapshot = await annotate(coordinate, match.name)
    position = store.upsert_by_proximity(snapshot)
    return MarkerUpdate(
        marker=to_marker(snapshot),
        position=position,
        selected=store.select(snapshot, ticket),
    )


@app.post("/markers/click")
async def map_click(click: MapClick) -> MarkerUpdate:
    """Record the weather at a clicked point as a new marker."""
    coordinate = to_coordinate(click.latitude, click.longitude)
    ticket = store.next_ticket()
    snapshot = await annotate(coordinate)
    position = store.append(snapshot)
    return MarkerUpdate(
        marker=to_marker(snapshot),
        position=position,
        selected=store.select(snapshot, ticket),
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report API health and dependency availability.

    Returns:
        A HealthResponse containing dependency status.
    """
    return HealthResponse(
        status="ok",
        markers=len(store),
        dependencies=Dependencies(
            weather_api=await is_weather_api_available(),
            geocoding_api=await is_geocoding_api_available(),
            redis=await is_redis_available(),
        ),
    )


@app.get("/metrics")
async def metrics():
    """Expose Prometheus metrics for scraping."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
