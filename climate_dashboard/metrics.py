"""Prometheus collectors shared across the service."""

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request duration in seconds", ["path"]
)
SNAPSHOT_COUNT = Counter(
    "weather_snapshots_total", "Weather snapshots produced", ["source"]
)
GEOCODE_LOOKUPS = Counter(
    "geocode_lookups_total", "Geocoding lookups by provider", ["provider", "outcome"]
)
