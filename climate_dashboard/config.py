"""Environment-driven settings for upstream APIs and the geocode cache."""

import os

OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.getenv(
    "OPENWEATHER_BASE_URL", "https://api.openweathermap.org"
).rstrip("/")
NOMINATIM_BASE_URL = os.getenv(
    "NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org"
).rstrip("/")
NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "ClimateChangeApp/1.0")

HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "8"))
GEOCODE_LIMIT = 10

REDIS_HOST = os.getenv("REDIS_HOST", "redis")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
GEOCODE_TTL_S = int(os.getenv("GEOCODE_TTL", "86400"))
