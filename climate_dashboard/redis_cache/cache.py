"""Redis cache for geocoding results."""

import json
from functools import partial

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from climate_dashboard.config import GEOCODE_TTL_S, REDIS_DB, REDIS_HOST, REDIS_PORT
from climate_dashboard.logging_config import logger
from climate_dashboard.models.location import LocationMatch

redis_client = Redis(
    host=REDIS_HOST,
    port=REDIS_PORT,
    db=REDIS_DB,
    decode_responses=True,
    socket_connect_timeout=1,
    socket_timeout=1,
)


def normalize_query(query: str):
    """Normalize free-text queries for stable cache keys.

    Args:
        query: Raw search text.

    Returns:
        Normalized query for Redis keys.
    """
    return "_".join(query.lower().split())


class GeocodeCache:
    """Cache wrapper for storing and retrieving geocoding matches."""

    def __init__(self, client):
        self.redis_client: Redis = client

    async def save_matches(self, query: str, matches: list[LocationMatch]):
        """Save geocoding matches to Redis.

        Args:
            query: Search text the matches were resolved from.
            matches: Resolver output to serialize.
        """
        try:
            ttl = GEOCODE_TTL_S if GEOCODE_TTL_S > 0 else None
            await self.redis_client.set(
                f"geocode:{normalize_query(query)}",
                json.dumps([match.model_dump() for match in matches]),
                ex=ttl,
            )
        except RedisError as exc:
            logger.error("REDIS_SAVE_GEOCODE_FAILED", query=query, error=str(exc))

    async def get_matches(self, query: str) -> list[LocationMatch] | None:
        """Get geocoding matches from Redis.

        Args:
            query: Search text.

        Returns:
            Cached matches if present, otherwise None.
        """
        try:
            cached = await self.redis_client.get(f"geocode:{normalize_query(query)}")
        except RedisError as exc:
            logger.error("REDIS_GET_GEOCODE_FAILED", query=query, error=str(exc))
            return None
        if not cached:
            return None
        try:
            return [LocationMatch(**item) for item in json.loads(cached)]
        except (ValueError, TypeError, ValidationError) as exc:
            logger.error("REDIS_GEOCODE_CORRUPT", query=query, error=str(exc))
            return None


geocode_cache = partial(GeocodeCache, client=redis_client)
