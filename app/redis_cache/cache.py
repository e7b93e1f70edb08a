"""Redis cache for weather payloads served stale while revalidating."""

import json
from functools import partial

from redis import Redis
from redis.exceptions import RedisError

from app.config import REDIS_DB, REDIS_HOST, REDIS_PORT, WEATHER_TTL_S
from app.logging_config import logger

redis_client = Redis(
    host=REDIS_HOST,
    port=REDIS_PORT,
    db=REDIS_DB,
    decode_responses=True,
)


def normalize_location(location: str):
    """Normalize location queries for stable cache keys.

    Args:
        location: Raw location query.

    Returns:
        Normalized location for Redis keys.
    """
    return location.lower().strip().replace(" ", "_")


class WeatherCache:
    """Cache wrapper for raw weather payloads, one namespace per language."""

    def __init__(self, client, language: str = "en"):
        self.redis_client: Redis = client
        self.language = language

    def _key(self, location: str) -> str:
        return f"weather:{self.language}:{normalize_location(location)}"

    def save_weather(self, location: str, weather_data: dict):
        """Save a weather payload to Redis.

        Args:
            location: Location query key.
            weather_data: Raw API payload to serialize.
        """
        try:
            ttl = WEATHER_TTL_S if WEATHER_TTL_S > 0 else None
            self.redis_client.set(self._key(location), json.dumps(weather_data), ex=ttl)
        except RedisError as exc:
            logger.error("REDIS_SAVE_WEATHER_FAILED", location=location, error=str(exc))

    def get_weather(self, location: str):
        """Get a weather payload from Redis.

        Args:
            location: Location query key.

        Returns:
            The cached payload if present, otherwise None.
        """
        try:
            weather = self.redis_client.get(self._key(location))
        except RedisError as exc:
            logger.error("REDIS_GET_WEATHER_FAILED", location=location, error=str(exc))
            return None
        return json.loads(weather) if weather else None


weather_cache = partial(WeatherCache, client=redis_client)
