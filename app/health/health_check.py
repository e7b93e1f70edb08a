"""Health checks for Redis and the external weather API."""

import httpx
from redis.exceptions import RedisError

from app.config import WEATHER_API_URL
from app.logging_config import logger
from app.models.health import ServiceStatus
from app.redis_cache.cache import redis_client
from app.resolvers.location import AUTO_IP
from app.weather_service.weather import api_headers


def is_redis_available() -> ServiceStatus:
    """Check Redis connectivity.

    Returns:
        ServiceStatus.available when Redis responds, else not_available.
    """
    try:
        redis_client.ping()
        logger.info("REDIS_CONNECTED")
        return ServiceStatus.available
    except RedisError as exc:
        logger.error("REDIS_UNAVAILABLE", error=str(exc))
        return ServiceStatus.not_available


async def is_weather_api_available() -> bool:
    """Check the external weather API for availability.

    Returns:
        True if the API responds with current weather data.
    """
    try:
        async with httpx.AsyncClient(timeout=5) as client:
            response = await client.get(
                WEATHER_API_URL,
                params={"q": AUTO_IP, "lang": "en"},
                headers=api_headers(),
            )
            return response.status_code == 200 and "current" in response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("WEATHER_API_UNAVAILABLE", error=str(exc))
        return False
