"""Weather API integration."""

from typing import Optional

import httpx

from app.config import WEATHER_API_HOST, WEATHER_API_KEY, WEATHER_API_URL
from app.logging_config import logger
from app.resolvers.language import resolve_language


class WeatherServiceError(Exception):
    """Base exception for weather service failures."""
    pass


class ExternalAPIError(WeatherServiceError):
    """Raised when the external weather API fails."""
    pass


def api_headers() -> dict:
    """Return the RapidAPI authentication headers."""
    return {
        "X-RapidAPI-Host": WEATHER_API_HOST,
        "X-RapidAPI-Key": WEATHER_API_KEY,
    }


async def fetch_weather(location: str, locale: Optional[str] = None) -> dict:
    """Fetch the current weather payload for a location.

    One GET, no retry. The payload is returned as parsed JSON without any
    validation.

    Args:
        location: Location query ("Paris", "48.85,2.35" or "auto:ip").
        locale: Client locale used to pick the response language.

    Returns:
        The parsed JSON body with `location` and `current` objects.

    Raises:
        ExternalAPIError: On transport errors, bad statuses or non-JSON bodies.
    """
    language = resolve_language(locale)
    log_context = {"location": location, "lang": language}
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                WEATHER_API_URL,
                params={"q": location, "lang": language},
                headers=api_headers(),
            )
        logger.info("WEATHER_RESPONSE", **log_context, status=response.status_code)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error(
            "WEATHER_BAD_STATUS", **log_context, status=exc.response.status_code
        )
        raise ExternalAPIError("Weather lookup failed") from exc
    except httpx.RequestError as exc:
        logger.error("WEATHER_REQUEST_FAILED", **log_context, error=str(exc))
        raise ExternalAPIError("Weather lookup failed") from exc

    try:
        return response.json()
    except ValueError as exc:
        logger.error("WEATHER_BAD_PAYLOAD", **log_context)
        raise ExternalAPIError("Weather lookup failed") from exc
