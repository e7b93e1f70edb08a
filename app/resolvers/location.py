"""Resolve the location query sent to the weather API."""

import asyncio
from typing import Optional, Protocol

from app.config import GEOLOCATION_TIMEOUT_S
from app.logging_config import logger
from app.models.location import Coordinates

AUTO_IP = "auto:ip"


class GeolocationError(Exception):
    """Raised when a geolocator cannot produce a position."""
    pass


class Geolocator(Protocol):
    async def current_position(
        self, *, high_accuracy: bool, maximum_age: float
    ) -> Coordinates: ...


class ClientGeolocator:
    """Geolocator backed by coordinates the client reported with its request."""

    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self.latitude = latitude
        self.longitude = longitude

    async def current_position(
        self, *, high_accuracy: bool = True, maximum_age: float = 0
    ) -> Coordinates:
        if self.latitude is None or self.longitude is None:
            raise GeolocationError("Client did not report a position")
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


def format_coordinates(coords: Coordinates) -> str:
    return f"{coords.latitude},{coords.longitude}"


async def geolocate(
    geolocator: Optional[Geolocator], timeout: float = GEOLOCATION_TIMEOUT_S
) -> str:
    """Ask the geolocator for a fresh position.

    Args:
        geolocator: Position provider, or None when geolocation is unsupported.
        timeout: Seconds to wait for a position.

    Returns:
        "lat,lon" on success, otherwise the "auto:ip" sentinel.
    """
    if geolocator is None:
        logger.info("GEOLOCATION_UNSUPPORTED")
        return AUTO_IP
    try:
        coords = await asyncio.wait_for(
            geolocator.current_position(high_accuracy=True, maximum_age=0),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.info("GEOLOCATION_TIMEOUT", timeout_s=timeout)
        return AUTO_IP
    except GeolocationError as exc:
        logger.info("GEOLOCATION_FAILED", error=str(exc))
        return AUTO_IP
    return format_coordinates(coords)


async def resolve_location(
    query: Optional[str],
    geolocator: Optional[Geolocator] = None,
    timeout: float = GEOLOCATION_TIMEOUT_S,
) -> str:
    """Return the location query for the weather API.

    A `q` query value wins and is used verbatim; geolocation is only
    attempted without one.

    Args:
        query: Value of the `q` URL parameter, if any.
        geolocator: Position provider, or None when unsupported.
        timeout: Seconds to wait for geolocation.

    Returns:
        The location string. Never raises.
    """
    if query:
        return query
    return await geolocate(geolocator, timeout=timeout)
