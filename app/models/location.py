"""Coordinates model for client geolocation."""

from pydantic import BaseModel


class Coordinates(BaseModel):
    """A latitude/longitude pair reported by the client."""

    latitude: float
    longitude: float
