"""Models for the /health endpoint."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ServiceStatus(str, Enum):
    """Whether a collaborator of the page answered."""

    available = "available"
    not_available = "not_available"


class Dependencies(BaseModel):
    """Status of the weather API and the stale-data cache."""

    weather_api: ServiceStatus
    redis: ServiceStatus


class HealthResponse(BaseModel):
    status: Literal["ok"]
    dependencies: Dependencies
