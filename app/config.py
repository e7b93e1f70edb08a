"""Environment configuration for the weather page."""

import os

WEATHER_API_URL = os.getenv(
    "WEATHER_API_URL", "https://weatherapi-com.p.rapidapi.com/current.json"
)
WEATHER_API_HOST = os.getenv("WEATHER_API_HOST", "weatherapi-com.p.rapidapi.com")
WEATHER_API_KEY = os.getenv("WEATHER_API_KEY", "")

GEOLOCATION_TIMEOUT_S = float(os.getenv("GEOLOCATION_TIMEOUT_S", "5"))

REDIS_HOST = os.getenv("REDIS_HOST", "redis")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
WEATHER_TTL_S = int(os.getenv("WEATHER_TTL", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "info")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
SOURCE_REGISTRY_SIZE = int(os.getenv("SOURCE_REGISTRY_SIZE", "256"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
