"""FastAPI application routes, middleware, and metrics."""

import time
import uuid
from functools import partial
from typing import Optional

import uvicorn
from fastapi import FastAPI, Header, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from app.config import HOST, PORT, SOURCE_REGISTRY_SIZE
from app.health.health_check import is_redis_available, is_weather_api_available
from app.logging_config import logger
from app.models.health import Dependencies, HealthResponse, ServiceStatus
from app.models.weather import WeatherView
from app.redis_cache.cache import weather_cache
from app.render.document import Document
from app.render.view import render_weather
from app.resolvers.language import locale_from_accept_language, resolve_language
from app.resolvers.location import ClientGeolocator, resolve_location
from app.swr.source import RevalidatingSource, SourceRegistry
from app.weather_service.weather import (
    ExternalAPIError,
    WeatherServiceError,
    fetch_weather,
)
from structlog.contextvars import bind_contextvars, clear_contextvars

app = FastAPI()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request duration in seconds", ["path"]
)
RENDER_COUNT = Counter(
    "weather_renders_total", "Weather renders by data origin", ["origin"]
)

sources = SourceRegistry(maxsize=SOURCE_REGISTRY_SIZE)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Log request details, attach a request ID, and record metrics.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI handler for the next middleware/app.

    Returns:
        The response produced by the downstream handler.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        duration_s = time.perf_counter() - start
        duration_ms = round(duration_s * 1000, 2)
        status_code = getattr(response, "status_code", 500)
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
        REQUEST_COUNT.labels(
            method=request.method, path=request.url.path, status_code=status_code
        ).inc()
        REQUEST_LATENCY.labels(path=request.url.path).observe(duration_s)
        clear_contextvars()


@app.exception_handler(ExternalAPIError)
async def external_api_error_handler(request: Request, exc: ExternalAPIError):
    """Convert external API errors into 502 responses.

    Args:
        request: Incoming HTTP request.
        exc: Raised external API error.

    Returns:
        A JSON response with the error detail.
    """
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(WeatherServiceError)
async def weather_service_error_handler(request: Request, exc: WeatherServiceError):
    """Convert unexpected weather service errors into 500 responses.

    Args:
        request: Incoming HTTP request.
        exc: Raised weather service error.

    Returns:
        A JSON response with a generic error message.
    """
    return JSONResponse(status_code=500, content={"detail": "Unexpected error"})


async def weather_source(
    q: Optional[str],
    lat: Optional[float],
    lon: Optional[float],
    accept_language: Optional[str],
) -> RevalidatingSource:
    """Return the shared revalidating source for the client's location and language.

    Args:
        q: Location override from the URL.
        lat: Latitude reported by the client's geolocation.
        lon: Longitude reported by the client's geolocation.
        accept_language: Client Accept-Language header.

    Returns:
        The RevalidatingSource for (language, location); requests for the
        same key share it, and with it any fetch in flight.
    """
    geolocator = ClientGeolocator(lat, lon) if lat is not None else None
    location = await resolve_location(q, geolocator)
    language = resolve_language(locale_from_accept_language(accept_language))
    return sources.get(
        (language, location),
        lambda: RevalidatingSource(
            location,
            partial(fetch_weather, locale=language),
            weather_cache(language=language),
        ),
    )


def watch_and_render(source: RevalidatingSource):
    """Subscribe a fresh document to the source; it re-renders on every emission.

    Returns:
        The document and the callable that unsubscribes it.
    """
    document = Document()

    def on_snapshot(snapshot):
        if snapshot.data:
            render_weather(document, snapshot.data)
            RENDER_COUNT.labels(origin="cache" if snapshot.sequence == 0 else "api").inc()

    return document, source.watch(on_snapshot)


@app.get("/", response_class=HTMLResponse)
async def weather_page(
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    accept_language: Optional[str] = Header(default=None),
):
    """Render the weather page for the resolved location.

    Args:
        q: Optional location override.
        lat: Optional client latitude.
        lon: Optional client longitude.
        accept_language: Client language preferences.

    Returns:
        The rendered HTML page.
    """
    source = await weather_source(q, lat, lon, accept_language)
    document, unwatch = watch_and_render(source)
    try:
        snapshot = await source.start()
    finally:
        unwatch()
    if not document.query("#app").children:
        # a shared fetch whose result lost to a newer one emits nothing
        render_weather(document, (source.snapshot or snapshot).data)
    return HTMLResponse(document.to_html())


@app.get("/weather")
async def get_weather(
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    accept_language: Optional[str] = Header(default=None),
) -> WeatherView:
    """Return the display values for the resolved location."""
    source = await weather_source(q, lat, lon, accept_language)
    snapshot = await source.start()
    return WeatherView.from_api_response(snapshot.data)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report API health and dependency availability.

    Returns:
        A HealthResponse containing dependency status.
    """
    weather_api_available = await is_weather_api_available()
    return HealthResponse(
        status="ok",
        dependencies=Dependencies(
            weather_api=ServiceStatus.available
            if weather_api_available
            else ServiceStatus.not_available,
            redis=is_redis_available(),
        ),
    )


@app.get("/metrics")
async def metrics():
    """Expose Prometheus metrics for scraping."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def run():
    """Serve the app with uvicorn."""
    uvicorn.run("app.main:app", host=HOST, port=PORT)
