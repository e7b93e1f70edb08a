import httpx
import pytest

from app.weather_service import weather
from app.weather_service.weather import ExternalAPIError, fetch_weather

RealAsyncClient = httpx.AsyncClient


def use_transport(monkeypatch, handler):
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        weather.httpx,
        "AsyncClient",
        lambda **kwargs: RealAsyncClient(transport=transport, **kwargs),
    )


@pytest.mark.asyncio
async def test_fetch_weather_sends_query_and_headers(monkeypatch):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={"location": {"name": "Paris"}, "current": {}})

    monkeypatch.setattr(weather, "WEATHER_API_HOST", "weather.example")
    monkeypatch.setattr(weather, "WEATHER_API_KEY", "secret")
    use_transport(monkeypatch, handler)

    data = await fetch_weather("Paris", locale="fr-FR")

    assert data["location"]["name"] == "Paris"
    request = seen[0]
    assert request.method == "GET"
    assert request.url.params["q"] == "Paris"
    assert request.url.params["lang"] == "fr"
    assert request.headers["X-RapidAPI-Host"] == "weather.example"
    assert request.headers["X-RapidAPI-Key"] == "secret"


@pytest.mark.asyncio
async def test_fetch_weather_defaults_to_english(monkeypatch):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={})

    use_transport(monkeypatch, handler)
    await fetch_weather("auto:ip")
    assert seen[0].url.params["lang"] == "en"


@pytest.mark.asyncio
async def test_fetch_weather_bad_status(monkeypatch):
    use_transport(monkeypatch, lambda request: httpx.Response(403, json={}))
    with pytest.raises(ExternalAPIError):
        await fetch_weather("Paris")


@pytest.mark.asyncio
async def test_fetch_weather_non_json_body(monkeypatch):
    use_transport(monkeypatch, lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(ExternalAPIError):
        await fetch_weather("Paris")


@pytest.mark.asyncio
async def test_fetch_weather_network_error(monkeypatch):
    def handler(request: httpx.Request):
        raise httpx.ConnectError("boom", request=request)

    use_transport(monkeypatch, handler)
    with pytest.raises(ExternalAPIError):
        await fetch_weather("Paris")
