import httpx
import pytest

from geminibot.config import Settings
from geminibot.exceptions import TransportError, WeatherFetchError
from geminibot.models import GeoCoordinate
from geminibot.services.weather_service import WeatherService

PARIS = GeoCoordinate(latitude=48.8, longitude=2.3)


@pytest.mark.asyncio
async def test_weather_service_success(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        assert params["lat"] == "48.8"
        assert params["lon"] == "2.3"
        assert params["units"] == "metric"
        assert params["appid"] == settings.openweathermap_api_key
        return httpx.Response(200, json={"current": {"temp": 15, "humidity": 60}})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = WeatherService(client, settings)
        current = await service.fetch_current(PARIS)

    assert current == {"temp": 15, "humidity": 60}


@pytest.mark.asyncio
async def test_weather_service_missing_current(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"lat": 48.8, "lon": 2.3})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = WeatherService(client, settings)
        with pytest.raises(WeatherFetchError) as exc:
            await service.fetch_current(PARIS)

    assert str(exc.value) == "Could not retrieve weather data from OpenWeatherMap."


@pytest.mark.asyncio
async def test_weather_service_http_error(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = WeatherService(client, settings)
        with pytest.raises(TransportError) as exc:
            await service.fetch_current(PARIS)

    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_weather_service_connection_error(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = WeatherService(client, settings)
        with pytest.raises(TransportError):
            await service.fetch_current(PARIS)


@pytest.mark.asyncio
async def test_weather_service_non_object_current(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"current": "sunny"})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = WeatherService(client, settings)
        with pytest.raises(WeatherFetchError):
            await service.fetch_current(PARIS)
