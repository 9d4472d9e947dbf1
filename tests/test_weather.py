"""Tests for the location and weather lookup module."""

import http.client
import json
import urllib.error
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from ahcheck.lib.config import DenialReason, Settings, set_settings
from ahcheck.lib.exceptions import (
    LocationDeniedError,
    LocationError,
    LocationUnsupportedError,
    WeatherError,
)
from ahcheck.lib.mock import MockWeatherSource
from ahcheck.lib.weather import (
    Coordinates,
    DisabledLocation,
    OpenMeteoWeatherSource,
    StaticLocation,
    UnavailableLocation,
    WeatherDenied,
    WeatherFailure,
    WeatherSuccess,
    create_location_provider,
    create_weather_source,
    fetch_weather,
)


def _response(body: bytes, status: int = 200) -> MagicMock:
    """Create a mock urlopen context manager returning body."""
    resp = MagicMock()
    resp.status = status
    resp.read.return_value = body
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


def _forecast(temperature=21.5, humidity=64) -> bytes:
    current = {"time": "2026-10-18T12:00", "interval": 900}
    if temperature is not None:
        current["temperature_2m"] = temperature
    if humidity is not None:
        current["relative_humidity_2m"] = humidity
    return json.dumps({"latitude": 35.7, "longitude": 139.75, "current": current}).encode()


class TestCoordinates:
    """Tests for coordinate validation."""

    def test_valid(self):
        coords = Coordinates(latitude=-33.87, longitude=151.21)

        assert coords.latitude == -33.87
        assert coords.longitude == 151.21

    @pytest.mark.parametrize(
        ("latitude", "longitude"), [(91, 0), (-91, 0), (0, 181), (0, -181)]
    )
    def test_out_of_range(self, latitude, longitude):
        with pytest.raises(ValidationError):
            Coordinates(latitude=latitude, longitude=longitude)

    def test_frozen(self, tokyo):
        with pytest.raises(ValidationError):
            tokyo.latitude = 0.0


class TestLocationProviders:
    """Tests for location providers and their factory."""

    @pytest.mark.asyncio
    async def test_static_location(self, tokyo):
        assert await StaticLocation(tokyo).locate() == tokyo

    @pytest.mark.asyncio
    async def test_disabled_location_denies(self):
        with pytest.raises(LocationDeniedError):
            await DisabledLocation().locate()

    @pytest.mark.asyncio
    async def test_unavailable_location_unsupported(self):
        with pytest.raises(LocationUnsupportedError):
            await UnavailableLocation().locate()

    def test_explicit_coordinates_win(self, tokyo):
        set_settings(
            Settings(_env_file=None, latitude=48.85, longitude=2.35)
        )

        provider = create_location_provider(tokyo)

        assert isinstance(provider, StaticLocation)

    @pytest.mark.asyncio
    async def test_configured_coordinates(self):
        set_settings(
            Settings(_env_file=None, latitude=48.85, longitude=2.35)
        )

        coords = await create_location_provider().locate()

        assert coords == Coordinates(latitude=48.85, longitude=2.35)

    def test_no_coordinates_is_unavailable(self):
        set_settings(Settings(_env_file=None, latitude=None, longitude=None))

        assert isinstance(create_location_provider(), UnavailableLocation)

    def test_disabled_overrides_everything(self, tokyo):
        set_settings(
            Settings(
                _env_file=None,
                location_enabled=False,
                latitude=48.85,
                longitude=2.35,
            )
        )

        assert isinstance(create_location_provider(tokyo), DisabledLocation)


class TestOpenMeteoWeatherSource:
    """Tests for the Open-Meteo client."""

    @pytest.fixture
    def source(self):
        return OpenMeteoWeatherSource(
            "https://weather.test/v1/forecast",
            timeout_sec=5,
            max_retries=2,
            initial_backoff_sec=0,
        )

    def test_build_url(self, source, tokyo):
        url = source.build_url(tokyo)

        assert url.startswith("https://weather.test/v1/forecast?")
        assert "latitude=35.68" in url
        assert "longitude=139.76" in url
        assert "current=temperature_2m%2Crelative_humidity_2m" in url

    def test_defaults_from_settings(self):
        set_settings(
            Settings(
                _env_file=None,
                weather_api_url="https://example.org/forecast",
                weather_timeout_sec=3,
            )
        )

        source = OpenMeteoWeatherSource()

        assert source.build_url(
            Coordinates(latitude=1, longitude=2)
        ).startswith("https://example.org/forecast?")

    @pytest.mark.asyncio
    async def test_current_conditions(self, source, tokyo):
        with patch(
            "ahcheck.lib.weather.urllib.request.urlopen",
            return_value=_response(_forecast()),
        ) as mock_urlopen:
            outcome = await source.current(tokyo)

        assert outcome == WeatherSuccess(
            temperature=21.5, humidity=64.0, coordinates=tokyo
        )
        request = mock_urlopen.call_args.args[0]
        assert request.get_method() == "GET"
        assert mock_urlopen.call_args.kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_missing_humidity_is_none(self, source, tokyo):
        with patch(
            "ahcheck.lib.weather.urllib.request.urlopen",
            return_value=_response(_forecast(humidity=None)),
        ):
            outcome = await source.current(tokyo)

        assert outcome.temperature == 21.5
        assert outcome.humidity is None

    @pytest.mark.asyncio
    async def test_missing_temperature_raises(self, source, tokyo):
        with (
            patch(
                "ahcheck.lib.weather.urllib.request.urlopen",
                return_value=_response(_forecast(temperature=None)),
            ),
            pytest.raises(WeatherError, match="Unexpected weather API response"),
        ):
            await source.current(tokyo)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_without_retry(self, source, tokyo):
        with (
            patch(
                "ahcheck.lib.weather.urllib.request.urlopen",
                return_value=_response(b"<html>oops</html>"),
            ) as mock_urlopen,
            pytest.raises(WeatherError, match="invalid JSON"),
        ):
            await source.current(tokyo)

        mock_urlopen.assert_called_once()

    @pytest.mark.asyncio
    async def test_truncated_response_retried_then_raises(self, source, tokyo):
        with (
            patch.object(
                source,
                "_fetch_json",
                side_effect=http.client.IncompleteRead(b""),
            ) as mock_fetch,
            pytest.raises(WeatherError, match="unreachable"),
        ):
            await source.current(tokyo)

        assert mock_fetch.call_count == 2

    @pytest.mark.asyncio
    async def test_malformed_status_line_recovers(self, source, tokyo):
        with patch(
            "ahcheck.lib.weather.urllib.request.urlopen",
            side_effect=[
                http.client.BadStatusLine("garbage"),
                _response(_forecast()),
            ],
        ):
            outcome = await source.current(tokyo)

        assert outcome.temperature == 21.5

    @pytest.mark.asyncio
    async def test_network_error_retried_then_raises(self, source, tokyo):
        with (
            patch(
                "ahcheck.lib.weather.urllib.request.urlopen",
                side_effect=urllib.error.URLError("no route to host"),
            ) as mock_urlopen,
            pytest.raises(WeatherError, match="unreachable"),
        ):
            await source.current(tokyo)

        assert mock_urlopen.call_count == 2

    @pytest.mark.asyncio
    async def test_transient_error_recovers(self, source, tokyo):
        with patch(
            "ahcheck.lib.weather.urllib.request.urlopen",
            side_effect=[TimeoutError("timed out"), _response(_forecast())],
        ):
            outcome = await source.current(tokyo)

        assert outcome.temperature == 21.5

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self, source, tokyo):
        with (
            patch(
                "ahcheck.lib.weather.urllib.request.urlopen",
                return_value=_response(b"", status=204),
            ),
            pytest.raises(WeatherError, match="status 204"),
        ):
            await source.current(tokyo)


class TestCreateWeatherSource:
    """Tests for the weather source factory."""

    def test_real_source_by_default(self):
        assert isinstance(create_weather_source(), OpenMeteoWeatherSource)

    def test_mock_source(self):
        set_settings(Settings(_env_file=None, mock_weather=True))

        assert isinstance(create_weather_source(), MockWeatherSource)


class TestMockWeatherSource:
    """Tests for the random-walk weather source."""

    @pytest.mark.asyncio
    async def test_readings_within_bounds(self, tokyo):
        source = MockWeatherSource()

        for _ in range(50):
            outcome = await source.current(tokyo)
            assert 15.0 <= outcome.temperature <= 30.0
            assert 30.0 <= outcome.humidity <= 70.0
            assert outcome.coordinates == tokyo


class TestFetchWeather:
    """Tests for the tagged outcome of a location weather lookup."""

    @pytest.mark.asyncio
    async def test_success(self, tokyo):
        success = WeatherSuccess(18.0, 72.0, tokyo)
        source = MagicMock()
        source.current = AsyncMock(return_value=success)

        outcome = await fetch_weather(StaticLocation(tokyo), source)

        assert outcome is success
        source.current.assert_awaited_once_with(tokyo)

    @pytest.mark.asyncio
    async def test_denied(self):
        source = MagicMock()
        source.current = AsyncMock()

        outcome = await fetch_weather(DisabledLocation(), source)

        assert outcome == WeatherDenied(DenialReason.DENIED)
        source.current.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported(self):
        outcome = await fetch_weather(UnavailableLocation(), MagicMock())

        assert outcome == WeatherDenied(DenialReason.UNSUPPORTED)

    @pytest.mark.asyncio
    async def test_other_location_error_is_unsupported(self):
        locator = MagicMock()
        locator.locate = AsyncMock(side_effect=LocationError("gps off"))

        outcome = await fetch_weather(locator, MagicMock())

        assert outcome == WeatherDenied(DenialReason.UNSUPPORTED)

    @pytest.mark.asyncio
    async def test_failure(self, tokyo):
        source = MagicMock()
        source.current = AsyncMock(side_effect=WeatherError("API down"))

        outcome = await fetch_weather(StaticLocation(tokyo), source)

        assert outcome == WeatherFailure("API down")

    @pytest.mark.asyncio
    async def test_truncated_response_is_failure(self, tokyo):
        source = OpenMeteoWeatherSource(max_retries=1)

        with patch.object(
            source, "_fetch_json", side_effect=http.client.IncompleteRead(b"")
        ):
            outcome = await fetch_weather(StaticLocation(tokyo), source)

        assert isinstance(outcome, WeatherFailure)
        assert "unreachable" in outcome.reason
