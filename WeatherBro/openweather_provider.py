"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union
from weather_provider import (
    AuthError,
    DecodeError,
    NotFoundError,
    TransportError,
    UpstreamError,
    WeatherProviderBase,
)
from weather_data import WeatherRecord

# Instants datetime can represent, kept one day inside its limits
MIN_TIMESTAMP = int(datetime(1, 1, 2, tzinfo=timezone.utc).timestamp())
MAX_TIMESTAMP = int(datetime(9999, 12, 30, tzinfo=timezone.utc).timestamp())
MAX_UTC_OFFSET = 86400


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    and looks cities up by name (the "q" parameter).
    """

    BASE_URL = "http://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        units: str = "metric",
        timeout: Optional[float] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            base_url: Endpoint override (defaults to BASE_URL)
            units: Unit system; the report assumes "metric"
            timeout: HTTP request timeout in seconds (None waits indefinitely)
        """
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.units = units
        self.timeout = timeout

    def get_current(self, city: str) -> WeatherRecord:
        """
        Fetch current weather for a city from OpenWeather.

        Args:
            city: City name, sent as the "q" query parameter

        Returns:
            WeatherRecord: Current weather information

        Raises:
            TransportError: If no HTTP response was received
            AuthError: On HTTP 401
            NotFoundError: On HTTP 404
            UpstreamError: On any other non-200 status
            DecodeError: If the body is not the expected JSON document
        """
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
        }

        logging.info(f"Making OpenWeather API request: {self.base_url}")
        logging.debug(f"Request parameters: q={city}, units={self.units}")

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransportError(f"Failed to make HTTP request: {e}") from e

        logging.info(f"API response status: {response.status_code}")
        logging.debug(f"Response headers: {response.headers}")

        if response.status_code != 200:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response, city)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Response body is not valid JSON: {response.text[:500]}")
            raise DecodeError(f"Failed to decode JSON response: {e}") from e

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        weather = parse_weather(data)
        logging.info(f"Successfully parsed weather data: {weather.city}, {weather.temp}°C, {weather.condition}")
        return weather

    def _handle_error_response(self, response: requests.Response, city: str) -> None:
        """Raise the error matching a non-200 OpenWeather response."""
        if response.status_code == 401:
            raise AuthError("Invalid API key. Please check your WEATHER_API_KEY setting")
        if response.status_code == 404:
            raise NotFoundError(city)
        logging.error(f"Unexpected error response: HTTP {response.status_code}, body: {response.text[:500]}")
        raise UpstreamError(response.status_code, response.text)


def _block(data: Dict[str, Any], key: str, required: bool = False) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        if required:
            raise DecodeError(f"Response missing '{key}' block")
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"Expected '{key}' to be an object, got {type(value).__name__}")
    return value


def _raw_number(block: Dict[str, Any], key: str) -> Union[int, float]:
    value = block.get(key)
    # null decodes as the zero value, like a missing key
    if value is None:
        return 0
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Expected '{key}' to be a number, got {value!r}")
    return value


def _number(block: Dict[str, Any], key: str) -> float:
    value = _raw_number(block, key)
    try:
        return float(value)
    except OverflowError as e:
        raise DecodeError(f"Expected '{key}' to fit in a float, got {value!r}") from e


def _integer(block: Dict[str, Any], key: str) -> int:
    value = _raw_number(block, key)
    if isinstance(value, int):
        return value
    if not value.is_integer():
        raise DecodeError(f"Expected '{key}' to be an integer, got {value!r}")
    return int(value)


def _text(block: Dict[str, Any], key: str) -> str:
    value = block.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Expected '{key}' to be a string, got {value!r}")
    return value


def _conditions(data: Dict[str, Any]) -> Tuple[str, ...]:
    weather_array = data.get("weather") or []
    if not isinstance(weather_array, list):
        raise DecodeError("Expected 'weather' to be an array")
    descriptions = []
    for entry in weather_array:
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise DecodeError("Expected 'weather' entries to be objects")
        descriptions.append(_text(entry, "description"))
    return tuple(descriptions)


def _check_local_times(timezone_offset: int, **timestamps: int) -> None:
    """Reject offsets and timestamps that cannot be rendered as a local datetime."""
    if abs(timezone_offset) > MAX_UTC_OFFSET:
        raise DecodeError(f"UTC offset out of range: {timezone_offset}")
    for key, value in timestamps.items():
        for instant in (value, value + timezone_offset):
            if not MIN_TIMESTAMP <= instant <= MAX_TIMESTAMP:
                raise DecodeError(f"Timestamp '{key}' out of range: {value}")


def parse_weather(data: Any) -> WeatherRecord:
    """
    Map a decoded OpenWeather response onto a WeatherRecord.

    Optional blocks (wind, clouds, rain, snow, sys) and null fields default
    to zero values; the "main" block is required. Sunrise and sunset must be
    renderable as local times, and the UTC offset must be within a day.

    Raises:
        DecodeError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

    main_data = _block(data, "main", required=True)
    sys_data = _block(data, "sys")
    wind_data = _block(data, "wind")
    clouds_data = _block(data, "clouds")
    rain = _block(data, "rain")
    snow = _block(data, "snow")

    sunrise = _integer(sys_data, "sunrise")
    sunset = _integer(sys_data, "sunset")
    timezone_offset = _integer(data, "timezone")
    _check_local_times(timezone_offset, sunrise=sunrise, sunset=sunset)

    return WeatherRecord(
        city=_text(data, "name"),
        country=_text(sys_data, "country"),
        conditions=_conditions(data),
        temp=_number(main_data, "temp"),
        feels_like=_number(main_data, "feels_like"),
        temp_min=_number(main_data, "temp_min"),
        temp_max=_number(main_data, "temp_max"),
        humidity=_integer(main_data, "humidity"),
        pressure=_integer(main_data, "pressure"),
        wind_speed=_number(wind_data, "speed"),
        cloudiness=_integer(clouds_data, "all"),
        sunrise=sunrise,
        sunset=sunset,
        timezone_offset=timezone_offset,
        rain_1h=_number(rain, "1h"),
        snow_1h=_number(snow, "1h"),
    )
