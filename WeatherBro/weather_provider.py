"""Weather provider abstraction and the errors a lookup can end with."""
from abc import ABC, abstractmethod
from weather_data import WeatherRecord


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> WeatherRecord:
        """
        Fetch current weather for a city.

        Args:
            city: City name as typed by the user

        Returns:
            WeatherRecord: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Base for every error that ends a weather lookup."""
    pass


class UsageError(WeatherProviderError):
    """Command line was missing required arguments."""
    pass


class ConfigError(WeatherProviderError):
    """Required configuration (e.g. the API key) is missing."""
    pass


class TransportError(WeatherProviderError):
    """The request never produced an HTTP response."""
    pass


class AuthError(WeatherProviderError):
    """The API rejected the credential (HTTP 401)."""
    pass


class NotFoundError(WeatherProviderError):
    """The API does not know the requested city (HTTP 404)."""

    def __init__(self, city: str):
        self.city = city
        super().__init__(f"City '{city}' not found. Please check the city name")


class UpstreamError(WeatherProviderError):
    """Any other non-200 answer from the API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API returned non-200 status: {status_code} - {body}")


class DecodeError(WeatherProviderError):
    """The response body was not the JSON document we expect."""
    pass
