"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple


@dataclass(frozen=True)
class WeatherRecord:
    """Snapshot of current conditions for one city, as reported by the API."""
    city: str
    country: str
    conditions: Tuple[str, ...]  # e.g. ("light rain", "mist")
    temp: float  # °C
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int  # percentage
    pressure: int  # hPa
    wind_speed: float  # m/s
    cloudiness: int  # percentage
    sunrise: int  # UNIX timestamp (UTC)
    sunset: int  # UNIX timestamp (UTC)
    timezone_offset: int  # Offset from UTC in seconds

    # Volume for the last hour in mm (0 if none reported)
    rain_1h: float = 0.0
    snow_1h: float = 0.0

    @property
    def condition(self) -> str:
        """First reported condition description, or "N/A" if there is none."""
        if not self.conditions:
            return "N/A"
        return self.conditions[0]

    @property
    def has_precip(self) -> bool:
        return self.rain_1h > 0 or self.snow_1h > 0

    def local_time(self, unix_seconds: int) -> datetime:
        """
        Shift a UTC instant by the city's offset.

        The result is still tagged UTC so that formatting it yields the
        wall-clock time at the queried location without any further
        conversion.
        """
        return datetime.fromtimestamp(unix_seconds + self.timezone_offset, tz=timezone.utc)

    def local_now(self, now: Optional[datetime] = None) -> datetime:
        """Current wall-clock time at the queried location."""
        if now is None:
            now = datetime.now(timezone.utc)
        return self.local_time(int(now.timestamp()))
