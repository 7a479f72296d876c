"""Text report rendering - pure functions for testability."""
from datetime import datetime
from typing import List, Optional
from field_selection import FieldSelection
from weather_data import WeatherRecord

CLOCK_FORMAT = "%H:%M:%S"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_PRECIP_TEXT = "No recent precipitation reported"

FIELD_ORDER = (
    "condition",
    "temperature",
    "humidity",
    "pressure",
    "wind-speed",
    "cloudiness",
    "sunrise",
    "sunset",
    "precipitation",
    "time",
)


def capitalize_first(text: str) -> str:
    """Upper-case only the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def get_header(weather: WeatherRecord) -> str:
    return f"--- Weather in {weather.city}, {weather.country} ---"


def get_precipitation_text(weather: WeatherRecord) -> str:
    """
    Summarize rain and snow volumes for the last hour.

    Args:
        weather: Weather record

    Returns:
        "Rain: X.XX mm (last 1h)" and/or "Snow: ..." joined by ", ",
        or a fixed message when neither was reported
    """
    if not weather.has_precip:
        return NO_PRECIP_TEXT

    parts = []
    if weather.rain_1h > 0:
        parts.append(f"Rain: {weather.rain_1h:.2f} mm (last 1h)")
    if weather.snow_1h > 0:
        parts.append(f"Snow: {weather.snow_1h:.2f} mm (last 1h)")
    return ", ".join(parts)


def get_field_lines(field: str, weather: WeatherRecord, now: Optional[datetime] = None) -> List[str]:
    """Lines for a single canonical field."""
    if field == "condition":
        return [f"Condition: {capitalize_first(weather.condition)}"]
    if field == "temperature":
        return [
            f"Temperature: {weather.temp:.1f}°C (Feels like: {weather.feels_like:.1f}°C)",
            f"Min Temp: {weather.temp_min:.1f}°C, Max Temp: {weather.temp_max:.1f}°C",
        ]
    if field == "humidity":
        return [f"Humidity: {weather.humidity}%"]
    if field == "pressure":
        return [f"Pressure: {weather.pressure} hPa"]
    if field == "wind-speed":
        return [f"Wind Speed: {weather.wind_speed:.1f} m/s"]
    if field == "cloudiness":
        return [f"Cloudiness: {weather.cloudiness}%"]
    if field == "sunrise":
        return [f"Sunrise: {weather.local_time(weather.sunrise).strftime(CLOCK_FORMAT)}"]
    if field == "sunset":
        return [f"Sunset: {weather.local_time(weather.sunset).strftime(CLOCK_FORMAT)}"]
    if field == "precipitation":
        return [f"Precipitation: {get_precipitation_text(weather)}"]
    if field == "time":
        return [f"Current Local Time: {weather.local_now(now).strftime(TIMESTAMP_FORMAT)}"]
    raise ValueError(f"Unknown field: {field}")


def format_report(
    weather: WeatherRecord,
    selection: FieldSelection,
    now: Optional[datetime] = None
) -> List[str]:
    """
    Build the printed report for a weather record.

    Fields are emitted in FIELD_ORDER, each at most once no matter how many
    synonyms selected it. The header and the closing dash line are always
    present, even when nothing was selected.

    Args:
        weather: Weather record to render
        selection: Fields requested on the command line
        now: Reference instant for the local time line (defaults to now)

    Returns:
        Report lines without trailing newlines
    """
    header = get_header(weather)
    lines = ["", header]
    for field in FIELD_ORDER:
        if selection.wants(field):
            lines.extend(get_field_lines(field, weather, now))
    lines.append("-" * len(header))
    return lines


def print_report(
    weather: WeatherRecord,
    selection: FieldSelection,
    now: Optional[datetime] = None
) -> None:
    for line in format_report(weather, selection, now):
        print(line)
