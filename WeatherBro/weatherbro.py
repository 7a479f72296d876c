"""Command-line entry point: current weather for a city, printed as text."""
import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from field_selection import FieldSelection, parse_field_selection
from report import print_report
from openweather_provider import OpenWeatherProvider
from weather_data import WeatherRecord
from weather_provider import ConfigError, UsageError, WeatherProviderError

USAGE = """\
Usage: weatherbro <city_name> [--show <details>]
Example: weatherbro "London"
Example: weatherbro "New York" --show temperature,humidity
Example: weatherbro "Tokyo" --show time,sunrise,sunset"""


@dataclass
class Config:
    api_key: str
    base_url: Optional[str] = None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("weatherbro", description="Current weather for a city")
    parser.add_argument("city", nargs="?", help="City name, e.g. \"London\"")
    parser.add_argument(
        "--show",
        default=None,
        help="Comma-separated list of details to display (e.g., 'temperature,humidity,time,all'). "
             "If omitted, all details are shown.",
    )
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    # stdout carries the report, so console logging goes to stderr and only on request
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = []
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    if not handlers:
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Config:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    base_url = os.getenv("WEATHER_BASE_URL")

    if not api_key:
        raise ConfigError("Missing WEATHER_API_KEY in environment")

    logging.info("Configuration loaded: base_url=%s", base_url or OpenWeatherProvider.BASE_URL)
    return Config(api_key=api_key, base_url=base_url)


def build_provider(config: Config) -> OpenWeatherProvider:
    return OpenWeatherProvider(api_key=config.api_key, base_url=config.base_url)


def fetch_weather(city: str, selection: FieldSelection) -> WeatherRecord:
    """Resolve config and fetch the record; every failure surfaces as WeatherProviderError."""
    unknown = selection.unknown_tokens()
    if unknown:
        logging.warning("Ignoring unrecognized --show fields: %s", ", ".join(unknown))

    config = load_config()
    provider = build_provider(config)

    print(f"Fetching weather for {city}...")
    weather = provider.get_current(city)
    logging.info(
        "Weather: city=%s temp=%s humidity=%s wind=%.1f condition=%s",
        weather.city,
        weather.temp,
        weather.humidity,
        weather.wind_speed,
        weather.condition,
    )
    return weather


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        if args.city is None:
            raise UsageError("Missing city name")
        selection = parse_field_selection(args.show)
        weather = fetch_weather(args.city, selection)
    except UsageError as err:
        logging.error("Usage error: %s", err)
        print(USAGE)
        return 1
    except WeatherProviderError as err:
        logging.error("Weather fetch failed: %s", err)
        print(f"Error: {err}", file=sys.stderr)
        return 1

    print_report(weather, selection)
    return 0


if __name__ == "__main__":
    sys.exit(main())
