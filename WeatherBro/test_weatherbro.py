"""Tests for the command-line entry point."""
import logging
import pytest
import requests
from unittest.mock import Mock, patch
import weatherbro
from weather_provider import ConfigError


@pytest.fixture
def sample_openweather_response():
    return {
        "weather": [{"main": "Clouds", "description": "broken clouds"}],
        "main": {
            "temp": 8.0,
            "feels_like": 5.5,
            "temp_min": 7.1,
            "temp_max": 9.4,
            "pressure": 1021,
            "humidity": 70
        },
        "wind": {"speed": 6.2},
        "clouds": {"all": 60},
        "sys": {"country": "JP", "sunrise": 1700000000, "sunset": 1700040000},
        "timezone": 32400,
        "name": "Tokyo",
    }


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    """Keep tests independent of any local .env file."""
    monkeypatch.setenv("WEATHER_API_KEY", "test_key")
    monkeypatch.delenv("WEATHER_BASE_URL", raising=False)
    with patch('weatherbro.load_dotenv'):
        yield


@pytest.fixture
def mock_get(sample_openweather_response):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.headers = {}
        mock_response.text = ""
        mock_response.json.return_value = sample_openweather_response
        mock_get.return_value = mock_response
        yield mock_get


def error_response(status_code, text=""):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.headers = {}
    mock_response.text = text
    return mock_response


def report_lines(out):
    """Report part of stdout, without the pre-fetch message."""
    lines = out.splitlines()
    assert lines[0].startswith("Fetching weather for ")
    return lines[1:]


def test_main_without_city_prints_usage(capsys):
    with patch('openweather_provider.requests.get') as mock_get:
        assert weatherbro.main([]) == 1
        mock_get.assert_not_called()

    captured = capsys.readouterr()
    assert captured.out.startswith("Usage: weatherbro <city_name> [--show <details>]")
    assert captured.err == ""


def test_main_without_api_key(monkeypatch, capsys):
    monkeypatch.delenv("WEATHER_API_KEY")

    with patch('openweather_provider.requests.get') as mock_get:
        assert weatherbro.main(["London"]) == 1
        mock_get.assert_not_called()

    captured = capsys.readouterr()
    assert "WEATHER_API_KEY" in captured.err
    assert "Fetching" not in captured.out


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("WEATHER_BASE_URL", "http://localhost:9000/weather")

    config = weatherbro.load_config()

    assert config.api_key == "test_key"
    assert config.base_url == "http://localhost:9000/weather"


def test_load_config_missing_key(monkeypatch):
    monkeypatch.delenv("WEATHER_API_KEY")
    with pytest.raises(ConfigError):
        weatherbro.load_config()


def test_main_prints_full_report(mock_get, capsys):
    assert weatherbro.main(["Tokyo"]) == 0

    captured = capsys.readouterr()
    lines = report_lines(captured.out)
    assert captured.out.startswith("Fetching weather for Tokyo...\n")
    assert lines[1] == "--- Weather in Tokyo, JP ---"
    assert lines[2] == "Condition: Broken clouds"
    assert lines[-1] == "-" * len(lines[1])
    assert len(lines) == 14
    assert captured.err == ""


def test_main_show_all_matches_default(mock_get, capsys):
    weatherbro.main(["Tokyo"])
    default_out = report_lines(capsys.readouterr().out)
    weatherbro.main(["Tokyo", "--show", "all"])
    all_out = report_lines(capsys.readouterr().out)

    # Current Local Time can tick between runs
    assert default_out[:-2] == all_out[:-2]
    assert default_out[-1] == all_out[-1]


def test_main_show_empty(mock_get, capsys):
    assert weatherbro.main(["Tokyo", "--show", ""]) == 0

    lines = report_lines(capsys.readouterr().out)
    assert lines == ["", "--- Weather in Tokyo, JP ---", "-" * 28]


def test_main_show_before_city(mock_get, capsys):
    assert weatherbro.main(["--show", "wind,wind-speed", "Tokyo"]) == 0

    lines = report_lines(capsys.readouterr().out)
    assert lines[2:-1] == ["Wind Speed: 6.2 m/s"]


def test_main_passes_city_to_api(mock_get, capsys):
    weatherbro.main(["New York", "--show", "humidity"])
    assert mock_get.call_args[1]["params"]["q"] == "New York"


def test_main_unknown_fields_are_logged(mock_get, capsys, caplog):
    with caplog.at_level(logging.WARNING):
        assert weatherbro.main(["Tokyo", "--show", "visibility"]) == 0

    lines = report_lines(capsys.readouterr().out)
    assert lines == ["", "--- Weather in Tokyo, JP ---", "-" * 28]
    assert "visibility" in caplog.text


def test_main_unauthorized(mock_get, capsys):
    mock_get.return_value = error_response(401)

    assert weatherbro.main(["Tokyo"]) == 1

    captured = capsys.readouterr()
    assert "Invalid API key" in captured.err
    assert "Weather in" not in captured.out


def test_main_city_not_found(mock_get, capsys):
    mock_get.return_value = error_response(404)

    assert weatherbro.main(["Atlantis"]) == 1

    assert "Atlantis" in capsys.readouterr().err


def test_main_server_error(mock_get, capsys):
    mock_get.return_value = error_response(500, "server error")

    assert weatherbro.main(["Tokyo"]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "500" in err
    assert "server error" in err


def test_main_network_error(mock_get, capsys):
    mock_get.side_effect = requests.exceptions.ConnectionError("Name or service not known")

    assert weatherbro.main(["Tokyo"]) == 1

    captured = capsys.readouterr()
    assert "Name or service not known" in captured.err
    assert "Weather in" not in captured.out


def test_main_decode_error(mock_get, capsys):
    mock_get.return_value.json.return_value = {"name": "Tokyo"}

    assert weatherbro.main(["Tokyo"]) == 1

    captured = capsys.readouterr()
    assert "missing 'main' block" in captured.err
    assert "Weather in" not in captured.out


def test_parse_args_logging_options():
    args = weatherbro.parse_args(["Tokyo", "--verbose", "--log-file", "run.log"])

    assert args.city == "Tokyo"
    assert args.show is None
    assert args.verbose is True
    assert args.log_file == "run.log"


def test_main_out_of_range_timestamp(mock_get, capsys):
    """An undrawable sunrise ends the run with an error, not a traceback."""
    mock_get.return_value.json.return_value["sys"]["sunrise"] = 10 ** 12

    assert weatherbro.main(["Tokyo"]) == 1

    captured = capsys.readouterr()
    assert captured.err.startswith("Error: ")
    assert "sunrise" in captured.err
    assert "Weather in" not in captured.out


def test_main_empty_city_is_sent_to_api(mock_get, capsys):
    """Only a missing city argument triggers usage; an empty one is queried."""
    mock_get.return_value = error_response(404)

    assert weatherbro.main([""]) == 1

    assert mock_get.call_args[1]["params"]["q"] == ""
    captured = capsys.readouterr()
    assert "Usage:" not in captured.out
    assert "City '' not found" in captured.err
