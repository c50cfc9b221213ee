# ABOUTME: Tests for loading configuration from WEATHER_* environment variables.
# ABOUTME: Covers defaults, overrides and rejection of invalid settings.

import pytest

from weather_label.config import DEFAULT_POLL_MINUTES, load_config
from weather_label.models import NOAA_DECODED_URL, Template


class TestLoadConfig:
    def test_station_only_uses_defaults(self):
        config, minutes = load_config({"WEATHER_STATION": "KMSN"})

        assert config.station == "KMSN"
        assert config.formatter == Template("$tempF$ °F")
        assert config.source == "report"
        assert config.report_base_url == NOAA_DECODED_URL
        assert minutes == DEFAULT_POLL_MINUTES

    def test_overrides(self):
        """Every WEATHER_* variable reaches the configuration.

        Implementation: Supplies an API source with template, URL and period.
        Passing implies: The environment fully determines the configuration.
        """
        config, minutes = load_config(
            {
                "WEATHER_STATION": "KPHL",
                "WEATHER_TEMPLATE": "$tempC$ C",
                "WEATHER_SOURCE": "api",
                "WEATHER_API_URL": "https://api.test/conditions.json",
                "WEATHER_POLL_MINUTES": "2.5",
            }
        )

        assert config.formatter == Template("$tempC$ C")
        assert config.source == "api"
        assert config.url == "https://api.test/conditions.json"
        assert minutes == 2.5

    def test_base_url_trailing_slash_is_dropped(self):
        config, _ = load_config({"WEATHER_STATION": "KMSN", "WEATHER_REPORT_BASE_URL": "https://mirror.test/decoded/"})
        assert config.url == "https://mirror.test/decoded/KMSN.TXT"

    @pytest.mark.parametrize(
        "environ",
        [
            {},
            {"WEATHER_STATION": "  "},
            {"WEATHER_STATION": "KMSN", "WEATHER_SOURCE": "radar"},
            {"WEATHER_STATION": "KMSN", "WEATHER_SOURCE": "api"},
            {"WEATHER_STATION": "KMSN", "WEATHER_POLL_MINUTES": "often"},
            {"WEATHER_STATION": "KMSN", "WEATHER_POLL_MINUTES": "0"},
        ],
    )
    def test_invalid_settings_raise(self, environ):
        with pytest.raises(ValueError):
            load_config(environ)
