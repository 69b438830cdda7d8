import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from weather_query.config import Settings


class TestConfig:
    def test_defaults(self):
        """Test default values."""
        settings = Settings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.log_level == "INFO"
        assert settings.data_file is None
        assert settings.cache_max_age == 3600

    def test_env_override(self):
        """Test partial override from environment."""
        with patch.dict(
            os.environ,
            {"WEATHER_QUERY_PORT": "8080", "WEATHER_QUERY_DATA_FILE": "/data/weather.csv"},
        ):
            settings = Settings()
            assert settings.port == 8080
            assert settings.data_file == Path("/data/weather.csv")
            # Others remain default
            assert settings.host == "0.0.0.0"

    def test_invalid_port(self):
        with patch.dict(os.environ, {"WEATHER_QUERY_PORT": "70000"}):
            with pytest.raises(ValidationError):
                Settings()

    def test_negative_cache_max_age(self):
        with patch.dict(os.environ, {"WEATHER_QUERY_CACHE_MAX_AGE": "-1"}):
            with pytest.raises(ValidationError):
                Settings()
