from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCES_DIR = Path(__file__).parent / "resources"


class Settings(BaseSettings):
    """
    Weather Query Configuration.
    Reads from WEATHER_QUERY_* environment variables and optional .env file.
    """

    # Service Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the service to")
    port: int = Field(default=3000, ge=1, le=65535, description="Port to bind the service to")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="/var/log/weather-query", description="Directory for log files")

    # HTTP caching of /query answers
    cache_max_age: int = Field(default=3600, ge=0, description="Cache-Control max-age in seconds")

    # Dataset
    data_file: Path | None = Field(
        default=None,
        description="CSV file with the daily weather observations. "
        "Unset loads the Seattle table shipped with vega_datasets",
    )

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
