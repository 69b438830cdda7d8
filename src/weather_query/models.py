import datetime
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WeatherKind(str, Enum):
    """Human weather description attached to each day."""

    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    SUN = "sun"
    FOG = "fog"

    @classmethod
    def tokens(cls) -> list[str]:
        return [kind.value for kind in cls]


class WeatherRecord(BaseModel):
    """
    One day of observations.
    Field order is the serialized key order of the query endpoint.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    precipitation: float = Field(ge=0, description="Precipitation in mm")
    temp_min: float = Field(description="Daily low temperature in °C")
    temp_max: float = Field(description="Daily high temperature in °C")
    wind: float = Field(ge=0, description="Average wind speed in m/s")
    weather: WeatherKind


DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(value: str) -> datetime.date:
    """Parse a strict YYYY-MM-DD calendar date, raising ValueError otherwise."""
    if not DATE_PATTERN.fullmatch(value):
        raise ValueError(f"{value!r} is not of the form YYYY-MM-DD")
    year, month, day = (int(part) for part in value.split("-"))
    return datetime.date(year, month, day)
