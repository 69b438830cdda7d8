import datetime

import pytest
from pydantic import ValidationError
from weather_query.models import WeatherKind, WeatherRecord, parse_date


def test_parse_date() -> None:
    assert parse_date("2034-12-23") == datetime.date(2034, 12, 23)


@pytest.mark.parametrize(
    "raw", ["20123422-11-30", "yesterday", "2012-11-31", "0000-01-01", "2012-11-3", "2012/11/30"]
)
def test_parse_date_rejects(raw) -> None:
    with pytest.raises(ValueError):
        parse_date(raw)


def test_weather_kind_tokens() -> None:
    assert WeatherKind.tokens() == ["drizzle", "rain", "snow", "sun", "fog"]


def test_record_is_frozen() -> None:
    record = WeatherRecord(
        date=datetime.date(2012, 6, 3),
        precipitation=0.0,
        temp_min=9.4,
        temp_max=17.2,
        wind=2.9,
        weather=WeatherKind.SUN,
    )
    with pytest.raises(ValidationError):
        record.wind = 5.0  # type: ignore[misc]


def test_record_json_shape() -> None:
    record = WeatherRecord(
        date=datetime.date(2012, 11, 30),
        precipitation=35.6,
        temp_min=7.8,
        temp_max=15.0,
        wind=4.6,
        weather=WeatherKind.RAIN,
    )
    assert record.model_dump_json() == (
        '{"date":"2012-11-30","precipitation":35.6,"temp_min":7.8,'
        '"temp_max":15.0,"wind":4.6,"weather":"rain"}'
    )
