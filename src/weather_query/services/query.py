import datetime
import re
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from weather_query.models import WeatherKind, WeatherRecord, parse_date
from weather_query.services.dataset import DatasetStore

logger = structlog.get_logger("Query")

LIMIT_PATTERN = re.compile(r"[0-9]+")


class QueryValidationError(Exception):
    """A query parameter that could not be turned into a filter."""

    param: str = ""

    def __init__(self, raw_value: str, message: str) -> None:
        super().__init__(message)
        self.raw_value = raw_value
        self.message = message


class InvalidLimit(QueryValidationError):
    param = "limit"

    def __init__(self, raw_value: str) -> None:
        super().__init__(
            raw_value,
            f"Invalid limit value in query parameters: {raw_value} "
            "- Expected a non-negative integer",
        )


class InvalidDate(QueryValidationError):
    param = "date"

    def __init__(self, raw_value: str) -> None:
        super().__init__(
            raw_value,
            f"Invalid date value in query parameters: {raw_value} "
            "- Expected a date of the form YYYY-MM-DD",
        )


class InvalidWeather(QueryValidationError):
    param = "weather"

    def __init__(self, raw_value: str) -> None:
        super().__init__(
            raw_value,
            f"Invalid weather kind: {raw_value} "
            f"- Expected one of the following: {', '.join(WeatherKind.tokens())}",
        )


def parse_limit(raw: str) -> int:
    if not LIMIT_PATTERN.fullmatch(raw):
        raise InvalidLimit(raw)
    try:
        return int(raw)
    except ValueError as e:
        # int() refuses strings beyond sys.get_int_max_str_digits()
        raise InvalidLimit(raw) from e


def parse_query_date(raw: str) -> datetime.date:
    try:
        return parse_date(raw)
    except ValueError as e:
        raise InvalidDate(raw) from e


def parse_weather(raw: str) -> WeatherKind:
    try:
        return WeatherKind(raw)
    except ValueError as e:
        raise InvalidWeather(raw) from e


@dataclass(frozen=True)
class WeatherQuery:
    """Validated query. None means the filter is not applied."""

    limit: int | None = None
    date: datetime.date | None = None
    weather: WeatherKind | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "WeatherQuery":
        """
        Validate raw query-string values.

        Parameters are checked in the order limit, date, weather; the first
        invalid one raises its QueryValidationError. Unknown keys are ignored.
        """
        raw_limit = params.get("limit")
        raw_date = params.get("date")
        raw_weather = params.get("weather")

        return cls(
            limit=parse_limit(raw_limit) if raw_limit is not None else None,
            date=parse_query_date(raw_date) if raw_date is not None else None,
            weather=parse_weather(raw_weather) if raw_weather is not None else None,
        )

    def _cap(self, records: tuple[WeatherRecord, ...]) -> tuple[WeatherRecord, ...]:
        if self.limit is None:
            return records
        return records[: self.limit]

    def run(self, store: DatasetStore) -> tuple[WeatherRecord, ...]:
        """Select matching records, most selective index first."""
        if self.limit == 0:
            return ()

        if self.date is not None:
            # At most one entry per date
            record = store.by_date(self.date)
            if record is None or (self.weather is not None and record.weather != self.weather):
                return ()
            return (record,)

        if self.weather is not None:
            return self._cap(store.by_kind(self.weather))

        return self._cap(store.all())


@dataclass(frozen=True)
class QueryResult:
    """Either the matching records or the single validation error."""

    records: tuple[WeatherRecord, ...] = ()
    error: QueryValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def evaluate(params: Mapping[str, str], store: DatasetStore) -> QueryResult:
    """Validate the raw parameters and run the query against the store."""
    logger.info("Handling raw weather query", params=dict(params))

    try:
        query = WeatherQuery.from_params(params)
    except QueryValidationError as e:
        logger.info("Query parameters are invalid", param=e.param, reason=e.message)
        return QueryResult(error=e)

    logger.info("Parsed weather query", query=repr(query))
    records = query.run(store)
    logger.info("Query returned weather entries", count=len(records))
    return QueryResult(records=records)
