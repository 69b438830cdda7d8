import csv
import datetime
import importlib.util
import io
import re
import types
import typing
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import structlog

from weather_query.config import settings
from weather_query.models import WeatherKind, WeatherRecord, parse_date

logger = structlog.get_logger("Dataset")

# vega_datasets writes dates as YYYY/MM/DD
SLASHED_DATE = re.compile(r"^([0-9]{4})/([0-9]{2})/([0-9]{2}),", re.MULTILINE)

CSV_COLUMNS = ("date", "precipitation", "temp_max", "temp_min", "wind", "weather")


class DatasetError(Exception):
    """Raised when the weather data file cannot be parsed."""


@dataclass(frozen=True)
class RowParseError:
    """A single CSV line that could not be turned into a WeatherRecord."""

    line_num: int
    line: str
    reason: str


def parse_row(fields: list[str]) -> WeatherRecord:
    """Build a record from one CSV row (file column order, temp_max before temp_min)."""
    if len(fields) != len(CSV_COLUMNS):
        raise ValueError(f"expected {len(CSV_COLUMNS)} columns, got {len(fields)}")
    raw = dict(zip(CSV_COLUMNS, fields, strict=True))
    # pydantic.ValidationError is a ValueError
    return WeatherRecord(
        date=parse_date(raw["date"]),
        precipitation=float(raw["precipitation"]),
        temp_min=float(raw["temp_min"]),
        temp_max=float(raw["temp_max"]),
        wind=float(raw["wind"]),
        weather=WeatherKind(raw["weather"]),
    )


def normalize_dates(text: str) -> str:
    """Rewrite leading YYYY/MM/DD dates as YYYY-MM-DD."""
    return SLASHED_DATE.sub(r"\1-\2-\3,", text)


def seattle_weather_path() -> Path:
    """Seattle 2012-2015 daily weather table shipped with the vega_datasets package."""
    # find_spec locates the package without importing it (and pandas with it)
    spec = importlib.util.find_spec("vega_datasets")
    if spec is None or spec.origin is None:
        raise DatasetError("vega_datasets is not installed; set WEATHER_QUERY_DATA_FILE instead")
    return Path(spec.origin).parent / "_data" / "seattle-weather.csv"


def parse_rows(text: str) -> Iterator[WeatherRecord | RowParseError]:
    """
    Parse every data line of the file contents.
    The header line is skipped and blank lines are ignored. Each line yields
    either a record or a RowParseError carrying its 1-based line number.
    """
    lines = text.splitlines()
    for line_num, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            fields = next(csv.reader(io.StringIO(line)))
            yield parse_row(fields)
        except (ValueError, csv.Error) as e:
            yield RowParseError(line_num=line_num, line=line, reason=str(e))


class DatasetStore:
    """
    Immutable, date-ordered collection of weather records.
    Built once; the records tuple and both indexes are read-only afterwards.
    """

    def __init__(self, records: typing.Iterable[WeatherRecord]) -> None:
        self._records: tuple[WeatherRecord, ...] = tuple(sorted(records, key=lambda r: r.date))

        by_kind: dict[WeatherKind, list[WeatherRecord]] = {}
        for record in self._records:
            by_kind.setdefault(record.weather, []).append(record)

        self._by_date: Mapping[datetime.date, WeatherRecord] = types.MappingProxyType(
            {record.date: record for record in self._records}
        )
        self._by_kind: Mapping[WeatherKind, tuple[WeatherRecord, ...]] = types.MappingProxyType(
            {kind: tuple(entries) for kind, entries in by_kind.items()}
        )

    @classmethod
    def from_csv(cls, text: str) -> "DatasetStore":
        """Parse CSV contents, failing on any malformed line."""
        logger.info("Parsing weather data")

        records: list[WeatherRecord] = []
        error_count = 0
        for result in parse_rows(text):
            if isinstance(result, RowParseError):
                error_count += 1
                logger.error(
                    "Failed to parse weather data line",
                    line_num=result.line_num,
                    line=result.line,
                    parse_error=result.reason,
                )
                continue
            records.append(result)

        if error_count > 0:
            raise DatasetError(f"Exiting because of {error_count} parse error(s)")

        store = cls(records)
        if store:
            first, last = store.all()[0], store.all()[-1]
            logger.info(
                "Parsed and sorted weather entries",
                entries=len(store),
                first_date=first.date.isoformat(),
                last_date=last.date.isoformat(),
            )
        else:
            logger.warning("The weather data file contained no entries")
        return store

    @classmethod
    def from_path(cls, path: Path) -> "DatasetStore":
        logger.info("Loading weather data", path=str(path))
        with open(path, encoding="utf-8") as f:
            return cls.from_csv(normalize_dates(f.read()))

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> tuple[WeatherRecord, ...]:
        return self._records

    def by_date(self, day: datetime.date) -> WeatherRecord | None:
        return self._by_date.get(day)

    def by_kind(self, kind: WeatherKind) -> tuple[WeatherRecord, ...]:
        return self._by_kind.get(kind, ())


@lru_cache(maxsize=1)
def get_store() -> DatasetStore:
    """Process-wide store, loaded on first use from the configured data file."""
    return DatasetStore.from_path(settings.data_file or seattle_weather_path())
