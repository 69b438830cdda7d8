from .dataset import DatasetError, DatasetStore, get_store
from .query import (
    InvalidDate,
    InvalidLimit,
    InvalidWeather,
    QueryResult,
    QueryValidationError,
    WeatherQuery,
    evaluate,
)

__all__ = [
    "DatasetError",
    "DatasetStore",
    "get_store",
    "InvalidDate",
    "InvalidLimit",
    "InvalidWeather",
    "QueryResult",
    "QueryValidationError",
    "WeatherQuery",
    "evaluate",
]
