import logging
import logging.handlers
import os
import sys
import typing

import structlog

from weather_query.config import settings

LOG_FILE_NAME = "weather-query.log"


def resolve_log_dir(log_dir: str) -> str:
    """Return log_dir if it is writable, otherwise a local .logs fallback."""
    try:
        os.makedirs(log_dir, exist_ok=True)
        if not os.access(log_dir, os.W_OK):
            raise PermissionError(f"{log_dir} is not writable")
    except (PermissionError, OSError):
        log_dir = os.path.join(os.getcwd(), ".logs")
        os.makedirs(log_dir, exist_ok=True)
    return log_dir


def setup_logging(log_dir: str | None = None, log_level: str | None = None) -> None:
    """Configure structlog and the stdlib handlers for the query service."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # JSON Formatter for stdlib handlers (uvicorn etc.)
    pre_chain: list[typing.Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=pre_chain,
    )

    handlers: list[logging.Handler] = []

    # Stdout
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    # File
    log_file = os.path.join(resolve_log_dir(log_dir or settings.log_dir), LOG_FILE_NAME)
    file_error: OSError | None = None
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file, when="midnight", interval=1, backupCount=30, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    except OSError as e:
        file_error = e

    logging.basicConfig(level=log_level or settings.log_level, handlers=handlers, force=True)

    # Reduce noise from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if file_error is not None:
        structlog.get_logger("Logging").warning(
            "File logging disabled", log_file=log_file, error=str(file_error)
        )
