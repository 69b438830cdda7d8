import structlog
import uvicorn

from weather_query.config import settings
from weather_query.core.logging import setup_logging

logger = structlog.get_logger("Main")


def main() -> None:
    setup_logging()
    logger.info("Starting weather-query server", host=settings.host, port=settings.port)

    try:
        uvicorn.run(
            "weather_query.app:app",
            host=settings.host,
            port=settings.port,
            log_config=None,
        )
    except Exception as e:
        logger.critical("Weather Query Main Crash", error=str(e))
        raise

    logger.info("Received shutdown signal. Server stopped")


if __name__ == "__main__":
    main()
