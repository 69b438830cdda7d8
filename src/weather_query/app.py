import typing
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from weather_query.config import RESOURCES_DIR, settings
from weather_query.core.middleware import QueryCacheMiddleware
from weather_query.routers import query
from weather_query.services import get_store

logger = structlog.get_logger("App")

WELCOME_CONTENT = (RESOURCES_DIR / "welcome.html").read_text(encoding="utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI) -> typing.AsyncGenerator[None, None]:
    # Startup: load the dataset before the first request is served
    store = app.dependency_overrides.get(get_store, get_store)()
    logger.info("Weather data ready", entries=len(store))
    yield


app = FastAPI(title="Weather Query", lifespan=lifespan)
app.add_middleware(QueryCacheMiddleware, max_age=settings.cache_max_age)
app.include_router(query.router)


@app.get("/", response_class=HTMLResponse)
async def welcome() -> HTMLResponse:
    return HTMLResponse(WELCOME_CONTENT)
