import typing

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from weather_query.services import DatasetStore, evaluate, get_store

router = APIRouter()


@router.get("/query", response_model=None)
def weather_query(
    request: Request, store: DatasetStore = Depends(get_store)
) -> JSONResponse | PlainTextResponse:
    """Filter the weather data by date, weather kind and limit.
    Usage: GET /query?weather=snow&limit=5
    """
    # Repeated keys: last occurrence wins
    params: dict[str, str] = dict(request.query_params)

    result = evaluate(params, store)
    if result.error is not None:
        return PlainTextResponse(result.error.message, status_code=400)

    payload: list[dict[str, typing.Any]] = [
        record.model_dump(mode="json") for record in result.records
    ]
    return JSONResponse(payload)
