import typing

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

QUERY_PATH = "/query"


class QueryCacheMiddleware(BaseHTTPMiddleware):
    """
    Cache headers for /query.
    The dataset never changes while the process runs, so a successful answer
    for a given query string stays valid; validation errors are not cached.
    """

    def __init__(self, app: typing.Any, max_age: int) -> None:
        super().__init__(app)
        self.max_age = max_age

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        if request.url.path != QUERY_PATH:
            return response

        if response.status_code == 200:
            response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        else:
            response.headers["Cache-Control"] = "no-store"
        return response
