"""Response headers middleware."""

import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from shrinker.constants import CORS_HEADERS, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Attach the blanket CORS policy to every response.

    Preflight (OPTIONS) requests are answered directly with 200. Unhandled
    errors are logged and answered with a bare 500, so clients always get a
    response carrying the CORS headers.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.method == 'OPTIONS':
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    'Unhandled error while serving request. Responding with 500.',
                    extra={'path': request.url.path, 'method': request.method, 'event': UNKNOWN_INTERNAL_SERVER_ERROR},
                )
                response = Response(status_code=500)

        response.headers.update(CORS_HEADERS)
        return response
