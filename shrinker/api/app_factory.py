"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from shrinker import __version__
from shrinker.api.middleware import CORSHeadersMiddleware
from shrinker.api.routes import index_router, redirect_router, shrink_router
from shrinker.constants import ORIGIN_CONFLICT, ORIGIN_NOT_FOUND, MALFORMED_REQUEST, STORE_UNAVAILABLE, GENERATION_EXHAUSTED, QR_CODE_FAILED
from shrinker.dao.exceptions import DataStoreError, RedirectAlreadyExistsError, RedirectNotFoundError
from shrinker.dao.redis import RedirectRedisDAO
from shrinker.exceptions import InvalidRedirectError, OriginGenerationExhaustedError, QRCodeError
from shrinker.services import RedirectResolver, ShrinkService
from shrinker.utils.config import Settings


logger = logging.getLogger(__name__)


def _bare_status(status_code: int, level: int, message: str, event: str):
    """Build an exception handler answering with an empty-bodied status code.

    Error details are logged, never sent to the client.
    """

    def handler(request: Request, exc: Exception) -> Response:
        logger.log(
            level,
            message,
            exc_info=exc if level >= logging.ERROR else None,
            extra={'path': request.url.path, 'error': str(exc), 'event': event},
        )
        return Response(status_code=status_code)

    return handler


def create_app(shrink_service: ShrinkService, redirect_resolver: RedirectResolver) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        shrink_service: Service creating and validating mappings
        redirect_resolver: Resolver deciding the redirect of an origin

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title='shrinker',
        description='Short links with configurable redirects',
        version=__version__,
    )

    # Store instances in app state for access in routes
    app.state.shrink_service = shrink_service
    app.state.redirect_resolver = redirect_resolver

    app.add_middleware(CORSHeadersMiddleware)

    # fmt: off
    app.add_exception_handler(RedirectNotFoundError, _bare_status(status.HTTP_404_NOT_FOUND, logging.INFO, 'Origin not found. Responding with 404.', ORIGIN_NOT_FOUND))
    app.add_exception_handler(RedirectAlreadyExistsError, _bare_status(status.HTTP_409_CONFLICT, logging.INFO, 'Origin already bound. Responding with 409.', ORIGIN_CONFLICT))
    app.add_exception_handler(InvalidRedirectError, _bare_status(status.HTTP_400_BAD_REQUEST, logging.INFO, 'Malformed mapping. Responding with 400.', MALFORMED_REQUEST))
    app.add_exception_handler(RequestValidationError, _bare_status(status.HTTP_400_BAD_REQUEST, logging.INFO, 'Malformed request body. Responding with 400.', MALFORMED_REQUEST))
    app.add_exception_handler(DataStoreError, _bare_status(status.HTTP_500_INTERNAL_SERVER_ERROR, logging.ERROR, 'Data store failure. Responding with 500.', STORE_UNAVAILABLE))
    app.add_exception_handler(OriginGenerationExhaustedError, _bare_status(status.HTTP_500_INTERNAL_SERVER_ERROR, logging.ERROR, 'Origin generation exhausted. Responding with 500.', GENERATION_EXHAUSTED))
    app.add_exception_handler(QRCodeError, _bare_status(status.HTTP_500_INTERNAL_SERVER_ERROR, logging.ERROR, 'QR code encoding failed. Responding with 500.', QR_CODE_FAILED))
    # fmt: on

    app.include_router(index_router)
    app.include_router(shrink_router)
    app.include_router(redirect_router)

    return app


def create_app_from_settings(settings: Settings) -> FastAPI:
    """Wire the Redis DAO, services and app from runtime settings.

    Both services share one DAO, hence one Redis connection pool.

    Raises:
        DataStoreError: if Redis is unreachable at startup.
    """
    dao = RedirectRedisDAO(
        redis_url=settings.redis_uri,
        redis_timeout=settings.redis_timeout,
        prefix=settings.prefix,
    )
    return create_app(
        shrink_service=ShrinkService(dao, origin_length=settings.origin_length),
        redirect_resolver=RedirectResolver(dao),
    )
