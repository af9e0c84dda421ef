"""HTTP routes of the shrink API

    GET  /                              liveness
    GET  /api/{origin}                  redirect to the target of an origin
    POST /api/shrink/                   bind an origin to a target
    GET  /api/shrink/generate-origin    mint a free origin
    POST /api/shrink/validate-origin    check whether an origin is free
    POST /api/shrink/generate-qr-code   render a QR code as SVG

Handlers are plain functions, so each request runs in its own worker thread.
Errors raised by the services are turned into bare status codes by the
exception handlers registered in app_factory.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse, Response

from shrinker.api.schemas import CreateShrinkRequest, GenerateOriginResponse, GenerateQRCodeRequest, ValidateOriginRequest
from shrinker.services import RedirectResolver, ShrinkService
from shrinker.utils.qr import SVG_MEDIA_TYPE, render_svg


index_router = APIRouter()
redirect_router = APIRouter(prefix='/api', tags=['redirect'])
shrink_router = APIRouter(prefix='/api/shrink', tags=['shrink'])


def get_shrink_service(request: Request) -> ShrinkService:
    return request.app.state.shrink_service


def get_redirect_resolver(request: Request) -> RedirectResolver:
    return request.app.state.redirect_resolver


@index_router.get('/')
def index() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@redirect_router.get('/{origin}')
def redirect(origin: str, resolver: RedirectResolver = Depends(get_redirect_resolver)) -> RedirectResponse:
    """Redirect to the target bound to an origin.

    The response status follows the status stored with the record:
    301, 302, 303, 307 or 308, and 303 for anything else.
    """
    decision = resolver.resolve(origin)
    return RedirectResponse(url=decision.location, status_code=int(decision.kind))


@shrink_router.post('/', status_code=status.HTTP_201_CREATED)
def create(body: CreateShrinkRequest, service: ShrinkService = Depends(get_shrink_service)) -> Response:
    """Bind an origin to a target, optionally expiring at expireDate."""
    service.create_mapping(
        origin=body.origin,
        target=body.target,
        status_code=body.status_code,
        expire_at=body.expire_date,
        overwrite=body.overwrite,
    )
    return Response(status_code=status.HTTP_201_CREATED)


@shrink_router.get('/generate-origin', response_model=GenerateOriginResponse)
def generate_origin(service: ShrinkService = Depends(get_shrink_service)) -> GenerateOriginResponse:
    return GenerateOriginResponse(origin=service.generate_unique_origin())


@shrink_router.post('/validate-origin')
def validate_origin(body: ValidateOriginRequest, service: ShrinkService = Depends(get_shrink_service)) -> Response:
    """200 if the origin is free, 409 if it is already bound."""
    if service.validate_origin(body.origin):
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_409_CONFLICT)


@shrink_router.post('/generate-qr-code')
def generate_qr_code(body: GenerateQRCodeRequest) -> Response:
    return Response(content=render_svg(body.shrink), media_type=SVG_MEDIA_TYPE)
