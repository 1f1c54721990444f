"""Global exception handlers.

Every error leaves the service in the same envelope as successful responses:
``{"success": false, "message": ..., "data": null | {field: message}}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.core.errors import CatalogError
from catalog_api.core.logging import get_logger
from catalog_api.schemas import ApiResponse

logger = get_logger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _error_response(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    body = ApiResponse(success=False, message=message, data=data)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True),
        headers=headers,
    )


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.info(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
        extra={"requestId": _request_id(request)},
    )
    return _error_response(exc.http_status, exc.message)


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        errors.setdefault(".".join(loc) or "body", err.get("msg", "Invalid value"))
    return errors


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = _field_errors(exc)
    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        field_errors,
        extra={"requestId": _request_id(request)},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", data=field_errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Internal details stay in the log.
    logger.exception(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        extra={"requestId": _request_id(request)},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")
