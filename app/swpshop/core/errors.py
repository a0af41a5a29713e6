from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.swpshop.core.error_catalog import AppError, ErrorCatalog, catalog_error
from app.swpshop.core.logging import log_json
from swpshop_client_sdk.results import ApiError, ErrorType, json_safe

logger = logging.getLogger("swpshop.errors")

_STATUS_BY_TYPE = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFIG: 500,
    ErrorType.NETWORK: 502,
}


def status_for_error(error: ApiError) -> int:
    mapped = _STATUS_BY_TYPE.get(error.type)
    if mapped is not None:
        return mapped
    # a failure never leaves as 2xx/3xx, e.g. an unreadable 200 body
    if isinstance(error.status, int) and not isinstance(error.status, bool) and error.status >= 400:
        return error.status
    return 502


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "")


def _set_error_context(request: Request, error: ApiError, exc: Exception | None = None) -> None:
    request.state.error_type = error.type.value
    if exc is not None:
        request.state.error_class = exc.__class__.__name__


def error_payload(error: ApiError, *, status_code: int, trace_id: str) -> dict:
    body = error.to_dict()
    body["status"] = status_code
    body["trace_id"] = trace_id
    return {"error": body}


def error_response(request: Request, error: ApiError, exc: Exception | None = None) -> JSONResponse:
    _set_error_context(request, error, exc)
    status_code = status_for_error(error)
    return JSONResponse(
        status_code=status_code,
        content=error_payload(error, status_code=status_code, trace_id=_trace_id(request)),
    )


def _validation_error_details(exc: RequestValidationError) -> dict:
    errors = []
    for error in exc.errors():
        loc = list(error.get("loc", []))
        field = ".".join(str(item) for item in loc if item not in {"body", "query", "path", "header"}) or None
        errors.append(
            {
                "field": field,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "validation_error"),
                "loc": loc,
                "input": json_safe(error.get("input")),
            }
        )
    return {"errors": errors}


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.upstream:
            log_json(
                logger,
                {
                    "event": "upstream_error",
                    "trace_id": _trace_id(request),
                    "type": exc.error.type.value,
                    "status": exc.error.status,
                    "code": exc.error.code,
                    "message": exc.error.message,
                    "retryable": exc.error.retryable,
                },
                level=logging.WARNING,
            )
        return error_response(request, exc.error, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            error = catalog_error(ErrorCatalog.ROUTE_NOT_FOUND, {"path": request.url.path})
        else:
            error = ApiError(
                type=ErrorType.HTTP,
                message=str(exc.detail) if exc.detail is not None else "Request failed.",
                status=exc.status_code,
            )
        response = error_response(request, error, exc)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = catalog_error(ErrorCatalog.VALIDATION_ERROR, _validation_error_details(exc))
        return error_response(request, error, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error while serving %s %s", request.method, request.url.path, exc_info=exc)
        error = catalog_error(ErrorCatalog.INTERNAL_ERROR, {"type": exc.__class__.__name__})
        return error_response(request, error, exc)
