"""Maps exceptions onto the response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.api.responses import envelope
from taskboard.domain.exceptions import InvalidArgumentError, NotFoundError, StoreFailureError

log = logging.getLogger(__name__)


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    log.info(f"{request.method} {request.url.path} rejected: {exc}")
    return envelope(exc.message, exc.details, status.HTTP_400_BAD_REQUEST)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return envelope(exc.message, exc.details, status.HTTP_404_NOT_FOUND)


async def store_failure_handler(request: Request, exc: StoreFailureError) -> JSONResponse:
    log.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return envelope(exc.message, exc.detail, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return envelope("Invalid request", exc.errors(), status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(f"{request.method} {request.url.path} raised an unexpected error", exc_info=exc)
    return envelope("Internal server error", str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreFailureError, store_failure_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
