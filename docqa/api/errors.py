"""
Exception handlers.

Maps the application error taxonomy onto HTTP responses with a uniform
{"error": message} body.

Dependencies: fastapi, docqa.core.exceptions
System role: Error-to-response translation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docqa.core.exceptions import DocQAError

logger = logging.getLogger(__name__)


def error_body(message: str, details: dict | None = None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = jsonable_encoder(details)
    return body


async def docqa_error_handler(request: Request, exc: DocQAError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            extra={"error_type": type(exc).__name__},
        )
    else:
        logger.info(
            f"{request.method} {request.url.path} - {exc.status_code} {type(exc).__name__}",
            extra={"error_type": type(exc).__name__},
        )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request", {"errors": exc.errors()}),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} - Unhandled {type(exc).__name__}")
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers to an application."""
    app.add_exception_handler(DocQAError, docqa_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
