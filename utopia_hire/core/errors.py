"""
Error handling - exception types and JSON error responses.

Every error leaves the API as {"error": "<message>"} (plus "details" when
there is something useful to add), with the status code telling the
category: 400 validation, 401 auth, 403 ownership, 404 missing, 500 other.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Generative AI call failed or returned something unusable."""


class WebhookError(Exception):
    """A workflow webhook answered with a non-OK status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Webhook returned {status_code}")
        self.status_code = status_code
        self.body = body


class APIError(HTTPException):
    """HTTPException carrying an optional `details` field."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(status_code=status_code, detail=message)
        self.details = details


def _error_body(message, details=None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, getattr(exc, "details", None)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", []) if p != "body")
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request body"
    return JSONResponse(status_code=400, content=_error_body(message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
