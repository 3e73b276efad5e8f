"""
Error taxonomy and the single recovery point.

Library code raises one of the `AppError` subclasses below; nothing outside
this module turns an error into a response. `register_error_handlers` installs
the handlers on the FastAPI app:

- AppError subclasses -> their own status from `STATUS_BY_ERROR`
- request validation (body/path/query) -> 422
- unknown route -> 404 "Route not found"
- anything unexpected -> 500 (logged with traceback)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    kind = "app_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(AppError):
    kind = "parse_error"

    def __init__(self, underlying: ValueError) -> None:
        super().__init__(f"Cannot parse parameter: {underlying}")
        self.underlying = underlying


class MissingParameters(AppError):
    kind = "missing_parameters"

    def __init__(self) -> None:
        super().__init__("Missing parameter")


class QuestionNotFound(AppError):
    kind = "question_not_found"

    def __init__(self, question_id: int | None = None) -> None:
        super().__init__("Question not found")
        self.question_id = question_id


class DatabaseQueryError(AppError):
    kind = "database_query_error"

    def __init__(self) -> None:
        # Driver details stay in the logs.
        super().__init__("Database query failed")


class ExternalAPIError(AppError):
    kind = "external_api_error"

    def __init__(self, underlying: Exception) -> None:
        # Transport details (upstream host) stay in the logs.
        super().__init__("External API call failed")
        self.underlying = underlying


class _APILayerError(AppError):
    label = "External"

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{self.label}: Status: {status}, Message: {message}")
        self.status = status
        self.api_message = message


class ClientError(_APILayerError):
    kind = "client_error"
    label = "External Client error"


class ServerError(_APILayerError):
    kind = "server_error"
    label = "External Server error"


STATUS_BY_ERROR: dict[type[AppError], int] = {
    ParseError: 400,
    MissingParameters: 400,
    QuestionNotFound: 404,
    DatabaseQueryError: 500,
    ExternalAPIError: 502,
    ClientError: 502,
    ServerError: 503,
}


def _error_response(
    status_code: int,
    error: str,
    detail: object,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail}, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        # KeyError here means a new AppError subclass was added without a status.
        status_code = STATUS_BY_ERROR[type(exc)]
        if status_code >= 500:
            logger.error(
                "request_failed method=%s path=%s error=%s detail=%s",
                request.method,
                request.url.path,
                exc.kind,
                exc.message,
            )
        else:
            logger.warning(
                "request_rejected method=%s path=%s error=%s detail=%s",
                request.method,
                request.url.path,
                exc.kind,
                exc.message,
            )
        return _error_response(status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("request_invalid method=%s path=%s", request.method, request.url.path)
        errors = [
            {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", ""))}
            for err in exc.errors()
        ]
        return _error_response(422, "unprocessable_entity", errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error_response(404, "not_found", "Route not found")
        # Keep framework headers such as `Allow` on a 405.
        return _error_response(exc.status_code, "http_error", exc.detail, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error method=%s path=%s type=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _error_response(500, "internal_error", "Internal server error")
