# src/utils/exception_handler.py
from http import HTTPStatus
from fastapi import FastAPI, Request, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .logger import setup_logger
from .exceptions import BaseAPIException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError, NoResultFound
from slowapi.errors import RateLimitExceeded

logger = setup_logger("EXCEPTION HANDLER")


def error_response(status_code: int, message, error_type: str, headers=None) -> JSONResponse:
    """Every error leaves the API in the same envelope"""
    return JSONResponse(
        status_code=status_code,
        content={
            "message": jsonable_encoder(message),
            "type": error_type,
            "status": status_code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(BaseAPIException)
    async def api_exception_handler(request: Request, exc: BaseAPIException):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.detail}")
        return error_response(
            exc.status_code, exc.detail, exc.__class__.__name__, exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Request validation failed on {request.url.path}")
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, exc.errors(), "ValidationError"
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # Routing errors (unknown path, wrong method) raised by the framework
        detail = exc.detail or HTTPStatus(exc.status_code).phrase
        logger.info(f"HTTP {exc.status_code} on {request.url.path}: {detail}")
        return error_response(
            exc.status_code, detail, "HTTPException", getattr(exc, "headers", None)
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_write_error_handler(request: Request, exc: SQLAlchemyError):
        # Reads are translated inside the store; failed writes surface here
        logger.error(f"Document store write failed: {str(exc)}", exc_info=True)

        if isinstance(exc, IntegrityError):
            return error_response(
                status.HTTP_409_CONFLICT, "Document conflicts with stored data", "DatabaseError"
            )
        if isinstance(exc, NoResultFound):
            return error_response(
                status.HTTP_404_NOT_FOUND, "Requested document not found", "NotFoundError"
            )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Document store operation failed",
            "DatabaseError",
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
        return error_response(
            status.HTTP_429_TOO_MANY_REQUESTS,
            f"Too many requests - limit {exc.detail}",
            "RateLimitExceeded",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "InternalServerError"
        )
