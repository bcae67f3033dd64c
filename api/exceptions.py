"""
Exception handling for the HTTP layer.

Maps pipeline failure codes to HTTP status codes and registers handlers so
routers can let typed failures propagate.
"""

import functools
import logging
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.enums import ErrorCode, TransformStage, TransformStatus
from schemas.transform import TransformFailure, TransformResult

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ACCESS_DENIED: 403,
    ErrorCode.UNKNOWN_FORMAT: 415,
    ErrorCode.DECODE_FAILED: 422,
    ErrorCode.ENCODE_FAILED: 422,
    ErrorCode.FETCH_FAILED: 502,
    ErrorCode.STORE_FAILED: 502,
}


def status_code_for(code: ErrorCode) -> int:
    """HTTP status code for a failure code."""
    return STATUS_CODES.get(code, 500)


def result_response(result: TransformResult) -> JSONResponse:
    """Serialize a result, using the failure's status code when it failed."""
    status_code = 200 if result.succeeded else status_code_for(result.error.code)
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


class TransformFailedException(Exception):
    """Raised by routers for a failed transform result"""

    def __init__(self, result: TransformResult):
        super().__init__(result.error.message if result.error else "Transform failed")
        self.result = result


def safe_endpoint(func: Callable) -> Callable:
    """
    Wrap an endpoint so unexpected errors become a 500 response.

    HTTPException and failed transform results pass through to their handlers.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, TransformFailedException):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return wrapper


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for typed failures and request validation."""

    @app.exception_handler(TransformFailedException)
    async def transform_failed_handler(request: Request, exc: TransformFailedException):
        return result_response(exc.result)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        result = TransformResult(
            status=TransformStatus.FAILED,
            error=TransformFailure(
                code=ErrorCode.INVALID_REQUEST,
                stage=TransformStage.VALIDATE,
                message=f"Invalid transform request ({fields})",
            ),
        )
        return result_response(result)
