"""API error handling

Use case errors are raised as ClientError and rendered as
{"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


def status_code_for(error: Error) -> int:
    if error.code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error.code == "ENTRY_ARCHIVED":
        return status.HTTP_409_CONFLICT
    if error.code.endswith("_FAILED") or error.code == "MUTATION_TIMEOUT":
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error):
    raise ClientError(error, status_code=status_code_for(error))


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} ({exc.error.reason})")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request parameters",
                "details": jsonable_encoder(exc.errors()),
            }
        },
    )
