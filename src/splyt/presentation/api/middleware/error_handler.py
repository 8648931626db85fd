"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from splyt.domain.exceptions import SplytException
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_SPLIT_STATE": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "DUPLICATE_TRANSACTION": status.HTTP_409_CONFLICT,
    "SPLIT_ID_EXHAUSTED": status.HTTP_409_CONFLICT,
}

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "status": status_code,
            "error": error,
            "message": message,
        },
    )


async def splyt_exception_handler(
    request: Request, exc: SplytException
) -> JSONResponse:
    """
    Handle Splyt domain exceptions.

    Converts domain exceptions to appropriate HTTP responses. Server-side
    failures are logged in full and answered with a generic message.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: "
            f"{exc.code}: {exc.message}"
        )
        return error_response(status_code, exc.code, GENERIC_SERVER_ERROR)

    if status_code == status.HTTP_401_UNAUTHORIZED:
        response = error_response(status_code, exc.code, exc.message)
        response.headers["WWW-Authenticate"] = "Bearer"
        return response

    return error_response(status_code, exc.code, exc.message)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies, paths and queries as 400."""
    problems = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        problems.append(f"{location}: {error.get('msg')}")

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "; ".join(problems) or "Invalid request",
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Last resort: log with traceback, answer with a generic 500."""
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}: "
        f"{type(exc).__name__}"
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        GENERIC_SERVER_ERROR,
    )
