"""
Error taxonomy for the API.

Every error, unexpected ones included, reaches the client as
``{"error": "<message>"}`` with the status code of its class. Database and
provider failures are collapsed into InternalError so callers never see
driver messages.
"""
import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class ConflictError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class UnauthorizedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ServiceUnavailableError(APIError):
    # reported as 500 to match the deployed frontend's expectations
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Drive service not configured"


class InternalError(APIError):
    message = "Database error"


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": APIError.message},
    )


def install_error_handlers(app):
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
