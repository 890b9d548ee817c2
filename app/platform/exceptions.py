import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.response import api_response, message_response

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors rendered straight to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, detail: str, error_type: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.error_type = error_type or type(self).__name__

    def details(self) -> dict:
        return {"error": self.detail, "type": self.error_type}


class ConfigurationError(AppError):
    """A required setting is missing."""


class AccessError(AppError):
    """An upstream resource refused access or could not be reached."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Failed to access spreadsheet. Please verify permissions and spreadsheet ID."

    def details(self) -> dict:
        return {}


class InternalError(AppError):
    """Anything else, carrying the underlying message and classification."""

    @classmethod
    def from_exception(cls, exc: Exception) -> "InternalError":
        return cls(str(exc), error_type=type(exc).__name__)


def add_exception_handlers(app):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.error(f"{exc.error_type} on {request.url.path}: {exc.detail}")
        return message_response(exc.message, status_code=exc.status_code, **exc.details())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            data={"errors": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
