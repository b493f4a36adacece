import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from docserver.errors import AccessDeniedError, AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str) -> JSONResponse:
    """Create JSON error response in the `{"error": {"code", "text"}}` envelope."""
    return JSONResponse(status_code=status_code, content={"error": {"code": status_code, "text": message}})


def error_status_code(exc: Exception) -> int:
    """HTTP status for a UserError subclass."""
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AccessDeniedError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    # Default for any other UserError subclass
    return 400


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    return create_json_error_response(status_code=error_status_code(exc), message=str(exc))


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(status_code=500, message="Internal server error")
