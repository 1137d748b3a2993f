"""Error envelopes and the application's exception handlers."""
import logging
from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Awaitable[Response]]


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the `{"error": {"message": ...}}` envelope used for client errors."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message}},
    )


def build_server_error_handler(verbose: bool) -> ExceptionHandler:
    """
    Build the single handler that shapes every 500 response.

    With `verbose` the error type and message are returned to the client;
    otherwise only a generic message is.
    """

    async def server_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception(
            "unhandled_error",
            extra={"method": request.method, "path": request.url.path},
        )
        if verbose:
            content = {
                "message": str(exc),
                "error": {"type": type(exc).__name__, "detail": repr(exc)},
            }
        else:
            content = {"error": {"message": "server error"}}
        return JSONResponse(status_code=500, content=content)

    return server_error_handler


async def request_validation_handler(
    request: Request,  # noqa: ARG001
    exc: RequestValidationError,
) -> Response:
    """Map FastAPI's request validation failures onto the 400 envelope."""
    errors = exc.errors()
    if errors:
        loc = errors[0].get("loc", ())
        location = loc[0] if loc else "request"
        field = loc[-1] if len(loc) > 1 else location
        return error_response(400, f"Invalid '{field}' in request {location}")
    return error_response(400, "Invalid request")
