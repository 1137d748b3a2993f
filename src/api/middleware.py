"""HTTP middleware applied to every route."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from api.errors import ExceptionHandler

logger = logging.getLogger("api.access")

SECURITY_HEADERS: dict[str, str] = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}


class ErrorResponseMiddleware(BaseHTTPMiddleware):
    """
    Turn unhandled exceptions into the error handler's response.

    Added innermost so the 500 still passes through the CORS and security
    header middleware on its way out.
    """

    def __init__(self, app: ASGIApp, handler: ExceptionHandler) -> None:
        super().__init__(app)
        self.handler = handler

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await self.handler(request, exc)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add a fixed set of security headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request.

    `short` gives "METHOD path status duration"; otherwise the line also
    carries the client address and HTTP version.
    """

    def __init__(self, app: ASGIApp, short: bool = False) -> None:
        super().__init__(app)
        self.short = short

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start)
            raise
        self._log(request, response.status_code, start)
        return response

    def _log(self, request: Request, status_code: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        extra = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if self.short:
            logger.info(
                "%s %s %s %.2f ms", request.method, path, status_code, duration_ms,
                extra=extra,
            )
            return
        client = request.client.host if request.client else "-"
        http_version = request.scope.get("http_version", "1.1")
        logger.info(
            '%s "%s %s HTTP/%s" %s %.2f ms',
            client, request.method, path, http_version, status_code, duration_ms,
            extra=extra,
        )
