"""
Audit Middleware - one log line per API request.

Each line carries a request id, the method and path, the response status,
the elapsed time and the client address. AI operation calls are the slow
path of the service, so their lines are tagged with the operation name to
make provider latency easy to grep for.

SecurityHeadersMiddleware sets the hardening headers every response gets.
"""
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from devstudio.core.logging_config import get_logger

logger = get_logger(__name__)

HEALTH_PATHS = ("/health", "/health/ready")

REQUEST_ID_HEADER = "X-Request-ID"

# Paths under /api that call a provider
_AI_OPERATIONS = {
    "generate", "review", "debug", "document", "test", "chat", "refactor", "explain",
}


def operation_for(path: str) -> Optional[str]:
    """Name of the AI operation a path targets, or None."""
    parts = path.strip("/").split("/")
    if len(parts) == 2 and parts[0] == "api" and parts[1] in _AI_OPERATIONS:
        return parts[1]
    return None


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Logs every request and stamps X-Request-ID and X-Response-Time.

    A client-supplied X-Request-ID is kept so calls can be traced from
    the browser to the log.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        client_ip = request.client.host if request.client else "unknown"
        path = request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{request_id}] {request.method} {path} failed after "
                f"{time.perf_counter() - started:.3f}s client={client_ip}: {e}"
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"

        if path in HEALTH_PATHS:
            logger.debug(f"[{request_id}] {path} status={response.status_code}")
            return response

        operation = operation_for(path)
        line = (
            f"[{request_id}] {request.method} {path} status={response.status_code} "
            f"duration={elapsed:.3f}s client={client_ip}"
        )
        if operation:
            line += f" operation={operation}"

        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the baseline hardening headers to every response."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Cross-Origin-Resource-Policy": "same-site",
        "X-DNS-Prefetch-Control": "off",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers.setdefault(name, value)
        return response
