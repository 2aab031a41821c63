"""
Request-scoped dependencies.

Stores, services and the rate limiter are created once by create_app()
and kept on app.state; routes reach them only through these functions,
so tests can swap any of them with app.dependency_overrides.
"""
from fastapi import Request, Response

from devstudio.core.config import Settings
from devstudio.core.exceptions import RateLimitExceeded
from devstudio.core.rate_limiter import RateLimiter
from devstudio.services.assistant_service import AssistantService
from devstudio.services.project_store import ProjectStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_assistant_service(request: Request) -> AssistantService:
    return request.app.state.assistant_service


def get_project_store(request: Request) -> ProjectStore:
    return request.app.state.project_store


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def enforce_rate_limit(request: Request, response: Response) -> None:
    """
    Apply the per-client rate limit and expose it in response headers.

    Raises:
        RateLimitExceeded: When the client used up its window
    """
    limiter = get_rate_limiter(request)
    client_id = request.client.host if request.client else "unknown"

    is_allowed, remaining = limiter.is_allowed(client_id)

    response.headers["X-RateLimit-Limit"] = str(limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(remaining)

    if not is_allowed:
        raise RateLimitExceeded(retry_after=limiter.retry_after_seconds(client_id))
