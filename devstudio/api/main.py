"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Building the LLM client, stores and services from settings
2. Router registration
3. Middleware configuration (security headers, audit, CORS)
4. Exception handlers mapping the error hierarchy to HTTP responses
5. Startup/shutdown events

Run with: uvicorn devstudio.api.main:app --reload
"""
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devstudio import __version__
from devstudio.api.routes import ai_router, health_router, projects_router
from devstudio.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from devstudio.core.config import Settings, get_settings
from devstudio.core.exceptions import DevStudioException, RateLimitExceeded, ValidationError
from devstudio.core.logging_config import get_logger, setup_logging
from devstudio.core.rate_limiter import RateLimiter
from devstudio.core.validators import format_violations
from devstudio.llm.client import LLMClient
from devstudio.memory import SessionMemoryStore, create_memory_store
from devstudio.services.assistant_service import AssistantService
from devstudio.services.project_store import ProjectStore

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    llm_client: Optional[LLMClient] = None,
    memory_store: Optional[SessionMemoryStore] = None,
    project_store: Optional[ProjectStore] = None,
) -> FastAPI:
    """
    Build a fully wired application.

    Anything not passed in is built from settings, so tests can inject a
    stub LLM client or pre-filled stores.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_dir)

    llm_client = llm_client or LLMClient.from_settings(settings)
    memory_store = memory_store or create_memory_store(settings)
    project_store = project_store or ProjectStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
        logger.info(f"Providers: {llm_client.providers or 'none'} (default={llm_client.default_provider})")
        logger.info(
            f"Rate Limit: {settings.rate_limit_max_requests} req / "
            f"{settings.rate_limit_window_seconds:g}s"
        )
        logger.info(f"Memory backend: {settings.memory_backend}")

        yield

        logger.info(f"Shutting down {settings.app_name}")
        memory_store.close()

    app = FastAPI(
        title="DevStudio API",
        description="""
    AI-assisted development backend.

    ## Features

    - **Code operations**: generate, review, debug, document, test, refactor, explain
    - **Chat**: multi-turn conversation with optional session memory
    - **Projects**: in-memory project and file workspace
    - **Providers**: OpenAI, Anthropic, Groq and Gemini
    """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.assistant_service = AssistantService(llm_client, memory_store)
    app.state.project_store = project_store
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    # Middleware: the last one added runs first
    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)
        logger.info("Audit logging middleware enabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    app.include_router(health_router)
    app.include_router(ai_router)
    app.include_router(projects_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "DevStudio API",
            "version": __version__,
            "documentation": "/docs",
            "health": "/health"
        }

    return app


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded: {request.client.host if request.client else 'unknown'}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"Retry-After": str(exc.retry_after)}
        )

    @app.exception_handler(DevStudioException)
    async def devstudio_exception_handler(request: Request, exc: DevStudioException):
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(format_violations(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error_code = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": str(exc.detail),
                "error_code": error_code,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions globally.

        The message is always generic; the trace is only included outside
        production.
        """
        logger.exception(f"Unhandled exception: {exc}")

        content = {
            "success": False,
            "error": "An unexpected error occurred",
            "error_code": "internal_error",
        }
        if not settings.is_production():
            content["trace"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return JSONResponse(status_code=500, content=content)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "devstudio.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().is_development()
    )
