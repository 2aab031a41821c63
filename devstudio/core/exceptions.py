"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Any, Dict, List, Optional


class DevStudioException(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert to error response dict."""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class RateLimitExceeded(DevStudioException):
    """Raised when a client exceeds the rate limit."""
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int = 60):
        super().__init__(
            message=f"Too many requests. Please wait {retry_after} seconds.",
            details=f"retry_after={retry_after}"
        )
        self.retry_after = retry_after


class ValidationError(DevStudioException):
    """
    Raised when input validation fails.

    Carries every violated field, never just the first one.
    Each violation is a dict with "field", "message" and "type".
    """
    status_code = 400
    error_code = "validation_error"

    def __init__(self, violations: List[Dict[str, str]], message: str = "Invalid request data"):
        fields = ", ".join(v["field"] for v in violations)
        super().__init__(message, details=f"fields={fields}" if fields else None)
        self.violations = violations

    @property
    def fields(self) -> List[str]:
        return [v["field"] for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["violations"] = self.violations
        return data


class NotFoundError(DevStudioException):
    """Raised when a project, file or session id is unknown."""
    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found",
            details=f"id={resource_id}"
        )
        self.resource = resource
        self.resource_id = resource_id


class ProviderConfigError(DevStudioException):
    """Raised when no credential exists for the requested or default provider."""
    status_code = 500
    error_code = "provider_config_error"

    def __init__(self, message: str = "No AI provider is configured"):
        super().__init__(message)


class ProviderCallError(DevStudioException):
    """Raised when the LLM backend is unreachable or rejects the request."""
    status_code = 500
    error_code = "provider_error"

    def __init__(self, message: str = "AI provider request failed"):
        super().__init__(message)


class ProviderTimeout(DevStudioException):
    """Raised when the LLM backend does not answer within the timeout."""
    status_code = 504
    error_code = "provider_timeout"

    def __init__(self, message: str = "AI provider did not respond in time"):
        super().__init__(message)
