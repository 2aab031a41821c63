"""
Response models for the API.

All successful AI responses share the {success, result, ...} envelope;
errors use ErrorResponse.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from devstudio.models.requests import ApiModel


class UsageInfo(ApiModel):
    """Token usage reported by the provider."""
    input_tokens: int = 0
    output_tokens: int = 0


class OperationResponse(ApiModel):
    """Response for review/debug/document/test/refactor/explain."""
    success: bool = True
    result: str
    provider: Optional[str] = None
    model: Optional[str] = None
    usage: Optional[UsageInfo] = None


class GenerateResponse(OperationResponse):
    """Generated code is returned both as result and as code."""
    code: str
    language: str


class ChatResponse(ApiModel):
    success: bool = True
    response: str
    model: Optional[str] = None
    provider: Optional[str] = None
    session_id: Optional[str] = None
    usage: Optional[UsageInfo] = None


class MemoryClearResponse(ApiModel):
    success: bool = True
    session_id: str


class ModelsResponse(ApiModel):
    models: List[str]


class ProvidersResponse(ApiModel):
    providers: List[str]
    default: Optional[str] = None


class HealthResponse(ApiModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="ok")
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(ApiModel):
    """Standard error response model."""
    success: bool = False
    error: str
    error_code: str
    details: Optional[str] = None
    violations: Optional[List[Dict[str, Any]]] = None
