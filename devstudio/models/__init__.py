"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for the AI endpoints
- Response models: Output formatting for API responses
- Project models: Records held by the project store
"""
from devstudio.models.requests import (
    Operation,
    GenerateCodeRequest,
    ReviewCodeRequest,
    DebugCodeRequest,
    DocumentCodeRequest,
    GenerateTestsRequest,
    RefactorRequest,
    ExplainCodeRequest,
    ChatRequest,
    MemoryClearRequest,
    REQUEST_MODELS,
)
from devstudio.models.responses import (
    UsageInfo,
    OperationResponse,
    GenerateResponse,
    ChatResponse,
    HealthResponse,
    ErrorResponse,
)
from devstudio.models.project import (
    Project,
    ProjectFile,
    ProjectCreate,
    ProjectUpdate,
    FileCreate,
    FileUpdate,
)

__all__ = [
    "Operation",
    "GenerateCodeRequest",
    "ReviewCodeRequest",
    "DebugCodeRequest",
    "DocumentCodeRequest",
    "GenerateTestsRequest",
    "RefactorRequest",
    "ExplainCodeRequest",
    "ChatRequest",
    "MemoryClearRequest",
    "REQUEST_MODELS",
    "UsageInfo",
    "OperationResponse",
    "GenerateResponse",
    "ChatResponse",
    "HealthResponse",
    "ErrorResponse",
    "Project",
    "ProjectFile",
    "ProjectCreate",
    "ProjectUpdate",
    "FileCreate",
    "FileUpdate",
]
