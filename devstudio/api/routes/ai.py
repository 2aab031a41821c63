"""
AI Routes - API endpoints for the LLM-backed operations.

Endpoints:
- POST /api/generate, /review, /debug, /document, /test, /refactor, /explain
- POST /api/chat: conversation with optional session memory
- POST /api/memory/clear: drop a session's memory
- GET  /api/memory/{session_id}: read a session's memory
- GET  /api/models, /api/providers: what clients may pick from

Every handler validates the raw body first; a rejected payload never
reaches a provider.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from devstudio.api.dependencies import (
    enforce_rate_limit,
    get_app_settings,
    get_assistant_service,
)
from devstudio.core.config import Settings
from devstudio.core.exceptions import ProviderCallError, ProviderConfigError, ProviderTimeout
from devstudio.core.logging_config import get_logger
from devstudio.core.validators import validate_payload, validate_request
from devstudio.llm.base import AIResponse, ErrorType
from devstudio.memory import DEFAULT_READ_LIMIT, MAX_STORED_MESSAGES
from devstudio.models.requests import MemoryClearRequest, Operation
from devstudio.models.responses import (
    ChatResponse,
    ErrorResponse,
    GenerateResponse,
    MemoryClearResponse,
    ModelsResponse,
    OperationResponse,
    ProvidersResponse,
    UsageInfo,
)
from devstudio.services.assistant_service import AssistantService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["AI"],
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Provider or internal error"},
        504: {"model": ErrorResponse, "description": "Provider timeout"},
    }
)


def raise_for_failure(response: AIResponse) -> None:
    """Turn a failed AIResponse into the matching API exception."""
    if response.success:
        return

    message = response.error or "AI provider request failed"
    if response.error_type == ErrorType.TIMEOUT:
        raise ProviderTimeout(message)
    if response.error_type == ErrorType.CONFIG:
        raise ProviderConfigError(message)
    raise ProviderCallError(message)


def _usage(response: AIResponse):
    if response.usage is None:
        return None
    return UsageInfo(
        input_tokens=response.usage.input_tokens,
        output_tokens=response.usage.output_tokens,
    )


async def _run_operation(
    operation: Operation,
    payload: Any,
    service: AssistantService
) -> OperationResponse:
    request = validate_request(operation, payload)
    response = await service.run(operation, request)
    raise_for_failure(response)

    return OperationResponse(
        result=response.result or "",
        provider=response.provider,
        model=response.model,
        usage=_usage(response),
    )


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate code from a description"
)
async def generate_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> GenerateResponse:
    request = validate_request(Operation.GENERATE, payload)
    response = await service.run(Operation.GENERATE, request)
    raise_for_failure(response)

    code = response.result or ""
    return GenerateResponse(
        result=code,
        code=code,
        language=request.language,
        provider=response.provider,
        model=response.model,
        usage=_usage(response),
    )


@router.post("/review", response_model=OperationResponse, summary="Review code")
async def review_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.REVIEW, payload, service)


@router.post("/debug", response_model=OperationResponse, summary="Find and fix bugs")
async def debug_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.DEBUG, payload, service)


@router.post("/document", response_model=OperationResponse, summary="Write documentation")
async def document_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.DOCUMENT, payload, service)


@router.post("/test", response_model=OperationResponse, summary="Generate tests")
async def generate_tests(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.TEST, payload, service)


@router.post("/refactor", response_model=OperationResponse, summary="Refactor code")
async def refactor_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.REFACTOR, payload, service)


@router.post("/explain", response_model=OperationResponse, summary="Explain code")
async def explain_code(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> OperationResponse:
    return await _run_operation(Operation.EXPLAIN, payload, service)


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Send a message to the assistant",
    description="""
    Include a `sessionId` with `useMemory` (default true) to have previous
    turns of the session prepended to the conversation. Client-supplied
    `history` is sent after the remembered turns.
    """
)
async def chat(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> ChatResponse:
    request = validate_request(Operation.CHAT, payload)
    response = await service.chat(request)
    raise_for_failure(response)

    return ChatResponse(
        response=response.result or "",
        model=response.model,
        provider=response.provider,
        session_id=request.session_id,
        usage=_usage(response),
    )


@router.post("/memory/clear", response_model=MemoryClearResponse, summary="Clear session memory")
async def clear_memory(
    payload: Any = Body(...),
    service: AssistantService = Depends(get_assistant_service)
) -> MemoryClearResponse:
    request = validate_payload(MemoryClearRequest, payload)
    await service.clear_memory(request.session_id)
    return MemoryClearResponse(session_id=request.session_id)


@router.get("/memory/{session_id}", summary="Read session memory")
async def get_memory(
    session_id: str,
    limit: int = Query(default=DEFAULT_READ_LIMIT, ge=1, le=MAX_STORED_MESSAGES),
    service: AssistantService = Depends(get_assistant_service)
) -> dict:
    messages = await service.get_memory(session_id, limit)
    return {
        "sessionId": session_id,
        "messages": [message.to_full_dict() for message in messages],
    }


@router.get("/models", response_model=ModelsResponse, summary="List chat models")
async def list_models(settings: Settings = Depends(get_app_settings)) -> ModelsResponse:
    return ModelsResponse(models=list(settings.chat_models))


@router.get("/providers", response_model=ProvidersResponse, summary="List configured providers")
async def list_providers(
    service: AssistantService = Depends(get_assistant_service)
) -> ProvidersResponse:
    client = service.llm_client
    default = client.default_provider if client.default_provider in client.providers else None
    return ProvidersResponse(providers=client.providers, default=default)
