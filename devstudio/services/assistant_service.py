"""
Assistant Service - Business logic for the LLM-backed operations.

This service orchestrates each operation:
1. Builds the (system, user) prompt pair for the validated request
2. For chat, prepends session memory and client-supplied history
3. Calls the selected provider through LLMClient
4. For chat, stores the new turn in session memory on success

Routes stay thin: they validate, call this service and shape the envelope.
"""
import asyncio
from typing import Dict, List

from pydantic import BaseModel

from devstudio.core.logging_config import get_logger
from devstudio.llm.base import AIResponse
from devstudio.llm.client import LLMClient
from devstudio.llm.prompts import build_prompts
from devstudio.memory import ChatMessage, SessionMemoryStore
from devstudio.models.requests import ChatRequest, Operation

logger = get_logger(__name__)


class AssistantService:
    """
    Runs operations against the configured providers.

    Example:
        >>> service = AssistantService(llm_client, memory_store)
        >>> response = await service.run(Operation.EXPLAIN, request)
        >>> response.result
        "This function adds two numbers..."
    """

    def __init__(self, llm_client: LLMClient, memory_store: SessionMemoryStore):
        self.llm_client = llm_client
        self.memory_store = memory_store

    async def run(self, operation: Operation, request: BaseModel) -> AIResponse:
        """
        Run a single-turn operation (everything except chat).

        Returns:
            The provider's AIResponse, successful or not
        """
        prompts = build_prompts(operation, request)

        logger.info(
            f"Running {Operation(operation).value}: "
            f"provider={request.provider or 'default'}, "
            f"prompt_length={len(prompts.user)}"
        )

        return await self.llm_client.complete(
            prompts.system,
            prompts.user,
            provider=request.provider,
            model=request.model,
        )

    async def chat(self, request: ChatRequest) -> AIResponse:
        """
        Run a chat turn with optional session memory.

        Memory turns come first, then client-supplied history, then the new
        user message. Only the raw user message and the assistant reply are
        stored, and only when the provider call succeeded.
        """
        prompts = build_prompts(Operation.CHAT, request)
        session_id = request.session_id
        use_memory = bool(request.use_memory and session_id)

        history: List[Dict[str, str]] = []
        if use_memory:
            remembered = await asyncio.to_thread(self.memory_store.get, session_id)
            history.extend(message.to_dict() for message in remembered)
        history.extend({"role": m.role, "content": m.content} for m in request.history)

        logger.info(
            f"Processing chat: session={session_id or '-'}, "
            f"memory={use_memory}, history_size={len(history)}"
        )

        response = await self.llm_client.complete(
            prompts.system,
            prompts.user,
            provider=request.provider,
            model=request.model,
            history=history,
        )

        if response.success and use_memory:
            await asyncio.to_thread(
                self.memory_store.append,
                session_id,
                [ChatMessage.user(request.message), ChatMessage.assistant(response.result or "")],
            )

        return response

    async def get_memory(self, session_id: str, limit: int) -> List[ChatMessage]:
        return await asyncio.to_thread(self.memory_store.get, session_id, limit)

    async def clear_memory(self, session_id: str) -> bool:
        return await asyncio.to_thread(self.memory_store.clear, session_id)
