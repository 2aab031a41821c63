"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose

build_prompts() is the single entry point: it maps an operation and its
validated request to a (system, user) prompt pair.
"""
from typing import Callable, Dict, NamedTuple

from pydantic import BaseModel

from devstudio.llm.prompts.chat_prompts import get_chat_prompts
from devstudio.llm.prompts.code_prompts import (
    get_debug_prompts,
    get_document_prompts,
    get_explain_prompts,
    get_generate_prompts,
    get_refactor_prompts,
    get_review_prompts,
    get_test_prompts,
)
from devstudio.models.requests import REQUEST_MODELS, Operation


class PromptPair(NamedTuple):
    system: str
    user: str


_BUILDERS: Dict[Operation, Callable] = {
    Operation.GENERATE: get_generate_prompts,
    Operation.REVIEW: get_review_prompts,
    Operation.DEBUG: get_debug_prompts,
    Operation.DOCUMENT: get_document_prompts,
    Operation.TEST: get_test_prompts,
    Operation.CHAT: get_chat_prompts,
    Operation.REFACTOR: get_refactor_prompts,
    Operation.EXPLAIN: get_explain_prompts,
}


def build_prompts(operation: Operation, request: BaseModel) -> PromptPair:
    """
    Build the prompt pair for an operation.

    Args:
        operation: Which capability the request targets
        request: Validated request model for that operation

    Returns:
        PromptPair(system, user)

    Raises:
        TypeError: If the request model does not belong to the operation
    """
    operation = Operation(operation)
    expected = REQUEST_MODELS[operation]
    if not isinstance(request, expected):
        raise TypeError(
            f"{operation.value} expects {expected.__name__}, got {type(request).__name__}"
        )
    system, user = _BUILDERS[operation](request)
    return PromptPair(system, user)


__all__ = ["PromptPair", "build_prompts"]
