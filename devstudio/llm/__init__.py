"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction (prompts/)
- Provider adapters for OpenAI, Anthropic, Groq and Gemini
- Provider selection and timeouts (LLMClient)
"""
from devstudio.llm.base import AIResponse, ErrorType, ProviderAdapter, TokenUsage
from devstudio.llm.client import LLMClient, infer_provider

__all__ = [
    "AIResponse",
    "ErrorType",
    "ProviderAdapter",
    "TokenUsage",
    "LLMClient",
    "infer_provider",
]
