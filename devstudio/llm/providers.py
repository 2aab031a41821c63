"""
Provider adapters for OpenAI, Anthropic, Groq and Google Gemini.

Each adapter only knows how to turn (system prompt, messages, model) into
its SDK's request and how to read text and token usage back. SDK-level
retries are disabled; ProviderAdapter owns the retry policy.
"""
from typing import Dict, List, Tuple

import anthropic
import google.generativeai as genai
import groq
import openai
from google.api_core import exceptions as google_exceptions

from devstudio.llm.base import ProviderAdapter, TokenUsage


class OpenAIAdapter(ProviderAdapter):
    """OpenAI chat completions."""
    name = "openai"
    timeout_errors = (openai.APITimeoutError,)
    transient_errors = (
        openai.APIConnectionError,
        openai.RateLimitError,
        openai.InternalServerError,
    )

    def _create_client(self):
        return openai.OpenAI(
            api_key=self.api_key,
            timeout=self.timeout_seconds,
            max_retries=0
        )

    def _call(self, system_prompt: str, messages: List[Dict[str, str]], model: str) -> Tuple[str, TokenUsage]:
        response = self.client.chat.completions.create(
            model=model,
            messages=[{"role": "system", "content": system_prompt}] + messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        usage = response.usage
        return text, TokenUsage(
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


class GroqAdapter(OpenAIAdapter):
    """Groq exposes the OpenAI chat completions shape."""
    name = "groq"
    timeout_errors = (groq.APITimeoutError,)
    transient_errors = (
        groq.APIConnectionError,
        groq.RateLimitError,
        groq.InternalServerError,
    )

    def _create_client(self):
        return groq.Groq(
            api_key=self.api_key,
            timeout=self.timeout_seconds,
            max_retries=0
        )


class AnthropicAdapter(ProviderAdapter):
    """Anthropic messages API; the system prompt is a top-level field."""
    name = "anthropic"
    timeout_errors = (anthropic.APITimeoutError,)
    transient_errors = (
        anthropic.APIConnectionError,
        anthropic.RateLimitError,
        anthropic.InternalServerError,
    )

    def _create_client(self):
        return anthropic.Anthropic(
            api_key=self.api_key,
            timeout=self.timeout_seconds,
            max_retries=0
        )

    def _call(self, system_prompt: str, messages: List[Dict[str, str]], model: str) -> Tuple[str, TokenUsage]:
        response = self.client.messages.create(
            model=model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=messages,
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return text, TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class GeminiAdapter(ProviderAdapter):
    """Google Gemini via google-generativeai chat sessions."""
    name = "gemini"
    timeout_errors = (google_exceptions.DeadlineExceeded,)
    transient_errors = (
        google_exceptions.ResourceExhausted,
        google_exceptions.ServiceUnavailable,
        google_exceptions.InternalServerError,
    )

    def _create_client(self):
        genai.configure(api_key=self.api_key)
        return genai

    def _call(self, system_prompt: str, messages: List[Dict[str, str]], model: str) -> Tuple[str, TokenUsage]:
        model_instance = self.client.GenerativeModel(
            model_name=model,
            system_instruction=system_prompt
        )

        # Convert history format (OpenAI -> Google)
        chat_history = [
            {"role": "user" if msg["role"] == "user" else "model", "parts": [msg["content"]]}
            for msg in messages[:-1]
        ]

        chat = model_instance.start_chat(history=chat_history)
        response = chat.send_message(
            messages[-1]["content"],
            generation_config=genai.types.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
            ),
            request_options={"timeout": self.timeout_seconds},
        )

        metadata = getattr(response, "usage_metadata", None)
        return response.text, TokenUsage(
            input_tokens=getattr(metadata, "prompt_token_count", 0) or 0,
            output_tokens=getattr(metadata, "candidates_token_count", 0) or 0,
        )


ADAPTER_CLASSES = {
    adapter.name: adapter
    for adapter in (OpenAIAdapter, AnthropicAdapter, GroqAdapter, GeminiAdapter)
}
