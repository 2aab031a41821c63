"""
LLM Client - provider selection and the async call boundary.

This module holds the registry of configured provider adapters and is the
only place the HTTP layer touches an LLM. It handles:
- Provider selection (explicit > inferred from model > configured default)
- Running the blocking SDK call in a worker thread
- Enforcing the provider timeout
"""
import asyncio
import functools
import threading
import time
from typing import Dict, List, Optional, Tuple

from devstudio.core.config import Settings
from devstudio.core.exceptions import ProviderConfigError
from devstudio.core.logging_config import get_logger
from devstudio.llm.base import AIResponse, ErrorType, ProviderAdapter
from devstudio.llm.providers import ADAPTER_CLASSES

logger = get_logger(__name__)

# Model name prefixes that identify a provider
MODEL_PREFIXES = (
    ("claude", "anthropic"),
    ("gpt", "openai"),
    ("o1", "openai"),
    ("o3", "openai"),
    ("gemini", "gemini"),
    ("models/gemini", "gemini"),
    ("llama", "groq"),
    ("mixtral", "groq"),
    ("gemma", "groq"),
)


def infer_provider(model: Optional[str]) -> Optional[str]:
    """Guess the provider from a model identifier, or None if unknown."""
    if not model:
        return None
    lowered = model.lower()
    for prefix, provider in MODEL_PREFIXES:
        if lowered.startswith(prefix):
            return provider
    return None


class LLMClient:
    """
    Registry of provider adapters with a configured default.

    Example:
        >>> client = LLMClient.from_settings(get_settings())
        >>> response = await client.complete("You are...", "Explain this code")
        >>> response.success
        True
    """

    def __init__(
        self,
        adapters: Dict[str, ProviderAdapter],
        default_provider: str,
        timeout_seconds: float = 60
    ):
        """
        Args:
            adapters: Adapters keyed by provider name; unconfigured ones are ignored
            default_provider: Provider used when a request names none
            timeout_seconds: Upper bound on one complete() call
        """
        self.adapters = {
            name: adapter for name, adapter in adapters.items() if adapter.is_configured
        }
        self.default_provider = default_provider
        self.timeout_seconds = timeout_seconds

        logger.info(
            f"LLM client initialized: providers={self.providers or 'none'}, "
            f"default={default_provider}"
        )
        if default_provider not in self.adapters:
            logger.warning(f"Default provider '{default_provider}' is not configured")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        """Build adapters for every provider with a credential."""
        keys = {
            "openai": settings.openai_api_key,
            "anthropic": settings.anthropic_api_key,
            "groq": settings.groq_api_key,
            "gemini": settings.google_api_key,
        }
        models = {
            "openai": settings.openai_model,
            "anthropic": settings.anthropic_model,
            "groq": settings.groq_model,
            "gemini": settings.gemini_model,
        }
        if settings.default_model:
            models[settings.default_provider] = settings.default_model

        adapters = {
            name: adapter_cls(
                api_key=keys[name],
                default_model=models[name],
                temperature=settings.llm_temperature,
                max_tokens=settings.llm_max_tokens,
                timeout_seconds=settings.provider_timeout_seconds,
                max_retries=settings.provider_max_retries,
            )
            for name, adapter_cls in ADAPTER_CLASSES.items()
        }
        return cls(
            adapters,
            default_provider=settings.default_provider,
            timeout_seconds=settings.provider_timeout_seconds
        )

    @property
    def providers(self) -> List[str]:
        """Names of configured providers."""
        return sorted(self.adapters)

    def select(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ) -> Tuple[ProviderAdapter, Optional[str]]:
        """
        Pick the adapter for a request.

        An explicit provider wins; otherwise the provider is inferred from
        the model name. If that provider is not configured the default is
        used, and a model hint meant for another provider is dropped.

        Returns:
            (adapter, model hint to pass on)

        Raises:
            ProviderConfigError: If neither the requested nor the default
                provider is configured
        """
        requested = provider or infer_provider(model)

        if requested and requested in self.adapters:
            return self.adapters[requested], model

        if requested:
            logger.warning(
                f"Provider '{requested}' is not configured, "
                f"falling back to '{self.default_provider}'"
            )

        adapter = self.adapters.get(self.default_provider)
        if adapter is None:
            wanted = requested or self.default_provider
            raise ProviderConfigError(
                f"AI provider '{wanted}' is not configured "
                f"and the default provider '{self.default_provider}' has no API key"
            )

        if requested and requested != adapter.name:
            model = None
        return adapter, model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        history: Optional[List[Dict[str, str]]] = None
    ) -> AIResponse:
        """
        Run a completion on the selected provider.

        The blocking SDK call runs in a worker thread. If it does not finish
        within timeout_seconds, or the awaiting request is cancelled, the
        thread is told to stop: the call in flight is left to finish, but no
        retry or backoff sleep starts afterwards and its result is discarded.

        Returns:
            AIResponse; timeouts come back with error_type="timeout"

        Raises:
            ProviderConfigError: Before any call, if no provider can serve it
        """
        adapter, model = self.select(provider, model)
        abandoned = threading.Event()
        call = functools.partial(
            adapter.complete,
            system_prompt,
            user_prompt,
            model,
            history,
            cancel_event=abandoned,
            deadline=time.monotonic() + self.timeout_seconds,
        )

        try:
            return await asyncio.wait_for(asyncio.to_thread(call), timeout=self.timeout_seconds)
        except asyncio.CancelledError:
            abandoned.set()
            logger.info(f"{adapter.name} call abandoned: request cancelled")
            raise
        except asyncio.TimeoutError:
            abandoned.set()
            logger.warning(
                f"{adapter.name} did not answer within {self.timeout_seconds:g}s"
            )
            return AIResponse.failure(
                f"{adapter.name} request timed out after {self.timeout_seconds:g}s",
                ErrorType.TIMEOUT,
                provider=adapter.name,
                model=model or adapter.default_model
            )
