"""
Provider Adapter base - uniform interface over text-completion backends.

Every backend converts the uniform complete() call into its own request
shape and normalizes the reply into an AIResponse. Failures never raise
out of complete(): they come back as AIResponse(success=False) with an
error_type, so callers have a single failure path.
"""
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from devstudio.core.logging_config import LoggerMixin


class ErrorType:
    CONFIG = "config"
    CALL = "call"
    TIMEOUT = "timeout"


# Substrings that mark an error as worth retrying when the SDK does not
# expose a specific exception class for it
TRANSIENT_ERROR_PATTERNS = (
    "429",
    "rate limit",
    "quota",
    "overloaded",
    "temporarily unavailable",
    "service unavailable",
    "bad gateway",
    "connection reset",
)

TIMEOUT_ERROR_PATTERNS = ("timed out", "timeout", "deadline exceeded")


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> Dict[str, int]:
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


@dataclass
class AIResponse:
    """Normalized outcome of any provider call."""
    success: bool
    result: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    usage: Optional[TokenUsage] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        result: str,
        usage: Optional[TokenUsage] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ) -> "AIResponse":
        return cls(success=True, result=result, usage=usage, provider=provider, model=model)

    @classmethod
    def failure(
        cls,
        error: str,
        error_type: str = ErrorType.CALL,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ) -> "AIResponse":
        return cls(
            success=False,
            error=error,
            error_type=error_type,
            provider=provider,
            model=model
        )


class ProviderAdapter(LoggerMixin, ABC):
    """
    Base class for LLM backends.

    Subclasses implement _create_client() and _call(); the base class owns
    credential checks, retries with linear backoff and error normalization.

    Attributes:
        name: Provider identifier used for selection ("openai", ...)
        timeout_errors: SDK exception classes meaning the call timed out
        transient_errors: SDK exception classes worth retrying
    """
    name: str = ""
    timeout_errors: Tuple[Type[BaseException], ...] = (TimeoutError,)
    transient_errors: Tuple[Type[BaseException], ...] = (ConnectionError,)

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        timeout_seconds: float = 60,
        max_retries: int = 2,
        retry_backoff_seconds: float = 1.0
    ):
        self.api_key = api_key
        self.default_model = default_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(0, max_retries)
        self.retry_backoff_seconds = retry_backoff_seconds
        self._client = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self):
        """SDK client, created on first use."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        history: Optional[List[Dict[str, str]]] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None
    ) -> AIResponse:
        """
        Run one completion.

        Args:
            system_prompt: Operation-specific instructions
            user_prompt: The user turn
            model: Model hint; the adapter's default model when omitted
            history: Prior turns as {"role", "content"} dicts, oldest first
            cancel_event: Set by the caller once it stopped waiting; no
                further attempt or backoff sleep starts after that
            deadline: time.monotonic() value after which no retry starts

        Returns:
            AIResponse; success=False with error_type on any failure
        """
        target_model = model or self.default_model

        if not self.is_configured:
            return AIResponse.failure(
                f"{self.name} API is not configured",
                ErrorType.CONFIG,
                provider=self.name,
                model=target_model
            )

        messages = [
            {"role": message["role"], "content": message["content"]}
            for message in (history or [])
        ]
        messages.append({"role": "user", "content": user_prompt})

        for attempt in range(self.max_retries + 1):
            if attempt:
                backoff = self.retry_backoff_seconds * attempt
                if not self._may_retry(backoff, cancel_event, deadline):
                    self.logger.info(f"{self.name} ({target_model}) abandoned before retry")
                    return AIResponse.failure(
                        f"{self.name} request abandoned",
                        ErrorType.TIMEOUT,
                        provider=self.name,
                        model=target_model
                    )
                self.logger.info(
                    f"Retrying {self.name} ({target_model}), attempt {attempt + 1}"
                )

            try:
                text, usage = self._call(system_prompt, messages, target_model)
            except Exception as e:
                if self._is_timeout(e):
                    self.logger.warning(f"{self.name} ({target_model}) timed out: {e}")
                    return AIResponse.failure(
                        f"{self.name} request timed out",
                        ErrorType.TIMEOUT,
                        provider=self.name,
                        model=target_model
                    )
                if attempt < self.max_retries and self._is_transient(e):
                    self.logger.warning(f"Transient {self.name} failure: {e}")
                    continue
                self.logger.error(f"{self.name} ({target_model}) failed: {e}")
                return AIResponse.failure(
                    str(e) or f"{self.name} request failed",
                    ErrorType.CALL,
                    provider=self.name,
                    model=target_model
                )

            self.logger.debug(
                f"{self.name} ({target_model}) answered: "
                f"in={usage.input_tokens} out={usage.output_tokens}"
            )
            return AIResponse.ok(text, usage=usage, provider=self.name, model=target_model)

    def _is_timeout(self, error: Exception) -> bool:
        if isinstance(error, self.timeout_errors):
            return True
        message = str(error).lower()
        return any(pattern in message for pattern in TIMEOUT_ERROR_PATTERNS)

    def _is_transient(self, error: Exception) -> bool:
        if isinstance(error, self.transient_errors):
            return True
        message = str(error).lower()
        return any(pattern in message for pattern in TRANSIENT_ERROR_PATTERNS)

    def _may_retry(
        self,
        backoff: float,
        cancel_event: Optional[threading.Event],
        deadline: Optional[float]
    ) -> bool:
        """Sleep out the backoff; False if the caller gave up or time runs out."""
        if deadline is not None and time.monotonic() + backoff >= deadline:
            return False
        if cancel_event is None:
            time.sleep(backoff)
            return True
        return not cancel_event.wait(backoff)

    @abstractmethod
    def _create_client(self):
        """Build the SDK client."""

    @abstractmethod
    def _call(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        model: str
    ) -> Tuple[str, TokenUsage]:
        """Send one request and return (text, usage). May raise."""
