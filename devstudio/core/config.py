"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Provider credentials are all optional: a provider without a key is simply
not registered, and requests routed to it fail with a configuration error.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


DEFAULT_CHAT_MODELS = (
    "claude-3-5-sonnet-20241022",
    "gpt-4-turbo-preview",
    "llama-3.3-70b-versatile",
    "gemini-2.0-flash",
)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime. Tests derive variants with
    dataclasses.replace().

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Console logging verbosity
        log_dir: Directory for daily log files ("" disables file logging)
        openai_api_key / anthropic_api_key / groq_api_key / google_api_key:
            Provider credentials (None when not configured)
        default_provider: Provider used when a request does not name one
        default_model: Optional override for the default provider's model
        llm_temperature: Sampling temperature passed to every provider
        llm_max_tokens: Maximum completion length
        provider_timeout_seconds: Upper bound on a single provider call
        provider_max_retries: Retries for transient provider failures
        rate_limit_window_seconds: Sliding window length for the rate limiter
        rate_limit_max_requests: Requests allowed per client per window
        allowed_origin: Browser origin allowed by CORS
        memory_backend: Session memory backing ("memory", "file" or "sql")
        memory_path: JSON file used by the "file" backend
        memory_database_url: SQLAlchemy URL used by the "sql" backend
        chat_models: Model identifiers exposed to clients
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: str

    # Provider credentials
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    groq_api_key: Optional[str]
    google_api_key: Optional[str]

    # LLM settings
    default_provider: str
    default_model: Optional[str]
    openai_model: str
    anthropic_model: str
    groq_model: str
    gemini_model: str
    llm_temperature: float
    llm_max_tokens: int
    provider_timeout_seconds: float
    provider_max_retries: int

    # Safety settings
    rate_limit_window_seconds: float
    rate_limit_max_requests: int
    allowed_origin: str
    enable_audit_logging: bool

    # Memory settings
    memory_backend: str
    memory_path: str
    memory_database_url: str

    chat_models: Tuple[str, ...] = DEFAULT_CHAT_MODELS

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"


def _get_env(key: str, default: str) -> str:
    """
    Get environment variable, falling back to default when unset.

    Every setting has a default; provider keys are optional and read with
    _get_optional_env instead.
    """
    return os.environ.get(key, default)


def _get_optional_env(key: str) -> Optional[str]:
    """Get an environment variable, treating empty strings as unset."""
    value = os.environ.get(key, "").strip()
    return value or None


def _parse_list(raw: str) -> Tuple[str, ...]:
    """Parse a comma separated list, dropping blanks."""
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; maxsize=1 ensures only one
    instance exists for the process.

    Returns:
        Settings instance with all configuration values
    """
    chat_models = _parse_list(_get_env("CHAT_MODELS", ",".join(DEFAULT_CHAT_MODELS)))

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "DevStudio"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=_get_env("LOG_DIR", "logs"),

        # Providers
        openai_api_key=_get_optional_env("OPENAI_API_KEY"),
        anthropic_api_key=_get_optional_env("ANTHROPIC_API_KEY"),
        groq_api_key=_get_optional_env("GROQ_API_KEY"),
        google_api_key=_get_optional_env("GOOGLE_API_KEY"),

        # LLM
        default_provider=_get_env("DEFAULT_AI_PROVIDER", "anthropic").lower(),
        default_model=_get_optional_env("DEFAULT_MODEL"),
        openai_model=_get_env("OPENAI_MODEL", "gpt-4-turbo-preview"),
        anthropic_model=_get_env("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022"),
        groq_model=_get_env("GROQ_MODEL", "llama-3.3-70b-versatile"),
        gemini_model=_get_env("GEMINI_MODEL", "gemini-2.0-flash"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "4096")),
        provider_timeout_seconds=float(_get_env("PROVIDER_TIMEOUT_SECONDS", "60")),
        provider_max_retries=int(_get_env("PROVIDER_MAX_RETRIES", "2")),

        # Safety
        rate_limit_window_seconds=int(_get_env("RATE_LIMIT_WINDOW_MS", "60000")) / 1000.0,
        rate_limit_max_requests=int(_get_env("RATE_LIMIT_MAX_REQUESTS", "100")),
        allowed_origin=_get_env("FRONTEND_URL", "http://localhost:3000"),
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",

        # Memory
        memory_backend=_get_env("MEMORY_BACKEND", "file").lower(),
        memory_path=_get_env("MEMORY_PATH", str(Path("data") / "memory.json")),
        memory_database_url=_get_env("MEMORY_DATABASE_URL", "sqlite:///data/memory.db"),

        chat_models=chat_models or DEFAULT_CHAT_MODELS,
    )
