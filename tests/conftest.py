"""Shared fixtures: a recording stub provider and an app wired to it."""
import os
import time
from dataclasses import replace
from typing import Dict, List, Optional

# Must be set before devstudio.api.main builds its module-level app
os.environ.setdefault("LOG_DIR", "")
os.environ["MEMORY_BACKEND"] = "memory"
os.environ.setdefault("ENABLE_AUDIT_LOGGING", "false")

import pytest
from fastapi.testclient import TestClient

from devstudio.api.main import create_app
from devstudio.core.config import Settings, get_settings
from devstudio.llm.base import ProviderAdapter, TokenUsage
from devstudio.llm.client import LLMClient
from devstudio.memory import InMemoryBackend, SessionMemoryStore
from devstudio.services.project_store import ProjectStore


class StubAdapter(ProviderAdapter):
    """Provider that records every call and answers with canned text."""

    def __init__(
        self,
        name: str = "anthropic",
        reply: str = "stub reply",
        delay: float = 0.0,
        errors: Optional[List[Exception]] = None,
        api_key: Optional[str] = "test-key",
        **kwargs
    ):
        kwargs.setdefault("retry_backoff_seconds", 0)
        super().__init__(api_key=api_key, default_model=f"{name}-default", **kwargs)
        self.name = name
        self.reply = reply
        self.delay = delay
        self.errors = list(errors or [])
        self.calls: List[Dict] = []

    def _create_client(self):
        return object()

    def _call(self, system_prompt, messages, model):
        self.calls.append({
            "system": system_prompt,
            "messages": [dict(message) for message in messages],
            "model": model,
        })
        if self.delay:
            time.sleep(self.delay)
        if self.errors:
            raise self.errors.pop(0)
        return self.reply, TokenUsage(input_tokens=12, output_tokens=7)


@pytest.fixture
def settings() -> Settings:
    return replace(
        get_settings(),
        app_env="test",
        log_dir="",
        default_provider="anthropic",
        default_model=None,
        rate_limit_max_requests=1000,
        rate_limit_window_seconds=60,
        enable_audit_logging=False,
        memory_backend="memory",
    )


@pytest.fixture
def stub_adapter() -> StubAdapter:
    return StubAdapter()


@pytest.fixture
def llm_client(stub_adapter) -> LLMClient:
    return LLMClient({"anthropic": stub_adapter}, default_provider="anthropic", timeout_seconds=5)


@pytest.fixture
def memory_store() -> SessionMemoryStore:
    return SessionMemoryStore(InMemoryBackend())


@pytest.fixture
def project_store() -> ProjectStore:
    return ProjectStore()


@pytest.fixture
def app(settings, llm_client, memory_store, project_store):
    return create_app(
        settings,
        llm_client=llm_client,
        memory_store=memory_store,
        project_store=project_store,
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
