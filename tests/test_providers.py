"""Adapters against fake SDK clients; no network access."""
from dataclasses import replace
from types import SimpleNamespace

from devstudio.llm.client import LLMClient
from devstudio.llm.providers import (
    ADAPTER_CLASSES,
    AnthropicAdapter,
    GeminiAdapter,
    GroqAdapter,
    OpenAIAdapter,
)

HISTORY = [
    {"role": "user", "content": "earlier question"},
    {"role": "assistant", "content": "earlier answer"},
]


class Recorder:
    """Callable that records its kwargs and returns a canned response."""

    def __init__(self, response):
        self.response = response
        self.args = None
        self.kwargs = None

    def __call__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        return self.response


def test_openai_sends_system_message_first():
    create = Recorder(SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="done"))],
        usage=SimpleNamespace(prompt_tokens=30, completion_tokens=4),
    ))
    adapter = OpenAIAdapter(api_key="k", default_model="gpt-4-turbo-preview", temperature=0.2)
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    response = adapter.complete("be helpful", "question", history=HISTORY)

    assert response.result == "done"
    assert response.usage.input_tokens == 30
    assert create.kwargs["model"] == "gpt-4-turbo-preview"
    assert create.kwargs["temperature"] == 0.2
    assert [m["role"] for m in create.kwargs["messages"]] == ["system", "user", "assistant", "user"]


def test_anthropic_passes_system_separately_and_joins_text():
    create = Recorder(SimpleNamespace(
        content=[
            SimpleNamespace(type="text", text="part one, "),
            SimpleNamespace(type="tool_use", text="ignored"),
            SimpleNamespace(type="text", text="part two"),
        ],
        usage=SimpleNamespace(input_tokens=11, output_tokens=3),
    ))
    adapter = AnthropicAdapter(api_key="k", default_model="claude-3-5-sonnet-20241022")
    adapter._client = SimpleNamespace(messages=SimpleNamespace(create=create))

    response = adapter.complete("be helpful", "question", model="claude-3-opus")

    assert response.result == "part one, part two"
    assert response.model == "claude-3-opus"
    assert create.kwargs["system"] == "be helpful"
    assert create.kwargs["messages"] == [{"role": "user", "content": "question"}]


def test_gemini_maps_history_roles():
    chat = SimpleNamespace(send_message=Recorder(SimpleNamespace(
        text="gemini says hi",
        usage_metadata=SimpleNamespace(prompt_token_count=9, candidates_token_count=2),
    )))
    start_chat = Recorder(chat)
    generative_model = Recorder(SimpleNamespace(start_chat=start_chat))
    adapter = GeminiAdapter(api_key="k", default_model="gemini-2.0-flash")
    adapter._client = SimpleNamespace(GenerativeModel=generative_model)

    response = adapter.complete("be helpful", "question", history=HISTORY)

    assert response.result == "gemini says hi"
    assert generative_model.kwargs["system_instruction"] == "be helpful"
    assert [turn["role"] for turn in start_chat.kwargs["history"]] == ["user", "model"]
    assert chat.send_message.args == ("question",)


def test_registry_covers_every_provider():
    assert set(ADAPTER_CLASSES) == {"openai", "anthropic", "groq", "gemini"}
    assert issubclass(GroqAdapter, OpenAIAdapter)


def test_client_from_settings_registers_keyed_providers(settings):
    configured = replace(
        settings,
        openai_api_key="sk-test",
        anthropic_api_key=None,
        groq_api_key=None,
        google_api_key="g-test",
        default_provider="openai",
        default_model="gpt-4o",
    )

    client = LLMClient.from_settings(configured)

    assert client.providers == ["gemini", "openai"]
    assert client.adapters["openai"].default_model == "gpt-4o"
    assert client.adapters["gemini"].default_model == configured.gemini_model
