import pytest

from devstudio.llm.prompts import PromptPair, build_prompts
from devstudio.llm.prompts.code_prompts import fence
from devstudio.models.requests import (
    ChatRequest,
    DocumentCodeRequest,
    ExplainCodeRequest,
    GenerateCodeRequest,
    GenerateTestsRequest,
    Operation,
    RefactorRequest,
    ReviewCodeRequest,
)


def test_same_request_builds_identical_prompts():
    request = ReviewCodeRequest(code="x = 1", language="python", focus_areas=["security"])

    first = build_prompts(Operation.REVIEW, request)
    second = build_prompts(Operation.REVIEW, request.model_copy())

    assert isinstance(first, PromptPair)
    assert first == second


def test_generate_embeds_prompt_and_context_verbatim():
    request = GenerateCodeRequest(
        prompt="add two numbers",
        language="python",
        context="used in a calculator",
        framework="fastapi",
    )

    system, user = build_prompts(Operation.GENERATE, request)

    assert "python" in system
    assert "fastapi" in system
    assert "add two numbers" in user
    assert "used in a calculator" in user


def test_generate_without_context_has_no_context_section():
    _, user = build_prompts(
        Operation.GENERATE,
        GenerateCodeRequest(prompt="add two numbers", language="python")
    )
    assert "Additional context" not in user


def test_code_is_fenced_with_language_tag():
    code = "def f():\n    return 1"
    _, user = build_prompts(Operation.EXPLAIN, ExplainCodeRequest(code=code, language="python"))

    assert fence(code, "python") in user
    assert "```python\n" in user


def test_review_defaults_to_all_aspects():
    _, user = build_prompts(Operation.REVIEW, ReviewCodeRequest(code="x", language="go"))
    assert "Focus on: all aspects" in user


def test_review_lists_focus_areas():
    request = ReviewCodeRequest(code="x", language="go", focus_areas=["security", "performance"])
    _, user = build_prompts(Operation.REVIEW, request)
    assert "Focus on: security, performance" in user


def test_document_style_changes_system_prompt():
    jsdoc, _ = build_prompts(Operation.DOCUMENT, DocumentCodeRequest(code="x", language="js"))
    docstring, _ = build_prompts(
        Operation.DOCUMENT,
        DocumentCodeRequest(code="x", language="python", style="docstring")
    )

    assert "JSDoc" in jsdoc
    assert "docstrings" in docstring


def test_test_prompt_mentions_framework_and_coverage():
    request = GenerateTestsRequest(code="x", language="typescript", framework="jest", coverage_target=90)
    system, _ = build_prompts(Operation.TEST, request)

    assert "jest" in system
    assert "90% coverage" in system


def test_refactor_goal_in_system_prompt():
    system, _ = build_prompts(
        Operation.REFACTOR,
        RefactorRequest(code="x", language="python", goal="dry")
    )
    assert "remove repetition" in system


def test_chat_adds_project_info_and_reference_code():
    request = ChatRequest.model_validate({
        "message": "why does this fail?",
        "context": {"code": "print(x)", "language": "python", "projectInfo": "CLI tool"},
    })

    system, user = build_prompts(Operation.CHAT, request)

    assert system.endswith("Project context: CLI tool")
    assert user.startswith("why does this fail?")
    assert "Reference code (python):" in user
    assert "print(x)" in user


def test_chat_without_context_sends_message_only():
    _, user = build_prompts(Operation.CHAT, ChatRequest(message="hi"))
    assert user == "hi"


def test_mismatched_request_type_is_rejected():
    with pytest.raises(TypeError):
        build_prompts(Operation.REVIEW, ExplainCodeRequest(code="x", language="go"))
