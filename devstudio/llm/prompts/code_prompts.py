"""
Code Operation Prompts - Templates for generate/review/debug/document/test/
refactor/explain.

Every function here is pure: the same request always yields the same
(system, user) pair. Submitted code, prompts and context are embedded
verbatim; code is fenced with the language tag.
"""
from typing import Optional

from devstudio.models.requests import (
    DebugCodeRequest,
    DocumentCodeRequest,
    ExplainCodeRequest,
    GenerateCodeRequest,
    GenerateTestsRequest,
    RefactorRequest,
    ReviewCodeRequest,
)


DOC_STYLE_GUIDES = {
    "jsdoc": "JSDoc with @param, @returns, @throws and @example tags",
    "docstring": "Python docstrings with Args, Returns, Raises and Examples sections",
    "markdown": "Markdown documentation with code examples",
    "inline": "explanatory inline comments",
}

REFACTOR_GOALS = {
    "performance": "optimize performance",
    "readability": "improve readability",
    "modularity": "make the code more modular",
    "dry": "remove repetition (DRY)",
}

ALL_FOCUS_AREAS = "all aspects"


def fence(code: str, language: str) -> str:
    """Wrap code in a Markdown fence tagged with its language."""
    return f"```{language}\n{code}\n```"


def _join_sections(*sections: Optional[str]) -> str:
    """Join non-empty prompt sections with blank lines."""
    return "\n\n".join(section for section in sections if section)


def get_generate_prompts(request: GenerateCodeRequest):
    framework = f" and the {request.framework} framework" if request.framework else ""
    system = (
        f"You are an expert software developer specialized in {request.language}.\n"
        "You write clean, well-structured and documented code.\n"
        "Answer only with the requested code, without extra explanations unless necessary.\n"
        f"Follow the best practices of {request.language}{framework}."
    )
    user = _join_sections(
        f"Generate the following code in {request.language}:",
        request.prompt,
        f"Additional context:\n{request.context}" if request.context else None,
    )
    return system, user


def get_review_prompts(request: ReviewCodeRequest):
    if request.focus_areas and "all" not in request.focus_areas:
        focus = ", ".join(request.focus_areas)
    else:
        focus = ALL_FOCUS_AREAS

    system = (
        f"You are an expert code reviewer with deep experience in {request.language}.\n"
        "You analyze code thoroughly and give constructive suggestions.\n"
        "Structure your answer with clear sections:\n"
        "- Summary\n"
        "- Strengths\n"
        "- Issues found (with severity level)\n"
        "- Suggested improvements\n"
        "- Overall score (out of 10)"
    )
    user = _join_sections(
        f"Perform a complete code review of the following {request.language} code.\n"
        f"Focus on: {focus}",
        fence(request.code, request.language),
    )
    return system, user


def get_debug_prompts(request: DebugCodeRequest):
    system = (
        f"You are an expert at debugging {request.language} code.\n"
        "You identify bugs, logic errors and potential problems.\n"
        "For each problem found:\n"
        "1. Explain the problem\n"
        "2. Show where it is\n"
        "3. Propose a fix\n"
        "4. Provide the corrected code"
    )
    user = _join_sections(
        f"Debug the following {request.language} code:",
        fence(request.code, request.language),
        f"Reported error: {request.error}" if request.error else None,
        f"Context: {request.context}" if request.context else None,
    )
    return system, user


def get_document_prompts(request: DocumentCodeRequest):
    system = (
        "You are an expert in code documentation.\n"
        "You write clear, complete and professional documentation.\n"
        f"Documentation style: {DOC_STYLE_GUIDES[request.style]}\n"
        "Include:\n"
        "- Description of the function/class\n"
        "- Parameters and their types\n"
        "- Return values\n"
        "- Possible exceptions\n"
        "- Usage examples"
    )
    user = _join_sections(
        f"Write the documentation for the following {request.language} code:",
        fence(request.code, request.language),
    )
    return system, user


def get_test_prompts(request: GenerateTestsRequest):
    framework = f"Use the {request.framework} test framework.\n" if request.framework else ""
    system = (
        f"You are an expert in software testing for {request.language}.\n"
        f"{framework}"
        "Write complete tests including:\n"
        "- Unit tests\n"
        "- Edge cases\n"
        "- Error handling tests\n"
        "- Mocks where needed\n"
        f"Aim for {request.coverage_target:g}% coverage."
    )
    user = _join_sections(
        f"Write tests for the following {request.language} code:",
        fence(request.code, request.language),
    )
    return system, user


def get_refactor_prompts(request: RefactorRequest):
    system = (
        f"You are an expert at refactoring {request.language} code.\n"
        f"Main goal: {REFACTOR_GOALS[request.goal]}\n"
        "\n"
        "For each change:\n"
        "1. Explain why the change is beneficial\n"
        "2. Show the code before and after\n"
        "3. Provide the complete refactored code at the end"
    )
    user = _join_sections(
        f"Refactor the following {request.language} code:",
        fence(request.code, request.language),
    )
    return system, user


def get_explain_prompts(request: ExplainCodeRequest):
    system = (
        "You are an expert programming teacher.\n"
        "Explain code in a clear and accessible way.\n"
        "Structure your explanation:\n"
        "1. Overview\n"
        "2. Line-by-line explanation of the important parts\n"
        "3. Key concepts used\n"
        "4. Typical use cases"
    )
    user = _join_sections(
        f"Explain the following {request.language} code:",
        fence(request.code, request.language),
    )
    return system, user
