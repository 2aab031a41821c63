"""
Request models for the AI operation endpoints.

These Pydantic models define the contract between client and server.
Field names are camelCase on the wire (focusAreas, coverageTarget,
sessionId, useMemory); snake_case is accepted as well.
"""
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


ProviderName = Literal["openai", "anthropic", "groq", "gemini"]
FocusArea = Literal["security", "performance", "style", "bugs", "all"]
DocStyle = Literal["jsdoc", "docstring", "markdown", "inline"]
RefactorGoal = Literal["performance", "readability", "modularity", "dry"]


class Operation(str, Enum):
    """LLM-backed capabilities, each with its own validation and prompt template."""
    GENERATE = "generate"
    REVIEW = "review"
    DEBUG = "debug"
    DOCUMENT = "document"
    TEST = "test"
    CHAT = "chat"
    REFACTOR = "refactor"
    EXPLAIN = "explain"


def reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class OperationRequest(ApiModel):
    """Fields shared by every AI operation."""
    provider: Optional[ProviderName] = Field(
        default=None,
        description="Provider override; the configured default is used when omitted"
    )
    model: Optional[str] = Field(
        default=None,
        description="Model hint passed through to the provider"
    )


class CodeRequest(OperationRequest):
    """Base for operations that act on submitted source code."""
    code: str = Field(..., min_length=1, description="Source code to work on")
    language: str = Field(..., min_length=1, description="Programming language of the code")

    @field_validator("code", "language")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


class GenerateCodeRequest(OperationRequest):
    prompt: str = Field(
        ...,
        min_length=1,
        description="What the generated code should do",
        examples=["add two numbers"]
    )
    language: str = Field(..., min_length=1, examples=["python"])
    context: Optional[str] = None
    framework: Optional[str] = None

    @field_validator("prompt", "language")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


class ReviewCodeRequest(CodeRequest):
    focus_areas: Optional[List[FocusArea]] = Field(
        default=None,
        description="Review dimensions to concentrate on"
    )


class DebugCodeRequest(CodeRequest):
    error: Optional[str] = Field(default=None, description="Reported error message")
    context: Optional[str] = None


class DocumentCodeRequest(CodeRequest):
    style: DocStyle = Field(default="jsdoc", description="Documentation style")


class GenerateTestsRequest(CodeRequest):
    framework: Optional[str] = Field(default=None, description="Test framework to target")
    coverage_target: float = Field(
        default=80,
        ge=0,
        le=100,
        description="Target coverage percentage"
    )


class RefactorRequest(CodeRequest):
    goal: RefactorGoal = Field(default="readability", description="Main refactoring goal")


class ExplainCodeRequest(CodeRequest):
    pass


class HistoryMessage(ApiModel):
    """A prior turn supplied by the client."""
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None


class ChatContext(ApiModel):
    code: Optional[str] = None
    language: Optional[str] = None
    project_info: Optional[str] = None


class ChatRequest(OperationRequest):
    """
    Request model for the /chat endpoint.

    Attributes:
        message: The user's message.
        history: Prior turns supplied by the client.
        session_id: Memory scope; prior turns are loaded from and saved to it.
        use_memory: Whether to read/write session memory for this turn.
        context: Optional reference code and project description.
    """
    message: str = Field(..., min_length=1, max_length=20000)
    history: List[HistoryMessage] = Field(default_factory=list)
    session_id: Optional[str] = Field(default=None, max_length=200)
    use_memory: bool = True
    context: Optional[ChatContext] = None

    @field_validator("message")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


class MemoryClearRequest(ApiModel):
    session_id: str = Field(..., min_length=1, max_length=200)

    @field_validator("session_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return reject_blank(value)


REQUEST_MODELS = {
    Operation.GENERATE: GenerateCodeRequest,
    Operation.REVIEW: ReviewCodeRequest,
    Operation.DEBUG: DebugCodeRequest,
    Operation.DOCUMENT: DocumentCodeRequest,
    Operation.TEST: GenerateTestsRequest,
    Operation.CHAT: ChatRequest,
    Operation.REFACTOR: RefactorRequest,
    Operation.EXPLAIN: ExplainCodeRequest,
}
