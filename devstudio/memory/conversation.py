"""
Conversation data structures.

A ChatMessage is immutable once created and is the unit stored in session
memory and sent to providers as history.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional


@dataclass(frozen=True)
class ChatMessage:
    """
    Represents a single message in a conversation.

    Attributes:
        role: "user" or "assistant"
        content: The message text
        timestamp: ISO-8601 creation time, if known

    Example:
        >>> msg = ChatMessage.user("What does this function do?")
        >>> msg.to_dict()
        {'role': 'user', 'content': 'What does this function do?'}
    """
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content, timestamp=_now_iso())

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role="assistant", content=content, timestamp=_now_iso())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        role = data.get("role")
        if role not in ("user", "assistant"):
            raise ValueError(f"Invalid message role: {role!r}")
        return cls(role=role, content=str(data.get("content", "")), timestamp=data.get("timestamp"))

    def to_dict(self) -> Dict[str, str]:
        """Convert to dict format for LLM API (role + content only)."""
        return {"role": self.role, "content": self.content}

    def to_full_dict(self) -> Dict[str, Any]:
        """Convert to full dict including the timestamp."""
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
