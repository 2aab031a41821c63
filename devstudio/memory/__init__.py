"""
Memory Package - Per-session chat history.

Three interchangeable backings sit behind SessionMemoryStore:

## In-memory
- Fast, lost on restart
- Good for development/testing

## JSON file
- One document with every session, rewritten atomically
- Survives restarts on a single instance

## SQL (SQLAlchemy)
- Persists across restarts and instances
- Good for production

Use `create_memory_store(settings)` to build the store selected by
MEMORY_BACKEND.
"""
from devstudio.memory.backends import InMemoryBackend, JsonFileBackend, MemoryBackend
from devstudio.memory.conversation import ChatMessage
from devstudio.memory.manager import (
    DEFAULT_READ_LIMIT,
    MAX_STORED_MESSAGES,
    SessionMemoryStore,
    create_memory_store,
)

__all__ = [
    "ChatMessage",
    "MemoryBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "SessionMemoryStore",
    "create_memory_store",
    "DEFAULT_READ_LIMIT",
    "MAX_STORED_MESSAGES",
]
