"""
Session Memory Store - capped per-session chat history.

This module provides the operation contract used by the chat flow:
- get(session_id, limit)     : most recent messages, oldest first
- append(session_id, msgs)   : concatenate and keep the most recent 50
- clear(session_id)          : drop the session

Architecture note:
Backing storage is pluggable (memory, JSON file, SQL). Every
read-modify-write runs under one of a fixed pool of locks picked by
session id hash, so concurrent requests for the same session never lose
each other's turns and unknown ids never add server state.
"""
import threading
from typing import Iterable, List

from devstudio.core.config import Settings
from devstudio.core.logging_config import get_logger
from devstudio.memory.backends import InMemoryBackend, JsonFileBackend, MemoryBackend
from devstudio.memory.conversation import ChatMessage

logger = get_logger(__name__)

MAX_STORED_MESSAGES = 50
DEFAULT_READ_LIMIT = 20
LOCK_STRIPES = 64


class SessionMemoryStore:
    """
    Append-only, size-capped message log per session.

    Example:
        >>> store = SessionMemoryStore(InMemoryBackend())
        >>> store.append("s1", [ChatMessage.user("hi"), ChatMessage.assistant("hello")])
        >>> [m.role for m in store.get("s1")]
        ['user', 'assistant']
    """

    def __init__(self, backend: MemoryBackend, max_messages: int = MAX_STORED_MESSAGES):
        """
        Args:
            backend: Storage primitive
            max_messages: Messages retained per session (oldest dropped first)
        """
        self.backend = backend
        self.max_messages = max_messages

        # Fixed pool: session ids are client-chosen, so no per-id state is kept
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(LOCK_STRIPES)]

        logger.info(
            f"SessionMemoryStore initialized: backend={backend.name}, "
            f"max_messages={max_messages}"
        )

    def get(self, session_id: str, limit: int = DEFAULT_READ_LIMIT) -> List[ChatMessage]:
        """
        Get the most recent messages of a session.

        Args:
            session_id: The session identifier
            limit: Maximum number of messages to return

        Returns:
            Up to `limit` messages in chronological order ([] if unknown)
        """
        if limit <= 0:
            return []
        with self._lock_for(session_id):
            history = self.backend.read(session_id)
        return history[-limit:]

    def append(self, session_id: str, messages: Iterable[ChatMessage]) -> List[ChatMessage]:
        """
        Append messages, creating the session on first use.

        Returns:
            The retained history after truncation
        """
        new_messages = list(messages)
        with self._lock_for(session_id):
            history = self.backend.read(session_id)
            retained = (history + new_messages)[-self.max_messages:]
            self.backend.write(session_id, retained)

        logger.debug(
            f"Appended {len(new_messages)} messages: session={session_id}, "
            f"stored={len(retained)}"
        )
        return retained

    def clear(self, session_id: str) -> bool:
        """
        Remove a session entirely.

        Returns:
            True if the session existed
        """
        with self._lock_for(session_id):
            removed = self.backend.delete(session_id)

        logger.info(f"Cleared memory: session={session_id}, existed={removed}")
        return removed

    def close(self) -> None:
        self.backend.close()

    def _lock_for(self, session_id: str) -> threading.Lock:
        return self._locks[hash(session_id) % len(self._locks)]


def create_memory_store(settings: Settings) -> SessionMemoryStore:
    """
    Build the memory store selected by MEMORY_BACKEND.

    Returns:
        - SQL-backed store if MEMORY_BACKEND=sql
        - JSON file store if MEMORY_BACKEND=file
        - In-memory store otherwise
    """
    backend_name = settings.memory_backend

    if backend_name == "sql":
        from devstudio.database.connection import DatabaseConnection
        from devstudio.memory.persistent import SQLMemoryBackend

        backend: MemoryBackend = SQLMemoryBackend(DatabaseConnection(settings.memory_database_url))
    elif backend_name == "file":
        backend = JsonFileBackend(settings.memory_path)
    else:
        if backend_name != "memory":
            logger.warning(f"Unknown MEMORY_BACKEND '{backend_name}', using in-memory storage")
        backend = InMemoryBackend()

    return SessionMemoryStore(backend)
