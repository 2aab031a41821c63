"""
Session memory backends.

A backend only reads, replaces and deletes a session's full message list.
Capping and per-session serialization live in SessionMemoryStore.
"""
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from devstudio.core.logging_config import get_logger
from devstudio.memory.conversation import ChatMessage

logger = get_logger(__name__)


class MemoryBackend(ABC):
    """Storage primitive behind SessionMemoryStore."""

    name: str = "abstract"

    @abstractmethod
    def read(self, session_id: str) -> List[ChatMessage]:
        """Return the stored messages, oldest first ([] if unknown)."""

    @abstractmethod
    def write(self, session_id: str, messages: List[ChatMessage]) -> None:
        """Replace the stored messages for a session."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""

    def close(self) -> None:
        """Release resources held by the backend."""


class InMemoryBackend(MemoryBackend):
    """Process-local dict; contents are lost on restart."""

    name = "memory"

    def __init__(self):
        self._sessions: Dict[str, List[ChatMessage]] = {}

    def read(self, session_id: str) -> List[ChatMessage]:
        return list(self._sessions.get(session_id, []))

    def write(self, session_id: str, messages: List[ChatMessage]) -> None:
        self._sessions[session_id] = list(messages)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None


class JsonFileBackend(MemoryBackend):
    """
    All sessions in one JSON document: {"sessions": {id: [message, ...]}}.

    Every write rewrites the file through a temporary file and os.replace,
    so a crash mid-write never leaves a truncated document. A file-wide
    lock serializes read-modify-write cycles across sessions. A file that
    cannot be parsed is renamed to <name>.corrupt-<timestamp> and treated
    as empty.
    """

    name = "file"

    def __init__(self, path: str):
        self.path = Path(path)
        self._file_lock = threading.RLock()
        logger.info(f"JSON memory backend at {self.path}")

    def read(self, session_id: str) -> List[ChatMessage]:
        with self._file_lock:
            raw = self._load().get(session_id, [])
        return [ChatMessage.from_dict(item) for item in raw]

    def write(self, session_id: str, messages: List[ChatMessage]) -> None:
        with self._file_lock:
            sessions = self._load()
            sessions[session_id] = [message.to_full_dict() for message in messages]
            self._save(sessions)

    def delete(self, session_id: str) -> bool:
        with self._file_lock:
            sessions = self._load()
            if session_id not in sessions:
                return False
            del sessions[session_id]
            self._save(sessions)
            return True

    def _load(self) -> Dict[str, list]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._quarantine(f"not valid JSON: {e}")
            return {}

        sessions = data.get("sessions", {}) if isinstance(data, dict) else None
        if not isinstance(sessions, dict):
            self._quarantine("missing a sessions object")
            return {}
        return sessions

    def _quarantine(self, reason: str) -> None:
        """Move an unreadable memory file aside so the next write starts fresh."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        os.replace(self.path, target)
        logger.error(f"Memory file {self.path} is {reason}; moved to {target}")

    def _save(self, sessions: Dict[str, list]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".memory-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump({"sessions": sessions}, handle, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
