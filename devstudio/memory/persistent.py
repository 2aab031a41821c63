"""
Persistent Memory Backend - Database-backed session memory.

Sessions survive server restarts. Each write replaces the session's rows
inside one transaction, so readers never observe a half-written history.
"""
from typing import List

from devstudio.core.logging_config import get_logger
from devstudio.database.connection import DatabaseConnection
from devstudio.database.models import MemoryMessage, MemorySession
from devstudio.memory.backends import MemoryBackend
from devstudio.memory.conversation import ChatMessage

logger = get_logger(__name__)


class SQLMemoryBackend(MemoryBackend):
    """
    SQLAlchemy-backed memory.

    Example:
        >>> backend = SQLMemoryBackend(DatabaseConnection("sqlite:///data/memory.db"))
        >>> backend.write("s1", [ChatMessage.user("hi")])
        >>> backend.read("s1")[0].content
        'hi'
    """

    name = "sql"

    def __init__(self, db: DatabaseConnection):
        self.db = db
        self.db.create_tables()

    def read(self, session_id: str) -> List[ChatMessage]:
        with self.db.get_session() as db_session:
            rows = db_session.query(MemoryMessage).filter(
                MemoryMessage.session_id == session_id
            ).order_by(MemoryMessage.position).all()

            return [
                ChatMessage(role=row.role, content=row.content, timestamp=row.timestamp)
                for row in rows
            ]

    def write(self, session_id: str, messages: List[ChatMessage]) -> None:
        with self.db.get_session() as db_session:
            db_conv = db_session.get(MemorySession, session_id)
            if db_conv is None:
                db_conv = MemorySession(id=session_id)
                db_session.add(db_conv)

            db_session.query(MemoryMessage).filter(
                MemoryMessage.session_id == session_id
            ).delete(synchronize_session=False)

            for position, message in enumerate(messages):
                db_session.add(MemoryMessage(
                    session_id=session_id,
                    position=position,
                    role=message.role,
                    content=message.content,
                    timestamp=message.timestamp,
                ))

            db_conv.message_count = len(messages)

        logger.debug(f"[PERSISTENT] Saved {len(messages)} messages: session={session_id}")

    def delete(self, session_id: str) -> bool:
        with self.db.get_session() as db_session:
            db_session.query(MemoryMessage).filter(
                MemoryMessage.session_id == session_id
            ).delete(synchronize_session=False)

            deleted = db_session.query(MemorySession).filter(
                MemorySession.id == session_id
            ).delete(synchronize_session=False)

        if deleted:
            logger.info(f"[PERSISTENT] Deleted session from DB: {session_id}")
        return bool(deleted)

    def close(self) -> None:
        self.db.close()
