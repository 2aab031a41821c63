"""
Database Models - SQLAlchemy ORM models for persistent session memory.

Messages are ordered by an explicit position column so that insertion
order survives identical timestamps.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class MemorySession(Base):
    """One chat memory scope, identified by the client-chosen session id."""
    __tablename__ = "memory_sessions"

    id = Column(String(200), primary_key=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    last_activity = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)
    message_count = Column(Integer, default=0, nullable=False)

    messages = relationship(
        "MemoryMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="MemoryMessage.position"
    )


class MemoryMessage(Base):
    """A stored chat turn."""
    __tablename__ = "memory_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        String(200),
        ForeignKey("memory_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    position = Column(Integer, nullable=False)
    role = Column(String(20), nullable=False)  # 'user' or 'assistant'
    content = Column(Text, nullable=False)
    timestamp = Column(String(40), nullable=True)

    session = relationship("MemorySession", back_populates="messages")
