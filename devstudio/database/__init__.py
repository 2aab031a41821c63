"""
Database module - SQL access layer for persistent session memory.
"""
from devstudio.database.connection import DatabaseConnection
from devstudio.database.models import Base, MemoryMessage, MemorySession

__all__ = [
    "DatabaseConnection",
    "Base",
    "MemoryMessage",
    "MemorySession",
]
