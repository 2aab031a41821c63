"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Error hierarchy mapped to HTTP status codes
- validators.py     : Request payload validation
- rate_limiter.py   : Sliding-window rate limiting
- audit.py          : Request audit and security header middleware
"""
from devstudio.core.config import get_settings, Settings
from devstudio.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
