"""
Centralized logging configuration.

Every module logs through the standard library with a shared line format:
    timestamp | level | logger:line | message

Console output follows LOG_LEVEL. When LOG_DIR is set, a daily file under
it records everything from DEBUG up.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Provider SDKs and their HTTP stacks log each round trip
_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "anthropic", "groq")

_logging_configured = False


def _daily_log_file(log_dir: Union[str, Path]) -> Path:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"devstudio_{datetime.now():%Y%m%d}.log"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure the root logger once per process.

    Later calls are no-ops, so every create_app() can call this safely.

    Args:
        log_level: Console level name (DEBUG, INFO, WARNING, ...)
        log_dir: Directory for the daily log file; falsy disables it

    Returns:
        The root logger
    """
    global _logging_configured

    root = logging.getLogger()
    if _logging_configured:
        return root

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console.setLevel(level)

    root.setLevel(logging.DEBUG)
    root.addHandler(console)

    log_file = None
    if log_dir:
        log_file = _daily_log_file(log_dir)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True
    root.debug(f"Logging configured: level={log_level}, file={log_file or 'disabled'}")
    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__ so records show the module path."""
    return logging.getLogger(name)


class LoggerMixin:
    """
    Gives a class a `logger` named after it.

    Example:
        >>> class OpenAIAdapter(LoggerMixin):
        ...     def complete(self):
        ...         self.logger.info("Calling OpenAI...")
    """

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)
