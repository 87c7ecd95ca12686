import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Server loggers that ship their own handlers; route them through root instead
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: Optional[str]) -> int:
    """
    Map a level name like "debug" to its logging constant, INFO when unknown.
    """
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Optional[str] = "INFO") -> None:
    """
    Send every log record to stdout in one format, replacing earlier handlers
    so app reloads and repeated create_app calls do not duplicate lines.
    Strength modules only log rule ids and scores, never the password.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
