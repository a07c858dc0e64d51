"""
Logger configuration.

Installs a single stdout handler on the root logger. Records carry an ISO
timestamp and the active session id.

Dependencies: logging (stdlib), paperlens.observability.session_context
System role: Centralized logging configuration
"""

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from paperlens.observability.session_context import SessionIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [session=%(session_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "google_genai", "grpc")


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> logging.Handler:
    """
    Configure root logging.

    Args:
        level: Root level name; unknown names fall back to INFO
        stream: Output stream (stdout when None)
        quiet_loggers: Third-party loggers capped at WARNING

    Returns:
        logging.Handler: The installed handler
    """
    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SessionIdFilter())

    root_logger.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
