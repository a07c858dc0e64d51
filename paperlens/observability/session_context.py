"""
Session context for log records.

Carries the active conversation session id across awaits using contextvars
so every log line emitted during a session operation can be attributed.

Dependencies: contextvars
System role: Log correlation per document session
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

NO_SESSION = "-"

session_id_ctx: ContextVar[str] = ContextVar("session_id", default=NO_SESSION)


@contextmanager
def bind_session(session_id: str) -> Iterator[str]:
    """Attribute log records emitted inside the block to a session."""
    token = session_id_ctx.set(session_id)
    try:
        yield session_id
    finally:
        session_id_ctx.reset(token)


def current_session_id() -> str:
    return session_id_ctx.get()


class SessionIdFilter(logging.Filter):
    """Adds ``session_id`` to every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_ctx.get()
        return True
