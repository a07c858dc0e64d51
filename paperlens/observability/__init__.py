"""
Observability module.

Logging configuration, per-session log correlation and safe log rendering.
"""

from paperlens.observability.log_utils import safe_log_value
from paperlens.observability.logger import configure_logging
from paperlens.observability.session_context import bind_session, current_session_id

__all__ = ["bind_session", "configure_logging", "current_session_id", "safe_log_value"]
